"""
Color-space conversion helpers.

RGB -> HSL conversion used by the swatch scorer for saturation and
lightness comparisons, plus hex formatting used by every presentation layer.
"""

import colorsys
from dataclasses import dataclass
from typing import Sequence, Tuple

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class HSL:
    """A color in HSL space."""
    h: float  # Hue [0, 360)
    s: float  # Saturation [0, 1]
    l: float  # Lightness [0, 1]


def _check_channel(value: int) -> None:
    if not 0 <= value <= 255:
        raise ValueError(f"Channel value out of range 0..255: {value}")


def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
    """
    Convert 8-bit RGB channels to HSL.

    Achromatic colors (r == g == b) short-circuit to hue 0 and saturation 0.

    Args:
        r, g, b: Channel values in 0..255

    Returns:
        HSL with hue in degrees [0, 360), saturation and lightness in [0, 1]
    """
    for channel in (r, g, b):
        _check_channel(channel)

    # colorsys returns (H, L, S) with H in [0, 1)
    h, l, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)
    return HSL(h=(h * 360.0) % 360.0, s=s, l=l)


def hsl_of(color: Sequence[int]) -> HSL:
    """HSL of an RGB or RGBA sequence; alpha is ignored."""
    return rgb_to_hsl(int(color[0]), int(color[1]), int(color[2]))


def rgb_to_hex(rgb: Sequence[int]) -> str:
    """Convert an RGB sequence to an uppercase #RRGGBB string."""
    r, g, b = [int(x) for x in rgb[:3]]
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_rgb(hex_color: str) -> RGB:
    """
    Convert a #RRGGBB string to an RGB tuple.

    Raises:
        ValueError: If the string is not a 6-digit hex color with '#' prefix
    """
    if not hex_color.startswith('#') or len(hex_color) != 7:
        raise ValueError(f"Invalid hex color format: {hex_color}")

    try:
        return tuple(int(hex_color[i:i + 2], 16) for i in (1, 3, 5))
    except ValueError:
        raise ValueError(f"Invalid hex color format: {hex_color}")
