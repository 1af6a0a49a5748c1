"""
Pixel access and filtering.

Defines the pixel source capability the palette builder consumes (anything
exposing width, height and per-coordinate RGBA access), a numpy/PIL backed
adapter, and the filter that decides which pixels train the quantizer.
"""

from dataclasses import dataclass
from typing import NamedTuple, Protocol, Tuple, runtime_checkable

import numpy as np
from PIL import Image


class Pixel(NamedTuple):
    """An 8-bit RGBA pixel."""
    r: int
    g: int
    b: int
    a: int

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class PixelFilterSettings:
    """Thresholds for discarding pixels before quantization."""
    min_alpha: int = 125  # alpha at or above this counts as opaque
    max_color: int = 250  # channels strictly above this count as white


DEFAULT_FILTER = PixelFilterSettings()


@runtime_checkable
class PixelSource(Protocol):
    """Anything exposing width, height and per-coordinate RGBA pixels."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def get_pixel(self, x: int, y: int) -> Pixel: ...


class ArrayPixelSource:
    """PixelSource over an (H, W, 3) or (H, W, 4) uint8 array."""

    def __init__(self, array: np.ndarray):
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(f"Expected (H, W, 3) or (H, W, 4) array, got shape {array.shape}")

        if array.shape[2] == 3:
            # RGB input is fully opaque
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([array.astype(np.uint8), alpha], axis=2)

        self._rgba = array.astype(np.uint8, copy=False)

    @classmethod
    def from_pil(cls, image: Image.Image) -> "ArrayPixelSource":
        """Wrap a decoded PIL image of any mode."""
        return cls(np.asarray(image.convert("RGBA")))

    @property
    def width(self) -> int:
        return self._rgba.shape[1]

    @property
    def height(self) -> int:
        return self._rgba.shape[0]

    def get_pixel(self, x: int, y: int) -> Pixel:
        r, g, b, a = (int(c) for c in self._rgba[y, x])
        return Pixel(r, g, b, a)

    def rgba_array(self) -> np.ndarray:
        """Row-major (N, 4) view of all pixels."""
        return self._rgba.reshape(-1, 4)


def pixel_array(source: PixelSource) -> np.ndarray:
    """
    Read every pixel of a source into a row-major (N, 4) uint8 array.

    Sources that expose ``rgba_array()`` hand over their buffer directly;
    anything else is read one coordinate at a time.
    """
    fast = getattr(source, "rgba_array", None)
    if callable(fast):
        return np.asarray(fast(), dtype=np.uint8).reshape(-1, 4)

    rgba = np.empty((source.width * source.height, 4), dtype=np.uint8)
    i = 0
    for y in range(source.height):
        for x in range(source.width):
            rgba[i] = tuple(source.get_pixel(x, y))
            i += 1
    return rgba


def is_interesting(pixel: Pixel, settings: PixelFilterSettings = DEFAULT_FILTER) -> bool:
    """
    Return False for boring pixels: near-opaque and near-white.

    Every other pixel is interesting, transparent ones included.
    """
    r, g, b, a = pixel
    is_white = r > settings.max_color and g > settings.max_color and b > settings.max_color
    return not (a >= settings.min_alpha and is_white)


def is_transparent(pixel: Pixel, settings: PixelFilterSettings = DEFAULT_FILTER) -> bool:
    """Pixels below the alpha threshold carry no reliable color."""
    return pixel[3] < settings.min_alpha


def is_trainable(pixel: Pixel, settings: PixelFilterSettings = DEFAULT_FILTER) -> bool:
    """Whether a pixel belongs in the quantizer training stream."""
    return is_interesting(pixel, settings) and not is_transparent(pixel, settings)


def interesting_mask(rgba: np.ndarray, settings: PixelFilterSettings = DEFAULT_FILTER) -> np.ndarray:
    """Vectorised is_interesting over an (N, 4) array."""
    opaque = rgba[:, 3] >= settings.min_alpha
    white = np.all(rgba[:, :3] > settings.max_color, axis=1)
    return ~(opaque & white)


def trainable_mask(rgba: np.ndarray, settings: PixelFilterSettings = DEFAULT_FILTER) -> np.ndarray:
    """Vectorised is_trainable over an (N, 4) array."""
    return interesting_mask(rgba, settings) & (rgba[:, 3] >= settings.min_alpha)
