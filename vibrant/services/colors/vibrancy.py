"""
Vibrancy Orchestrator

Assigns the six swatch slots (primary, light, dark, muted, light muted,
dark muted) from a palette. Slots are claimed in a fixed order and every
claimed color is excluded from the slots that follow, so no two slots
share a color.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

from loguru import logger

from .hsl import RGB, rgb_to_hex
from .palette import Palette, build_palette
from .pixels import PixelFilterSettings, PixelSource
from .quantizer import Quantizer
from .selection import DEFAULT_WEIGHTS, ScoreWeights, TargetRange, select
from ...schemas import SwatchColor, VibrancyResponse

SLOT_NAMES = ("primary", "dark", "light", "muted", "dark_muted", "light_muted")

NORMAL_LUMA = TargetRange(0.3, 0.5, 0.7)
LIGHT_LUMA = TargetRange(0.55, 0.74, 1.0)
DARK_LUMA = TargetRange(0.0, 0.26, 0.45)
VIBRANT_SATURATION = TargetRange(0.35, 1.0, 1.0)
MUTED_SATURATION = TargetRange(0.0, 0.3, 0.4)


@dataclass(frozen=True)
class SwatchProfile:
    """Target windows for one swatch slot."""
    name: str
    luma: TargetRange
    saturation: TargetRange


def _default_profiles() -> Tuple[SwatchProfile, ...]:
    # Claim order: primary → light → dark → muted → light_muted → dark_muted
    return (
        SwatchProfile("primary", NORMAL_LUMA, VIBRANT_SATURATION),
        SwatchProfile("light", LIGHT_LUMA, VIBRANT_SATURATION),
        SwatchProfile("dark", DARK_LUMA, VIBRANT_SATURATION),
        SwatchProfile("muted", NORMAL_LUMA, MUTED_SATURATION),
        SwatchProfile("light_muted", LIGHT_LUMA, MUTED_SATURATION),
        SwatchProfile("dark_muted", DARK_LUMA, MUTED_SATURATION),
    )


@dataclass(frozen=True)
class VibrancySettings:
    """Ordered slot profiles and scoring weights used by the orchestrator."""
    profiles: Tuple[SwatchProfile, ...] = field(default_factory=_default_profiles)
    weights: ScoreWeights = DEFAULT_WEIGHTS

    def __post_init__(self):
        names = [profile.name for profile in self.profiles]
        if sorted(names) != sorted(SLOT_NAMES):
            raise ValueError(f"Profiles must cover each slot exactly once: {SLOT_NAMES}, got {names}")

    @classmethod
    def default(cls) -> "VibrancySettings":
        return cls()


DEFAULT_SETTINGS = VibrancySettings()


@dataclass(frozen=True)
class Vibrancy:
    """The six swatch slots; None marks a slot no palette color satisfied."""
    primary: Optional[RGB] = None
    dark: Optional[RGB] = None
    light: Optional[RGB] = None
    muted: Optional[RGB] = None
    dark_muted: Optional[RGB] = None
    light_muted: Optional[RGB] = None

    @classmethod
    def from_palette(cls, palette: Palette,
                     settings: Optional[VibrancySettings] = None) -> "Vibrancy":
        """Assign every slot from a palette in the configured claim order."""
        settings = settings or DEFAULT_SETTINGS

        claimed: FrozenSet[RGB] = frozenset()
        chosen = {}
        for profile in settings.profiles:
            color = select(palette, claimed, profile.luma, profile.saturation, settings.weights)
            chosen[profile.name] = color
            if color is not None:
                claimed = claimed | {color}
            logger.debug(f"Slot {profile.name}: {rgb_to_hex(color) if color is not None else 'none'}")

        vibrancy = cls(**chosen)
        logger.info(f"Assigned {len(claimed)}/{len(SLOT_NAMES)} swatch slots "
                    f"from {len(palette)} palette colors")
        return vibrancy

    @classmethod
    def from_image(cls, image: PixelSource,
                   color_count: int = 10,
                   quality: int = 10,
                   settings: Optional[VibrancySettings] = None,
                   quantizer: Optional[Quantizer] = None,
                   filter_settings: Optional[PixelFilterSettings] = None) -> "Vibrancy":
        """Build the palette of an image, then assign the swatch slots."""
        palette = build_palette(image, color_count, quality,
                                quantizer=quantizer, filter_settings=filter_settings)
        return cls.from_palette(palette, settings)

    def swatches(self) -> List[Tuple[str, Optional[RGB]]]:
        return [(name, getattr(self, name)) for name in SLOT_NAMES]

    def __str__(self) -> str:
        lines = []
        for name, color in self.swatches():
            lines.append(f"{name}: {rgb_to_hex(color) if color is not None else 'none'}")
        return "\n".join(lines)

    def to_schema(self, palette: Optional[Palette] = None) -> VibrancyResponse:
        """JSON model of the slots; populations come from ``palette`` when given."""
        slots = {}
        for name, color in self.swatches():
            if color is None:
                slots[name] = None
                continue
            population = palette.frequency_of(color) if palette is not None else 0
            slots[name] = SwatchColor(hex=rgb_to_hex(color), rgb=list(color), population=population)
        return VibrancyResponse(**slots)
