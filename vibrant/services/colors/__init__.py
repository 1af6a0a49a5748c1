"""
Vibrant Colors Module

Provides color-space conversion, pixel filtering, palette construction and
swatch selection for deriving UI theme colors from images.
"""

from .hsl import HSL, RGB, hex_to_rgb, hsl_of, rgb_to_hex, rgb_to_hsl
from .palette import Palette, build_palette
from .pixels import (
    ArrayPixelSource, Pixel, PixelFilterSettings, PixelSource,
    is_interesting, is_trainable, is_transparent
)
from .quantizer import KMeansQuantizer, QuantizedTable, Quantizer
from .selection import ScoreWeights, TargetRange, score_candidate, select
from .vibrancy import SLOT_NAMES, SwatchProfile, Vibrancy, VibrancySettings

__all__ = [
    'HSL', 'RGB', 'hex_to_rgb', 'hsl_of', 'rgb_to_hex', 'rgb_to_hsl',
    'Palette', 'build_palette',
    'ArrayPixelSource', 'Pixel', 'PixelFilterSettings', 'PixelSource',
    'is_interesting', 'is_trainable', 'is_transparent',
    'KMeansQuantizer', 'QuantizedTable', 'Quantizer',
    'ScoreWeights', 'TargetRange', 'score_candidate', 'select',
    'SLOT_NAMES', 'SwatchProfile', 'Vibrancy', 'VibrancySettings',
]
