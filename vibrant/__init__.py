"""
Vibrant

Derives vibrant and muted swatch colors from images for UI theming.
"""

from vibrant.services.colors import (
    ArrayPixelSource, Palette, Pixel, Vibrancy, VibrancySettings,
    build_palette, is_interesting, rgb_to_hsl, select
)

__version__ = "1.0.0"

__all__ = [
    'ArrayPixelSource', 'Palette', 'Pixel', 'Vibrancy', 'VibrancySettings',
    'build_palette', 'is_interesting', 'rgb_to_hsl', 'select',
]
