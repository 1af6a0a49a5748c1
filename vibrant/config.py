"""
Vibrant Configuration
Manages environment variables and defaults for palette and swatch extraction.
"""
import os

from vibrant.services.colors.pixels import PixelFilterSettings


class Config:
    """Configuration class for the vibrant swatch extractor."""

    # Logging
    LOG_LEVEL: str = os.environ.get("VIBRANT_LOG_LEVEL", "INFO")

    # Quantization defaults
    COLOR_COUNT: int = int(os.environ.get("VIBRANT_COLOR_COUNT", "10"))
    QUALITY: int = int(os.environ.get("VIBRANT_QUALITY", "10"))
    RANDOM_STATE: int = int(os.environ.get("VIBRANT_RANDOM_STATE", "42"))

    # Pixel filter thresholds
    MIN_ALPHA: int = int(os.environ.get("VIBRANT_MIN_ALPHA", "125"))
    MAX_COLOR: int = int(os.environ.get("VIBRANT_MAX_COLOR", "250"))

    # Supported image extensions for the CLI wrapper
    SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp"}

    @classmethod
    def validate_color_count(cls, color_count: int) -> bool:
        """Validate palette size parameter."""
        return 1 <= color_count <= 256

    @classmethod
    def validate_quality(cls, quality: int) -> bool:
        """Validate quantizer sampling factor."""
        return 1 <= quality <= 30

    @classmethod
    def filter_settings(cls) -> PixelFilterSettings:
        """Build pixel filter thresholds from the environment."""
        return PixelFilterSettings(min_alpha=cls.MIN_ALPHA, max_color=cls.MAX_COLOR)


# Global config instance
config = Config()
