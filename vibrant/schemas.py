"""
Vibrant Schemas
Pydantic models for palette and swatch JSON output.
"""
from typing import List, Optional
from pydantic import BaseModel, Field


class SwatchColor(BaseModel):
    """A single color with its population weight."""
    hex: str = Field(..., description="Uppercase #RRGGBB color")
    rgb: List[int] = Field(..., min_length=3, max_length=3, description="RGB channels 0-255")
    population: int = Field(0, ge=0, description="Number of image pixels mapped to this color")


class PaletteResponse(BaseModel):
    """Population-weighted palette of an image."""
    colors: List[SwatchColor] = Field(default_factory=list, description="Palette colors in palette order")
    total_population: int = Field(0, ge=0, description="Sum of all color populations")


class VibrancyResponse(BaseModel):
    """The six swatch slots; absent slots are null."""
    primary: Optional[SwatchColor] = Field(None, description="Vibrant swatch, normal lightness")
    dark: Optional[SwatchColor] = Field(None, description="Vibrant swatch, dark")
    light: Optional[SwatchColor] = Field(None, description="Vibrant swatch, light")
    muted: Optional[SwatchColor] = Field(None, description="Muted swatch, normal lightness")
    dark_muted: Optional[SwatchColor] = Field(None, description="Muted swatch, dark")
    light_muted: Optional[SwatchColor] = Field(None, description="Muted swatch, light")
