"""
Swatch Selection Module

Scores palette entries against a target lightness/saturation profile and
picks the best unclaimed candidate. Scoring is a weighted mean of
saturation match, lightness match and population share.
"""

from dataclasses import dataclass
from typing import AbstractSet, Optional

from loguru import logger

from .hsl import HSL, RGB, hsl_of
from .palette import Palette


@dataclass(frozen=True)
class TargetRange:
    """Acceptable window (min..max) and ideal value for lightness or saturation."""
    min: float
    target: float
    max: float

    def __post_init__(self):
        if not 0.0 <= self.min <= self.target <= self.max <= 1.0:
            raise ValueError(
                f"TargetRange requires 0 <= min <= target <= max <= 1, "
                f"got ({self.min}, {self.target}, {self.max})"
            )

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class ScoreWeights:
    """Relative weights of the three scoring terms."""
    saturation: float = 3.0
    luma: float = 6.0
    population: float = 1.0

    @property
    def total(self) -> float:
        return self.saturation + self.luma + self.population


DEFAULT_WEIGHTS = ScoreWeights()


def score_candidate(hsl: HSL,
                    population: int,
                    total_population: int,
                    luma_range: TargetRange,
                    sat_range: TargetRange,
                    weights: ScoreWeights = DEFAULT_WEIGHTS) -> float:
    """
    Weighted mean of saturation match, lightness match and population share.

    Each term lies in [0, 1], so the score does too.
    """
    saturation_term = 1.0 - abs(hsl.s - sat_range.target)
    luma_term = 1.0 - abs(hsl.l - luma_range.target)
    population_term = population / total_population

    weighted = (weights.saturation * saturation_term
                + weights.luma * luma_term
                + weights.population * population_term)
    return weighted / weights.total


def select(palette: Palette,
           already_claimed: AbstractSet[RGB],
           luma_range: TargetRange,
           sat_range: TargetRange,
           weights: ScoreWeights = DEFAULT_WEIGHTS) -> Optional[RGB]:
    """
    Pick the best-scoring palette color inside both windows.

    Claimed colors, colors outside the lightness/saturation windows and
    colors with zero population are skipped. On equal scores the earliest
    color in palette order wins.

    Args:
        palette: Population-weighted palette
        already_claimed: Colors taken by earlier swatch slots
        luma_range: Lightness window and target
        sat_range: Saturation window and target
        weights: Scoring weights

    Returns:
        The selected RGB color, or None when no candidate qualifies
    """
    total_population = palette.total_population
    best_color: Optional[RGB] = None
    best_score = float("-inf")

    for index, color in enumerate(palette.colors):
        if color in already_claimed:
            continue

        hsl = hsl_of(color)
        if not (sat_range.contains(hsl.s) and luma_range.contains(hsl.l)):
            continue

        population = palette.population_at(index)
        if population == 0:
            continue

        score = score_candidate(hsl, population, total_population, luma_range, sat_range, weights)
        logger.debug(f"Candidate {index} {color} HSL=({hsl.h:.1f}, {hsl.s:.3f}, {hsl.l:.3f}) "
                     f"pop={population} score={score:.4f}")

        # Strict comparison keeps the earliest candidate on ties
        if score > best_score:
            best_score = score
            best_color = color

    return best_color
