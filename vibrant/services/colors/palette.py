"""
Palette construction.

Runs the quantizer over the filtered pixel stream, recounts every pixel of
the image against the trained table, and collapses the table into an
ordered, deduplicated list of RGB colors weighted by pixel population.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from loguru import logger

from .hsl import RGB, rgb_to_hex
from .pixels import DEFAULT_FILTER, PixelFilterSettings, PixelSource, pixel_array, trainable_mask
from .quantizer import KMeansQuantizer, Quantizer
from ..observability import log_memory_usage, performance_monitor
from ...schemas import PaletteResponse, SwatchColor


@dataclass(frozen=True)
class Palette:
    """
    Ordered distinct colors plus per-index pixel counts.

    ``counts`` is keyed by position in ``colors``; indices with no pixels
    may be absent.
    """
    colors: List[RGB] = field(default_factory=list)
    counts: Dict[int, int] = field(default_factory=dict)

    def __post_init__(self):
        for index in self.counts:
            if not 0 <= index < len(self.colors):
                raise ValueError(f"Count index {index} out of range for {len(self.colors)} colors")

    def __len__(self) -> int:
        return len(self.colors)

    def __str__(self) -> str:
        return f"Color Palette {{ {', '.join(self.hex_colors())} }}"

    @property
    def total_population(self) -> int:
        return sum(self.counts.values())

    def population_at(self, index: int) -> int:
        return self.counts.get(index, 0)

    def frequency_of(self, color: RGB) -> int:
        """Pixel count for a color, 0 when the color is not in the palette."""
        color = tuple(color)
        for index, candidate in enumerate(self.colors):
            if candidate == color:
                return self.population_at(index)
        return 0

    def sort_by_frequency(self, descending: bool = False) -> "Palette":
        """Return a copy ordered by pixel count, re-keying counts to the new order."""
        order = sorted(range(len(self.colors)), key=self.population_at, reverse=descending)
        colors = [self.colors[i] for i in order]
        counts = {new: self.counts[old] for new, old in enumerate(order) if old in self.counts}
        return Palette(colors=colors, counts=counts)

    def hex_colors(self) -> List[str]:
        return [rgb_to_hex(color) for color in self.colors]

    def to_schema(self) -> PaletteResponse:
        return PaletteResponse(
            colors=[
                SwatchColor(hex=rgb_to_hex(color), rgb=list(color), population=self.population_at(i))
                for i, color in enumerate(self.colors)
            ],
            total_population=self.total_population
        )


def dedupe_table(table_colors: List[tuple], table_counts: Dict[int, int]) -> Palette:
    """
    Collapse RGBA table entries to distinct RGB colors in first-occurrence order.

    Counts of entries that collapse into the same RGB color are summed under
    the surviving position.
    """
    colors: List[RGB] = []
    position: Dict[RGB, int] = {}
    remap: Dict[int, int] = {}

    for table_index, entry in enumerate(table_colors):
        rgb = tuple(int(c) for c in entry[:3])
        if rgb not in position:
            position[rgb] = len(colors)
            colors.append(rgb)
        remap[table_index] = position[rgb]

    counts: Dict[int, int] = {}
    for table_index, count in table_counts.items():
        if count <= 0:
            continue
        merged = remap[table_index]
        counts[merged] = counts.get(merged, 0) + count

    return Palette(colors=colors, counts=dict(sorted(counts.items())))


def build_palette(image: PixelSource,
                  target_color_count: int = 10,
                  quality: int = 10,
                  quantizer: Optional[Quantizer] = None,
                  filter_settings: Optional[PixelFilterSettings] = None) -> Palette:
    """
    Build a population-weighted palette from an image.

    Args:
        image: Pixel source to analyse
        target_color_count: Upper bound on the quantizer table size
        quality: Quantizer speed/quality knob (1 = best, 30 = fastest)
        quantizer: Quantizer implementation; defaults to KMeansQuantizer
        filter_settings: Thresholds for boring and transparent pixels

    Returns:
        Palette whose counts cover every pixel of the image, filtered or not
    """
    quantizer = quantizer or KMeansQuantizer()
    filter_settings = filter_settings or DEFAULT_FILTER

    rgba = pixel_array(image)
    logger.info(f"Building palette from {image.width}x{image.height} image "
                f"(target {target_color_count} colors, quality {quality})")

    # 1) Only interesting, visible pixels train the quantizer
    training = rgba[trainable_mask(rgba, filter_settings)]
    logger.debug(f"Filtering: {len(rgba)} → {len(training)} training pixels")

    # 2) Train
    with performance_monitor("quantizer_training", pixel_count=len(training),
                             color_count=target_color_count):
        table = quantizer.train(training.tobytes(), target_color_count, quality)

    # 3) Recount every pixel of the image against the table
    table_counts: Dict[int, int] = {}
    if len(table) > 0 and len(rgba) > 0:
        with performance_monitor("population_recount", pixel_count=len(rgba),
                                 color_count=len(table)):
            indices = table.indices_of(rgba)
            table_counts = dict(Counter(indices.tolist()))
    elif len(table) == 0:
        logger.warning("Quantizer returned an empty color table")

    log_memory_usage("palette_recount_complete")

    # 4-5) Deduplicate and re-key counts onto the final color order
    palette = dedupe_table(table.colors, table_counts)

    logger.info(f"Palette built: {len(palette)} colors from {len(table)} table entries, "
                f"population {palette.total_population}")
    return palette
