"""
Color quantization boundary.

The palette builder only relies on the Quantizer protocol: train on a flat
RGBA byte stream, get back a color table and a way to map any RGBA value to
an index of that table. KMeansQuantizer is the default implementation,
clustering in RGBA space with MiniBatchKMeans.
"""

from collections import Counter
from typing import List, Protocol, Sequence, Tuple, Union

import numpy as np
from loguru import logger
from sklearn.cluster import MiniBatchKMeans

RGBA = Tuple[int, int, int, int]

MIN_QUALITY = 1
MAX_QUALITY = 30
# Rows per distance computation when classifying large images
CLASSIFY_CHUNK = 65536


class QuantizedTable:
    """A trained color table plus nearest-entry classification."""

    def __init__(self, colors: np.ndarray):
        colors = np.asarray(colors, dtype=np.uint8)
        if colors.size == 0:
            colors = colors.reshape(0, 4)
        if colors.ndim != 2 or colors.shape[1] != 4:
            raise ValueError(f"Color table must have shape (k, 4), got {colors.shape}")
        self._colors = colors
        self._centers = colors.astype(np.float32)

    def __len__(self) -> int:
        return len(self._colors)

    @property
    def colors(self) -> List[RGBA]:
        return [tuple(int(c) for c in row) for row in self._colors]

    def indices_of(self, rgba: np.ndarray) -> np.ndarray:
        """
        Map each row of an (N, 4) array to its nearest table index.

        Ties resolve to the lowest index.

        Raises:
            ValueError: If the table is empty
        """
        if len(self._colors) == 0:
            raise ValueError("Cannot classify against an empty color table")

        rgba = np.asarray(rgba, dtype=np.float32).reshape(-1, 4)
        indices = np.empty(len(rgba), dtype=np.int64)
        for start in range(0, len(rgba), CLASSIFY_CHUNK):
            chunk = rgba[start:start + CLASSIFY_CHUNK]
            # Broadcasting: (n, 1, 4) - (1, k, 4) -> (n, k)
            distances = np.sum((chunk[:, None, :] - self._centers[None, :, :]) ** 2, axis=2)
            indices[start:start + CLASSIFY_CHUNK] = distances.argmin(axis=1)
        return indices

    def index_of(self, rgba: Sequence[int]) -> int:
        """Nearest table index for a single RGBA value."""
        return int(self.indices_of(np.asarray([rgba[:4]]))[0])


class Quantizer(Protocol):
    """External quantizer contract consumed by the palette builder."""

    def train(self, flat_rgba: Union[bytes, np.ndarray], target_count: int,
              quality: int) -> QuantizedTable: ...


def _as_rgba_rows(flat_rgba: Union[bytes, np.ndarray]) -> np.ndarray:
    if isinstance(flat_rgba, (bytes, bytearray, memoryview)):
        flat = np.frombuffer(flat_rgba, dtype=np.uint8)
    else:
        flat = np.asarray(flat_rgba, dtype=np.uint8).reshape(-1)

    if flat.size % 4 != 0:
        raise ValueError(f"Flat RGBA stream length must be a multiple of 4, got {flat.size}")
    return flat.reshape(-1, 4)


class KMeansQuantizer:
    """
    MiniBatchKMeans quantizer over RGBA samples.

    ``quality`` follows the NeuQuant sampling-factor convention: 1 trains on
    every pixel, 10 on every tenth. The table is ordered by training
    population, most common first.
    """

    def __init__(self, random_state: int = 42, max_iter: int = 100):
        self.random_state = random_state
        self.max_iter = max_iter

    def train(self, flat_rgba: Union[bytes, np.ndarray], target_count: int,
              quality: int = 10) -> QuantizedTable:
        if target_count < 1:
            raise ValueError(f"target_count must be at least 1, got {target_count}")

        pixels = _as_rgba_rows(flat_rgba)
        if len(pixels) == 0:
            logger.info("Empty training stream, returning empty color table")
            return QuantizedTable(np.empty((0, 4), dtype=np.uint8))

        step = min(max(int(quality), MIN_QUALITY), MAX_QUALITY)
        samples = pixels[::step]

        unique_colors, unique_counts = np.unique(samples, axis=0, return_counts=True)
        logger.debug(f"Training on {len(samples)}/{len(pixels)} pixels "
                     f"({len(unique_colors)} distinct, target {target_count})")

        if len(unique_colors) <= target_count:
            # Every distinct color gets its own entry
            order = np.argsort(-unique_counts, kind="stable")
            return QuantizedTable(unique_colors[order])

        kmeans = MiniBatchKMeans(
            n_clusters=target_count,
            random_state=self.random_state,
            batch_size=min(2048, len(samples)),
            n_init="auto",
            max_iter=self.max_iter
        )
        labels = kmeans.fit_predict(samples.astype(np.float32))
        centers = np.clip(np.rint(kmeans.cluster_centers_), 0, 255).astype(np.uint8)

        # Sort clusters by training population, descending
        label_counts = Counter(labels.tolist())
        order = sorted(range(target_count), key=lambda i: -label_counts.get(i, 0))

        logger.debug(f"Quantizer produced {len(centers)} entries")
        return QuantizedTable(centers[order])
