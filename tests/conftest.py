"""
Test configuration and fixtures for the vibrant swatch extractor tests.
"""
import numpy as np
import pytest

from vibrant.services.colors import ArrayPixelSource, QuantizedTable


WHITE = (255, 255, 255, 255)
RED = (230, 20, 20, 255)


@pytest.fixture
def make_image():
    """Factory building an ArrayPixelSource filled with one RGBA color."""
    def _make(width, height, fill):
        array = np.zeros((height, width, 4), dtype=np.uint8)
        array[:, :] = fill
        return array
    return _make


@pytest.fixture
def red_on_white(make_image):
    """20x20 opaque white image with a 4x4 saturated red block."""
    array = make_image(20, 20, WHITE)
    array[8:12, 8:12] = RED
    return ArrayPixelSource(array)


@pytest.fixture
def transparent_image(make_image):
    """Uniform, fully transparent image."""
    return ArrayPixelSource(make_image(16, 16, (0, 0, 0, 0)))


class RecordingQuantizer:
    """Quantizer returning a fixed table and remembering what it was trained on."""

    def __init__(self, table_colors):
        self.table_colors = table_colors
        self.trained_on = None

    def train(self, flat_rgba, target_count, quality):
        self.trained_on = np.frombuffer(bytes(flat_rgba), dtype=np.uint8).reshape(-1, 4)
        return QuantizedTable(np.array(self.table_colors, dtype=np.uint8).reshape(-1, 4))


@pytest.fixture
def recording_quantizer():
    """Factory for quantizers with a fixed color table."""
    return RecordingQuantizer
