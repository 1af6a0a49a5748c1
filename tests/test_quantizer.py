"""
Unit tests for the MiniBatchKMeans quantizer and its color table.
"""

import numpy as np
import pytest

from vibrant.services.colors.quantizer import KMeansQuantizer, QuantizedTable


def flat(colors, repeat=1):
    return np.repeat(np.array(colors, dtype=np.uint8), repeat, axis=0).tobytes()


class TestQuantizedTable:
    """Test nearest-entry classification"""

    def test_index_of_nearest(self):
        table = QuantizedTable(np.array([[255, 0, 0, 255], [0, 0, 255, 255]]))
        assert table.index_of((250, 10, 10, 255)) == 0
        assert table.index_of((5, 5, 240, 255)) == 1

    def test_ties_resolve_to_lowest_index(self):
        table = QuantizedTable(np.array([[0, 0, 0, 255], [2, 0, 0, 255]]))
        assert table.index_of((1, 0, 0, 255)) == 0

    def test_indices_of_batch(self):
        table = QuantizedTable(np.array([[0, 0, 0, 255], [255, 255, 255, 255]]))
        rgba = np.array([[10, 10, 10, 255], [240, 240, 240, 255], [0, 0, 0, 255]], dtype=np.uint8)
        assert table.indices_of(rgba).tolist() == [0, 1, 0]

    def test_empty_table(self):
        table = QuantizedTable(np.empty((0, 4), dtype=np.uint8))
        assert len(table) == 0
        assert table.colors == []
        with pytest.raises(ValueError):
            table.index_of((0, 0, 0, 0))

    def test_invalid_table_shape(self):
        with pytest.raises(ValueError):
            QuantizedTable(np.zeros((3, 3), dtype=np.uint8))


class TestKMeansQuantizer:
    """Test training on flat RGBA streams"""

    def test_empty_stream_gives_empty_table(self):
        table = KMeansQuantizer().train(b"", 10, 10)
        assert len(table) == 0

    def test_stream_length_must_be_multiple_of_four(self):
        with pytest.raises(ValueError):
            KMeansQuantizer().train(b"\x00\x01\x02", 10, 10)

    def test_target_count_must_be_positive(self):
        with pytest.raises(ValueError):
            KMeansQuantizer().train(flat([[1, 2, 3, 255]]), 0, 10)

    def test_few_colors_are_kept_exactly(self):
        """Fewer distinct colors than requested: one entry each, most common first"""
        stream = flat([[0, 0, 255, 255]], 2) + flat([[255, 0, 0, 255]], 5)
        table = KMeansQuantizer().train(stream, 10, quality=1)

        assert table.colors == [(255, 0, 0, 255), (0, 0, 255, 255)]

    def test_accepts_ndarray_input(self):
        stream = np.array([255, 0, 0, 255] * 4, dtype=np.uint8)
        table = KMeansQuantizer().train(stream, 4, quality=1)
        assert table.colors == [(255, 0, 0, 255)]

    def test_quality_samples_stream(self):
        # Every 2nd pixel: only the red ones are seen
        stream = flat([[255, 0, 0, 255], [0, 255, 0, 255]] * 4)
        table = KMeansQuantizer().train(stream, 10, quality=2)
        assert table.colors == [(255, 0, 0, 255)]

    def test_quality_is_clamped(self):
        stream = flat([[10, 20, 30, 255]], 5)
        table = KMeansQuantizer().train(stream, 10, quality=1000)
        assert table.colors == [(10, 20, 30, 255)]

    def test_clustering_limits_table_size(self):
        rng = np.random.default_rng(7)
        colors = rng.integers(0, 256, size=(300, 4), dtype=np.uint8)
        colors[:, 3] = 255

        table = KMeansQuantizer().train(colors.tobytes(), 8, quality=1)

        assert len(table) == 8
        assert all(len(entry) == 4 for entry in table.colors)

    def test_clustering_is_deterministic(self):
        rng = np.random.default_rng(11)
        colors = rng.integers(0, 256, size=(200, 4), dtype=np.uint8)
        colors[:, 3] = 255
        stream = colors.tobytes()

        first = KMeansQuantizer(random_state=42).train(stream, 5, quality=1)
        second = KMeansQuantizer(random_state=42).train(stream, 5, quality=1)

        assert first.colors == second.colors

    def test_separated_groups_recovered(self):
        stream = (flat([[250, 10, 10, 255], [240, 0, 0, 255]], 50)
                  + flat([[10, 10, 250, 255], [0, 0, 240, 255]], 30)
                  + flat([[10, 250, 10, 255], [0, 240, 0, 255]], 10))
        table = KMeansQuantizer().train(stream, 3, quality=1)

        red, blue, green = table.colors
        assert red[0] > 200 and red[2] < 50
        assert blue[2] > 200 and blue[0] < 50
        assert green[1] > 200 and green[0] < 50
