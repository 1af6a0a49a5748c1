"""
Tests for the command-line wrapper and configuration defaults.
"""

import json

import numpy as np
import pytest
from PIL import Image

from vibrant.cli import main
from vibrant.config import Config


@pytest.fixture
def red_on_white_png(tmp_path):
    array = np.full((20, 20, 4), 255, dtype=np.uint8)
    array[8:12, 8:12] = (230, 20, 20, 255)
    path = tmp_path / "red_on_white.png"
    Image.fromarray(array).save(path)
    return path


class TestConfig:
    """Test configuration defaults and validators"""

    def test_defaults(self):
        assert Config.COLOR_COUNT == 10
        assert Config.QUALITY == 10

    def test_validators(self):
        assert Config.validate_color_count(10)
        assert not Config.validate_color_count(0)
        assert not Config.validate_color_count(257)
        assert Config.validate_quality(1)
        assert not Config.validate_quality(31)

    def test_filter_settings(self):
        settings = Config.filter_settings()
        assert settings.min_alpha == Config.MIN_ALPHA
        assert settings.max_color == Config.MAX_COLOR


class TestCli:
    """Test the palette and vibrancy commands"""

    def test_palette_command(self, red_on_white_png, capsys):
        assert main(["palette", str(red_on_white_png)]) == 0
        out = capsys.readouterr().out
        assert out.strip() == "Color Palette { #E61414 }"

    def test_palette_json(self, red_on_white_png, capsys):
        assert main(["palette", str(red_on_white_png), "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["total_population"] == 400
        assert payload["colors"][0]["hex"] == "#E61414"

    def test_vibrancy_command(self, red_on_white_png, capsys):
        assert main(["vibrancy", str(red_on_white_png)]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "(20, 20)"
        assert "primary: #E61414" in lines
        assert "dark: none" in lines
        assert len(lines) == 7

    def test_vibrancy_json(self, red_on_white_png, capsys):
        assert main(["vibrancy", str(red_on_white_png), "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert (payload["width"], payload["height"]) == (20, 20)
        assert payload["swatches"]["primary"]["rgb"] == [230, 20, 20]
        assert payload["swatches"]["light"] is None

    def test_missing_image(self, tmp_path):
        assert main(["vibrancy", str(tmp_path / "missing.png")]) == 1

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("not an image")
        assert main(["palette", str(path)]) == 1

    def test_invalid_color_count(self, red_on_white_png):
        assert main(["palette", str(red_on_white_png), "--colors", "0"]) == 2
