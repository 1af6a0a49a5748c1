"""
Command-line wrapper around the swatch extractor.

    vibrant palette IMAGE    print the palette, least frequent color first
    vibrant vibrancy IMAGE   print the image size and the six swatch slots
"""
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Environment must be loaded before the config class reads it
load_dotenv()

from loguru import logger
from PIL import Image

from vibrant.config import config
from vibrant.services.colors import ArrayPixelSource, KMeansQuantizer, Vibrancy, build_palette
from vibrant.utils.logging import configure_logging


def load_image(path: Path) -> ArrayPixelSource:
    """Decode an image file into a pixel source."""
    if path.suffix.lower() not in config.SUPPORTED_EXTENSIONS:
        raise ValueError(f"Unsupported image extension '{path.suffix}'. "
                         f"Supported: {', '.join(sorted(config.SUPPORTED_EXTENSIONS))}")

    with Image.open(path) as image:
        image.load()
        return ArrayPixelSource.from_pil(image)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser("vibrant", description="Derive swatch colors from an image")
    ap.add_argument("--log-level", default=None,
                    help=f"Log level (default: {config.LOG_LEVEL})")
    sub = ap.add_subparsers(dest="command", required=True)

    for name, help_text in (("palette", "Print the quantized palette"),
                            ("vibrancy", "Print the six swatch slots")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("image", type=Path)
        cmd.add_argument("--colors", type=int, default=config.COLOR_COUNT,
                         help=f"Palette size (default: {config.COLOR_COUNT})")
        cmd.add_argument("--quality", type=int, default=config.QUALITY,
                         help=f"Sampling factor, 1 = best (default: {config.QUALITY})")
        cmd.add_argument("--json", action="store_true", help="Emit JSON instead of text")

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if not config.validate_color_count(args.colors):
        logger.error(f"Invalid --colors {args.colors}: expected 1-256")
        return 2
    if not config.validate_quality(args.quality):
        logger.error(f"Invalid --quality {args.quality}: expected 1-30")
        return 2

    try:
        image = load_image(args.image)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load image {args.image}: {e}")
        return 1

    quantizer = KMeansQuantizer(random_state=config.RANDOM_STATE)
    palette = build_palette(image, args.colors, args.quality,
                            quantizer=quantizer, filter_settings=config.filter_settings())

    if args.command == "palette":
        palette = palette.sort_by_frequency()
        if args.json:
            print(palette.to_schema().model_dump_json(indent=2))
        else:
            print(palette)
        return 0

    vibrancy = Vibrancy.from_palette(palette)
    if args.json:
        payload = {
            "width": image.width,
            "height": image.height,
            "swatches": vibrancy.to_schema(palette).model_dump(),
        }
        print(json.dumps(payload, indent=2))
    else:
        print(f"({image.width}, {image.height})")
        print(vibrancy)
    return 0


if __name__ == "__main__":
    sys.exit(main())
