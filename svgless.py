#!python3
import argparse
import logging
import sys
from pathlib import Path

from tqdm import tqdm

from pack import IconStream
from utils import IconSource, SvgLessConfig, SvgLessError, setup_logging

SOURCES = Path("icons/")
OUTPUT = Path("styles/")


def config_from_args(args) -> SvgLessConfig:
    return SvgLessConfig(
        file_name=args.file_name,
        add_size=args.add_size,
        output_mixin=args.output_mixin,
        mixin_prefix=args.mixin_prefix,
        default_width=args.default_width,
        default_height=args.default_height,
    )


def main(args) -> int:
    try:
        config = config_from_args(args)
    except ValueError as e:
        logging.error(str(e))
        return 2

    svgs = sorted(args.svg_dir.glob("*.svg"))
    if not svgs:
        logging.warning(f"No SVG files found in {args.svg_dir}, nothing written.")
        return 0

    stream = IconStream(config)
    try:
        for svg_path in tqdm(svgs, desc="Packing SVGs", unit=" files"):
            stream.write(IconSource(svg_path.name, svg_path.read_bytes()))
        count = len(stream)
        artifact = stream.end()
    except SvgLessError as e:
        logging.error(str(e))
        return 1

    args.output_dir.mkdir(parents=True, exist_ok=True)
    output = args.output_dir / artifact.name
    output.write_bytes(artifact.content)
    logging.info(f"Wrote {count} icons from {len(svgs)} files to {output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    defaults = SvgLessConfig()
    parser = argparse.ArgumentParser(
        description="Pack a directory of SVG icons into a single LESS file."
    )
    parser.add_argument(
        "--svg-dir",
        type=Path,
        default=SOURCES,
        help="Directory containing the SVG icons",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=OUTPUT,
        help="Directory the LESS file is written to",
    )
    parser.add_argument(
        "--file-name",
        default=defaults.file_name,
        help="Base name of the LESS file (without extension)",
    )
    parser.add_argument(
        "--add-size",
        action="store_true",
        help="Emit width and height for every icon",
    )
    parser.add_argument(
        "--output-mixin",
        action="store_true",
        help="Emit parametrised mixins instead of class rules",
    )
    parser.add_argument(
        "--mixin-prefix",
        default=defaults.mixin_prefix,
        help="Prefix of every class or mixin name",
    )
    parser.add_argument(
        "--default-width",
        default=defaults.default_width,
        help="Width used when neither the file name nor the SVG declares one",
    )
    parser.add_argument(
        "--default-height",
        default=defaults.default_height,
        help="Height used when neither the file name nor the SVG declares one",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


if __name__ == "__main__":
    args = build_parser().parse_args()

    setup_logging()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    sys.exit(main(args))
