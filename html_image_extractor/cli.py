"""Command-line entry point for the inline image extractor."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_NAME_PREFIX,
    DEFAULT_OUTPUT_DIR,
    ExtractConfig,
)
from .extractor import extract_with_config
from .images import save_images
from .models import ImageOutputFormat
from .utils import is_blank

logger = logging.getLogger("html_image_extractor.cli")


def _parse_format(value: str) -> ImageOutputFormat:
    try:
        return ImageOutputFormat.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Extract inline base64 images from HTML, save them as files and "
            "rewrite the img tags to reference them."
        ),
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        default=None,
        help="HTML file to process (reads STDIN when omitted)",
    )
    parser.add_argument(
        "--output",
        default=DEFAULT_OUTPUT_DIR,
        type=Path,
        help="Directory where extracted image files should be written",
    )
    parser.add_argument(
        "--html-output",
        type=Path,
        default=None,
        help="Write the rewritten HTML to this file instead of STDOUT",
    )
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help="URL prefix the rewritten img tags should point at",
    )
    parser.add_argument(
        "--format",
        dest="image_format",
        type=_parse_format,
        default=ImageOutputFormat.PNG,
        help="Output image format: png, jpeg (jpg) or webp",
    )
    parser.add_argument(
        "--prefix",
        default=DEFAULT_NAME_PREFIX,
        help="Prefix for generated file names",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def _read_html(path: Path | None) -> str:
    if path is None:
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    try:
        html = _read_html(args.input)
    except OSError as exc:
        parser.error(f"cannot read {args.input}: {exc}")
    if is_blank(html):
        parser.error("HTML content cannot be null or empty")

    config = ExtractConfig(
        base_url=args.base_url,
        image_format=args.image_format,
        name_prefix=args.prefix,
        output_root=Path(args.output).resolve(),
    )

    start = time.perf_counter()
    result = extract_with_config(html, config)
    for image in result.image_files:
        logger.info(
            "File: %s, Size: %d byte, Format: %s",
            image.file_name,
            image.file_size_bytes,
            image.output_format.name,
        )
    saved = save_images(result.image_files, config.output_root)
    elapsed = time.perf_counter() - start

    if args.html_output:
        args.html_output.parent.mkdir(parents=True, exist_ok=True)
        args.html_output.write_text(result.modified_html, encoding="utf-8")
        logger.info("Saved HTML to %s", args.html_output)
    else:
        sys.stdout.write(result.modified_html)
        if not result.modified_html.endswith("\n"):
            sys.stdout.write("\n")
        sys.stdout.flush()

    logger.info(
        "Finished in %.2fs (%d image(s), %d bytes, %d saved)",
        elapsed,
        len(result.image_files),
        result.total_bytes,
        len(saved),
    )
    return 0 if len(saved) == len(result.image_files) else 1


if __name__ == "__main__":
    sys.exit(main())
