"""Configuration objects and constants for image extraction."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .models import ImageOutputFormat

DEFAULT_BASE_URL = "/images"
DEFAULT_NAME_PREFIX = "image"
DEFAULT_OUTPUT_DIR = "output"
JPEG_QUALITY = 90
HTML_PARSER = "html.parser"


@dataclass
class ExtractConfig:
    """Settings that control how inline images are externalized."""

    base_url: str = DEFAULT_BASE_URL
    image_format: ImageOutputFormat = ImageOutputFormat.PNG
    name_prefix: str = DEFAULT_NAME_PREFIX
    output_root: Path = Path(DEFAULT_OUTPUT_DIR)
