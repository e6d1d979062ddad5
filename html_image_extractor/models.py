"""Data models used throughout the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from bs4 import Tag


class ImageOutputFormat(str, Enum):
    """Binary formats extracted images can be re-encoded into."""

    PNG = "png"
    JPEG = "jpeg"
    WEBP = "webp"

    @classmethod
    def parse(cls, value: str) -> "ImageOutputFormat":
        """Resolve a user supplied format name such as ``PNG`` or ``jpg``."""
        normalized = value.strip().lower()
        if normalized == "jpg":
            normalized = "jpeg"
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unsupported image format: {value!r}") from None


@dataclass
class ImageCandidate:
    """An ``img`` element whose ``src`` holds an inline base64 image."""

    element: Tag
    src: str


@dataclass
class ImageFile:
    """Re-encoded image ready to be written to disk or uploaded."""

    file_name: str
    file_data: bytes
    original_media_subtype: str
    output_format: ImageOutputFormat
    file_size_bytes: int


@dataclass
class ExtractResult:
    """Rewritten HTML together with the images pulled out of it."""

    modified_html: str
    image_files: List[ImageFile] = field(default_factory=list)

    @property
    def total_bytes(self) -> int:
        return sum(image.file_size_bytes for image in self.image_files)
