"""High-level orchestration for pulling inline images out of HTML."""

from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import BeautifulSoup

from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_NAME_PREFIX,
    HTML_PARSER,
    ExtractConfig,
)
from .images import convert_candidate
from .models import ExtractResult, ImageFile, ImageOutputFormat
from .scanner import iter_candidates
from .utils import is_blank, join_url

logger = logging.getLogger("html_image_extractor")


def extract(
    html: Optional[str],
    base_url: str = DEFAULT_BASE_URL,
    image_format: ImageOutputFormat = ImageOutputFormat.PNG,
    name_prefix: str = DEFAULT_NAME_PREFIX,
) -> ExtractResult:
    """Replace inline base64 images with file references.

    Every ``img`` whose ``src`` is a ``data:image/...;base64,...`` URL is
    decoded, re-encoded as ``image_format`` and pointed at
    ``{base_url}/{name_prefix}_{n}.{ext}``. Images that cannot be decoded are
    left untouched and do not consume a sequence number.

    Raises:
        ValueError: if ``html`` is None, empty or whitespace only.
    """
    if is_blank(html):
        raise ValueError("HTML content cannot be null or empty")

    soup = BeautifulSoup(html, HTML_PARSER)
    image_files: List[ImageFile] = []
    attempted = 0

    for candidate in iter_candidates(soup):
        attempted += 1
        image_file = convert_candidate(
            candidate,
            sequence=len(image_files) + 1,
            image_format=image_format,
            name_prefix=name_prefix,
        )
        if image_file is None:
            continue
        image_files.append(image_file)
        candidate.element["src"] = join_url(base_url, image_file.file_name)

    logger.debug(
        "Extracted %d of %d inline image(s)",
        len(image_files),
        attempted,
    )
    return ExtractResult(modified_html=soup.decode(), image_files=image_files)


def extract_with_config(html: Optional[str], config: ExtractConfig) -> ExtractResult:
    """Run :func:`extract` using the settings held in ``config``."""
    return extract(
        html,
        base_url=config.base_url,
        image_format=config.image_format,
        name_prefix=config.name_prefix,
    )
