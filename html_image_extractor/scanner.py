"""Discovery of inline base64 images inside parsed HTML."""

from __future__ import annotations

import re
from typing import Iterator, Optional

from bs4 import BeautifulSoup

from .models import ImageCandidate
from .utils import is_blank

DATA_URL_PATTERN = re.compile(r"^data:image/[a-z0-9+/]+;base64,", re.IGNORECASE)


def is_base64_data_url(src: Optional[str]) -> bool:
    """Return True when ``src`` looks like ``data:image/<type>;base64,...``."""
    if is_blank(src):
        return False
    return DATA_URL_PATTERN.match(src) is not None


def iter_candidates(soup: BeautifulSoup) -> Iterator[ImageCandidate]:
    """Yield ``img`` elements carrying inline image data, in document order."""
    for img in soup.find_all("img", src=True):
        src = img.get("src")
        if not isinstance(src, str) or not is_base64_data_url(src):
            continue
        yield ImageCandidate(element=img, src=src)
