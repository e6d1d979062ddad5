"""Utility helpers for URL composition and input checks."""

from __future__ import annotations

from typing import Optional


def join_url(base_url: str, file_name: str) -> str:
    """Join a served image directory and a file name with a single slash."""
    return f"{base_url.rstrip('/')}/{file_name}"


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()
