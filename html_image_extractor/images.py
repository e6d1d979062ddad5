"""Decoding, re-encoding and saving of inline images."""

from __future__ import annotations

import base64
import io
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from filetype import guess
from PIL import Image

from .config import JPEG_QUALITY
from .models import ImageCandidate, ImageFile, ImageOutputFormat

logger = logging.getLogger("html_image_extractor")

MEDIA_SUBTYPE_PATTERN = re.compile(r"data:image/([a-z0-9+]+)", re.IGNORECASE)
DEFAULT_MEDIA_SUBTYPE = "png"
# Modes each Pillow encoder writes as is; anything else is converted first.
# WEBP converts on its own.
WRITABLE_MODES: Dict[str, Set[str]] = {
    "PNG": {"1", "L", "LA", "P", "RGB", "RGBA", "I", "I;16"},
    "JPEG": {"1", "L", "RGB", "CMYK"},
}

# Pillow format name, save options, file extension.
_ENCODER_SETTINGS: Dict[ImageOutputFormat, Tuple[str, Dict[str, Any], str]] = {
    ImageOutputFormat.PNG: ("PNG", {}, "png"),
    ImageOutputFormat.JPEG: ("JPEG", {"quality": JPEG_QUALITY}, "jpg"),
    ImageOutputFormat.WEBP: ("WEBP", {}, "webp"),
}


def encoder_settings(image_format: ImageOutputFormat) -> Tuple[str, Dict[str, Any], str]:
    """Return Pillow format, save options and extension, defaulting to PNG."""
    return _ENCODER_SETTINGS.get(image_format, _ENCODER_SETTINGS[ImageOutputFormat.PNG])


def resolve_output_format(image_format: ImageOutputFormat) -> ImageOutputFormat:
    """Return the format actually written for ``image_format``."""
    if image_format in _ENCODER_SETTINGS:
        return ImageOutputFormat(image_format)
    return ImageOutputFormat.PNG


def file_extension(image_format: ImageOutputFormat) -> str:
    return encoder_settings(image_format)[2]


def detect_image_format(data: bytes) -> Optional[str]:
    """Detect image type using filetype; returns lowercase extension."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        if ext == "jpeg":
            return "jpg"
        return ext
    return None


def parse_media_subtype(header: str) -> str:
    """Extract the lower-cased subtype from a ``data:image/...`` header."""
    match = MEDIA_SUBTYPE_PATTERN.search(header)
    if not match:
        return DEFAULT_MEDIA_SUBTYPE
    return match.group(1).lower()


def decode_data_url(src: str) -> Tuple[str, bytes]:
    """Split a data URL and decode its payload.

    Returns the media subtype declared in the header and the raw bytes.
    Raises ``ValueError`` (``binascii.Error`` for bad base64) when the URL
    cannot be decoded.
    """
    parts = src.split(",")
    if len(parts) != 2:
        raise ValueError(f"expected a single ',' separator, found {len(parts) - 1}")
    header, payload = parts
    subtype = parse_media_subtype(header)
    data = base64.b64decode("".join(payload.split()), validate=True)
    return subtype, data


def encode_image(image: Image.Image, image_format: ImageOutputFormat) -> Tuple[bytes, str]:
    """Encode a decoded image into the target format.

    Returns the encoded bytes and the file extension to use for them.
    """
    pil_format, options, extension = encoder_settings(image_format)
    writable = WRITABLE_MODES.get(pil_format)
    if writable is not None and image.mode not in writable:
        keep_alpha = pil_format == "PNG" and "A" in image.mode
        image = image.convert("RGBA" if keep_alpha else "RGB")
    buffer = io.BytesIO()
    image.save(buffer, format=pil_format, **options)
    return buffer.getvalue(), extension


def _convert(
    src: str,
    sequence: int,
    image_format: ImageOutputFormat,
    name_prefix: str,
) -> ImageFile:
    image_format = resolve_output_format(image_format)
    subtype, raw = decode_data_url(src)

    detected = detect_image_format(raw)
    if detected and detected != subtype and not (detected == "jpg" and subtype == "jpeg"):
        logger.debug("Declared image/%s but payload looks like %s", subtype, detected)

    with Image.open(io.BytesIO(raw)) as image:
        image.load()
        data, extension = encode_image(image, image_format)

    return ImageFile(
        file_name=f"{name_prefix}_{sequence}.{extension}",
        file_data=data,
        original_media_subtype=subtype,
        output_format=image_format,
        file_size_bytes=len(data),
    )


def convert_candidate(
    candidate: ImageCandidate,
    sequence: int,
    image_format: ImageOutputFormat,
    name_prefix: str,
) -> Optional[ImageFile]:
    """Turn one inline image into an ``ImageFile``, or None if it cannot be used."""
    try:
        image_file = _convert(candidate.src, sequence, image_format, name_prefix)
    except (ValueError, OSError, Image.DecompressionBombError) as exc:
        logger.warning("Failed to process base64 image: %s", exc)
        return None
    except Exception:  # pylint: disable=broad-except
        logger.exception("Unexpected error while converting inline image")
        return None
    logger.debug(
        "Converted image/%s to %s (%d bytes)",
        image_file.original_media_subtype,
        image_file.file_name,
        image_file.file_size_bytes,
    )
    return image_file


def save_images(image_files: Sequence[ImageFile], output_dir: Path) -> List[Path]:
    """Write extracted images below ``output_dir`` and return the saved paths."""
    if not image_files:
        return []
    output_dir.mkdir(parents=True, exist_ok=True)

    saved: List[Path] = []
    for image_file in image_files:
        destination = output_dir / image_file.file_name
        try:
            destination.write_bytes(image_file.file_data)
        except OSError as exc:
            logger.warning("Failed to write image %s: %s", destination, exc)
            continue
        logger.info("Saved %s", destination)
        saved.append(destination)
    return saved
