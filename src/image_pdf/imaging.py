"""Image decoding with Pillow."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from .errors import ImageReadError, IoError
from .validation import validate_image

logger = logging.getLogger(__name__)


@dataclass
class DecodedImage:
    """Pixel data ready to embed: interleaved 8-bit RGB samples."""

    width: int
    height: int
    data: bytes


@dataclass
class ImageInfo:
    width: int
    height: int
    format: str
    size_bytes: int


def decode_image(path: str | os.PathLike[str]) -> DecodedImage:
    """Decode *path* and convert it to RGB8.

    Palette, grayscale and alpha images are flattened to RGB; alpha is
    dropped.

    Raises:
        ImageReadError: If Pillow cannot open or decode the file.
    """
    try:
        with Image.open(path) as img:
            rgb = img.convert("RGB")
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageReadError(f"{path}: {exc}") from exc

    data = rgb.tobytes()
    logger.debug(f"Decoded {path}: {rgb.width}x{rgb.height}, {len(data):,} bytes")
    return DecodedImage(width=rgb.width, height=rgb.height, data=data)


def get_image_info(path: str | os.PathLike[str]) -> ImageInfo:
    """Return pixel dimensions, format and file size of a validated image.

    ``format`` is the upper-cased file extension (``"PNG"``, ``"JPG"``...).

    Raises:
        ImageNotFoundError, UnsupportedFormatError, ImageTooLargeError:
            From :func:`~image_pdf.validation.validate_image`.
        ImageReadError: If the image header cannot be read.
    """
    validate_image(path)

    try:
        with Image.open(path) as img:
            width, height = img.size
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageReadError(f"{path}: {exc}") from exc

    try:
        size_bytes = os.stat(path).st_size
    except OSError as exc:
        raise IoError(str(exc)) from exc

    return ImageInfo(
        width=width,
        height=height,
        format=Path(path).suffix.lstrip(".").upper() or "UNKNOWN",
        size_bytes=size_bytes,
    )
