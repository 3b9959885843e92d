"""Pre-embedding image optimization.

PNG files are re-saved losslessly without ancillary chunks, JPEG files are
re-encoded at a target quality. The optimized copy lives in a temporary
file that the caller removes once the image has been decoded.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path

from PIL import Image

from .errors import ImageProcessingError, ImageReadError, IoError

logger = logging.getLogger(__name__)

DEFAULT_JPEG_QUALITY = 85

_PNG_EXTENSIONS = (".png",)
_JPEG_EXTENSIONS = (".jpg", ".jpeg")

# Bytes of the source file name kept in temporary names; keeps them under
# the usual 255-byte file name limit.
_TEMP_NAME_TAIL = 100

Optimizer = Callable[[Path, Path, int], None]


def optimize_png(input_path: Path, output_path: Path) -> None:
    """Re-save a PNG with maximum zlib effort and no metadata chunks.

    Raises:
        ImageReadError: If the PNG cannot be opened.
        ImageProcessingError: If re-encoding fails.
    """
    try:
        img = Image.open(input_path)
        img.load()
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageReadError(f"Failed to read PNG: {exc}") from exc

    with img:
        # Only transparency survives; text, time and other chunks are dropped.
        params = {}
        if "transparency" in img.info:
            params["transparency"] = img.info["transparency"]
        try:
            img.save(output_path, format="PNG", optimize=True, **params)
        except (OSError, ValueError) as exc:
            raise ImageProcessingError(f"PNG optimization failed: {exc}") from exc


def optimize_jpeg(input_path: Path, output_path: Path, quality: int) -> None:
    """Re-encode a JPEG at *quality*, clamped to 1..100.

    Raises:
        ImageReadError: If the source cannot be opened.
        ImageProcessingError: If encoding fails.
    """
    quality = max(1, min(100, quality))

    try:
        img = Image.open(input_path)
        img.load()
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageReadError(f"Failed to read JPEG: {exc}") from exc

    with img:
        if img.mode not in ("RGB", "L", "CMYK"):
            img = img.convert("RGB")
        try:
            img.save(output_path, format="JPEG", quality=quality, optimize=True)
        except (OSError, ValueError) as exc:
            raise ImageProcessingError(f"JPEG encoding failed: {exc}") from exc


def optimize_image(input_path: Path, output_path: Path, jpeg_quality: int) -> None:
    """Optimize *input_path* into *output_path* based on its extension.

    Formats other than PNG and JPEG are copied unchanged.
    """
    suffix = input_path.suffix.lower()
    if suffix in _PNG_EXTENSIONS:
        optimize_png(input_path, output_path)
    elif suffix in _JPEG_EXTENSIONS:
        optimize_jpeg(input_path, output_path, jpeg_quality)
    else:
        try:
            shutil.copyfile(input_path, output_path)
        except OSError as exc:
            raise IoError(f"Failed to copy image: {exc}") from exc


def _name_tail(name: str) -> str:
    return name.encode("utf-8")[-_TEMP_NAME_TAIL:].decode("utf-8", errors="ignore")


def is_optimizable(path: Path) -> bool:
    return path.suffix.lower() in _PNG_EXTENSIONS + _JPEG_EXTENSIONS


def create_optimized_image(
    input_path: Path,
    *,
    optimizer: Optimizer = optimize_image,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> Path | None:
    """Write an optimized copy of *input_path* to a temporary file.

    Returns:
        The temporary path, or ``None`` when the format is not optimized and
        the original file should be embedded as-is. The caller owns the
        returned file and should pass it to :func:`remove_temporary`.

    Raises:
        IoError: If the temporary file cannot be created.
        ImagePdfError: Whatever *optimizer* raises.
    """
    if not is_optimizable(input_path):
        return None

    try:
        fd, name = tempfile.mkstemp(
            prefix="optimized_",
            suffix=f"_{_name_tail(input_path.name)}",
        )
    except OSError as exc:
        raise IoError(f"Failed to create temporary file: {exc}") from exc
    os.close(fd)
    temp_path = Path(name)

    try:
        optimizer(input_path, temp_path, quality)
    except BaseException:
        remove_temporary(temp_path)
        raise

    logger.debug(
        f"Optimized {input_path.name}: "
        f"{input_path.stat().st_size:,} -> {temp_path.stat().st_size:,} bytes"
    )
    return temp_path


def remove_temporary(path: Path) -> None:
    """Delete a temporary file, ignoring failures.

    Cleanup never fails a generation run; a leftover file in the temp
    directory is acceptable.
    """
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.debug(f"Could not remove temporary file {path}: {exc}")
