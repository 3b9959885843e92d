"""Checks applied to image files before they are embedded."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import (
    ImageNotFoundError,
    ImagePdfError,
    ImageTooLargeError,
    IoError,
    UnsupportedFormatError,
)

MAX_FILE_SIZE = 50 * 1024 * 1024

SUPPORTED_FORMATS = ("png", "jpg", "jpeg", "webp", "bmp", "gif", "tiff", "tif")


@dataclass
class InvalidImage:
    path: str
    error: str


@dataclass
class ValidationResult:
    """Outcome of validating a batch of image paths."""

    valid: list[str] = field(default_factory=list)
    invalid: list[InvalidImage] = field(default_factory=list)


def validate_image_format(path: str | os.PathLike[str]) -> None:
    """Check the file extension against :data:`SUPPORTED_FORMATS`.

    Raises:
        UnsupportedFormatError: If the extension is missing or unsupported.
    """
    extension = Path(path).suffix.lower().lstrip(".")
    if not extension:
        raise UnsupportedFormatError("No file extension")

    if extension not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(
            f".{extension} (supported: {', '.join(SUPPORTED_FORMATS)})"
        )


def validate_file_size(path: str | os.PathLike[str]) -> None:
    """Reject files larger than :data:`MAX_FILE_SIZE`.

    Raises:
        ImageTooLargeError: If the file is over the limit.
        IoError: If the file size cannot be read.
    """
    try:
        size = os.stat(path).st_size
    except OSError as exc:
        raise IoError(str(exc)) from exc

    if size > MAX_FILE_SIZE:
        raise ImageTooLargeError(size)


def validate_file_exists(path: str | os.PathLike[str]) -> None:
    if not Path(path).exists():
        raise ImageNotFoundError(str(path))


def validate_image(path: str | os.PathLike[str]) -> None:
    """Run all checks on a single image path, in order.

    Existence is checked first, then the extension, then the file size.

    Raises:
        ImageNotFoundError: If the path does not exist.
        UnsupportedFormatError: If the extension is not supported.
        ImageTooLargeError: If the file exceeds 50 MiB.
    """
    validate_file_exists(path)
    validate_image_format(path)
    validate_file_size(path)


def validate_images(paths: list[str]) -> ValidationResult:
    """Validate many paths without raising, partitioning them by outcome."""
    result = ValidationResult()
    for path in paths:
        try:
            validate_image(path)
        except ImagePdfError as exc:
            result.invalid.append(InvalidImage(path=path, error=str(exc)))
        else:
            result.valid.append(path)
    return result
