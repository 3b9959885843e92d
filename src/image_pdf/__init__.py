"""image-pdf: Combine raster images into a PDF, one image per page."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass

from .assembler import DocumentBuilder, assemble_pdf, build_document
from .errors import (
    ImageNotFoundError,
    ImagePdfError,
    ImageProcessingError,
    ImageReadError,
    ImageTooLargeError,
    InvalidDimensionsError,
    IoError,
    NoImagesError,
    PdfGenerationError,
    UnsupportedFormatError,
)
from .geometry import PageBox, Placement, calculate_placement, resolve_page_box
from .imaging import DecodedImage, ImageInfo, decode_image, get_image_info
from .serializer import serialize
from .settings import FitMode, Orientation, PageSettings, PageSize
from .validation import ValidationResult, validate_image, validate_images

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "DecodedImage",
    "DocumentBuilder",
    "FitMode",
    "GenerationResult",
    "ImageInfo",
    "ImageNotFoundError",
    "ImagePdfError",
    "ImageProcessingError",
    "ImageReadError",
    "ImageTooLargeError",
    "InvalidDimensionsError",
    "IoError",
    "NoImagesError",
    "Orientation",
    "PageBox",
    "PageSettings",
    "PageSize",
    "PdfGenerationError",
    "Placement",
    "UnsupportedFormatError",
    "ValidationResult",
    "assemble_pdf",
    "build_document",
    "calculate_placement",
    "decode_image",
    "generate_pdf",
    "get_image_info",
    "resolve_page_box",
    "serialize",
    "validate_image",
    "validate_images",
]

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Outcome of :func:`generate_pdf`."""

    success: bool
    output_path: str | None = None
    error: str | None = None
    error_kind: str | None = None
    page_count: int = 0
    size_bytes: int = 0


def generate_pdf(
    image_paths: Sequence[str | os.PathLike[str]],
    output_path: str | os.PathLike[str],
    settings: PageSettings | None = None,
    **builder_options,
) -> GenerationResult:
    """Generate a PDF from images and report the outcome as a value.

    This never raises: every failure, including the empty-input case, is
    returned in :attr:`GenerationResult.error` with its category in
    :attr:`GenerationResult.error_kind`. On failure no output file is
    written.

    Args:
        image_paths: Ordered image file paths, one page each.
        output_path: Where to save the PDF.
        settings: Page layout. Defaults to A4 portrait, fit.
        **builder_options: Collaborator overrides passed through to
            :func:`~image_pdf.assembler.assemble_pdf`.

    Example::

        from image_pdf import FitMode, PageSettings, PageSize, generate_pdf

        result = generate_pdf(
            ["scan_01.png", "scan_02.jpg"],
            "scans.pdf",
            PageSettings(page_size=PageSize.LETTER, fit_mode=FitMode.FILL),
        )
        if not result.success:
            print(result.error)
    """
    try:
        size = assemble_pdf(
            image_paths=image_paths,
            output_path=output_path,
            settings=settings,
            **builder_options,
        )
    except ImagePdfError as exc:
        logger.warning(f"PDF generation failed: {exc}")
        return GenerationResult(success=False, error=str(exc), error_kind=exc.kind)
    except Exception as exc:
        logger.exception("Unexpected error during PDF generation")
        error = PdfGenerationError(str(exc))
        return GenerationResult(success=False, error=str(error), error_kind=error.kind)

    return GenerationResult(
        success=True,
        output_path=os.fspath(output_path),
        page_count=len(image_paths),
        size_bytes=size,
    )
