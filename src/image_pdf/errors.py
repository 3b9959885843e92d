"""Exceptions raised while validating images and building PDFs."""

from __future__ import annotations


class ImagePdfError(Exception):
    """Base exception for image-pdf errors.

    ``kind`` names the failure category reported back to callers of
    :func:`image_pdf.generate_pdf`.
    """

    kind = "ImagePdfError"


class UnsupportedFormatError(ImagePdfError):
    """Raised when a file extension is not a supported image format."""

    kind = "UnsupportedFormat"

    def __init__(self, detail: str) -> None:
        super().__init__(f"Unsupported image format: {detail}")


class ImageNotFoundError(ImagePdfError):
    """Raised when an image path does not exist."""

    kind = "ImageNotFound"

    def __init__(self, path: str) -> None:
        super().__init__(f"Image file not found: {path}")
        self.path = path


class ImageReadError(ImagePdfError):
    """Raised when an image cannot be decoded."""

    kind = "ImageReadError"

    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to read image: {detail}")


class ImageProcessingError(ImagePdfError):
    """Raised when an image cannot be optimized before embedding."""

    kind = "ImageProcessingError"

    def __init__(self, detail: str) -> None:
        super().__init__(f"Image processing error: {detail}")


class ImageTooLargeError(ImagePdfError):
    """Raised when an image file exceeds the size limit."""

    kind = "ImageTooLarge"

    def __init__(self, size_bytes: int) -> None:
        super().__init__(f"Image file too large: {size_bytes} bytes (max 50 MB)")
        self.size_bytes = size_bytes


class PdfGenerationError(ImagePdfError):
    """Raised when the PDF object graph cannot be built or serialized."""

    kind = "PdfGenerationError"

    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to generate PDF: {detail}")


class IoError(ImagePdfError):
    """Raised on filesystem failures."""

    kind = "IoError"

    def __init__(self, detail: str) -> None:
        super().__init__(f"IO error: {detail}")


class InvalidDimensionsError(ImagePdfError):
    """Raised when custom page dimensions are missing or not positive."""

    kind = "InvalidDimensions"

    def __init__(self) -> None:
        super().__init__("Invalid custom page dimensions")


class NoImagesError(ImagePdfError):
    """Raised when PDF generation is requested for an empty image list."""

    kind = "NoImages"

    def __init__(self) -> None:
        super().__init__("No images provided")
