"""Assemble images into a single PDF file, one image per page."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from pathlib import Path

from .content import encode_content, image_operations
from .errors import NoImagesError
from .geometry import PageBox, calculate_placement, resolve_page_box
from .imaging import DecodedImage, decode_image
from .objects import Document, Name, ObjectId, Stream
from .optimize import (
    DEFAULT_JPEG_QUALITY,
    Optimizer,
    create_optimized_image,
    optimize_image,
    remove_temporary,
)
from .serializer import write_document
from .settings import FitMode, PageSettings
from .validation import validate_image

logger = logging.getLogger(__name__)

IMAGE_RESOURCE_NAME = "Im1"
PRODUCER = "image-pdf"

Validator = Callable[[Path], None]
Decoder = Callable[[Path], DecodedImage]


class DocumentBuilder:
    """Builds the PDF object graph for a sequence of image pages.

    The catalog and a reserved page tree object are created up front; every
    :meth:`add_image_page` call appends an image XObject, a content stream
    and a page, in that order. :meth:`finalize` fills in the page tree.
    Any exception leaves the builder unusable; callers discard it.
    """

    def __init__(
        self,
        page_box: PageBox,
        fit_mode: FitMode,
        *,
        validator: Validator | None = validate_image,
        optimizer: Optimizer | None = optimize_image,
        decoder: Decoder = decode_image,
        jpeg_quality: int = DEFAULT_JPEG_QUALITY,
    ):
        self.page_box = page_box
        self.fit_mode = fit_mode
        self.validator = validator
        self.optimizer = optimizer
        self.decoder = decoder
        self.jpeg_quality = jpeg_quality

        self.document = Document()
        self.pages_id = self.document.new_object_id()
        catalog_id = self.document.add_object({
            "Type": Name("Catalog"),
            "Pages": self.pages_id,
        })
        self.document.trailer["Root"] = catalog_id
        self.page_ids: list[ObjectId] = []

    def _load_image(self, image_path: Path) -> DecodedImage:
        """Decode *image_path*, through an optimized temporary copy if any."""
        temp_path = None
        if self.optimizer is not None:
            temp_path = create_optimized_image(
                image_path,
                optimizer=self.optimizer,
                quality=self.jpeg_quality,
            )

        try:
            return self.decoder(temp_path or image_path)
        finally:
            if temp_path is not None:
                remove_temporary(temp_path)

    def add_image_page(self, image_path: str | os.PathLike[str]) -> ObjectId:
        """Append one page showing *image_path* and return the page id."""
        image_path = Path(image_path)
        if self.validator is not None:
            self.validator(image_path)

        image = self._load_image(image_path)
        placement = calculate_placement(
            image.width,
            image.height,
            self.page_box.width_pt,
            self.page_box.height_pt,
            self.fit_mode,
        )

        image_id = self.document.add_object(Stream(
            {
                "Type": Name("XObject"),
                "Subtype": Name("Image"),
                "Width": image.width,
                "Height": image.height,
                "ColorSpace": Name("DeviceRGB"),
                "BitsPerComponent": 8,
                "Length": len(image.data),
            },
            image.data,
        ))

        content = encode_content(image_operations(placement, IMAGE_RESOURCE_NAME))
        content_id = self.document.add_object(
            Stream({"Length": len(content)}, content)
        )

        page_id = self.document.add_object({
            "Type": Name("Page"),
            "Parent": self.pages_id,
            "MediaBox": [0, 0, self.page_box.width_pt, self.page_box.height_pt],
            "Contents": content_id,
            "Resources": {
                "XObject": {IMAGE_RESOURCE_NAME: image_id},
            },
        })
        self.page_ids.append(page_id)

        logger.debug(
            f"Added page {len(self.page_ids)} from {image_path.name}: "
            f"{image.width}x{image.height} px at "
            f"({placement.x:.2f}, {placement.y:.2f}) "
            f"{placement.width:.2f}x{placement.height:.2f} pt"
        )
        return page_id

    def finalize(self) -> Document:
        """Write the page tree and document info, and return the document."""
        self.document.set_object(self.pages_id, {
            "Type": Name("Pages"),
            "Count": len(self.page_ids),
            "Kids": list(self.page_ids),
        })
        self.document.trailer["Info"] = self.document.add_object({"Producer": PRODUCER})
        return self.document


def build_document(
    image_paths: Sequence[str | os.PathLike[str]],
    page_box: PageBox,
    fit_mode: FitMode,
    **builder_options,
) -> Document:
    """Build a document with one page per image, in input order.

    Keyword arguments are passed to :class:`DocumentBuilder`.

    Raises:
        NoImagesError: If *image_paths* is empty.
        ImagePdfError: The first failure of any image; no document is
            returned in that case.
    """
    if not image_paths:
        raise NoImagesError()

    builder = DocumentBuilder(page_box, fit_mode, **builder_options)
    for path in image_paths:
        builder.add_image_page(path)
    return builder.finalize()


def assemble_pdf(
    *,
    image_paths: Sequence[str | os.PathLike[str]],
    output_path: str | os.PathLike[str],
    settings: PageSettings | None = None,
    **builder_options,
) -> int:
    """Combine images into a single PDF file.

    The whole document is built in memory first; the output file is only
    written once every image has been embedded.

    Args:
        image_paths: Ordered image file paths, one page each.
        output_path: Path to write the output PDF. Parent directories are
            created as needed.
        settings: Page layout. Defaults to A4 portrait, fit.
        **builder_options: Collaborator overrides for
            :class:`DocumentBuilder` (``validator``, ``optimizer``,
            ``decoder``, ``jpeg_quality``).

    Returns:
        Size of the written PDF in bytes.

    Raises:
        NoImagesError: If *image_paths* is empty.
        InvalidDimensionsError: If custom page dimensions are invalid.
        ImagePdfError: If any image fails or the file cannot be written.
    """
    if not image_paths:
        raise NoImagesError()

    settings = settings or PageSettings()
    page_box = resolve_page_box(settings)
    document = build_document(
        image_paths,
        page_box,
        settings.fit_mode,
        **builder_options,
    )
    return write_document(document, output_path)
