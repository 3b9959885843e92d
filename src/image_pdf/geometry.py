"""Page box resolution and image placement on a page.

All values are PDF points (1/72 inch) with the origin at the lower-left
corner of the page.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import InvalidDimensionsError
from .settings import FitMode, Orientation, PageSettings, PageSize

MM_TO_PT = 2.83465

# Portrait boxes in points.
STANDARD_PAGE_SIZES: dict[PageSize, tuple[float, float]] = {
    PageSize.A4: (595.0, 842.0),  # 210 x 297 mm
    PageSize.A3: (842.0, 1191.0),  # 297 x 420 mm
    PageSize.A5: (420.0, 595.0),  # 148 x 210 mm
    PageSize.LETTER: (612.0, 792.0),  # 8.5 x 11 in
    PageSize.LEGAL: (612.0, 1008.0),  # 8.5 x 14 in
}


@dataclass(frozen=True)
class PageBox:
    """Resolved page dimensions in points."""

    width_pt: float
    height_pt: float


@dataclass(frozen=True)
class Placement:
    """Rectangle an image is drawn into, in page coordinates."""

    x: float
    y: float
    width: float
    height: float


def resolve_page_box(settings: PageSettings) -> PageBox:
    """Compute the page box for *settings*.

    Standard sizes come from :data:`STANDARD_PAGE_SIZES`. Custom sizes are
    given in millimeters and converted with :data:`MM_TO_PT`. Landscape
    swaps width and height of the resolved portrait box.

    Raises:
        InvalidDimensionsError: If a custom dimension is missing, not
            finite or not strictly positive.
    """
    if settings.page_size is PageSize.CUSTOM:
        width_mm = settings.custom_width_mm
        height_mm = settings.custom_height_mm
        if width_mm is None or height_mm is None:
            raise InvalidDimensionsError()
        if not (
            math.isfinite(width_mm)
            and math.isfinite(height_mm)
            and width_mm > 0
            and height_mm > 0
        ):
            raise InvalidDimensionsError()
        width, height = width_mm * MM_TO_PT, height_mm * MM_TO_PT
    else:
        width, height = STANDARD_PAGE_SIZES[settings.page_size]

    if settings.orientation is Orientation.LANDSCAPE:
        width, height = height, width

    return PageBox(width_pt=width, height_pt=height)


def calculate_placement(
    img_width: int,
    img_height: int,
    page_width: float,
    page_height: float,
    fit_mode: FitMode,
) -> Placement:
    """Position an image of ``img_width`` x ``img_height`` pixels on a page.

    One pixel counts as one point before scaling. The result is always
    centered; with ``Fill`` and ``Original`` it may extend past the page
    edges (negative ``x``/``y``), which viewers clip to the media box.
    Image dimensions must be positive.
    """
    if fit_mode is FitMode.ORIGINAL:
        width, height = float(img_width), float(img_height)
    else:
        scale_w = page_width / img_width
        scale_h = page_height / img_height
        if fit_mode is FitMode.FIT:
            scale = min(scale_w, scale_h)
        elif fit_mode is FitMode.FILL:
            scale = max(scale_w, scale_h)
        else:
            raise ValueError(f"Unknown fit mode: {fit_mode!r}")
        width, height = img_width * scale, img_height * scale

    return Placement(
        x=(page_width - width) / 2,
        y=(page_height - height) / 2,
        width=width,
        height=height,
    )
