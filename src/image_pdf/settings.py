"""Page settings accepted by the PDF generator."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class PageSize(str, Enum):
    A4 = "A4"
    A3 = "A3"
    A5 = "A5"
    LETTER = "Letter"
    LEGAL = "Legal"
    CUSTOM = "Custom"


class Orientation(str, Enum):
    PORTRAIT = "Portrait"
    LANDSCAPE = "Landscape"


class FitMode(str, Enum):
    """How an image is scaled onto its page.

    ``Fit`` keeps the whole image visible, ``Fill`` covers the page and lets
    the overflow be cropped by the viewer, ``Original`` draws the image at
    its native pixel size.
    """

    FIT = "Fit"
    FILL = "Fill"
    ORIGINAL = "Original"


@dataclass
class PageSettings:
    """Page layout for one generation run.

    Custom dimensions are in millimeters and only consulted when
    ``page_size`` is :attr:`PageSize.CUSTOM`.
    """

    page_size: PageSize = PageSize.A4
    custom_width_mm: float | None = None
    custom_height_mm: float | None = None
    orientation: Orientation = Orientation.PORTRAIT
    fit_mode: FitMode = FitMode.FIT

    def __post_init__(self) -> None:
        self.page_size = PageSize(self.page_size)
        self.orientation = Orientation(self.orientation)
        self.fit_mode = FitMode(self.fit_mode)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PageSettings:
        """Build settings from the camelCase mapping used by front ends.

        Example::

            PageSettings.from_dict({
                "pageSize": "Custom",
                "customWidth": 100,
                "customHeight": 150,
                "orientation": "Landscape",
                "fitMode": "Fill",
            })

        Raises:
            ValueError: If an enum field holds an unknown value.
        """
        return cls(
            page_size=PageSize(data.get("pageSize", PageSize.A4)),
            custom_width_mm=data.get("customWidth"),
            custom_height_mm=data.get("customHeight"),
            orientation=Orientation(data.get("orientation", Orientation.PORTRAIT)),
            fit_mode=FitMode(data.get("fitMode", FitMode.FIT)),
        )
