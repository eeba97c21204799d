"""
Module: imagerecord
Purpose: Image format variants and the per-image record dataclass.
"""

from dataclasses import dataclass
from enum import Enum

from ..exceptions import AlreadyGroupedError


class ImageFormat(Enum):
    """
    Closed set of encoding schemes the size model knows about.
    The value is the label printed next to each computed size.
    """

    BASELINE = "JPEG/Baseline"
    JP2 = "JP2/2000"
    BMP = "BMP"

    @property
    def label(self) -> str:
        return self.value


@dataclass
class ImageRecord:
    """
    One user-declared image with its size computed at creation time.
    """

    index: int
    format: ImageFormat
    width: int
    height: int
    size: int
    grouped: bool = False

    def mark_grouped(self) -> None:
        """Flag the record as consumed by a stack compression pass."""
        if self.grouped:
            raise AlreadyGroupedError(f"Image {self.index} is already part of a group")
        self.grouped = True
