"""
Module: catalog
Purpose: Ordered, append-only collection of sized image records.
"""

from typing import Iterator, List, Optional, Tuple

from .models.imagerecord import ImageFormat, ImageRecord
from .sizing import estimate_size
from .utils import log_info


class IndexCounter:
    """
    Monotonic sequence of image indices. Values are never reused;
    a fresh counter starts over at 1.
    """

    def __init__(self, start: int = 1):
        self._next = start

    @property
    def peek(self) -> int:
        return self._next

    def next(self) -> int:
        value = self._next
        self._next += 1
        return value


class Catalog:
    """
    All ImageRecords created during a session, in creation order.
    Only the grouped flag of a record changes after insertion.
    """

    def __init__(self, counter: IndexCounter | None = None):
        self._records: List[ImageRecord] = []
        self._counter = counter or IndexCounter()

    def create(self, fmt: ImageFormat, width: int, height: int) -> ImageRecord:
        """
        Size a new image and append it to the catalog.

        Args:
            fmt: Image format variant.
            width: Width in pixels.
            height: Height in pixels.

        Returns:
            The newly created record.

        Raises:
            DimensionError: If either dimension is negative or too large. No index is consumed.
        """
        size = estimate_size(fmt, width, height)
        record = ImageRecord(
            index=self._counter.next(),
            format=fmt,
            width=width,
            height=height,
            size=size,
        )
        self._records.append(record)
        log_info(f"Created image {record.index} ({fmt.label} {width}x{height}) size={size}")
        return record

    def find(self, index: int) -> Optional[ImageRecord]:
        for record in self._records:
            if record.index == index:
                return record
        return None

    def ungrouped(self) -> List[ImageRecord]:
        return [record for record in self._records if not record.grouped]

    def total_size(self) -> int:
        """Sum of sizes of records not yet consumed by a group."""
        return sum(record.size for record in self.ungrouped())

    @property
    def records(self) -> Tuple[ImageRecord, ...]:
        return tuple(self._records)

    def __iter__(self) -> Iterator[ImageRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)
