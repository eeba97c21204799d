"""
Module: compression
Purpose: Stack compression of previously sized images.
"""

import math
from typing import Iterable, List

from .catalog import Catalog
from .models.stackresult import GroupResult
from .sizing import round_half_up
from .utils import log_info

# Added to the matched count before taking the log; keeps the divisor > 1
COMPRESSION_FACTOR = 3


class GroupRequest:
    """
    Pending indices for a single grouping pass. The indices are handed
    out once by consume() and the request is cleared afterwards.
    """

    def __init__(self, indices: Iterable[int] = ()):
        self._indices: List[int] = list(indices)

    def extend(self, indices: Iterable[int]) -> None:
        self._indices.extend(indices)

    def consume(self) -> List[int]:
        indices, self._indices = self._indices, []
        return indices


def compressed_size(total: int, count: int) -> int:
    return round_half_up(total / math.log(count + COMPRESSION_FACTOR))


def compress_stack(catalog: Catalog, request: GroupRequest | Iterable[int]) -> GroupResult:
    """
    Group catalog entries by index into one compressed stack.

    Each requested index is searched over the whole catalog; every
    ungrouped record with that index is matched and marked grouped.
    Unknown and repeated indices therefore contribute nothing.

    Args:
        catalog: Catalog to scan.
        request: GroupRequest (consumed) or plain iterable of indices.

    Returns:
        GroupResult with the matched records and the before/after sizes.

    Raises:
        AlreadyGroupedError: If a record is marked twice. Matching skips
            grouped records, so this does not occur for a consistent catalog.
    """
    if isinstance(request, GroupRequest):
        indices = request.consume()
    else:
        indices = list(request)

    result = GroupResult()
    for index in indices:
        for record in catalog:
            if record.index == index and not record.grouped:
                record.mark_grouped()
                result.matched.append(record)
                result.previous_size += record.size

    result.compressed_size = compressed_size(result.previous_size, result.matched_count)
    log_info(
        f"Grouped {result.matched_count} image(s) from request {indices}: "
        f"{result.previous_size} -> {result.compressed_size}"
    )
    return result
