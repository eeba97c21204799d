"""
Module: stackresult
Purpose: Result dataclass for one stack compression pass.
"""

from dataclasses import dataclass, field
from typing import List

from .imagerecord import ImageRecord


@dataclass
class GroupResult:
    """
    Records consumed by a grouping request and the sizes before
    and after compression.
    """

    matched: List[ImageRecord] = field(default_factory=list)
    previous_size: int = 0
    compressed_size: int = 0

    @property
    def matched_count(self) -> int:
        return len(self.matched)

    @property
    def delta(self) -> int:
        return self.compressed_size - self.previous_size
