"""
Date-keyed grouping of discovered media.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .constants import UNDATED


TimeKey = Union[Tuple[int, int], int]


@dataclass(frozen=True)
class MediaItem:
    """A discovered media file and the name it keeps at its destination."""
    source_path: Path
    file_name: str

    @classmethod
    def from_path(cls, path: Path) -> "MediaItem":
        return cls(source_path=path, file_name=path.name)


class KeyShape(Enum):
    """Which date components make up the grouping key."""
    YEAR_MONTH = "year+month"
    YEAR = "year"
    MONTH = "month"

    @classmethod
    def from_flags(cls, by_year: bool, by_month: bool) -> "KeyShape":
        """Select the shape for the given grouping flags."""
        if by_year and by_month:
            return cls.YEAR_MONTH
        if by_year:
            return cls.YEAR
        if by_month:
            return cls.MONTH
        raise ValueError("Either the years or months grouping must be selected")

    def project(self, capture_date: Tuple[int, int]) -> TimeKey:
        """Reduce a (year, month) pair to this shape's key."""
        year, month = capture_date
        if self is KeyShape.YEAR_MONTH:
            return (year, month)
        if self is KeyShape.YEAR:
            return year
        if self is KeyShape.MONTH:
            return month
        raise ValueError(f"Unhandled key shape: {self}")


class GroupingIndex:
    """Buckets of media keyed by capture date, iterated in ascending key order.

    The key shape is fixed at construction. Buckets keep insertion order;
    the order in which buckets are produced depends only on their keys.
    """

    def __init__(self, shape: KeyShape):
        self._shape = shape
        self._buckets: Dict[TimeKey, List[MediaItem]] = {}

    @property
    def shape(self) -> KeyShape:
        return self._shape

    def insert(self, capture_date: Optional[Tuple[int, int]], item: MediaItem) -> TimeKey:
        """Append item to the bucket for capture_date, or the undated bucket if None."""
        key = self.shape.project(capture_date if capture_date is not None else UNDATED)
        self._buckets.setdefault(key, []).append(item)
        return key

    def size(self) -> int:
        """Total number of items across all buckets."""
        return sum(len(bucket) for bucket in self._buckets.values())

    def keys(self) -> List[TimeKey]:
        return sorted(self._buckets)

    def bucket(self, key: TimeKey) -> Tuple[MediaItem, ...]:
        return tuple(self._buckets.get(key, ()))

    def items(self) -> Iterator[Tuple[TimeKey, Tuple[MediaItem, ...]]]:
        for key in self.keys():
            yield key, tuple(self._buckets[key])

    def __iter__(self) -> Iterator[Tuple[TimeKey, Tuple[MediaItem, ...]]]:
        return self.items()

    def __len__(self) -> int:
        return len(self._buckets)

    def __contains__(self, key: object) -> bool:
        return key in self._buckets

    def __repr__(self) -> str:
        return f"GroupingIndex(shape={self.shape.name}, buckets={len(self)}, items={self.size()})"
