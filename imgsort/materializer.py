"""
Write a populated grouping index out as a dated directory tree.
"""

from pathlib import Path
from typing import List, Optional, Tuple

from .constants import MONTH_NAMES, UNKNOWN_MONTH, get_logger
from .file_operations import FileOperations
from .grouping import GroupingIndex, KeyShape, MediaItem, TimeKey
from .progress import ProgressContext
from .stats import StatsManager


def month_name(month: int) -> str:
    """English name for month 1-12, 'Unknown' for anything else."""
    if 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return UNKNOWN_MONTH


def bucket_directory(dest: Path, shape: KeyShape, key: TimeKey) -> Path:
    """Directory under dest that holds the bucket for key.

    The undated key renders its year as '0' and its month as 'Unknown'.
    """
    if shape is KeyShape.YEAR_MONTH:
        year, month = key
        return dest / str(year) / month_name(month)
    if shape is KeyShape.YEAR:
        return dest / str(key)
    if shape is KeyShape.MONTH:
        return dest / month_name(key)
    raise ValueError(f"Unhandled key shape: {shape}")


class Materializer:
    """Creates one directory per key and copies every bucket into it."""

    def __init__(self, file_ops: FileOperations, stats_manager: Optional[StatsManager] = None):
        self.file_ops = file_ops
        self.stats_manager = stats_manager or StatsManager()
        self.logger = get_logger()

    def save(self, index: GroupingIndex, dest: Path,
             progress_ctx: Optional[ProgressContext] = None) -> List[Tuple[MediaItem, Path]]:
        """Copy every item of index below dest, keys in ascending order.

        The first directory or copy failure is raised as is; files already
        written stay in place. Returns (item, destination) pairs in copy order.
        """
        progress_ctx = progress_ctx or ProgressContext()
        placed = []

        for key, bucket in index.items():
            directory = bucket_directory(dest, index.shape, key)
            self.file_ops.ensure_directory(directory)
            self.logger.debug(f"Saving {len(bucket)} files to {directory}")

            for item in bucket:
                progress_ctx.update(f"Copying {item.file_name}")
                dest_path, outcome = self.file_ops.place_file(item.source_path, directory,
                                                              item.file_name)
                self.stats_manager.record_placement(outcome)
                placed.append((item, dest_path))
                progress_ctx.advance()

        return placed
