"""
Core media sorting pipeline: discover, date, group and copy.
"""

import time
from pathlib import Path
from typing import List, Optional, Tuple

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from .config import SortOptions
from .constants import get_console, get_logger
from .discovery import build_walker, find_media
from .file_operations import FileOperations
from .grouping import GroupingIndex, MediaItem
from .materializer import Materializer, bucket_directory
from .progress import track
from .stats import StatsManager
from .timestamps import get_capture_date


class ImageSorter:
    """Main class for sorting media into dated folders."""

    def __init__(self, options: SortOptions, console: Optional[Console] = None):
        self.options = options
        self.source = options.source
        self.dest = options.dest
        self.console = console or get_console()
        self.logger = get_logger()
        self.stats_manager = StatsManager()

        self.file_ops = FileOperations(dry_run=options.dry_run,
                                       on_collision=options.on_collision)
        self.materializer = Materializer(self.file_ops, self.stats_manager)

        self.logger.info(f"Starting sort: {self.source} -> {self.dest}")
        self.logger.info(f"Grouping: {options.key_shape.value}, "
                         f"mode: {'DRY RUN' if options.dry_run else 'COPY'}")

    def discover(self) -> GroupingIndex:
        """Walk the source tree and group every media file by capture date.

        Files that cannot be opened are skipped and counted. Raises
        NoMediaFoundError before any metadata is read if nothing matches,
        and PatternError if the search patterns are malformed.
        """
        started = time.perf_counter()
        media = find_media(build_walker(self.source))

        index = GroupingIndex(self.options.key_shape)
        with self.console.status("Reading capture dates..."):
            for file_path in media:
                try:
                    capture_date = get_capture_date(file_path)
                except OSError as e:
                    # Left out of the index so the copy phase never touches it
                    self.logger.warning(f"Skipping unreadable file {file_path}: {e}")
                    self.stats_manager.record_unreadable()
                    continue

                index.insert(capture_date, MediaItem.from_path(file_path))
                self.stats_manager.record_found(capture_date is not None)

        self.stats_manager.set_duration('discovery', time.perf_counter() - started)
        self.logger.info(f"Grouped {index.size()} files into {len(index)} folders")
        return index

    def materialize(self, index: GroupingIndex) -> List[Tuple[MediaItem, Path]]:
        """Copy the grouped media into the destination tree."""
        started = time.perf_counter()
        with track(self.console, "Copying files...", index.size(),
                   enabled=not self.options.dry_run) as progress_ctx:
            placed = self.materializer.save(index, self.dest, progress_ctx)

        self.stats_manager.set_duration('materialization', time.perf_counter() - started)
        return placed

    def print_plan(self, index: GroupingIndex) -> None:
        """Print each destination folder with the files grouped into it."""
        tree = Tree(f"[bold blue]{self.dest}[/bold blue]")
        for key, bucket in index.items():
            folder = bucket_directory(self.dest, index.shape, key).relative_to(self.dest)
            branch = tree.add(f"[cyan]{folder}[/cyan] ({len(bucket)})")
            for item in bucket:
                branch.add(str(item.source_path))
        self.console.print(tree)

    def print_summary(self) -> None:
        """Print processing summary."""
        table = Table(title="Processing Summary")
        table.add_column("Category", style="cyan")
        table.add_column("Count", style="green")

        table.add_row("Media Found", str(self.stats_manager.get_found()))
        table.add_row("With Capture Date", str(self.stats_manager.get_dated()))
        table.add_row("Without Capture Date", str(self.stats_manager.get_undated()))
        table.add_row("Skipped Unreadable", str(self.stats_manager.get_unreadable()))
        label = "Would Copy" if self.options.dry_run else "Copied"
        table.add_row(label, str(self.stats_manager.get_copied()))
        table.add_row("Renamed On Collision", str(self.stats_manager.get_renamed()))
        table.add_row("Overwritten", str(self.stats_manager.get_overwritten()))
        table.add_row("Discovery Time",
                      f"{self.stats_manager.get_duration('discovery'):.2f}s")
        table.add_row("Copy Time",
                      f"{self.stats_manager.get_duration('materialization'):.2f}s")

        self.console.print(table)

    def run(self) -> GroupingIndex:
        """Run the whole pipeline. The first fatal error propagates."""
        index = self.discover()
        self.console.print(
            f"Found {index.size()} pieces of media in "
            f"{self.stats_manager.get_duration('discovery'):.2f}s"
        )

        if self.options.list_plan or self.options.dry_run:
            self.print_plan(index)

        self.materialize(index)
        self.print_summary()
        return index
