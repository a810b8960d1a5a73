"""
Directory creation and copy primitives with dry-run and collision handling.
"""

import shutil
from pathlib import Path
from typing import Set, Tuple

from .constants import get_logger


RENAME = "rename"
OVERWRITE = "overwrite"
ERROR = "error"
COLLISION_POLICIES = (RENAME, OVERWRITE, ERROR)

# Outcomes reported by FileOperations.place_file
COPIED = "copied"
RENAMED = "renamed"
OVERWRITTEN = "overwritten"


class FileOperations:
    """Copy files into the destination tree without ever moving the source."""

    def __init__(self, dry_run: bool = False, on_collision: str = RENAME):
        if on_collision not in COLLISION_POLICIES:
            raise ValueError(f"Unknown collision policy: {on_collision}")
        self.dry_run = dry_run
        self.on_collision = on_collision
        self.logger = get_logger()
        # Destinations handed out during this run, needed when nothing hits disk
        self._claimed: Set[Path] = set()

    def ensure_directory(self, directory: Path) -> None:
        """Create directory and parents if needed, with dry-run support."""
        if not self.dry_run:
            directory.mkdir(parents=True, exist_ok=True)

    def _is_taken(self, path: Path) -> bool:
        return path in self._claimed or path.exists()

    def create_unique_path(self, dest_dir: Path, file_name: str) -> Path:
        """Generate unique file path with counter if needed."""
        dest_path = dest_dir / file_name
        stem = dest_path.stem
        suffix = dest_path.suffix
        counter = 1
        while self._is_taken(dest_path):
            dest_path = dest_dir / f"{stem}_{counter:03d}{suffix}"
            counter += 1
        return dest_path

    def resolve_destination(self, dest_dir: Path, file_name: str) -> Tuple[Path, str]:
        """Pick the destination for file_name in dest_dir according to the collision policy."""
        dest_path = dest_dir / file_name
        if not self._is_taken(dest_path):
            return dest_path, COPIED

        if self.on_collision == RENAME:
            return self.create_unique_path(dest_dir, file_name), RENAMED
        if self.on_collision == OVERWRITE:
            return dest_path, OVERWRITTEN
        raise FileExistsError(f"Destination already exists: {dest_path}")

    def copy_file(self, source: Path, dest: Path) -> None:
        """Copy source to dest preserving timestamps. I/O errors propagate."""
        self._claimed.add(dest)
        if self.dry_run:
            self.logger.info(f"Dry run: would copy {source} -> {dest}")
            return

        shutil.copy2(str(source), str(dest))
        self.logger.info(f"{source} -> {dest}")

    def place_file(self, source: Path, dest_dir: Path, file_name: str) -> Tuple[Path, str]:
        """Copy source into dest_dir under file_name. Returns (dest_path, outcome)."""
        dest_path, outcome = self.resolve_destination(dest_dir, file_name)
        if outcome == RENAMED:
            self.logger.warning(f"Name collision: {source} saved as {dest_path.name}")
        elif outcome == OVERWRITTEN:
            self.logger.warning(f"Overwriting {dest_path} with {source}")
        self.copy_file(source, dest_path)
        return dest_path, outcome
