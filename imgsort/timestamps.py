"""Capture-date extraction from embedded EXIF metadata."""

from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

import exifread

from .constants import DATETIME_ORIGINAL_TAG, EXIF_DATE_FORMAT, get_logger


logger = get_logger()


def parse_exif_datetime(value: str) -> Optional[datetime]:
    """Parse an EXIF 'YYYY:MM:DD HH:MM:SS' string, or None if malformed."""
    # Some cameras pad the ASCII field with NULs
    text = str(value).replace("\x00", "").strip()
    try:
        return datetime.strptime(text, EXIF_DATE_FORMAT)
    except ValueError:
        return None


def get_capture_date(file_path: Path) -> Optional[Tuple[int, int]]:
    """Return the (year, month) the file was captured, if recorded.

    Raises OSError when the file cannot be opened. Anything wrong with
    the metadata itself (unknown container, no DateTimeOriginal, bad
    date string) yields None.
    """
    with open(file_path, "rb") as f:
        try:
            tags = exifread.process_file(f, details=False)
        except Exception as e:
            logger.debug(f"Could not parse metadata of {file_path}: {e}")
            return None

    if not tags:
        logger.debug(f"No EXIF metadata found for {file_path}")
        return None

    tag = tags.get(DATETIME_ORIGINAL_TAG)
    if tag is None:
        logger.debug(f"No {DATETIME_ORIGINAL_TAG} tag found for {file_path}")
        return None

    captured = parse_exif_datetime(str(tag))
    if captured is None:
        logger.debug(f"Malformed {DATETIME_ORIGINAL_TAG} for {file_path}: {tag}")
        return None

    logger.debug(f"Capture date: {file_path} = {captured}")
    return captured.year, captured.month
