"""
Search patterns, date formats and shared console/logger for imgsort.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PROGRAM = "imgsort"

# Filename patterns for discovery (matched case-insensitively)
MEDIA_PATTERNS = ("*.png", "*.jpg", "*.jpeg", "*.heic", "*.mov")

# Files directly under the source root are at depth 1
MAX_DEPTH = 4

# EXIF DateTimeOriginal layout
EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"
DATETIME_ORIGINAL_TAG = "EXIF DateTimeOriginal"

# Key used for media without an extractable capture date
UNDATED = (0, 0)

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)
UNKNOWN_MONTH = "Unknown"

_console: Optional[Console] = None


def get_console() -> Console:
    """Shared rich console for all user-facing output."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def get_logger() -> logging.Logger:
    return logging.getLogger(PROGRAM)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Route log records through rich, WARNING by default and DEBUG when verbose."""
    logger = get_logger()
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    console_handler = RichHandler(console=get_console(), rich_tracebacks=True,
                                  show_path=False)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(console_handler)
    logger.setLevel(logging.DEBUG)

    # ExifRead warns about every file it cannot identify
    logging.getLogger("exifread").setLevel(logging.ERROR)
    return logger
