"""
imgsort - Sort photos and videos into folders by capture date.

Reads the EXIF DateTimeOriginal of every photo and video below a source
directory and copies each file into a year/month, year or month folder
of the destination. Files without a capture date go to an 'Unknown' folder.
"""

__version__ = "1.0.0"
__copyright__ = "Copyright (c) 2025 Lucas Waddell"


# Public API
from .cli import main
from .config import Config, ConfigurationError, SortOptions
from .core import ImageSorter
from .discovery import NoMediaFoundError, PatternError, build_walker, find_media
from .file_operations import FileOperations
from .grouping import GroupingIndex, KeyShape, MediaItem
from .materializer import Materializer
from .timestamps import get_capture_date

__all__ = [ "main", "Config", "ConfigurationError", "SortOptions", "ImageSorter",
            "NoMediaFoundError", "PatternError", "build_walker", "find_media",
            "FileOperations", "GroupingIndex", "KeyShape", "MediaItem", "Materializer",
            "get_capture_date" ]
