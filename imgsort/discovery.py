"""
Media discovery: bounded-depth walk of the source tree with filename patterns.
"""

import fnmatch
import itertools
import os
import re
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .constants import MAX_DEPTH, MEDIA_PATTERNS, get_logger


logger = get_logger()


class PatternError(ValueError):
    """A search pattern the matcher cannot interpret."""


class NoMediaFoundError(FileNotFoundError):
    """The source tree holds no file matching any search pattern."""


def _check_pattern(pattern: str) -> None:
    """Reject patterns that would not mean what they say to fnmatch."""
    if not pattern:
        raise PatternError("Empty search pattern")
    if "\\" in pattern:
        raise PatternError(f"Escapes are not supported in search patterns: {pattern!r}")
    if "/" in pattern or os.sep in pattern:
        raise PatternError(f"Search patterns match file names only: {pattern!r}")

    # fnmatch silently treats an unterminated class as a literal '['
    i = 0
    while i < len(pattern):
        if pattern[i] == "[":
            j = i + 1
            if j < len(pattern) and pattern[j] == "!":
                j += 1
            if j < len(pattern) and pattern[j] == "]":
                j += 1
            end = pattern.find("]", j)
            if end == -1:
                raise PatternError(f"Unterminated character class in pattern: {pattern!r}")
            i = end
        i += 1


def compile_patterns(patterns: Iterable[str]) -> List[re.Pattern]:
    """Validate and compile filename patterns into case-insensitive regexes."""
    compiled = []
    for pattern in patterns:
        _check_pattern(pattern)
        try:
            compiled.append(re.compile(fnmatch.translate(pattern), re.IGNORECASE))
        except re.error as e:
            raise PatternError(f"Invalid search pattern {pattern!r}: {e}") from e

    if not compiled:
        raise PatternError("No search patterns given")
    return compiled


def build_walker(root: Path, patterns: Sequence[str] = MEDIA_PATTERNS,
                 max_depth: int = MAX_DEPTH) -> Iterator[Path]:
    """Return a lazy iterator over matching files below root.

    Patterns are compiled before anything is read from disk, so a bad
    pattern fails here rather than halfway through the walk.
    """
    matchers = compile_patterns(patterns)
    if max_depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {max_depth}")
    return _walk(Path(root), matchers, max_depth)


def _walk(root: Path, matchers: List[re.Pattern], max_depth: int) -> Iterator[Path]:
    # (st_dev, st_ino) of each walked directory and its ancestors
    lineage = {}

    def on_error(error: OSError) -> None:
        logger.debug(f"Skipping unreadable directory {error.filename}: {error.strerror}")

    for dirpath, dirnames, filenames in os.walk(root, followlinks=True, onerror=on_error):
        current = Path(dirpath)

        # A symlink back to an ancestor would recurse until the depth limit
        try:
            stat = current.stat()
        except OSError as e:
            logger.debug(f"Skipping {current}: {e}")
            dirnames[:] = []
            continue
        identity = (stat.st_dev, stat.st_ino)
        ancestors = lineage.get(os.path.dirname(dirpath), frozenset())
        if identity in ancestors:
            logger.debug(f"Skipping {current}: symlink loop")
            dirnames[:] = []
            continue
        lineage[dirpath] = ancestors | {identity}

        depth = len(current.relative_to(root).parts)
        if depth + 1 >= max_depth:
            dirnames[:] = []
        else:
            dirnames.sort()

        for name in sorted(filenames):
            if not any(matcher.match(name) for matcher in matchers):
                continue

            file_path = current / name
            if not file_path.is_file():
                # Broken symlink or entry removed mid-walk
                logger.debug(f"Skipping {file_path}: not a readable file")
                continue

            yield file_path


def find_media(walker: Iterable[Path]) -> Iterator[Path]:
    """Ensure the walk yields at least one file without consuming the rest.

    Returns an iterator equivalent to the original one.
    """
    walker = iter(walker)
    first = next(walker, None)
    if first is None:
        raise NoMediaFoundError("Did not find any media in the source directory")
    return itertools.chain([first], walker)
