"""Discovery of JSON documents below a root folder.

Exclusion patterns are glob-style and matched against the POSIX path
relative to the root:

- ``*`` and ``**`` match any run of characters, including ``/``
- a leading ``**/`` may also match zero directories
- a pattern without ``/`` matches any single path segment

Directories matched by a pattern are pruned from the walk, so nothing
below them is ever listed. Hidden entries (names starting with ``.``)
are skipped the same way, whatever the patterns say.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from fnmatch import fnmatchcase
from pathlib import Path

from json_validator.constants import (
    DEFAULT_IGNORE_PATTERNS,
    JSON_FILE_PATTERN,
)
from json_validator.logger import get_logger

logger = get_logger(__name__)


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def _pattern_matches(relative: str, pattern: str) -> bool:
    if "/" not in pattern.rstrip("/"):
        segment_pattern = pattern.rstrip("/")
        return any(
            fnmatchcase(part, segment_pattern)
            for part in relative.rstrip("/").split("/")
        )
    if fnmatchcase(relative, pattern):
        return True
    return pattern.startswith("**/") and fnmatchcase(relative, pattern[3:])


def is_ignored(
    relative: str, ignore_patterns: Iterable[str], is_dir: bool = False
) -> bool:
    """Check whether a root-relative path is excluded.

    Args:
        relative: POSIX path relative to the discovery root
        ignore_patterns: Glob-style exclusion patterns
        is_dir: Whether the path is a directory; directories are tested
            with a trailing slash so ``foo/**`` excludes ``foo`` itself

    Returns:
        True if any pattern matches

    """
    candidate = f"{relative}/" if is_dir else relative
    return any(_pattern_matches(candidate, p) for p in ignore_patterns)


def discover(
    root_folder: str | os.PathLike[str],
    ignore_patterns: Iterable[str] | None = None,
    cwd: Path | None = None,
) -> list[Path]:
    """Find all JSON documents below ``root_folder``.

    Args:
        root_folder: Folder to scan, relative to ``cwd`` unless absolute
        ignore_patterns: Exclusion globs; None selects the defaults. A
            given list replaces the defaults entirely.
        cwd: Base directory for relative roots (default: process cwd)

    Returns:
        Absolute paths in sorted walk order. Empty when the root does
        not exist, is not a directory or holds no JSON files.

    """
    patterns = tuple(
        DEFAULT_IGNORE_PATTERNS if ignore_patterns is None else ignore_patterns
    )
    root = Path(os.path.abspath((cwd or Path.cwd()) / root_folder))
    if not root.is_dir():
        logger.debug("Discovery root %s is not a directory", root)
        return []

    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        rel_dir = current.relative_to(root).as_posix()
        prefix = "" if rel_dir == "." else f"{rel_dir}/"

        # Prune in place so os.walk never descends into excluded dirs
        dirnames[:] = sorted(
            d
            for d in dirnames
            if not _is_hidden(d)
            and not is_ignored(f"{prefix}{d}", patterns, is_dir=True)
        )

        for filename in sorted(filenames):
            if _is_hidden(filename):
                continue
            if not fnmatchcase(filename, JSON_FILE_PATTERN):
                continue
            if is_ignored(f"{prefix}{filename}", patterns):
                continue
            found.append(current / filename)

    logger.debug("Discovered %d JSON file(s) under %s", len(found), root)
    return found
