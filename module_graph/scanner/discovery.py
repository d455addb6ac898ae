"""File discovery for directory roots."""

from __future__ import annotations

import fnmatch
from pathlib import Path
from typing import Iterable, Iterator


def walk_files(root: Path, skip_dirs: Iterable[str] = ()) -> Iterator[Path]:
    """Yield every file below root in sorted order.

    Directories whose name matches one of the skip_dirs glob patterns are
    not descended into.
    """
    patterns = list(skip_dirs)
    for path in sorted(root.rglob("*")):
        if path.is_dir():
            continue
        if patterns and _should_skip(path.relative_to(root), patterns):
            continue
        yield path


def has_source_extension(path: Path, extensions: Iterable[str]) -> bool:
    return any(path.name.endswith(ext) for ext in extensions)


def _should_skip(relative: Path, patterns: list[str]) -> bool:
    for part in relative.parts[:-1]:
        for pattern in patterns:
            if fnmatch.fnmatch(part, pattern):
                return True
    return False
