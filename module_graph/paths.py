"""Module id normalization relative to a common base directory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterable, Sequence

from module_graph.errors import ResolutionError


def absolute(path: str | os.PathLike) -> Path:
    """Make a path absolute without following symlinks."""
    return Path(os.path.abspath(path))


def compute_base_directory(roots: Sequence[Path]) -> Path:
    """Return the nearest common directory of all input roots.

    When the common path is a file (a single file root), its parent is used.
    """
    if not roots:
        raise ResolutionError("No input roots given")
    if not any(root.exists() for root in roots):
        raise ResolutionError(
            "None of the input roots exist: " + ", ".join(str(r) for r in roots)
        )

    try:
        common = Path(os.path.commonpath([str(root) for root in roots]))
    except ValueError as e:
        raise ResolutionError(f"Input roots share no common directory: {e}") from e

    if not common.is_dir():
        common = common.parent
    return common


def strip_extension(name: str, extensions: Iterable[str]) -> str:
    for ext in extensions:
        if ext and name.endswith(ext):
            return name[: -len(ext)]
    return name


def normalize(path: str | Path, base_dir: Path, extensions: Iterable[str]) -> str:
    """Turn an absolute file path into a module id.

    Raw references (anything that is not an absolute path) are ids already
    and are returned unchanged.
    """
    if not os.path.isabs(path):
        return str(path)
    relative = os.path.relpath(path, base_dir)
    return strip_extension(relative, extensions).replace("\\", "/")


def to_path(
    module_id: str,
    base_dir: Path,
    extensions: Iterable[str],
    is_file: Callable[[Path], bool],
) -> Path:
    """Map a module id back to the file it was built from."""
    stem = base_dir / module_id
    for ext in extensions:
        candidate = stem.with_name(stem.name + ext)
        if is_file(candidate):
            return candidate
    return stem
