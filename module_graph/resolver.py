"""Node-style resolution of require() references to files on disk."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from module_graph.errors import UnresolvedModuleError
from module_graph.models import GraphConfig

logger = logging.getLogger(__name__)


def default_is_file(path: Path) -> bool:
    """True for regular files and FIFOs.

    Any stat failure (missing, name too long, symlink loop, permission) is
    treated as "no file here".
    """
    try:
        mode = os.stat(path).st_mode
    except OSError:
        return False
    return stat.S_ISREG(mode) or stat.S_ISFIFO(mode)


def is_path_like(reference: str) -> bool:
    """Relative (./, ../) and absolute references must resolve to a file."""
    return (
        reference in (".", "..")
        or reference.startswith(("./", "../", ".\\", "..\\"))
        or os.path.isabs(reference)
    )


def load_as_file(path: Path, extensions: list[str], is_file) -> Path | None:
    """Probe path verbatim, then with each extension appended, in order."""
    if is_file(path):
        return path
    for ext in extensions:
        candidate = Path(f"{path}{ext}")
        if is_file(candidate):
            return candidate
    return None


def resolve_module(directory: Path, reference: str, config: GraphConfig) -> Path | None:
    """Resolve reference as seen from directory.

    Returns the absolute file path, or None for a bare reference that maps to
    no file (a built-in or installed package, kept as an opaque leaf).
    Raises UnresolvedModuleError when a relative or absolute reference names
    no existing file.
    """
    is_file = config.is_file or default_is_file

    if is_path_like(reference):
        joined = Path(os.path.abspath(os.path.join(directory, reference)))
        found = load_as_file(joined, config.extensions, is_file)
        if found is None:
            raise UnresolvedModuleError(reference, directory)
        return found

    for search_dir in [directory, *config.paths]:
        joined = Path(os.path.abspath(os.path.join(search_dir, reference)))
        found = load_as_file(joined, config.extensions, is_file)
        if found is not None:
            return found

    logger.debug("Keeping %r from %s as an external module", reference, directory)
    return None
