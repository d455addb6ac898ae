"""Exceptions raised while building a module graph."""

from __future__ import annotations

from pathlib import Path


class ModuleGraphError(Exception):
    """Base class for every error the graph builder can raise."""


class ResolutionError(ModuleGraphError):
    """No base directory can be computed for the input roots."""


class UnresolvedModuleError(ModuleGraphError):
    """A relative or absolute reference names no existing file."""

    def __init__(self, reference: str, directory: Path):
        self.reference = reference
        self.directory = directory
        super().__init__(f"Cannot find module '{reference}' from '{directory}'")


class PreprocessError(ModuleGraphError):
    """Compiling a non-native dialect into plain JavaScript failed."""

    def __init__(self, filename: Path, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"Failed to preprocess {filename}: {reason}")


class ReadError(ModuleGraphError):
    """A file vanished or could not be read between discovery and load."""

    def __init__(self, filename: Path, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"Cannot read {filename}: {reason}")


class ScanError(ModuleGraphError):
    """The reference scanner failed on a file's source."""

    def __init__(self, filename: Path, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"Failed to scan {filename}: {reason}")
