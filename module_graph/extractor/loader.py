"""Reads source files and compiles non-native dialects to JavaScript."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from module_graph.errors import PreprocessError, ReadError
from module_graph.models import GraphConfig, Preprocessor

logger = logging.getLogger(__name__)

COFFEE_COMMAND = ["coffee", "--bare", "--compile", "--stdio"]


def compile_coffee(filename: Path, source: str) -> str:
    """Compile CoffeeScript with the ``coffee`` command-line compiler."""
    try:
        result = subprocess.run(
            COFFEE_COMMAND,
            input=source,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise PreprocessError(filename, f"cannot run {COFFEE_COMMAND[0]!r}: {e}") from e

    if result.returncode != 0:
        raise PreprocessError(filename, result.stderr.strip() or f"exit status {result.returncode}")
    return result.stdout


DEFAULT_PREPROCESSORS: dict[str, Preprocessor] = {
    ".coffee": compile_coffee,
}


def _preprocessor_for(filename: Path, config: GraphConfig) -> Preprocessor | None:
    preprocessors = DEFAULT_PREPROCESSORS if config.preprocessors is None else config.preprocessors
    for ext, preprocessor in preprocessors.items():
        if filename.name.endswith(ext):
            return preprocessor
    return None


def load_source(filename: Path, config: GraphConfig) -> str:
    """Read filename and return text ready for reference scanning."""
    try:
        source = filename.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(filename, str(e)) from e

    preprocessor = _preprocessor_for(filename, config)
    if preprocessor is None:
        return source

    logger.debug("Preprocessing %s", filename)
    try:
        return preprocessor(filename, source)
    except PreprocessError:
        raise
    except Exception as e:
        raise PreprocessError(filename, str(e)) from e
