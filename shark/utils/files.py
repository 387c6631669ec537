"""File helpers with descriptive errors."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TextIO

logger = logging.getLogger(__name__)


class FileOpenError(RuntimeError):
    """A file could not be opened; the message names the file and the OS error."""

    def __init__(self, name: str | Path, reason: str):
        super().__init__(f"Error when opening file '{name}': {reason}")
        self.name = str(name)
        self.reason = reason


def open_file(name: str | Path, encoding: str | None = None) -> TextIO:
    """Open a file for reading in text mode.

    Raises:
        FileOpenError: If the file cannot be opened.
    """
    try:
        return open(name, encoding=encoding)
    except OSError as exc:
        reason = os.strerror(exc.errno) if exc.errno else str(exc)
        logger.debug("Cannot open %s: %s", name, reason)
        raise FileOpenError(name, reason) from exc
