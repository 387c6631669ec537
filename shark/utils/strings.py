"""String helpers used when reading configuration and data files."""

from __future__ import annotations

import re


def tokenize(s: str, delims: str = " ") -> list[str]:
    """Split s on any of the characters in delims.

    Runs of delimiters count as one and leading/trailing delimiters are
    ignored, so no empty tokens are produced.

    Example:
        >>> tokenize("  a,,b  c", " ,")
        ['a', 'b', 'c']
    """
    if not delims:
        return [s] if s else []
    return [token for token in re.split(f"[{re.escape(delims)}]+", s) if token]


def trim(s: str) -> str:
    """Strip leading and trailing whitespace."""
    return s.strip()


def lower(s: str) -> str:
    return s.lower()


def upper(s: str) -> str:
    return s.upper()


def empty_or_comment(line: str) -> bool:
    """True for empty lines and lines starting with '#'."""
    return not line or line[0] == "#"
