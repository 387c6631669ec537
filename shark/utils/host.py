"""Host identification for run metadata."""

from __future__ import annotations

import socket

# Names longer than this are cut short
_HOSTNAME_BUFFER = 100


def gethostname() -> str:
    """Return the local host name."""
    return socket.gethostname()[: _HOSTNAME_BUFFER - 1]
