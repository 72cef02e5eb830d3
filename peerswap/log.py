"""Process-wide logging hooks with an optional pluggable logger."""

from __future__ import annotations

import sys
import time
from typing import Any, Optional, Protocol


class PeerswapLogger(Protocol):
    """Anything that can receive formatted info and debug messages."""

    def infof(self, fmt: str, *args: Any) -> None:
        """Log an informational message built from ``fmt`` and ``args``."""

    def debugf(self, fmt: str, *args: Any) -> None:
        """Log a debug message built from ``fmt`` and ``args``."""


_logger: Optional[PeerswapLogger] = None


def set_logger(logger: Optional[PeerswapLogger]) -> None:
    """Route all subsequent log calls to ``logger``; ``None`` restores the default."""
    global _logger
    _logger = logger


def _render(fmt: str, args: tuple) -> str:
    if not args:
        return fmt
    try:
        return fmt % args
    except (TypeError, ValueError):
        return " ".join([fmt, *(repr(arg) for arg in args)])


def _write(prefix: str, fmt: str, args: tuple) -> None:
    message = f"{time.strftime('%Y/%m/%d %H:%M:%S')} {prefix} {_render(fmt, args)}"
    if not message.endswith("\n"):
        message += "\n"
    sys.stderr.write(message)


def infof(fmt: str, *args: Any) -> None:
    """Log an informational message."""
    if _logger is not None:
        _logger.infof(fmt, *args)
    else:
        _write("[INFO]", fmt, args)


def debugf(fmt: str, *args: Any) -> None:
    """Log a debug message."""
    if _logger is not None:
        _logger.debugf(fmt, *args)
    else:
        _write("[DEBUG]", fmt, args)