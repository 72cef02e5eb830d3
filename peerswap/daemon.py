"""Start-up helpers for the daemon: version checks, network lookup, directories and logging."""

from __future__ import annotations

import os
import re
import sys
import time
from enum import IntEnum
from pathlib import Path
from typing import Any, Optional, TextIO, Union

MIN_LND_VERSION = 14.1
"""Oldest supported lnd minor version, as ``major.minor`` after the leading ``0.``."""

_DECIMAL_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")

_BITCOIN_NETWORKS = {
    "regtest": "regtest",
    "testnet": "testnet3",
    "signet": "signet",
    "bitcoin": "mainnet",
    "mainnet": "mainnet",
}

_LIQUID_NETWORKS = {
    "liquidv1": "liquid",
    "liquidregtest": "regtest",
    "liquidtestnet": "testnet",
}
_DEFAULT_LIQUID_NETWORK = "testnet"


class LogLevel(IntEnum):
    """How much the daemon logs."""

    INFO = 1
    DEBUG = 2


class UnsupportedLndVersionError(Exception):
    """The connected lnd node is older than the daemon supports."""

    def __init__(self, required: float = MIN_LND_VERSION) -> None:
        super().__init__(f"Lnd version unsupported, requires {required}")
        self.required = required


def _render(fmt: str, args: tuple) -> str:
    if not args:
        return fmt
    try:
        return fmt % args
    except (TypeError, ValueError):
        return " ".join([fmt, *(repr(arg) for arg in args)])


class LndLogger:
    """Logger writing timestamped lines to a stream; debug lines only at debug level."""

    def __init__(self, log_level: LogLevel = LogLevel.INFO, stream: Optional[TextIO] = None) -> None:
        self.log_level = log_level
        self._stream = stream if stream is not None else sys.stdout

    def _write(self, prefix: str, fmt: str, args: tuple) -> None:
        line = f"{time.strftime('%Y/%m/%d %H:%M:%S')} {prefix} {_render(fmt, args)}"
        if not line.endswith("\n"):
            line += "\n"
        self._stream.write(line)
        self._stream.flush()

    def infof(self, fmt: str, *args: Any) -> None:
        """Log an informational message."""
        self._write("[INFO]", fmt, args)

    def debugf(self, fmt: str, *args: Any) -> None:
        """Log a debug message if the level is ``DEBUG``."""
        if self.log_level == LogLevel.DEBUG:
            self._write("[DEBUG]", fmt, args)


def check_lnd_version(version: str) -> None:
    """Raise unless the lnd version string (e.g. ``0.14.1-beta``) is recent enough.

    A version that cannot be parsed raises ``ValueError``; one that is too old
    raises ``UnsupportedLndVersionError``.
    """
    head = version.split("-")[0]
    if len(head) < 2:
        raise ValueError(f"cannot parse lnd version {version!r}")
    number = head[2:]
    if not _DECIMAL_RE.fullmatch(number):
        raise ValueError(f"cannot parse lnd version {version!r}")
    if float(number) < MIN_LND_VERSION:
        raise UnsupportedLndVersionError()


def bitcoin_network(name: str) -> str:
    """Map the chain network lnd reports to the bitcoin network name."""
    try:
        return _BITCOIN_NETWORKS[name]
    except KeyError:
        raise ValueError("unknown bitcoin network") from None


def liquid_network(name: str) -> str:
    """Map the chain name an elements node reports to the liquid network name.

    Unknown chains are treated as testnet.
    """
    return _LIQUID_NETWORKS.get(name, _DEFAULT_LIQUID_NETWORK)


def make_directories(path: Union[str, os.PathLike]) -> Path:
    """Create ``path`` and its parents with owner-only permissions."""
    target = Path(path)
    try:
        target.mkdir(mode=0o700, parents=True, exist_ok=True)
    except OSError as err:
        reason: object = err
        failed = err.filename
        if failed is not None and os.path.islink(failed):
            reason = f"is symlink {failed} -> {os.readlink(failed)} mounted?"
        message = f"failed to create directory {target}: {reason}"
        print(message, file=sys.stderr)
        raise OSError(message) from err
    return target