"""Peerswap custom message types and their hex encoding."""

from __future__ import annotations

import re
from enum import IntEnum

BASE_MESSAGE_TYPE = 42069
"""First peerswap message type in the custom message range (BOLT #1)."""


class MessageType(IntEnum):
    """Peerswap protocol messages; all odd, spaced two apart."""

    SWAP_IN_REQUEST = 42069
    SWAP_OUT_REQUEST = 42071
    SWAP_IN_AGREEMENT = 42073
    SWAP_OUT_AGREEMENT = 42075
    OPENING_TX_BROADCASTED = 42077
    CANCELED = 42079
    COOP_CLOSE = 42081
    POLL = 42083
    REQUEST_POLL = 42085


UPPER_MESSAGE_BOUND = 42086
"""Exclusive upper bound of the peerswap message range."""

_HEX_RE = re.compile(r"[+-]?[0-9a-fA-F]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


class MessageTypeError(ValueError):
    """A message type could not be accepted."""


class EvenMessageTypeError(MessageTypeError):
    """The message type is even."""

    def __init__(self) -> None:
        super().__init__("message type is even")


class MessageNotInRangeError(MessageTypeError):
    """The message type lies outside the peerswap range."""

    def __init__(self) -> None:
        super().__init__("message type not in range")


class AlreadyHasASenderError(Exception):
    """A sender is already registered under this id."""

    def __init__(self, sender_id: str) -> None:
        super().__init__(f"already has a sender with id {sender_id}")
        self.sender_id = sender_id


def in_range(msg_type: int) -> bool:
    """Return whether ``msg_type`` lies in the peerswap range; even types raise."""
    if msg_type % 2 == 0:
        raise EvenMessageTypeError()
    return BASE_MESSAGE_TYPE <= msg_type < UPPER_MESSAGE_BOUND


def message_type_to_hex_string(msg_type: int) -> str:
    """Return the lower-case hex encoding of a message type."""
    return format(int(msg_type), "x")


def hex_string_to_message_type(value: str) -> MessageType:
    """Parse a hex string into a peerswap message type."""
    if not _HEX_RE.fullmatch(value):
        raise MessageTypeError(
            f"could not parse hex string to message type: invalid syntax {value!r}"
        )
    number = int(value, 16)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise MessageTypeError(
            f"could not parse hex string to message type: value out of range {value!r}"
        )
    if not in_range(number):
        raise MessageNotInRangeError()
    return MessageType(number)