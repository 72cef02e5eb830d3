"""Building blocks for peer-to-peer Lightning channel balancing swaps."""

__version__ = "0.1.0"

__all__ = [
    "commands",
    "daemon",
    "log",
    "messages",
    "payments",
    "sender",
]