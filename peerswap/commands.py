"""Checks performed by the swap commands before a swap is started."""

from __future__ import annotations

FEATURE_BIT = 69
"""Node feature bit that advertises peerswap support."""

SWAP_OUT_RESERVE_SAT = 5000
"""Outbound capacity a swap-out must leave in the channel beyond its amount."""

SUPPORTED_ASSETS = ("btc", "lbtc")


class SwapCanceledError(Exception):
    """A swap was canceled; ``reason`` holds the cancel message."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"swap canceled, reason: {reason}")
        self.reason = reason


def check_features(features: bytes, feature_bit: int) -> bool:
    """Return whether ``feature_bit`` is set in the big-endian ``features`` bytes."""
    if feature_bit < 0:
        raise ValueError(f"feature bit must not be negative, got {feature_bit}")
    value = int.from_bytes(bytes(features), "big")
    return (value >> feature_bit) & 1 == 1


def validate_asset(
    asset: str,
    liquid_enabled: bool,
    bitcoin_enabled: bool,
    liquid_configured: bool,
) -> None:
    """Raise ``ValueError`` unless swaps with ``asset`` can be performed."""
    if asset == "lbtc":
        if not liquid_enabled:
            raise ValueError("liquid swaps are not enabled")
        if not liquid_configured:
            raise ValueError("peerswap was not started with liquid node config")
    elif asset == "btc":
        if not bitcoin_enabled:
            raise ValueError("bitcoin swaps are not enabled")
    else:
        raise ValueError("invalid asset (btc or lbtc)")


def check_swap_out_capacity(channel_sat: int, amount_sat: int, connected: bool) -> None:
    """Raise ``ValueError`` unless the channel can carry a swap-out of ``amount_sat``."""
    if amount_sat <= 0:
        raise ValueError("Missing required amt_sat parameter")
    if channel_sat < amount_sat + SWAP_OUT_RESERVE_SAT:
        raise ValueError("not enough outbound capacity to perform swapOut")
    if not connected:
        raise ValueError("fundingChannels is not connected")


def check_swap_in_capacity(
    channel_sat: int, channel_total_sat: int, amount_sat: int, connected: bool
) -> None:
    """Raise ``ValueError`` unless the channel can receive a swap-in of ``amount_sat``."""
    if amount_sat <= 0:
        raise ValueError("Missing required amt_sat parameter")
    if channel_total_sat - channel_sat < amount_sat:
        raise ValueError("not enough inbound capacity to perform swap")
    if not connected:
        raise ValueError("fundingChannels is not connected")