"""Lightning payment helpers: multi-part payments over one channel, route hops and labels."""

from __future__ import annotations

import secrets
import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import List, Protocol

PAYMENT_SPLITTER_MSAT = 1_000_000_000
"""Largest part a multi-part payment is split into."""

MPP_THRESHOLD_MSAT = 4_000_000_000
"""Payments above this amount are sent as multi-part payments."""

WAIT_SEND_PAY_TIMEOUT = 30
"""Seconds to wait for each payment part to resolve."""


@dataclass(frozen=True)
class DecodedBolt11:
    """The fields of a decoded Bolt11 invoice used when paying it."""

    milli_satoshis: int
    payment_hash: str = ""
    payee: str = ""
    min_final_cltv_expiry: int = 0
    payment_secret: str = ""


@dataclass(frozen=True)
class SendPayFields:
    """Result of waiting for a sent payment (or payment part)."""

    payment_preimage: str = ""
    payment_hash: str = ""
    status: str = ""


@dataclass(frozen=True)
class RouteHop:
    """A single hop of a payment route."""

    id: str
    short_channel_id: str
    milli_satoshi: int
    amount_msat: str
    delay: int
    direction: int = 0


class MppPayer(Protocol):
    """Sends a payment part through a given channel."""

    def send_pay_channel(
        self,
        payreq: str,
        bolt11: DecodedBolt11,
        amount_msat: int,
        channel: str,
        label: str,
        part_id: int,
    ) -> str:
        """Send ``amount_msat`` of the invoice through ``channel``; raise on failure."""


class PayWaiter(Protocol):
    """Waits for a sent payment part to resolve."""

    def wait_send_pay_part(
        self, payment_hash: str, timeout: int, part_id: int
    ) -> SendPayFields:
        """Block until part ``part_id`` resolves; raise on failure."""


def _split_amount(amount_msat: int) -> List[int]:
    full_parts, remainder = divmod(amount_msat, PAYMENT_SPLITTER_MSAT)
    parts = [PAYMENT_SPLITTER_MSAT] * full_parts
    if remainder > 0:
        parts.append(remainder)
    return parts


def mpp_payment(
    mpp_payer: MppPayer,
    pay_waiter: PayWaiter,
    payreq: str,
    channel: str,
    bolt11: DecodedBolt11,
) -> str:
    """Pay ``bolt11`` in parts through ``channel`` and return the preimage.

    Every part is sent first; a failure to send one stops at once. Then all
    parts are awaited, and the first part to finish decides: a preimage is
    returned, an error is raised.
    """
    parts = _split_amount(bolt11.milli_satoshis)
    if not parts:
        raise ValueError("payment amount must be positive")

    label = random_string()
    lock = threading.Lock()
    outcomes: List[Future] = []

    with ThreadPoolExecutor(max_workers=len(parts)) as pool:
        for part_id, amount in enumerate(parts, start=1):
            mpp_payer.send_pay_channel(
                payreq, bolt11, amount, channel, f"{label}{part_id}", part_id
            )
            outcomes.append(
                pool.submit(
                    pay_waiter.wait_send_pay_part,
                    bolt11.payment_hash,
                    WAIT_SEND_PAY_TIMEOUT,
                    part_id,
                )
            )

        finished_order: List[Future] = []
        pending = set(outcomes)
        while pending:
            done, pending = wait(pending, return_when=FIRST_COMPLETED)
            with lock:
                finished_order.extend(done)

    for future in finished_order:
        error = future.exception()
        if error is not None:
            raise error
        result = future.result()
        if result is not None and result.payment_preimage:
            return result.payment_preimage
    raise RuntimeError("no payment part returned a preimage")


def build_route_hop(bolt11: DecodedBolt11, amount_msat: int, channel: str) -> RouteHop:
    """Return the single-hop route that pays ``bolt11`` directly through ``channel``."""
    return RouteHop(
        id=bolt11.payee,
        short_channel_id=channel,
        milli_satoshi=amount_msat,
        amount_msat=f"{amount_msat}msat",
        delay=bolt11.min_final_cltv_expiry + 1,
        direction=0,
    )


def get_label(swap_id: str, invoice_type: object) -> str:
    """Return the invoice label for a swap and invoice type."""
    value = getattr(invoice_type, "value", invoice_type)
    return f"{swap_id}_{value}"


def random_string() -> str:
    """Return 32 random bytes as a hex string."""
    return secrets.token_hex(32)


def normalize_short_channel_id(channel: str) -> str:
    """Turn a ``block:tx:out`` channel id into ``blockxtxxout`` form."""
    if "x" not in channel:
        return channel.replace(":", "x")
    return channel