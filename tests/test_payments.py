import random
import threading
import time
from enum import Enum

import pytest

from peerswap.payments import (
    PAYMENT_SPLITTER_MSAT,
    DecodedBolt11,
    RouteHop,
    SendPayFields,
    build_route_hop,
    get_label,
    mpp_payment,
    normalize_short_channel_id,
    random_string,
)


class DummyPayerWaiter:
    def __init__(self, wait_error=None, wait_result=None, send_error=None):
        self.wait_error = wait_error
        self.wait_result = wait_result
        self.send_error = send_error
        self.wait_calls = 0
        self.send_calls = 0
        self.total_payed = 0
        self.labels = []
        self.amounts = []
        self.send_part_ids = []
        self.wait_part_ids = []
        self._lock = threading.Lock()

    def wait_send_pay_part(self, payment_hash, timeout, part_id):
        time.sleep(random.random() * 0.05)
        with self._lock:
            self.wait_calls += 1
            self.wait_part_ids.append(part_id)
        if self.wait_error is not None:
            raise self.wait_error
        return self.wait_result

    def send_pay_channel(self, payreq, bolt11, amount_msat, channel, label, part_id):
        with self._lock:
            self.send_calls += 1
            self.total_payed += amount_msat
            self.labels.append(label)
            self.amounts.append(amount_msat)
            self.send_part_ids.append(part_id)
        if self.send_error is not None:
            raise self.send_error
        return ""


PAYMENT_SIZE = 5_100_000 * 1000


def test_mpp_payments():
    payer = DummyPayerWaiter(wait_result=SendPayFields(payment_preimage="preimage"))
    preimage = mpp_payment(payer, payer, "", "", DecodedBolt11(milli_satoshis=PAYMENT_SIZE))
    assert preimage == "preimage"
    assert payer.send_calls == 6
    assert payer.wait_calls == 6
    assert payer.total_payed == PAYMENT_SIZE


def test_mpp_payments_send_error():
    payer = DummyPayerWaiter(
        wait_result=SendPayFields(payment_preimage="preimage"),
        send_error=RuntimeError("sendpay error"),
    )
    with pytest.raises(RuntimeError, match="sendpay error"):
        mpp_payment(payer, payer, "", "", DecodedBolt11(milli_satoshis=PAYMENT_SIZE))
    assert payer.send_calls == 1
    assert payer.wait_calls == 0
    assert payer.total_payed == 1_000_000 * 1000


def test_mpp_payments_wait_error():
    payer = DummyPayerWaiter(
        wait_error=RuntimeError("waitsendpay error"),
        wait_result=SendPayFields(payment_preimage="preimage"),
    )
    with pytest.raises(RuntimeError, match="waitsendpay error"):
        mpp_payment(payer, payer, "", "", DecodedBolt11(milli_satoshis=PAYMENT_SIZE))
    assert payer.send_calls == 6
    assert payer.wait_calls == 6
    assert payer.total_payed == PAYMENT_SIZE


def test_mpp_part_amounts_and_ids():
    payer = DummyPayerWaiter(wait_result=SendPayFields(payment_preimage="p"))
    mpp_payment(payer, payer, "", "", DecodedBolt11(milli_satoshis=PAYMENT_SIZE))
    assert payer.amounts == [PAYMENT_SPLITTER_MSAT] * 5 + [100_000_000]
    assert payer.send_part_ids == [1, 2, 3, 4, 5, 6]
    assert sorted(payer.wait_part_ids) == [1, 2, 3, 4, 5, 6]
    assert len(set(payer.labels)) == 6


def test_mpp_exact_multiple_has_no_remainder_part():
    payer = DummyPayerWaiter(wait_result=SendPayFields(payment_preimage="p"))
    mpp_payment(payer, payer, "", "", DecodedBolt11(milli_satoshis=2 * PAYMENT_SPLITTER_MSAT))
    assert payer.amounts == [PAYMENT_SPLITTER_MSAT, PAYMENT_SPLITTER_MSAT]


def test_mpp_zero_amount_rejected():
    payer = DummyPayerWaiter(wait_result=SendPayFields(payment_preimage="p"))
    with pytest.raises(ValueError):
        mpp_payment(payer, payer, "", "", DecodedBolt11(milli_satoshis=0))
    assert payer.send_calls == 0


def test_mpp_without_preimage_raises():
    payer = DummyPayerWaiter(wait_result=SendPayFields(payment_preimage=""))
    with pytest.raises(RuntimeError):
        mpp_payment(payer, payer, "", "", DecodedBolt11(milli_satoshis=1000))


def test_build_route_hop():
    bolt11 = DecodedBolt11(
        milli_satoshis=5000, payment_hash="ab", payee="02aa", min_final_cltv_expiry=18
    )
    hop = build_route_hop(bolt11, 4000, "1x2x3")
    assert hop == RouteHop(
        id="02aa",
        short_channel_id="1x2x3",
        milli_satoshi=4000,
        amount_msat="4000msat",
        delay=19,
        direction=0,
    )


class _InvoiceType(Enum):
    FEE = "fee"


def test_get_label():
    assert get_label("swapid", "claim") == "swapid_claim"
    assert get_label("swapid", _InvoiceType.FEE) == "swapid_fee"


def test_random_string():
    first = random_string()
    second = random_string()
    assert len(first) == 64
    assert bytes.fromhex(first).hex() == first
    assert first != second


@pytest.mark.parametrize(
    "given, expected",
    [
        ("100:1:0", "100x1x0"),
        ("100x1x0", "100x1x0"),
        ("", ""),
    ],
)
def test_normalize_short_channel_id(given, expected):
    assert normalize_short_channel_id(given) == expected