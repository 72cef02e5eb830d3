# peerswap

Building blocks for balancing Lightning channels with on-chain swaps between
two peers. The package holds the pieces of a swap node that work without a
running Lightning or chain backend:

- `peerswap.messages` – the custom peer message types (`MessageType`), their
  hex encoding and range checks (`in_range`, `message_type_to_hex_string`,
  `hex_string_to_message_type`) and the errors they raise
  (`MessageTypeError`, `EvenMessageTypeError`, `MessageNotInRangeError`,
  `AlreadyHasASenderError`).
- `peerswap.sender` – resending a message on a timer until told to stop
  (`RedundantMessenger`) and keeping one such sender per id (`Manager`).
- `peerswap.payments` – splitting a large payment into parts of at most
  1,000,000,000 msat and collecting the preimage (`mpp_payment`), plus
  `build_route_hop`, `get_label`, `random_string` and
  `normalize_short_channel_id`.
- `peerswap.commands` – the checks a swap request has to pass before it
  starts (`validate_asset`, `check_swap_out_capacity`,
  `check_swap_in_capacity`), the node feature-bit check (`check_features`)
  and `SwapCanceledError`.
- `peerswap.daemon` – lnd version checks (`check_lnd_version`,
  `UnsupportedLndVersionError`), network names (`bitcoin_network`,
  `liquid_network`), data directory creation (`make_directories`), and a
  level-aware logger (`LogLevel`, `LndLogger`).
- `peerswap.log` – package-wide `infof` / `debugf` calls whose target can be
  replaced with `set_logger`.

## Examples

Decoding the type of an incoming custom message:

```python
from peerswap.messages import MessageType, MessageTypeError, hex_string_to_message_type

assert hex_string_to_message_type("a455") is MessageType.SWAP_IN_REQUEST

try:
    hex_string_to_message_type("a456")
except MessageTypeError as err:
    print(err)  # message type is even
```

Strings that are not hex, even types and types outside the swap range all
raise a `MessageTypeError` (the last two as `EvenMessageTypeError` and
`MessageNotInRangeError`).

Checking a node's advertised features:

```python
from peerswap.commands import check_features

assert check_features(bytes.fromhex("8000000020008000002822aaa2"), 69)
```

Validating a swap-out request against a channel:

```python
from peerswap.commands import check_swap_out_capacity, validate_asset

validate_asset("btc", liquid_enabled=False, bitcoin_enabled=True, liquid_configured=False)
check_swap_out_capacity(channel_sat=1_000_000, amount_sat=100_000, connected=True)
```

Both raise `ValueError` with the reason when the request cannot go ahead.

Paying a large invoice in parts: `mpp_payment(payer, waiter, payreq,
channel, bolt11)` takes any object with a `send_pay_channel(...)` method and
any object with a `wait_send_pay_part(payment_hash, timeout, part_id)` method,
sends every part, waits for all of them, and returns the preimage of the
first part to finish, or raises that part's error.

Resending a message until the swap moves on:

```python
from peerswap.sender import Manager, RedundantMessenger

manager = Manager()
resender = RedundantMessenger(my_messenger, retry_time=10.0)
resender.send_message(peer_id, payload, message_type)
manager.add_sender(swap_id, resender)
# later, once the peer has answered
manager.remove_sender(swap_id)
```

`my_messenger` is any object with a
`send_message(peer_id, message, message_type)` method. Adding a second
sender under the same id raises `AlreadyHasASenderError`.

## Logging

By default `peerswap.log.infof` and `debugf` write timestamped lines with an
`[INFO]` or `[DEBUG]` prefix to standard error. Install your own logger with
`peerswap.log.set_logger`; it needs `infof(fmt, *args)` and
`debugf(fmt, *args)` methods. `peerswap.daemon.LndLogger` is one such
logger: it writes to a stream (standard output by default) and drops debug
lines unless its level is `LogLevel.DEBUG`.

## What this package does not do

It does not connect to a Lightning node or a chain backend, build or
broadcast transactions, store swaps, run a swap state machine, or serve an
RPC interface, and it has no command-line program. Those parts are left to
the application that uses these building blocks.

## Tests

The test suite uses pytest and is installed with the `test` extra.