"""Messengers that resend a message periodically until told to stop."""

from __future__ import annotations

import threading
from typing import Dict, Protocol

from peerswap import log
from peerswap.messages import AlreadyHasASenderError


class Messenger(Protocol):
    """Something that can deliver a message to a peer."""

    def send_message(self, peer_id: str, message: bytes, message_type: int) -> None:
        """Deliver ``message`` of ``message_type`` to ``peer_id``; raise on failure."""


class _StoppableMessenger(Messenger, Protocol):
    def stop(self) -> None:
        """Stop any further sending."""


class RedundantMessenger:
    """Sends a message once, then keeps resending it every ``retry_time`` seconds."""

    def __init__(self, messenger: Messenger, retry_time: float) -> None:
        self._messenger = messenger
        self._retry_time = retry_time
        self._stopped = threading.Event()

    def send_message(self, peer_id: str, message: bytes, message_type: int) -> None:
        """Send immediately, then resend in the background until stopped."""
        log.debugf(
            "[RedundantSender]\tstart sending messages of type %d to %s\n",
            message_type,
            peer_id,
        )
        self._messenger.send_message(peer_id, message, message_type)

        thread = threading.Thread(
            target=self._resend,
            args=(peer_id, message, message_type),
            daemon=True,
        )
        thread.start()

    def _resend(self, peer_id: str, message: bytes, message_type: int) -> None:
        while not self._stopped.wait(self._retry_time):
            try:
                self._messenger.send_message(peer_id, message, message_type)
            except Exception as err:  # keep retrying regardless of delivery errors
                log.debugf("[RedundantSender]\tSendMessageWithRetry: %s\n", err)
        log.debugf(
            "[RedundantSender]\tstop sending messages of type %d to %s\n",
            message_type,
            peer_id,
        )

    def stop(self) -> None:
        """Stop resending; stopping twice is an error."""
        if self._stopped.is_set():
            raise RuntimeError("redundant messenger already stopped")
        self._stopped.set()


class Manager:
    """Keeps one stoppable messenger per id."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._messengers: Dict[str, _StoppableMessenger] = {}

    def add_sender(self, sender_id: str, messenger: _StoppableMessenger) -> None:
        """Register ``messenger`` under ``sender_id``; raise if the id is taken."""
        with self._lock:
            if sender_id in self._messengers:
                raise AlreadyHasASenderError(sender_id)
            self._messengers[sender_id] = messenger

    def remove_sender(self, sender_id: str) -> None:
        """Stop and forget the messenger under ``sender_id``, if any."""
        with self._lock:
            messenger = self._messengers.pop(sender_id, None)
            if messenger is not None:
                messenger.stop()

    def __len__(self) -> int:
        with self._lock:
            return len(self._messengers)

    def __contains__(self, sender_id: object) -> bool:
        with self._lock:
            return sender_id in self._messengers