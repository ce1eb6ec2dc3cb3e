"""Connection interface.

A connection moves raw messages between the rapids and the rivers
registered with it. The :class:`rapids.River` only depends on
:func:`RapidsConnection.register`; everything else here is for the
services doing the wiring.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import List, Union

from ..packet import Packet


# Connection agnostic exceptions

class RapidsError(Exception):
    """Base class for all rapids connection errors."""


class ConnectionFailure(RapidsError):
    """The connection could not be established or maintained."""


class ConnectionClosed(RapidsError):
    """An operation was attempted on a connection that is not open."""


class UnknownBackend(RapidsError):
    """No connection implementation exists for the requested backend."""


class RapidsConnection(ABC):
    """Minimal contract for a rapids connection."""

    def __init__(self) -> None:
        self.rivers: List = []
        self._rivers_lock = threading.Lock()

    def register(self, river) -> None:
        """Add a river; every inbound message will be passed to it."""
        with self._rivers_lock:
            self.rivers.append(river)

    def publish(self, message: Union[Packet, str, bytes]) -> None:
        """Put a packet, or raw JSON text, on the rapids."""
        if not self.is_open:
            raise ConnectionClosed(f"{type(self).__name__} is not open")

        if isinstance(message, Packet):
            message = message.to_json()
        if isinstance(message, str):
            message = message.encode()

        self._send(message)

    def _deliver(self, message: Union[str, bytes]) -> None:
        """Hand one inbound raw message to every registered river."""
        with self._rivers_lock:
            rivers = list(self.rivers)

        for river in rivers:
            river.message(self, message)

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @abstractmethod
    def open(self) -> None:
        """Establish the underlying connection/socket."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection/socket."""

    @abstractmethod
    def _send(self, body: bytes) -> None:
        """Send one encoded message on the wire."""

    @property
    def is_open(self) -> bool:
        """Whether the connection is currently usable."""
        return False
