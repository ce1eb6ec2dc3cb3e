"""In-process rapids.

Every message published on a :class:`LocalConnection` is delivered,
synchronously and on the publishing thread, to every river registered with
that same connection. This is useful for tests, and for wiring several
services together inside a single process.
"""

from __future__ import annotations

import logging

from .base import RapidsConnection


logger = logging.getLogger(__name__)


class LocalConnection(RapidsConnection):
    """Rapids confined to the current process."""

    def __init__(self) -> None:
        super().__init__()
        self._open = True
        self.published: list = []

    def open(self) -> None:
        self._open = True

    def close(self) -> None:
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def _send(self, body: bytes) -> None:
        logger.debug("local publish: %r", body)
        self.published.append(body)
        self._deliver(body)
