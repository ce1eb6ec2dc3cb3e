"""ZeroMQ rapids.

ZeroMQ has no broker; a :func:`forwarder` process plays that role. Services
connect a PUB socket to the forwarder's XSUB side and a SUB socket to its
XPUB side, so every service sees every message published by any service.
"""

from __future__ import annotations

import atexit
import logging
import threading
from typing import Optional

import zmq

from .. import config
from .base import ConnectionFailure, RapidsConnection


logger = logging.getLogger(__name__)

zmq_context = zmq.Context()


class Connection(RapidsConnection):
    """Rapids connection via a ZeroMQ forwarder."""

    def __init__(
        self,
        publish_address: Optional[str] = None,
        subscribe_address: Optional[str] = None,
    ):
        super().__init__()

        settings = config.settings(zmq_pub=publish_address, zmq_sub=subscribe_address)
        self.publish_address = settings.zmq_pub
        self.subscribe_address = settings.zmq_sub

        self.pub = None
        self.sub = None
        self.shutdown = False

        # The lock around the PUB socket is necessary in a multithreaded
        # application; ZeroMQ sockets are not thread safe.

        self._pub_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_open(self) -> bool:
        return self.pub is not None

    def open(self) -> None:
        if self.is_open:
            return

        pub = zmq_context.socket(zmq.PUB)
        sub = zmq_context.socket(zmq.SUB)
        pub.setsockopt(zmq.LINGER, 0)
        sub.setsockopt(zmq.LINGER, 0)
        sub.setsockopt(zmq.SUBSCRIBE, b"")

        try:
            pub.connect(self.publish_address)
            sub.connect(self.subscribe_address)
        except zmq.ZMQError as exc:
            pub.close()
            sub.close()
            raise ConnectionFailure(
                f"cannot connect to forwarder {self.publish_address}, {self.subscribe_address}"
            ) from exc

        self.pub = pub
        self.sub = sub
        self.shutdown = False

        self._thread = threading.Thread(target=self.run, daemon=True)
        self._thread.start()

    def close(self) -> None:
        if not self.is_open:
            return

        self.shutdown = True

        # Closing from a listener callback happens on the receive thread,
        # which exits on its own once the callback returns.

        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

        with self._pub_lock:
            self.pub.close()
            self.pub = None

    def _send(self, body: bytes) -> None:
        with self._pub_lock:
            self.pub.send(body)

    def run(self) -> None:
        poller = zmq.Poller()
        poller.register(self.sub, zmq.POLLIN)

        while not self.shutdown:
            for active, _flag in poller.poll(100):
                if active == self.sub:
                    body = self.sub.recv()
                    try:
                        self._deliver(body)
                    except Exception:
                        logger.exception("failure handling message from %s", self.subscribe_address)

        self.sub.close()
        self.sub = None


def forwarder(publish_port: int = 10139, subscribe_port: int = 10140) -> None:
    """Run the XSUB/XPUB proxy that joins publishers to subscribers. This
    call blocks for as long as the proxy is running."""

    frontend = zmq_context.socket(zmq.XSUB)
    backend = zmq_context.socket(zmq.XPUB)

    try:
        frontend.bind(f"tcp://*:{publish_port}")
        backend.bind(f"tcp://*:{subscribe_port}")
    except zmq.ZMQError as exc:
        frontend.close()
        backend.close()
        raise ConnectionFailure(
            f"cannot bind forwarder on ports {publish_port}, {subscribe_port}"
        ) from exc

    logger.info("forwarding tcp://*:%d -> tcp://*:%d", publish_port, subscribe_port)

    try:
        zmq.proxy(frontend, backend)
    finally:
        frontend.close()
        backend.close()


def _cleanup() -> None:
    try:
        zmq_context.term()
    except Exception:
        pass


atexit.register(_cleanup)
