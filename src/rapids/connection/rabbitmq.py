"""RabbitMQ rapids.

Every service binds its own exclusive queue to a shared fanout exchange, so
every service sees every message. A single background thread owns the pika
connection; it consumes inbound messages and, when signaled via
``add_callback_threadsafe``, drains the queue of outbound messages.
"""

from __future__ import annotations

import atexit
import logging
import queue
import threading
from typing import Optional

import pika
import pika.exceptions

from .. import config
from .base import ConnectionFailure, RapidsConnection


logger = logging.getLogger(__name__)


class Connection(RapidsConnection):
    """Rapids connection backed by a RabbitMQ fanout exchange."""

    timeout = 10

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        exchange: Optional[str] = None,
        queue_name: str = "",
    ):
        super().__init__()

        settings = config.settings(host=host, port=port, exchange=exchange)
        self.host = settings.host
        self.port = settings.port
        self.exchange = settings.exchange
        self.queue_name = queue_name

        self._outbox: queue.Queue = queue.Queue()
        self._ready = threading.Event()
        self._failure: Optional[Exception] = None
        self._connection = None
        self._channel = None
        self._thread: Optional[threading.Thread] = None

    def _params(self) -> pika.ConnectionParameters:
        return pika.ConnectionParameters(
            host=self.host,
            port=self.port,
            heartbeat=600,
            blocked_connection_timeout=300,
        )

    @property
    def is_open(self) -> bool:
        channel = self._channel
        return channel is not None and channel.is_open

    def open(self) -> None:
        if self.is_open:
            return

        self._ready.clear()
        self._failure = None

        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

        if not self._ready.wait(timeout=self.timeout):
            raise ConnectionFailure(
                f"no connection to {self.host}:{self.port} in {self.timeout} sec"
            )

        if self._failure is not None:
            raise ConnectionFailure(
                f"cannot connect to {self.host}:{self.port}: {self._failure}"
            ) from self._failure

        _open_connections.add(self)

    def close(self) -> None:
        _open_connections.discard(self)

        connection = self._connection
        if connection is None:
            return

        try:
            connection.add_callback_threadsafe(self._stop)
        except pika.exceptions.AMQPError:
            # Already closed out from under us.
            pass

        # A listener may close the connection from its own callback, which
        # runs on the consumer thread; that thread cannot join itself.

        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(self.timeout)

    def _send(self, body: bytes) -> None:
        self._outbox.put(body)
        self._connection.add_callback_threadsafe(self._flush)

    def _run(self) -> None:
        try:
            self._connection = pika.BlockingConnection(self._params())
            channel = self._connection.channel()

            channel.exchange_declare(
                exchange=self.exchange,
                exchange_type="fanout",
                durable=True,
                auto_delete=True,
            )

            result = channel.queue_declare(
                queue=self.queue_name, exclusive=True, auto_delete=True
            )
            self.queue_name = result.method.queue

            channel.queue_bind(exchange=self.exchange, queue=self.queue_name)
            channel.basic_consume(
                queue=self.queue_name,
                on_message_callback=self._on_message,
                auto_ack=True,
            )
        except pika.exceptions.AMQPError as e:
            self._failure = e
            self._connection = None
            self._ready.set()
            return

        self._channel = channel
        self._ready.set()

        try:
            channel.start_consuming()
        except pika.exceptions.AMQPError:
            logger.exception("lost connection to %s:%d", self.host, self.port)
        finally:
            self._channel = None
            connection = self._connection
            self._connection = None
            if connection is not None and connection.is_open:
                connection.close()

    def _stop(self) -> None:
        channel = self._channel
        if channel is not None:
            channel.stop_consuming()

    def _flush(self) -> None:
        """Drain all queued outgoing messages (called on the connection
        thread via add_callback_threadsafe)."""
        while True:
            try:
                body = self._outbox.get_nowait()
            except queue.Empty:
                break

            try:
                self._channel.basic_publish(
                    exchange=self.exchange,
                    routing_key="",
                    body=body,
                )
            except pika.exceptions.AMQPError:
                logger.exception("cannot publish to exchange %r", self.exchange)

    def _on_message(self, _ch, _method, _properties, body: bytes) -> None:
        # A misbehaving listener must not take down the consumer thread.
        try:
            self._deliver(body)
        except Exception:
            logger.exception("failure handling message from %r", self.exchange)


_open_connections: set = set()


def _cleanup() -> None:
    for connection in list(_open_connections):
        connection.close()


atexit.register(_cleanup)
