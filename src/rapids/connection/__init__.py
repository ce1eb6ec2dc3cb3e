"""Rapids connections: the transports a :class:`rapids.River` listens to."""

from .. import config
from .base import (
    RapidsError,
    ConnectionFailure,
    ConnectionClosed,
    UnknownBackend,
    RapidsConnection,
)
from .local import LocalConnection


def get(backend=None, **kwargs):
    """Return a new, unopened connection for the named *backend*; the
    default is taken from :mod:`rapids.config`. The *kwargs* are passed to
    the connection constructor."""

    if backend is None:
        backend = config.transport

    if backend == "local":
        return LocalConnection(**kwargs)
    elif backend == "rabbitmq":
        from . import rabbitmq
        return rabbitmq.Connection(**kwargs)
    elif backend == "zmq":
        from . import zmq
        return zmq.Connection(**kwargs)

    raise UnknownBackend(f"unknown rapids transport backend: {backend!r}")
