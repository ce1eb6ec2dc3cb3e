""" Connection settings for the rapids. Defaults are drawn from the
    environment when this module is imported:

    ``RAPIDS_TRANSPORT``
        Which connection backend to use: ``local``, ``rabbitmq``, or ``zmq``.

    ``RAPIDS_HOST``, ``RAPIDS_PORT``
        The RabbitMQ broker location.

    ``RAPIDS_EXCHANGE``
        The name of the RabbitMQ fanout exchange shared by every service.

    ``RAPIDS_ZMQ_PUB``, ``RAPIDS_ZMQ_SUB``
        The ZeroMQ forwarder endpoints: services publish to the first and
        subscribe to the second.
"""

import collections
import os


Settings = collections.namedtuple('Settings', ('transport', 'host', 'port', 'exchange', 'zmq_pub', 'zmq_sub'))


transport = os.environ.get('RAPIDS_TRANSPORT', 'local')
host = os.environ.get('RAPIDS_HOST', 'localhost')
port = int(os.environ.get('RAPIDS_PORT', '5672'))
exchange = os.environ.get('RAPIDS_EXCHANGE', 'rapids')
zmq_pub = os.environ.get('RAPIDS_ZMQ_PUB', 'tcp://localhost:10139')
zmq_sub = os.environ.get('RAPIDS_ZMQ_SUB', 'tcp://localhost:10140')


def settings(**overrides):
    """ Return a :class:`Settings` instance reflecting the module defaults,
        with any keyword *overrides* applied. Overrides set to None are
        ignored, so that command-line arguments can be passed through
        directly.
    """

    current = Settings(transport, host, port, exchange, zmq_pub, zmq_sub)

    for key, value in overrides.items():
        if key in Settings._fields:
            pass
        else:
            raise TypeError('unknown setting: ' + repr(key))

    overrides = dict((key, value) for key, value in overrides.items() if value is not None)

    if 'port' in overrides:
        overrides['port'] = int(overrides['port'])

    return current._replace(**overrides)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
