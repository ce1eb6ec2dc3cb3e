import pytest
import rapids


class Recorder:
    """ Listener that remembers everything it is told.
    """

    def __init__(self, service_name):
        self.service_name = service_name
        self.packets = list()
        self.errors = list()


    def packet(self, send_port, packet, problems):
        self.packets.append((send_port, packet, problems))


    def on_error(self, send_port, problems):
        self.errors.append((send_port, problems))


@pytest.fixture
def connection():
    return rapids.connection.LocalConnection()


@pytest.fixture
def river(connection):
    return rapids.River(connection)


@pytest.fixture
def recorder():
    """ Factory for :class:`Recorder` instances.
    """

    return Recorder


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
