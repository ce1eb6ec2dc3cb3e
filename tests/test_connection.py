import pytest
import rapids


def test_local_round_trip(connection, recorder):
    river = rapids.River(connection)
    service = recorder('service')
    river.require('need').register(service)

    connection.publish('{"need": "car_rental_offer"}')

    assert len(service.packets) == 1
    port, packet, problems = service.packets[0]
    assert port is connection
    assert packet.need == 'car_rental_offer'


def test_republish_packet(connection, recorder):
    needs = rapids.River(connection)
    solutions = rapids.River(connection)

    observer = recorder('observer')
    solutions.require('solution').register(observer)

    class Solver(rapids.Listener):
        def packet(self, send_port, packet, problems):
            packet.solution = 'discount'
            send_port.publish(packet)

    needs.require('need').forbid('solution').register(Solver('solver'))

    connection.publish('{"need": "offer"}')

    assert len(observer.packets) == 1
    packet = observer.packets[0][1]
    assert packet.solution == 'discount'
    assert packet.contributing_services == ['solver', 'observer']
    assert packet.system_read_count == 1


def test_every_river_sees_every_message(connection, recorder):
    one = recorder('one')
    two = recorder('two')
    rapids.River(connection).require('type').register(one)
    rapids.River(connection).forbid('type').register(two)

    connection.publish(b'{"type": "order"}')

    assert len(one.packets) == 1
    assert len(two.errors) == 1
    assert connection.published == [b'{"type": "order"}']


def test_publish_when_closed(connection):
    connection.close()
    assert connection.is_open == False

    with pytest.raises(rapids.connection.ConnectionClosed):
        connection.publish('{}')

    with connection:
        assert connection.is_open == True
        connection.publish('{}')

    assert connection.is_open == False


def test_get():
    connection = rapids.connection.get('local')
    assert isinstance(connection, rapids.connection.LocalConnection)

    with pytest.raises(rapids.connection.UnknownBackend):
        rapids.connection.get('carrier-pigeon')


def test_error_hierarchy():
    for error in (rapids.connection.ConnectionFailure,
                  rapids.connection.ConnectionClosed,
                  rapids.connection.UnknownBackend):
        assert issubclass(error, rapids.connection.RapidsError)


def test_settings():
    settings = rapids.config.settings()
    assert settings.transport == rapids.config.transport
    assert settings.exchange == rapids.config.exchange

    settings = rapids.config.settings(host='broker', port='5673', exchange=None)
    assert settings.host == 'broker'
    assert settings.port == 5673
    assert settings.exchange == rapids.config.exchange

    with pytest.raises(TypeError):
        rapids.config.settings(colour='blue')


def test_rabbitmq_settings():
    pytest.importorskip('pika')
    from rapids.connection import rabbitmq

    connection = rabbitmq.Connection(host='broker', port=5673, exchange='test')
    assert connection.host == 'broker'
    assert connection.port == 5673
    assert connection.exchange == 'test'
    assert connection.is_open == False

    with pytest.raises(rapids.connection.ConnectionClosed):
        connection.publish('{}')


def test_zmq_close_from_receive_thread():
    pytest.importorskip('zmq')
    import threading
    from rapids.connection import zmq

    connection = zmq.Connection('tcp://127.0.0.1:29139', 'tcp://127.0.0.1:29140')
    connection.open()
    receiver = connection._thread

    errors = list()

    def close_from_callback():
        try:
            connection.close()
        except Exception as e:
            errors.append(e)

    # Stand in for a listener callback running on the receive thread.

    callback = threading.Thread(target=close_from_callback)
    connection._thread = callback
    callback.start()
    callback.join(5)
    receiver.join(5)

    assert errors == []
    assert connection.is_open == False
    assert receiver.is_alive() == False



# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
