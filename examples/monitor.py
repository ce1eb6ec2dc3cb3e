""" The rapids monitor: a service that prints every message on the rapids,
    along with any problems found when validating it against the rules
    given on the command line. With no rules at all every well-formed JSON
    object on the rapids is printed.
"""

import logging
import threading

import rapids


class Monitor(rapids.Listener):

    service_name = 'monitor'

    def packet(self, send_port, packet, problems):
        print(' [*] ' + packet.to_json())

        if problems.has_messages():
            print(str(problems))


    def on_error(self, send_port, problems):
        print(' [x] ' + str(problems))


# end of class Monitor



def main():
    import argparse

    parser = argparse.ArgumentParser(
        description='Print every message on the rapids'
    )
    parser.add_argument(
        '-t', '--transport',
        help='Connection backend: local, rabbitmq, or zmq (default: $RAPIDS_TRANSPORT)',
        default=None
    )
    parser.add_argument(
        '--host',
        help='RabbitMQ broker host (default: $RAPIDS_HOST)',
        default=None
    )
    parser.add_argument(
        '--port',
        help='RabbitMQ broker port (default: $RAPIDS_PORT)',
        default=None
    )
    parser.add_argument(
        '-r', '--require', nargs='*', default=[],
        help='Keys every message must have'
    )
    parser.add_argument(
        '-f', '--forbid', nargs='*', default=[],
        help='Keys no message may have'
    )
    parser.add_argument(
        '-i', '--interested', nargs='*', default=[],
        help='Keys to expose without constraint'
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args()

    if args.verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    logging.basicConfig(level=level, format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    settings = rapids.config.settings(transport=args.transport, host=args.host, port=args.port)

    if settings.transport == 'rabbitmq':
        connection = rapids.connection.get('rabbitmq', host=settings.host, port=settings.port)
    else:
        connection = rapids.connection.get(settings.transport)

    river = rapids.River(connection)
    river.require(*args.require).forbid(*args.forbid).interested_in(*args.interested)
    river.register(Monitor())

    with connection:
        print(' [*] Waiting for traffic on the rapids. To exit press CTRL+C')
        try:
            threading.Event().wait()
        except KeyboardInterrupt:
            pass


if __name__ == '__main__':
    main()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
