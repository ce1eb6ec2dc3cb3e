""" Run the ZeroMQ forwarder that ties together every service using the
    ``zmq`` rapids transport.
"""

import logging

from rapids.connection import zmq


def main():
    import argparse

    parser = argparse.ArgumentParser(
        description='Forward messages between ZeroMQ rapids services'
    )
    parser.add_argument(
        '--publish-port', type=int, default=10139,
        help='Port services publish to (default: 10139)'
    )
    parser.add_argument(
        '--subscribe-port', type=int, default=10140,
        help='Port services subscribe to (default: 10140)'
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)

    try:
        zmq.forwarder(args.publish_port, args.subscribe_port)
    except KeyboardInterrupt:
        pass


if __name__ == '__main__':
    main()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
