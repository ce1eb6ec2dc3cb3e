""" A :class:`River` is a filtered view of the rapids: it parses each raw
    message arriving on a connection, validates it against a set of
    declared rules, and hands the result to every registered listener.
"""

import logging

from . import json
from . import packet
from . import problems
from . import rules


logger = logging.getLogger(__name__)


class River:
    """ Filter the raw JSON messages arriving on a rapids *connection*.
        The river registers itself with the *connection* upon construction;
        the connection is then expected to invoke :func:`message` for every
        inbound message.

        Rules are declared with :func:`require`, :func:`forbid`,
        :func:`require_values`, and :func:`interested_in`. Each of these
        returns the river itself, so that declarations can be chained::

            river = rapids.River(connection)
            river.require('need').forbid('solution').interested_in('user')
            river.register(service)

        Rules are applied in the order they are declared, and every rule is
        applied to every message; a message that violates several rules
        will have all of the violations reported.
    """

    def __init__(self, connection):

        self.connection = connection
        self.listeners = list()
        self.rules = list()

        connection.register(self)


    def message(self, send_port, message):
        """ Process one raw *message* received via *send_port*, and notify
            every registered listener. If any errors were found every
            listener is notified via its on_error() method; otherwise each
            listener receives its own copy of the packet. Exceptions raised
            by a listener are not caught here.
        """

        new_packet, found = self.process(message)

        if found.has_errors():
            count = len(found.errors) + len(found.severe_errors)
            logger.debug('message rejected with %d error(s): %s', count, found)

        for listener in self.listeners:
            if found.has_errors():
                listener.on_error(send_port, found)
            else:
                clone = new_packet.clone_with_name(listener.service_name)
                listener.packet(send_port, clone, found)


    def process(self, message):
        """ Parse and validate a raw *message*. The return value is a tuple
            of the new :class:`rapids.packet.Packet`, or None if one could not
            be constructed, and the :class:`rapids.problems.PacketProblems`
            describing anything found along the way. A packet may be
            returned even if the problems include validation errors.
        """

        found = problems.PacketProblems(message)

        try:
            fields = json.loads(message)
            new_packet = packet.Packet(fields, found)
            for rule in self.rules:
                rules.evaluate(rule, fields, new_packet, found)
        except json.DecodeError:
            found.severe_error('Invalid JSON format. Please check syntax carefully.')
            return None, found
        except Exception as e:
            found.severe_error('Packet creation issue:\n\t' + str(e))
            return None, found

        return new_packet, found


    def register(self, listener):
        """ Add a *listener* to receive the results of this river. Listeners
            are notified in the order they were registered.
        """

        for method in ('packet', 'on_error'):
            if callable(getattr(listener, method, None)):
                pass
            else:
                raise TypeError('listener must have a callable %s() method' % (method))

        if getattr(listener, 'service_name', None) is None:
            raise TypeError('listener must have a service_name')

        self.listeners.append(listener)
        return self


    def require(self, *keys):
        """ Each of the *keys* must be present in every message, with a
            value that is not null, an empty string, or an empty list.
        """

        for key in keys:
            self.rules.append(rules.Rule(rules.RuleKind.REQUIRED, key))

        return self


    def forbid(self, *keys):
        """ None of the *keys* may be present with a value. A null, empty
            string, or empty list is acceptable. The keys are still
            available on the packet, so a listener can inspect the value.
        """

        for key in keys:
            self.rules.append(rules.Rule(rules.RuleKind.FORBIDDEN, key))

        return self


    def require_values(self, pairs=None, **kwargs):
        """ Require each key to be present with exactly the given value. The
            key/value pairs can be a dictionary, keyword arguments, or both;
            dictionary entries are applied first. Values are compared
            strictly: the string '5' does not match the number 5.
        """

        if pairs is None:
            pairs = dict()

        for key, value in dict(pairs).items():
            self.rules.append(rules.Rule(rules.RuleKind.REQUIRED_VALUE, key, value))

        for key, value in kwargs.items():
            self.rules.append(rules.Rule(rules.RuleKind.REQUIRED_VALUE, key, value))

        return self


    def interested_in(self, *keys):
        """ Make the *keys* available on the packet without imposing any
            constraint on their presence or value.
        """

        for key in keys:
            self.rules.append(rules.Rule(rules.RuleKind.INTERESTED, key))

        return self


# end of class River


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
