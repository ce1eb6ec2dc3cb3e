""" The :class:`Packet` is the view of an inbound message handed to each
    listener of a :class:`rapids.River`. Only the keys declared by the
    river's rules are reachable through the packet; anything else in the
    original message is carried along untouched, so that a republished
    packet does not lose fields some other service cares about.
"""

import copy

from . import json


# Keys maintained by the rapids themselves rather than by any one service.

read_count = 'system_read_count'
contributing_services = 'contributing_services'


class Packet:
    """ Wrap the decoded *fields* of a single JSON message. A freshly
        constructed :class:`Packet` exposes no keys at all; keys become
        readable and writable, either as attributes or via item access,
        once they are bound with :func:`bind`::

            packet.bind('need', fields.get('need'))
            packet.need = 'car_rental_offer'
            packet['need']

        Reading or writing a key that was never bound raises an
        :class:`AttributeError` (attribute access) or :class:`KeyError`
        (item access), even if the key is present in the original message.
        Keys that are not valid identifiers, or that collide with a method
        name such as ``keys``, are only reachable via item access.

        Each packet also tracks how many times the message has been read
        off the rapids, and which services have contributed to it; see
        :attr:`system_read_count` and :attr:`contributing_services`.
        Malformed values for either are ignored; if a
        :class:`rapids.problems.PacketProblems` is supplied as *problems*
        a warning is recorded there.
    """

    __slots__ = ('_fields', '_values', '_used', '_read_count', '_services', '_service_name')

    def __init__(self, fields, problems=None):

        if isinstance(fields, dict):
            pass
        else:
            raise TypeError('a packet must wrap a JSON object, not ' + type(fields).__name__)

        # Malformed system keys are not the fault of any one service; they
        # are treated as absent, with a warning if anyone is listening.

        previous = fields.get(read_count)
        if previous is None:
            previous = -1
        elif isinstance(previous, float) and previous.is_integer():
            previous = int(previous)
        elif isinstance(previous, bool) or not isinstance(previous, int):
            if problems is not None:
                problems.warning("Ignoring '%s' value %r, not an integer" % (read_count, previous))
            previous = -1

        services = fields.get(contributing_services)
        if services is None:
            services = list()
        elif isinstance(services, list):
            services = list(services)
        else:
            if problems is not None:
                problems.warning("Ignoring '%s' value %r, not a list" % (contributing_services, services))
            services = list()

        object.__setattr__(self, '_fields', fields)
        object.__setattr__(self, '_values', dict())
        object.__setattr__(self, '_used', list())
        object.__setattr__(self, '_read_count', previous + 1)
        object.__setattr__(self, '_services', services)
        object.__setattr__(self, '_service_name', None)


    def __getattr__(self, name):

        # __getattr__ is only invoked when normal attribute lookup fails;
        # guard against the instance not being fully initialized, which
        # happens while copy or pickle machinery is probing the object.

        try:
            values = object.__getattribute__(self, '_values')
        except AttributeError:
            raise AttributeError(name)

        try:
            return values[name]
        except KeyError:
            raise AttributeError("packet has no declared key '%s'" % (name)) from None


    def __setattr__(self, name, value):

        if name in self._values:
            self._values[name] = value
        else:
            raise AttributeError("packet has no declared key '%s'" % (name))


    def __getitem__(self, key):
        try:
            return self._values[key]
        except KeyError:
            raise KeyError("packet has no declared key '%s'" % (key)) from None


    def __setitem__(self, key, value):
        if key in self._values:
            self._values[key] = value
        else:
            raise KeyError("packet has no declared key '%s'" % (key))


    def __contains__(self, key):
        return key in self._values


    def __repr__(self):
        return '<Packet %s: %r>' % (self._service_name, self._values)


    def bind(self, key, value=None):
        """ Establish *key* as a readable and writable field of this packet,
            with an initial *value*. Binding a key a second time resets its
            value.
        """

        self.used_key(key)
        self._values[key] = value


    def used_key(self, key):
        """ Note that *key* was referenced by a validation rule. Used keys
            are written back into the message by :func:`to_json`.
        """

        if key in self._used:
            pass
        else:
            self._used.append(key)


    def keys(self):
        """ Return the declared keys, in the order they were bound.
        """

        return list(self._values.keys())


    def get(self, key, default=None):
        return self._values.get(key, default)


    def clone_with_name(self, service_name):
        """ Return an independent copy of this packet on behalf of the named
            service. Changes made to the copy, including changes to nested
            lists or objects, are not visible to this packet or to any other
            copy. The service name is appended to the copy's
            :attr:`contributing_services`.
        """

        # Share the memo so that values aliased between the original fields
        # and the bound values remain aliased in the copy.

        memo = dict()
        fields = copy.deepcopy(self._fields, memo)
        values = copy.deepcopy(self._values, memo)

        services = list(self._services)
        services.append(service_name)

        clone = Packet.__new__(Packet)
        object.__setattr__(clone, '_fields', fields)
        object.__setattr__(clone, '_values', values)
        object.__setattr__(clone, '_used', list(self._used))
        object.__setattr__(clone, '_read_count', self._read_count)
        object.__setattr__(clone, '_services', services)
        object.__setattr__(clone, '_service_name', service_name)

        return clone


    # The metadata properties below share their names with keys a message
    # may legitimately carry. A declared key always takes precedence, so
    # the attribute reads back the message field and anything written to it.

    @property
    def service_name(self):
        """ The service this copy was cloned for; None for the original.
        """

        if 'service_name' in self._values:
            return self._values['service_name']

        return self._service_name


    @property
    def system_read_count(self):
        if read_count in self._values:
            return self._values[read_count]

        return self._read_count


    @property
    def contributing_services(self):
        if contributing_services in self._values:
            return self._values[contributing_services]

        return list(self._services)


    def to_json(self):
        """ Return the JSON text for this packet, suitable for republishing
            on the rapids. Every field of the original message is included;
            the system keys reflect this read of the message, unless a rule
            declared them, in which case they carry their current values
            like any other declared key.
        """

        message = dict(self._fields)
        message[read_count] = self._read_count
        message[contributing_services] = list(self._services)

        for key in self._used:
            value = self._values[key]

            # Don't introduce explicit nulls for declared keys that were
            # never present in the first place.

            if value is None and key not in self._fields:
                continue

            message[key] = value

        return json.dumps(message).decode()


# end of class Packet


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
