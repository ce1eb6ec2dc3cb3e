""" The contract for services listening to a :class:`rapids.River`.
"""

import logging

from abc import ABC, abstractmethod


logger = logging.getLogger(__name__)


class Listener(ABC):
    """ A service that wants to hear about messages passing through a
        :class:`rapids.River`. Subclassing is optional; the river accepts any
        object with a *service_name* attribute and callable :func:`packet`
        and :func:`on_error` methods.

        The *service_name* is used to tag the copy of each packet delivered
        to this listener, and is recorded in the packet's list of
        contributing services.
    """

    service_name = None

    def __init__(self, service_name=None):

        if service_name is not None:
            self.service_name = service_name

        if self.service_name is None:
            self.service_name = type(self).__name__


    @abstractmethod
    def packet(self, send_port, packet, problems):
        """ Handle a message that satisfied every rule of the river. The
            *packet* is this listener's own copy; *problems* holds any
            informational messages or warnings, but never errors.
        """


    def on_error(self, send_port, problems):
        """ Handle a message that did not satisfy the river's rules, or that
            could not be parsed at all. The default does nothing beyond
            logging the report at debug level.
        """

        logger.debug('%s rejected message: %s', self.service_name, problems)


# end of class Listener


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
