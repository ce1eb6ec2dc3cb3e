""" Python implementation of the rapids/rivers pattern. Services share a
    single stream of JSON messages (the rapids); each service declares a
    :class:`River` describing the fields it requires, forbids, or is merely
    interested in, and receives either a validated :class:`Packet` or a
    :class:`PacketProblems` report for every message.
"""

# Utility components.

from . import json
from . import config

# Submodules used by multiple other components.

from . import packet
from . import problems
from . import rules
from . import connection

# Primary public-facing interfaces.

from .packet import Packet
from .problems import PacketProblems
from .listener import Listener
from .river import River

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
