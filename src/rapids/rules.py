""" Declarative field rules for a :class:`rapids.River`. Each rule is a
    small immutable record; :func:`evaluate` interprets a rule against the
    decoded fields of one message, recording any problems and binding the
    rule's key on the packet.
"""

import collections
import enum

from . import json


class RuleKind(enum.Enum):
    REQUIRED = 'required'
    FORBIDDEN = 'forbidden'
    REQUIRED_VALUE = 'required-value'
    INTERESTED = 'interested'


class Rule(collections.namedtuple('Rule', ('kind', 'key', 'expected'))):
    """ A single declared constraint on one top-level *key*. The *expected*
        value is only meaningful for :attr:`RuleKind.REQUIRED_VALUE`.
    """

    __slots__ = ()

    def __new__(cls, kind, key, expected=None):

        if isinstance(kind, RuleKind):
            pass
        else:
            kind = RuleKind(kind)

        return super().__new__(cls, kind, str(key), expected)


# end of class Rule



def has_value(value):
    """ Return True if *value* counts as present. None, the empty string,
        and the empty list are all equivalent to the key being absent.
        Numbers, including zero, and booleans always count as present.
    """

    if value is None:
        return False

    if isinstance(value, (bool, int, float)):
        return True

    if value == '' or value == []:
        return False

    return True



def matches(actual, expected):
    """ Strict comparison for required values: no coercion between strings
        and numbers, and booleans never match numbers even though Python
        considers True equal to 1. The same applies to every element of
        nested lists and objects.
    """

    if isinstance(actual, bool) != isinstance(expected, bool):
        return False

    if isinstance(actual, str) != isinstance(expected, str):
        return False

    if isinstance(expected, (list, tuple)):
        if isinstance(actual, list) and len(actual) == len(expected):
            pass
        else:
            return False

        for one, other in zip(actual, expected):
            if matches(one, other):
                continue
            return False

        return True

    if isinstance(expected, dict):
        if isinstance(actual, dict) and actual.keys() == expected.keys():
            pass
        else:
            return False

        for key in expected:
            if matches(actual[key], expected[key]):
                continue
            return False

        return True

    return actual == expected



def evaluate(rule, fields, packet, problems):
    """ Apply one *rule* to the decoded *fields* of a message. Problems are
        recorded in *problems*; the rule's key is bound on *packet* whether
        or not the rule was satisfied.
    """

    kind = rule.kind
    key = rule.key

    if kind is RuleKind.REQUIRED:
        _validate_required(key, fields, problems)

    elif kind is RuleKind.FORBIDDEN:
        _validate_missing(key, fields, problems)

    elif kind is RuleKind.REQUIRED_VALUE:
        _validate_value(key, rule.expected, fields, problems)

    elif kind is RuleKind.INTERESTED:
        pass

    else:
        raise ValueError('unhandled rule kind: ' + repr(kind))

    packet.bind(key, fields.get(key))



def _validate_required(key, fields, problems):

    value = fields.get(key)

    if value is None:
        problems.error('Missing required key ' + key)
    elif has_value(value):
        pass
    else:
        problems.error('Empty required key ' + key)



def _validate_missing(key, fields, problems):

    if key in fields and has_value(fields[key]):
        problems.error('Forbidden key ' + key + ' detected')



def _validate_value(key, expected, fields, problems):

    _validate_required(key, fields, problems)

    actual = fields.get(key)

    if matches(actual, expected):
        return

    error = "Required value of key '%s' is '%s', not '%s'"
    error = error % (key, json.text(actual), json.text(expected))
    problems.error(error)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
