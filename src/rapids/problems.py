""" Accumulated findings for a single message on the rapids. A
    :class:`PacketProblems` instance is created fresh for every inbound
    message and handed to each listener, regardless of whether the message
    passed validation.
"""


class PacketProblems:
    """ Collect the problems found while validating one message. There are
        four severities, in increasing order of concern: informational
        messages, warnings, errors, and severe errors. An error means the
        message was understood but did not satisfy the declared rules; a
        severe error means the message could not be understood at all.

        The *original* argument is the raw message as received; it is only
        retained for the human-readable report produced by :func:`__str__`.

        :ivar informational_messages: Ordered list of informational messages.
        :ivar warnings: Ordered list of warnings.
        :ivar errors: Ordered list of validation errors.
        :ivar severe_errors: Ordered list of severe errors.
    """

    def __init__(self, original=''):

        try:
            original = original.decode()
        except AttributeError:
            # Assume it is already a string.
            pass
        except UnicodeDecodeError:
            original = repr(original)

        self.original = str(original)

        self.informational_messages = list()
        self.warnings = list()
        self.errors = list()
        self.severe_errors = list()


    def __bool__(self):
        return self.has_messages()


    def __repr__(self):
        counts = (len(self.severe_errors), len(self.errors), len(self.warnings), len(self.informational_messages))
        return '<PacketProblems severe=%d errors=%d warnings=%d information=%d>' % counts


    def __str__(self):

        if self.has_messages():
            pass
        else:
            return 'No errors detected in JSON:\n\t' + self.original

        report = 'Errors and/or messages exist. Original JSON string is:\n\t'
        report += self.original

        report += self._section('Severe errors', self.severe_errors)
        report += self._section('Errors', self.errors)
        report += self._section('Warnings', self.warnings)
        report += self._section('Information', self.informational_messages)

        return report + '\n'


    def _section(self, title, messages):

        if len(messages) == 0:
            return ''

        section = '\n' + title + ' (' + str(len(messages)) + '):'
        for message in messages:
            section += '\n\t' + message

        return section


    def information(self, explanation):
        self.informational_messages.append(explanation)


    def warning(self, explanation):
        self.warnings.append(explanation)


    def error(self, explanation):
        """ Record a validation failure. The message was parsed, but did not
            satisfy one of the declared rules.
        """

        self.errors.append(explanation)


    def severe_error(self, explanation):
        """ Record a failure to interpret the message at all, such as
            malformed JSON.
        """

        self.severe_errors.append(explanation)


    def has_errors(self):
        """ Return True if any error or severe error has been recorded.
        """

        if self.errors or self.severe_errors:
            return True

        return False


    def has_messages(self):
        """ Return True if anything at all has been recorded, including
            warnings and informational messages.
        """

        if self.has_errors():
            return True

        if self.warnings or self.informational_messages:
            return True

        return False


# end of class PacketProblems


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
