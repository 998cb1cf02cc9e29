"""nachafile exception hierarchy."""

__all__ = [
    'NachaError',
    'StructuralDefect',
    'RecordLengthError',
    'FieldOverflow',
    'FieldValueError',
    'InvalidPayment',
    'SequencingViolation',
    'ConfigurationError',
]


class NachaError(Exception):
    """Base exception for all nachafile errors."""


class StructuralDefect(NachaError):
    """A record cannot be rendered at the width its layout requires."""


class RecordLengthError(StructuralDefect):
    """A rendered record is not exactly its layout's width."""

    def __init__(self, record_type, expected, actual):
        self.record_type = record_type
        self.expected = expected
        self.actual = actual
        super(RecordLengthError, self).__init__(
            '{0} rendered {1} characters, expected {2}'.format(
                record_type, actual, expected,
            )
        )


class FieldOverflow(StructuralDefect):
    """A value has more digits or characters than its field holds."""

    def __init__(self, field_name, length, value):
        self.field_name = field_name
        self.length = length
        self.value = value
        super(FieldOverflow, self).__init__(
            '{0}={1!r} does not fit {2} characters'.format(
                field_name, value, length,
            )
        )


class FieldValueError(StructuralDefect):
    """A value is missing or not allowed in its field."""

    def __init__(self, field_name, value, reason):
        self.field_name = field_name
        self.value = value
        self.reason = reason
        super(FieldValueError, self).__init__(
            '{0}={1!r} {2}'.format(field_name, value, reason)
        )


class InvalidPayment(NachaError, ValueError):
    """A payment cannot be turned into an entry detail record."""

    def __init__(self, reason, payment=None):
        self.reason = reason
        self.payment = payment
        super(InvalidPayment, self).__init__(reason)


class SequencingViolation(NachaError):
    """An operation was called out of file/batch order."""

    def __init__(self, operation, state):
        self.operation = operation
        self.state = state
        super(SequencingViolation, self).__init__(
            'Cannot {0} while {1}'.format(operation, state)
        )


class ConfigurationError(NachaError, ValueError):
    """Settings are missing or unusable."""
