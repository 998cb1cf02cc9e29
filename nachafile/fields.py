"""
Fixed width fields and the records built from them.

A record is declared as a class whose body lists its fields in layout order:

.. code:: python

    class Greeting(Record):

        record_type = Alphanumeric(1).constant('G')

        name = Alphanumeric(10)

        count = Numeric(3)

    Greeting(name='bob', count=7).dump()  # 'GBOB       007'

Alphanumeric values are upper-cased, folded to ASCII, space padded and
truncated. Numeric values are zero padded on the left and are *never*
truncated: a value with more digits than its field raises
:class:`FieldOverflow`.
"""

__all__ = [
    'format_text',
    'format_numeric',
    'Field',
    'Alphanumeric',
    'Numeric',
    'Amount',
    'EntryHash',
    'Date',
    'Time',
    'Record',
]

import collections
import datetime
import decimal
import unicodedata

from .exceptions import (
    FieldOverflow,
    FieldValueError,
    RecordLengthError,
)


def format_text(value, width):
    if value is None:
        value = ''
    text = unicodedata.normalize('NFKD', str(value).upper())
    text = ''.join(c for c in text if not unicodedata.combining(c))
    # files are ASCII, anything without a plain letter form becomes "?"
    text = text.encode('ascii', errors='replace').decode('ascii')
    return text.ljust(width)[:width]


def format_numeric(value, width, pad='0'):
    if value is None:
        value = ''
    if isinstance(value, decimal.Decimal):
        text = format(value, 'f')
    else:
        text = str(value)
    text = text.replace('.', '').replace(',', '')
    if text and not (text.isascii() and text.isdigit()):
        raise FieldValueError(None, value, 'is not numeric')
    if len(text) > width:
        raise FieldOverflow(None, width, value)
    return text.rjust(width, pad)


class Field(object):

    def __init__(self, length, default=None, required=True, enum=None):
        self.length = length
        self.default = default
        self.required = required
        self.enum = enum
        self.name = None
        self.is_constant = False
        self.value = None

    def __set_name__(self, owner, name):
        self.name = name

    def __repr__(self):
        return '{0}(name={1!r}, length={2})'.format(
            type(self).__name__, self.name, self.length,
        )

    def __get__(self, record, record_type=None):
        if record is None:
            return self
        if self.is_constant:
            return self.value
        return record.get(self.name, self.default)

    def __set__(self, record, value):
        if self.is_constant:
            raise AttributeError(
                '{0} is constant {1!r}'.format(self.name, self.value)
            )
        record[self.name] = value

    def copy(self):
        field = object.__new__(type(self))
        field.__dict__.update(self.__dict__)
        return field

    def constant(self, value):
        field = self.copy()
        field.is_constant = True
        field.value = value
        field.default = value
        return field

    def reserved(self):
        return self.constant(None)

    def dump(self, value):
        if value is None:
            value = self.default
        if value is None and self.required and not self.is_constant:
            raise FieldValueError(self.name, value, 'is required')
        if value is not None and self.enum is not None:
            allowed = set(str(v) for v in self.enum.values())
            if str(value) not in allowed:
                raise FieldValueError(self.name, value, 'is not one of {0}'.format(
                    ', '.join(sorted(allowed))
                ))
        try:
            text = self.render(value)
        except FieldOverflow:
            raise FieldOverflow(self.name, self.length, value)
        except FieldValueError as ex:
            raise FieldValueError(self.name, value, ex.reason)
        if len(text) != self.length:
            raise FieldOverflow(self.name, self.length, value)
        return text

    def render(self, value):
        raise NotImplementedError


class Alphanumeric(Field):

    def render(self, value):
        return format_text(value, self.length)


class Numeric(Field):

    def __init__(self, length, default=None, required=True, enum=None,
                 pad='0'):
        super(Numeric, self).__init__(
            length, default=default, required=required, enum=enum,
        )
        self.pad = pad

    def render(self, value):
        return format_numeric(value, self.length, self.pad)


class Amount(Numeric):
    """
    Currency in whole units (e.g. ``Decimal('12.34')``) rendered as cents with
    two implied decimal places.
    """

    CENTS = decimal.Decimal('0.01')

    def __init__(self, length, **kwargs):
        kwargs.setdefault('default', decimal.Decimal(0))
        super(Amount, self).__init__(length, **kwargs)

    @classmethod
    def quantize(cls, value):
        if not isinstance(value, decimal.Decimal):
            value = decimal.Decimal(str(value))
        return value.quantize(cls.CENTS, rounding=decimal.ROUND_HALF_UP)

    def render(self, value):
        amount = self.quantize(value)
        if amount < 0:
            raise FieldValueError(self.name, value, 'is negative')
        return format_numeric(amount, self.length, self.pad)


class EntryHash(Numeric):
    """
    Sum of receiving DFI identifications. Only the low-order ``length`` digits
    are rendered.
    """

    def __init__(self, length, **kwargs):
        kwargs.setdefault('default', 0)
        super(EntryHash, self).__init__(length, **kwargs)

    def render(self, value):
        return format_numeric(int(value) % (10 ** self.length), self.length)


class Date(Field):

    formats = {
        'YYMMDD': '%y%m%d',
        'MMDD': '%m%d',
        'YYYYMMDD': '%Y%m%d',
        'hhmm': '%H%M',
    }

    def __init__(self, pattern, **kwargs):
        self.pattern = pattern
        super(Date, self).__init__(len(pattern), **kwargs)

    def render(self, value):
        if value is None:
            return ' ' * self.length
        if isinstance(value, (datetime.date, datetime.time)):
            return value.strftime(self.formats[self.pattern])
        text = str(value)
        if len(text) != self.length or not text.isdigit():
            raise FieldValueError(self.name, value, 'is not {0}'.format(self.pattern))
        return text


class Time(Date):
    pass


class RecordType(type):

    def __new__(mcs, name, bases, attrs):
        cls = super(RecordType, mcs).__new__(mcs, name, bases, attrs)
        fields = collections.OrderedDict()
        for klass in reversed(cls.__mro__):
            for attr_name, attr in vars(klass).items():
                if isinstance(attr, Field):
                    fields[attr_name] = attr
        cls.fields = list(fields.values())
        cls.length = sum(field.length for field in cls.fields)
        return cls


class Record(dict, metaclass=RecordType):
    """
    Fixed width record. Values live in the ``dict``, layout lives on the
    class.
    """

    def __init__(self, **kwargs):
        super(Record, self).__init__()
        names = set(field.name for field in self.fields)
        for key, value in kwargs.items():
            if key not in names:
                raise TypeError('{0} has no field {1!r}'.format(
                    type(self).__name__, key,
                ))
            setattr(self, key, value)

    def __repr__(self):
        return '{0}({1})'.format(
            type(self).__name__,
            ', '.join('{0}={1!r}'.format(k, v) for k, v in self.items()),
        )

    @property
    def expected_length(self):
        return self.length

    def dump(self):
        text = ''.join(
            field.dump(getattr(self, field.name)) for field in self.fields
        )
        if len(text) != self.expected_length:
            raise RecordLengthError(
                type(self).__name__, self.expected_length, len(text),
            )
        return text
