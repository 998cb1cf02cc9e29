"""
`NACHA <https://www.nacha.org/>`_ ACH files are fixed width, 94 character
records composed like this:

.. code::

    FileHeader
        CompanyBatchHeader
            EntryDetail
                EntryDetailAddendum
            ...
        CompanyBatchControl
        ...
    FileControl

Writing is done like this:

.. code:: python

    writer = nachafile.Writer(
        nachafile.FileSettings(...),
        nachafile.CompanySettings(...),
    )
    with writer.begin_file():
        with writer.begin_company_batch(
             nachafile.ServiceClassCodes.MIXED_DEBITS_CREDITS,
             nachafile.StandardEntryClasses.PPD,
             ):
            writer.add_credit(nachafile.Payment(...))
            writer.add_debit(nachafile.Payment(...))
    with open('sample.ach', 'w', newline='') as fo:
        writer.dump(fo)

"""

import logging

from .encoder import Entry, encode_entry
from .exceptions import (
    ConfigurationError,
    FieldOverflow,
    FieldValueError,
    InvalidPayment,
    NachaError,
    RecordLengthError,
    SequencingViolation,
    StructuralDefect,
)
from .fields import format_numeric, format_text
from .models import CompanySettings, FileSettings, Payment
from .records import (
    AccountTypes,
    BlockBuffer,
    CompanyBatchControl,
    CompanyBatchHeader,
    EntryDetail,
    EntryDetailAddendum,
    FileControl,
    FileHeader,
    ServiceClassCodes,
    StandardEntryClasses,
    TransactionCodes,
)
from .routing import is_valid_routing_number
from .writer import BatchContext, FileContext, Result, States, Writer

__version__ = '0.2.0'

__all__ = [
    'AccountTypes',
    'BatchContext',
    'BlockBuffer',
    'CompanyBatchControl',
    'CompanyBatchHeader',
    'CompanySettings',
    'ConfigurationError',
    'Entry',
    'EntryDetail',
    'EntryDetailAddendum',
    'FieldOverflow',
    'FieldValueError',
    'FileContext',
    'FileControl',
    'FileHeader',
    'FileSettings',
    'InvalidPayment',
    'NachaError',
    'Payment',
    'RecordLengthError',
    'Result',
    'SequencingViolation',
    'ServiceClassCodes',
    'StandardEntryClasses',
    'States',
    'StructuralDefect',
    'TransactionCodes',
    'Writer',
    'encode_entry',
    'format_numeric',
    'format_text',
    'is_valid_routing_number',
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
