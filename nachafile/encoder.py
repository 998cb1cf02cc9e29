"""
Turns one :class:`~nachafile.models.Payment` into its entry detail record and
optional addendum. Nothing here touches batch or file totals: callers fold an
:class:`Entry` into their running totals only once it rendered completely.
"""

__all__ = [
    'Entry',
    'encode_entry',
    'resolve_transaction_code',
]

import collections
import logging

from .exceptions import FieldOverflow, FieldValueError, InvalidPayment
from .fields import Amount
from .records import EntryDetail, EntryDetailAddendum

logger = logging.getLogger(__name__)


class Entry(collections.namedtuple('Entry', ['detail', 'addenda', 'lines'])):

    @property
    def amount(self):
        return Amount.quantize(self.detail.amount)

    @property
    def is_debit(self):
        return self.detail.is_debit

    @property
    def entry_hash(self):
        return int(self.detail.receiving_dfi_trn)

    @property
    def record_count(self):
        return len(self.lines)


def resolve_transaction_code(payment, is_debit):
    # zero or missing means derive it from the account type
    if payment.transaction_code:
        return payment.transaction_code
    try:
        return EntryDetail.transaction_code_for(payment.account_type, is_debit)
    except ValueError as ex:
        raise InvalidPayment(str(ex), payment)


def _split_routing_number(routing_number):
    routing_number = str(routing_number)
    if len(routing_number) > 9:
        raise FieldOverflow('routing_number', 9, routing_number)
    if not (routing_number.isascii() and routing_number.isdigit()):
        raise FieldValueError('routing_number', routing_number, 'is not numeric')
    routing_number = routing_number.rjust(9, '0')
    return routing_number[:8], routing_number[-1]


def encode_entry(payment, trace_number, originating_dfi_id,
                 addenda_sequence_number=1):
    """
    Render ``payment`` as an entry detail line and, when it carries addendum
    text, an ``05`` addenda line.

    ``payment.transaction_code`` must already be resolved. Raises
    :class:`~nachafile.exceptions.StructuralDefect` if either line cannot be
    rendered at 94 characters, in which case nothing is returned.
    """
    trn, check_digit = _split_routing_number(payment.routing_number)
    detail = EntryDetail(
        transaction_code=payment.transaction_code,
        receiving_dfi_trn=trn,
        receiving_dfi_trn_check_digit=check_digit,
        receiving_dfi_account_number=payment.account_number,
        amount=Amount.quantize(payment.amount),
        individual_id=payment.individual_id,
        individual_name=payment.individual_name,
        discretionary_data=payment.discretionary_data,
        addenda_record_indicator=1 if payment.has_addendum else 0,
        originating_dfi_id=originating_dfi_id,
        trace_sequence_number=trace_number,
    )
    lines = [detail.dump()]

    addenda = []
    if payment.has_addendum:
        addendum = EntryDetailAddendum(
            payment_related_information=payment.addendum,
            addenda_sequence_number=addenda_sequence_number,
            entry_detail_sequence_number=trace_number,
        )
        lines.append(addendum.dump())
        addenda.append(addendum)

    logger.debug(
        'encoded entry trace=%s transaction_code=%s records=%d',
        detail.trace_number, detail.transaction_code, len(lines),
    )
    return Entry(detail=detail, addenda=addenda, lines=lines)
