"""
`NACHA <https://www.nacha.org/>`_ record layouts. Every record is 94
characters wide and a file is composed like this:

.. code::

    FileHeader
        CompanyBatchHeader
            EntryDetail
                EntryDetailAddendum
            ...
        CompanyBatchControl
        ...
    FileControl
    BlockBuffer
    ...

"""

__all__ = [
    'RECORD_SIZE',
    'BLOCKING_FACTOR',
    'Enum',
    'NachaRecord',
    'FileHeader',
    'CompanyBatchHeader',
    'EntryDetail',
    'EntryDetailAddendum',
    'CompanyBatchControl',
    'FileControl',
    'BlockBuffer',
    'AccountTypes',
    'ServiceClassCodes',
    'StandardEntryClasses',
    'TransactionCodes',
    'DEBIT_TRANSACTION_CODES',
]

from .fields import (
    Alphanumeric,
    Amount,
    Date,
    EntryHash,
    Numeric,
    Record,
    Time,
)


RECORD_SIZE = 94

BLOCKING_FACTOR = 10


class Enum(dict):

    def __init__(self, **kwargs):
        super(Enum, self).__init__(**kwargs)
        for k, v in list(kwargs.items()):
            setattr(self, k, v)


class NachaRecord(Record):

    expected_length = RECORD_SIZE

    record_type = Alphanumeric(1)


class FileHeader(NachaRecord):

    record_type = NachaRecord.record_type.constant('1')

    priority_code = Numeric(2).constant(1)

    immediate_destination = Numeric(10, pad=' ')

    immediate_origin = Numeric(10, pad=' ')

    file_creation_date = Date('YYMMDD')

    file_creation_time = Time('hhmm')

    file_id_modifier = Alphanumeric(1)

    record_size = Numeric(3).constant(RECORD_SIZE)

    blocking_factor = Numeric(2).constant(BLOCKING_FACTOR)

    format_code = Numeric(1).constant(1)

    immediate_destination_name = Alphanumeric(23)

    immediate_origin_name = Alphanumeric(23)

    reference_code = Alphanumeric(8, default='')


ServiceClassCodes = Enum(
    MIXED_DEBITS_CREDITS=200,
    CREDITS=220,
    DEBITS=225,
)

StandardEntryClasses = Enum(
    ARC='ARC',  # Accounts Receivable Entry
    BOC='BOC',  # Back Office Conversion
    CIE='CIE',  # Customer Initiated Entry
    MTE='MTE',  # Machine Transfer Entry
    PBR='PBR',  # Consumer Cross-Border Payment
    POP='POP',  # Point-of-Purchase
    PPD='PPD',  # Prearranged Payment & Deposit
    POS='POS',  # Point of Sale Entry/Shared Network Transaction
    SHR='SHR',  # Point of Sale Entry/Shared Network Transaction
    RCK='RCK',  # Re-presented Check Entry
    TEL='TEL',  # Telephone-Initiated Entry
    WEB='WEB',  # Internet-Initiated Entry
    CBR='CBR',  # Corporate Cross-Border Payment
    CCD='CCD',  # Cash Concentration or Disbursement
    CTX='CTX',  # Corporate Trade Exchange
    ACK='ACK',  # Acknowledgment Entries
    ATX='ATX',  # Acknowledgment Entries
    ADV='ADV',  # Automated Accounting Advice
    COR='COR',  # Automated Notification of Change or Refused Notification of Change
    DNE='DNE',  # Death Notification Entry
    ENR='ENR',  # Automated Enrollment Entry
    TRC='TRC',  # Truncated Entries
    TRX='TRX',  # Truncated Entries
    XCK='XCK',  # Destroyed Check Entry
)
# IAT batches use a different header layout and are not written here


class CompanyBatchHeader(NachaRecord):

    record_type = NachaRecord.record_type.constant('5')

    service_class_code = Numeric(3, enum=ServiceClassCodes)

    company_name = Alphanumeric(16)

    company_discretionary_data = Alphanumeric(20, required=False)

    company_id = Alphanumeric(10)

    standard_entry_class = Alphanumeric(3, enum=StandardEntryClasses)

    company_entry_description = Alphanumeric(10)

    company_descriptive_date = Alphanumeric(6, required=False)

    effective_entry_date = Date('YYMMDD')

    # NOTE: this field is reserved for the banks
    settlement_date = Alphanumeric(3).reserved()

    originator_status = Numeric(1).constant(1)

    originating_dfi_id = Numeric(8)

    batch_number = Numeric(7)


AccountTypes = Enum(
    CHECKING='CHECKING',
    SAVINGS='SAVINGS',
)

TransactionCodes = Enum(
    CHECKING_CREDIT=22,
    CHECKING_DEBIT=27,
    SAVINGS_CREDIT=32,
    SAVINGS_DEBIT=37,
)

# every other transaction code is totalled as a credit
DEBIT_TRANSACTION_CODES = (
    TransactionCodes.CHECKING_DEBIT,
    TransactionCodes.SAVINGS_DEBIT,
)


class EntryDetail(NachaRecord):

    record_type = NachaRecord.record_type.constant('6')

    @classmethod
    def transaction_code_for(cls, account_type, is_debit):
        account_type = (account_type or AccountTypes.CHECKING).upper()
        if account_type == AccountTypes.CHECKING:
            code = TransactionCodes.CHECKING_CREDIT
        elif account_type == AccountTypes.SAVINGS:
            code = TransactionCodes.SAVINGS_CREDIT
        else:
            raise ValueError(
                'Invalid account_type={0!r}'.format(account_type)
            )
        if is_debit:
            code += 5
        return code

    transaction_code = Numeric(2)

    receiving_dfi_trn = Numeric(8)

    receiving_dfi_trn_check_digit = Numeric(1)

    receiving_dfi_account_number = Alphanumeric(17)

    amount = Amount(10)

    individual_id = Alphanumeric(15)

    individual_name = Alphanumeric(22)

    discretionary_data = Alphanumeric(2, required=False)

    addenda_record_indicator = Numeric(1)

    originating_dfi_id = Numeric(8)

    trace_sequence_number = Numeric(7)

    @property
    def trace_number(self):
        return '{0:0>8}{1:0>7}'.format(
            self.originating_dfi_id, self.trace_sequence_number,
        )

    @property
    def is_debit(self):
        return int(self.transaction_code) in DEBIT_TRANSACTION_CODES


class EntryDetailAddendum(NachaRecord):

    record_type = NachaRecord.record_type.constant('7')

    addenda_type = Alphanumeric(2).constant('05')

    payment_related_information = Alphanumeric(80)

    addenda_sequence_number = Numeric(4)

    entry_detail_sequence_number = Numeric(7)


class CompanyBatchControl(NachaRecord):

    record_type = NachaRecord.record_type.constant('8')

    service_class_code = Numeric(3, enum=ServiceClassCodes)

    entry_addenda_count = Numeric(6)

    entry_hash = EntryHash(10)

    total_batch_debit_entry_amount = Amount(12)

    total_batch_credit_entry_amount = Amount(12)

    company_id = Alphanumeric(10)

    message_authentication_code = Alphanumeric(19).reserved()

    blank = Alphanumeric(6).reserved()

    originating_dfi_id = Numeric(8)

    batch_number = Numeric(7)


class FileControl(NachaRecord):

    record_type = NachaRecord.record_type.constant('9')

    batch_count = Numeric(6)

    block_count = Numeric(6)

    entry_addenda_record_count = Numeric(8)

    entry_hash_total = EntryHash(10)

    total_file_debit_entry_amount = Amount(12)

    total_file_credit_entry_amount = Amount(12)

    filler = Alphanumeric(39).reserved()


class BlockBuffer(NachaRecord):

    record_type = NachaRecord.record_type.constant('9')

    filler = Alphanumeric(93).constant('9' * 93)
