"""
Assembles a NACHA file one record at a time:

.. code:: python

    writer = nachafile.Writer()
    writer.configure_file(
        immediate_destination='081000032',
        immediate_origin='123456789',
        immediate_destination_name='SOME BANK',
        immediate_origin_name='ACME CORP',
    )
    writer.configure_company(
        company_name='ACME CORP',
        company_id='1123456789',
        company_entry_description='PAYROLL',
        effective_entry_date=datetime.date(2026, 10, 19),
    )
    with writer.begin_file():
        with writer.begin_company_batch(200, 'PPD'):
            writer.add_credit(nachafile.Payment(...))
    text = writer.fetch_file()

Every open/add/close call returns a :class:`Result`. Only successful calls
append to the file text; failed payments are kept in ``error_records``.
"""

__all__ = [
    'States',
    'Result',
    'BatchContext',
    'FileContext',
    'Writer',
]

import collections
import contextlib
import datetime
import decimal
import logging
import math

import pydantic

from .encoder import encode_entry, resolve_transaction_code
from .exceptions import (
    ConfigurationError,
    InvalidPayment,
    SequencingViolation,
    StructuralDefect,
)
from .fields import Amount
from .models import CompanySettings, FileSettings
from .records import (
    BLOCKING_FACTOR,
    BlockBuffer,
    CompanyBatchControl,
    CompanyBatchHeader,
    Enum,
    FileControl,
    FileHeader,
)
from .routing import is_valid_routing_number

logger = logging.getLogger(__name__)


States = Enum(
    UNINITIALIZED='uninitialized',
    CONFIGURED='configured',
    FILE_OPEN='file open',
    BATCH_OPEN='batch open',
    FILE_CLOSED='file closed',
)


class Result(collections.namedtuple('Result', ['ok', 'record', 'reason'])):

    def __bool__(self):
        return self.ok

    @classmethod
    def success(cls, record):
        return cls(ok=True, record=record, reason=None)

    @classmethod
    def failure(cls, reason):
        return cls(ok=False, record=None, reason=reason)


class BatchContext(object):
    """Running totals for the one open company batch."""

    def __init__(self,
                 company,
                 service_class_code,
                 standard_entry_class,
                 batch_number,
                 originating_dfi_id,
        ):
        self.company = company
        self.service_class_code = service_class_code
        self.standard_entry_class = standard_entry_class
        self.batch_number = batch_number
        self.originating_dfi_id = originating_dfi_id
        self.entry_addenda_count = 0
        self.entry_hash = 0
        self.debit_total = decimal.Decimal(0)
        self.credit_total = decimal.Decimal(0)
        self.trace_number = 0

    def apply(self, entry):
        self.entry_addenda_count += entry.record_count
        # NOTE: not reduced here, the control record keeps the low 10 digits
        self.entry_hash += entry.entry_hash
        if entry.is_debit:
            self.debit_total += entry.amount
        else:
            self.credit_total += entry.amount
        self.trace_number += 1

    def header(self):
        return CompanyBatchHeader(
            service_class_code=self.service_class_code,
            company_name=self.company.company_name,
            company_discretionary_data=self.company.company_discretionary_data,
            company_id=self.company.company_id,
            standard_entry_class=self.standard_entry_class,
            company_entry_description=self.company.company_entry_description,
            company_descriptive_date=self.company.company_descriptive_date,
            effective_entry_date=self.company.effective_entry_date,
            originating_dfi_id=self.originating_dfi_id,
            batch_number=self.batch_number,
        )

    def control(self, service_class_code=None):
        return CompanyBatchControl(
            service_class_code=service_class_code or self.service_class_code,
            entry_addenda_count=self.entry_addenda_count,
            entry_hash=self.entry_hash,
            total_batch_debit_entry_amount=self.debit_total,
            total_batch_credit_entry_amount=self.credit_total,
            company_id=self.company.company_id,
            originating_dfi_id=self.originating_dfi_id,
            batch_number=self.batch_number,
        )


class FileContext(object):
    """Everything one file accumulates. A ``Writer`` owns exactly one."""

    blocking_factor = BLOCKING_FACTOR

    def __init__(self):
        self.reset()

    def reset(self):
        self.state = States.UNINITIALIZED
        self.settings = None
        self.company = None
        self.file_header = None
        self.batch = None
        self.next_batch_number = 1
        self.batch_count = 0
        self.entry_addenda_count = 0
        self.entry_hash = 0
        self.debit_total = decimal.Decimal(0)
        self.credit_total = decimal.Decimal(0)
        self.addenda_sequence_number = 1
        self.lines = []
        self.error_records = []

    def fold(self, batch):
        self.entry_addenda_count += batch.entry_addenda_count
        self.entry_hash += batch.entry_hash
        self.debit_total += batch.debit_total
        self.credit_total += batch.credit_total

    @property
    def line_count(self):
        # file header + file control + a header and control per batch
        return self.entry_addenda_count + 2 * self.batch_count + 2

    @property
    def block_count(self):
        return int(math.ceil(self.line_count / float(self.blocking_factor)))

    @property
    def filler_count(self):
        return self.blocking_factor * self.block_count - self.line_count

    def control(self):
        return FileControl(
            batch_count=self.batch_count,
            block_count=self.block_count,
            entry_addenda_record_count=self.entry_addenda_count,
            entry_hash_total=self.entry_hash,
            total_file_debit_entry_amount=self.debit_total,
            total_file_credit_entry_amount=self.credit_total,
        )


class Writer(object):

    RECORD_TERMINAL = '\r\n'

    is_valid_routing_number = staticmethod(is_valid_routing_number)

    def __init__(self, settings=None, company=None):
        self.ctx = FileContext()
        if settings is not None:
            self.configure_file(settings)
        if company is not None:
            self.configure_company(company)

    @property
    def state(self):
        return self.ctx.state

    @property
    def error_records(self):
        return list(self.ctx.error_records)

    # configuration

    def configure_file(self, settings=None, **kwargs):
        self._expect('configure file', States.UNINITIALIZED, States.CONFIGURED)
        self.ctx.settings = self._settings(FileSettings, settings, kwargs)
        self.ctx.state = States.CONFIGURED
        return self.ctx.settings

    def configure_company(self, settings=None, **kwargs):
        self._expect(
            'configure company',
            States.UNINITIALIZED, States.CONFIGURED, States.FILE_OPEN,
        )
        company = self._settings(CompanySettings, settings, kwargs)
        self.ctx.company = company
        if company.next_batch_number is not None:
            self.ctx.next_batch_number = company.next_batch_number
        return company

    # file

    def open_file(self, created_at=None, file_id_modifier=None):
        self._expect('open file', States.CONFIGURED)
        settings = self.ctx.settings
        created_at = created_at or datetime.datetime.now(datetime.timezone.utc)
        header = FileHeader(
            immediate_destination=settings.immediate_destination,
            immediate_origin=settings.immediate_origin,
            file_creation_date=created_at.date(),
            file_creation_time=created_at.time(),
            file_id_modifier=file_id_modifier or settings.file_id_modifier,
            immediate_destination_name=settings.immediate_destination_name,
            immediate_origin_name=settings.immediate_origin_name,
            reference_code=settings.file_reference_code,
        )
        result = self._emit(header)
        if result:
            self.ctx.file_header = header
            self.ctx.state = States.FILE_OPEN
            logger.info(
                'opened file destination=%s origin=%s modifier=%s',
                settings.immediate_destination,
                settings.immediate_origin,
                header.file_id_modifier,
            )
        return result

    def close_file(self):
        self._expect('close file', States.FILE_OPEN)
        ctx = self.ctx
        try:
            lines = [ctx.control().dump()]
            lines.extend(BlockBuffer().dump() for _ in range(ctx.filler_count))
        except StructuralDefect as ex:
            logger.warning('file control rejected: %s', ex)
            return Result.failure(str(ex))
        ctx.lines.extend(lines)
        ctx.state = States.FILE_CLOSED
        logger.info(
            'closed file batches=%d blocks=%d entries=%d debits=%s credits=%s',
            ctx.batch_count,
            ctx.block_count,
            ctx.entry_addenda_count,
            ctx.debit_total,
            ctx.credit_total,
        )
        return Result.success(self._join(lines))

    @contextlib.contextmanager
    def begin_file(self, created_at=None, file_id_modifier=None):
        self._require(self.open_file(created_at, file_id_modifier))
        with self._closing(self.close_file):
            yield self

    def fetch_file(self):
        return self._join(self.ctx.lines)

    def dump(self, fo):
        fo.write(self.fetch_file())

    def reset(self):
        self.ctx.reset()

    # company batch

    def open_batch(self, service_class_code, standard_entry_class):
        self._expect('open batch', States.FILE_OPEN)
        ctx = self.ctx
        if ctx.company is None:
            raise ConfigurationError('configure_company() before open_batch()')
        batch = BatchContext(
            company=ctx.company,
            service_class_code=service_class_code,
            standard_entry_class=standard_entry_class,
            batch_number=ctx.next_batch_number,
            originating_dfi_id=ctx.settings.odfi_id,
        )
        result = self._emit(batch.header())
        if result:
            ctx.batch_count += 1
            ctx.batch = batch
            ctx.state = States.BATCH_OPEN
            logger.info(
                'opened batch number=%d scc=%s sec=%s company_id=%s',
                batch.batch_number,
                service_class_code,
                standard_entry_class,
                ctx.company.company_id,
            )
        return result

    def close_batch(self, service_class_code=None):
        self._expect('close batch', States.BATCH_OPEN)
        ctx = self.ctx
        batch = ctx.batch
        result = self._emit(batch.control(service_class_code))
        if result:
            ctx.next_batch_number = batch.batch_number + 1
            ctx.fold(batch)
            ctx.batch = None
            ctx.state = States.FILE_OPEN
            logger.info(
                'closed batch number=%d entries=%d debits=%s credits=%s',
                batch.batch_number,
                batch.entry_addenda_count,
                batch.debit_total,
                batch.credit_total,
            )
        return result

    @contextlib.contextmanager
    def begin_company_batch(self, service_class_code, standard_entry_class):
        self._require(self.open_batch(service_class_code, standard_entry_class))
        with self._closing(self.close_batch):
            yield self.ctx.batch

    def fetch_next_batch_number(self):
        return self.ctx.next_batch_number

    # entries

    def add_debit(self, payment):
        return self._add(payment, is_debit=True)

    def add_credit(self, payment):
        return self._add(payment, is_debit=False)

    def _add(self, payment, is_debit):
        self._expect('add debit' if is_debit else 'add credit', States.BATCH_OPEN)
        ctx = self.ctx
        batch = ctx.batch
        try:
            transaction_code = resolve_transaction_code(payment, is_debit)
        except InvalidPayment as ex:
            return self._reject(payment, ex)

        trace_number = batch.trace_number + 1
        payment = payment.model_copy(update=dict(
            transaction_code=transaction_code,
            trace_number=trace_number,
        ))
        try:
            entry = encode_entry(
                payment,
                trace_number,
                batch.originating_dfi_id,
                ctx.addenda_sequence_number,
            )
        except StructuralDefect as ex:
            return self._reject(payment, ex)

        batch.apply(entry)
        ctx.addenda_sequence_number += len(entry.addenda)
        ctx.lines.extend(entry.lines)
        return Result.success(self._join(entry.lines))

    # internals

    def _reject(self, payment, ex):
        self.ctx.error_records.append(
            payment.model_copy(update=dict(trace_number=None))
        )
        logger.warning(
            'rejected payment individual_id=%s amount=%s: %s',
            payment.individual_id, Amount.quantize(payment.amount), ex,
        )
        return Result.failure(str(ex))

    def _emit(self, record):
        try:
            line = record.dump()
        except StructuralDefect as ex:
            logger.warning('%s rejected: %s', type(record).__name__, ex)
            return Result.failure(str(ex))
        self.ctx.lines.append(line)
        logger.debug('wrote %s', type(record).__name__)
        return Result.success(line)

    def _join(self, lines):
        return ''.join(line + self.RECORD_TERMINAL for line in lines)

    def _expect(self, operation, *states):
        if self.ctx.state not in states:
            raise SequencingViolation(operation, self.ctx.state)

    @staticmethod
    def _settings(settings_cls, settings, kwargs):
        if settings is not None and kwargs:
            raise ConfigurationError(
                'pass {0} or keyword fields, not both'.format(settings_cls.__name__)
            )
        if settings is None:
            try:
                settings = settings_cls(**kwargs)
            except pydantic.ValidationError as ex:
                raise ConfigurationError(str(ex)) from ex
        elif not isinstance(settings, settings_cls):
            raise ConfigurationError(
                'expected {0}, got {1}'.format(
                    settings_cls.__name__, type(settings).__name__,
                )
            )
        return settings

    @staticmethod
    def _require(result):
        if not result:
            raise StructuralDefect(result.reason)

    @contextlib.contextmanager
    def _closing(self, close):
        try:
            yield
        except Exception:
            logger.warning('leaving %s without closing', self.ctx.state)
            raise
        else:
            self._require(close())
