"""Settings and payment inputs, validated at construction."""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class FileSettings(BaseSettings):
    """File header facts. Unset fields may come from ``NACHA_*`` env vars."""

    model_config = {"env_prefix": "NACHA_"}

    immediate_destination: str
    immediate_origin: str
    immediate_destination_name: str = ""
    immediate_origin_name: str = ""
    file_id_modifier: str = "A"
    batch_id: int = Field(default=0, ge=0)
    reference_code: Optional[str] = None  # defaults to batch_id, zero padded
    originating_dfi_id: Optional[str] = None  # defaults to immediate_destination[:8]

    @field_validator("immediate_destination", "immediate_origin")
    @classmethod
    def check_routing_identifier(cls, value: str) -> str:
        value = value.strip()
        if not (value.isascii() and value.isdigit()) or len(value) not in (9, 10):
            raise ValueError("must be 9 or 10 digits")
        return value

    @field_validator("file_id_modifier")
    @classmethod
    def check_file_id_modifier(cls, value: str) -> str:
        value = value.upper()
        if len(value) != 1 or not value.isalnum():
            raise ValueError("must be a single letter or digit")
        return value

    @field_validator("originating_dfi_id")
    @classmethod
    def check_originating_dfi_id(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and (len(value) != 8 or not value.isdigit()):
            raise ValueError("must be 8 digits")
        return value

    @property
    def odfi_id(self) -> str:
        """Originating DFI identification used in batch and entry records."""
        if self.originating_dfi_id:
            return self.originating_dfi_id
        return self.immediate_destination[-9:][:8]

    @property
    def file_reference_code(self) -> str:
        if self.reference_code is not None:
            return self.reference_code
        return str(self.batch_id).rjust(8, "0")


class CompanySettings(BaseModel):
    """Company batch header facts, applied to every batch opened after them."""

    company_name: str
    company_id: str = Field(max_length=10)
    company_entry_description: str = ""
    company_discretionary_data: str = ""
    company_descriptive_date: str = ""
    effective_entry_date: Union[datetime.date, str]
    next_batch_number: Optional[int] = Field(default=None, gt=0)

    @field_validator("effective_entry_date")
    @classmethod
    def check_effective_entry_date(cls, value):
        if isinstance(value, str) and (len(value) != 6 or not value.isdigit()):
            raise ValueError("must be a date or YYMMDD")
        return value


class Payment(BaseModel):
    """One credit or debit instruction.

    ``transaction_code`` wins over ``account_type`` when both are given. A
    code of 0 counts as absent.
    ``trace_number`` is assigned by the writer.
    """

    routing_number: str
    account_number: str
    amount: Decimal = Field(ge=0)
    individual_name: str
    individual_id: str = ""
    account_type: Optional[str] = None
    transaction_code: Optional[int] = Field(default=None, ge=0, le=99)
    discretionary_data: str = ""
    addendum: str = ""
    trace_number: Optional[int] = None

    @property
    def has_addendum(self) -> bool:
        return bool(self.addendum)
