"""Shared fixtures for writer tests."""

from __future__ import annotations

import datetime
from decimal import Decimal

import pytest

from nachafile import CompanySettings, FileSettings, Payment, Writer

CREATED_AT = datetime.datetime(2026, 10, 18, 9, 5)


@pytest.fixture
def clean_env(monkeypatch):
    """Keep NACHA_* variables from the host out of FileSettings."""
    for name in (
        "NACHA_IMMEDIATE_DESTINATION",
        "NACHA_IMMEDIATE_ORIGIN",
        "NACHA_IMMEDIATE_DESTINATION_NAME",
        "NACHA_IMMEDIATE_ORIGIN_NAME",
        "NACHA_FILE_ID_MODIFIER",
        "NACHA_BATCH_ID",
        "NACHA_REFERENCE_CODE",
        "NACHA_ORIGINATING_DFI_ID",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def file_settings(clean_env):
    return FileSettings(
        immediate_destination="081000032",
        immediate_origin="123456789",
        immediate_destination_name="Dest Bank",
        immediate_origin_name="Origin Co",
    )


@pytest.fixture
def company_settings():
    return CompanySettings(
        company_name="Origin Co",
        company_id="1123456789",
        company_entry_description="Payroll",
        effective_entry_date=datetime.date(2026, 10, 19),
    )


@pytest.fixture
def writer(file_settings, company_settings):
    return Writer(file_settings, company_settings)


@pytest.fixture
def open_batch(writer):
    """Writer with an open file and an open mixed PPD batch."""
    assert writer.open_file(created_at=CREATED_AT)
    assert writer.open_batch(200, "PPD")
    return writer


@pytest.fixture
def make_payment():
    def _make(**overrides):
        fields = dict(
            routing_number="021000021",
            account_number="000111222",
            amount=Decimal("100.00"),
            individual_id="EMP1",
            individual_name="Jane Doe",
        )
        fields.update(overrides)
        return Payment(**fields)

    return _make


def lines_of(text):
    assert text.endswith("\r\n")
    return text.split("\r\n")[:-1]
