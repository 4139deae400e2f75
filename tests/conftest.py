"""Shared fixtures: a sample company, originator, and two-entry batch."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from achexport.models.ach import Batch, CompanyInfo, Entry, OriginatorConfig, TransactionType


@pytest.fixture
def company() -> CompanyInfo:
    return CompanyInfo(company_name="ACME CORPORATION", company_id="1234567890")


@pytest.fixture
def originator() -> OriginatorConfig:
    return OriginatorConfig(
        immediate_destination="091000019",
        immediate_destination_name="WELLS FARGO BANK",
        immediate_origin="1234567890",
    )


@pytest.fixture
def debit_entry() -> Entry:
    return Entry(
        transaction_type=TransactionType.DEBIT,
        routing_number="021000021",
        account_number="12345678",
        amount=Decimal("100"),
        payee_id="EMP001",
        payee_name="Jane Doe",
        description="Benefit premium",
        effective_date=date(2025, 3, 15),
    )


@pytest.fixture
def credit_entry() -> Entry:
    return Entry(
        transaction_type=TransactionType.CREDIT,
        routing_number="011000015",
        account_number="987654321",
        amount=Decimal("50"),
        payee_id="EMP002",
        payee_name="John Smith",
        description="Net pay",
        effective_date=date(2025, 3, 15),
    )


@pytest.fixture
def batch(debit_entry, credit_entry) -> Batch:
    return Batch(
        id="B-1",
        name="March 15 payroll",
        disbursement_type="payroll",
        scheduled_date=date(2025, 3, 15),
        status="scheduled",
        total_amount=Decimal("150"),
        entries=[debit_entry, credit_entry],
    )
