"""Disbursement batch, payment entry, and originator models.

A batch and its entries are assembled upstream by the payroll scheduler and
handed to the formatter once. Amounts are dollars as ``Decimal``; the
formatter converts them to integer cents.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class TransactionType(StrEnum):
    DEBIT = "debit"
    CREDIT = "credit"


class Entry(BaseModel):
    """One payment instruction. Sign lives in ``transaction_type``, never in ``amount``."""

    transaction_type: TransactionType
    routing_number: str
    account_number: str
    amount: Decimal = Field(ge=0)
    payee_id: str = ""
    payee_name: str = ""
    description: str = ""
    effective_date: Optional[date] = None

    model_config = {"str_strip_whitespace": True}


class Batch(BaseModel):
    """One disbursement run."""

    id: str
    name: str = ""
    disbursement_type: str = ""
    scheduled_date: date
    status: str = "pending"
    total_amount: Decimal = Decimal("0")
    entries: list[Entry] = Field(default_factory=list)

    model_config = {"str_strip_whitespace": True}


class CompanyInfo(BaseModel):
    """Originating company written into the batch header and control records."""

    company_name: str
    company_id: str  # Company identification, usually "1" + EIN

    model_config = {"str_strip_whitespace": True}


class OriginatorConfig(BaseModel):
    """File and batch header settings for the originating bank relationship.

    Empty fields fall back at build time: origin id to the company id, both
    names to the company name, the ODFI to the first 8 digits of the
    immediate destination.
    """

    immediate_destination: str = "091000019"
    immediate_destination_name: str = ""
    immediate_origin: str = ""
    immediate_origin_name: str = ""
    originating_dfi: str = ""
    file_id_modifier: str = "A"
    reference_code: str = ""
    service_class_code: str = "220"
    standard_entry_class: str = "PPD"
    entry_description: str = "PAYROLL"
    company_discretionary_data: str = ""

    @field_validator("immediate_destination", "immediate_origin", "originating_dfi")
    @classmethod
    def _strip_bank_ids(cls, v: str) -> str:
        # banks often hand out the 10-char header form, e.g. " 091000019"
        return v.strip()

    @field_validator("service_class_code")
    @classmethod
    def _known_service_class(cls, v: str) -> str:
        if v not in {"200", "220", "225"}:
            raise ValueError(f"unsupported service class code {v!r}")
        return v

    @field_validator("file_id_modifier")
    @classmethod
    def _single_modifier(cls, v: str) -> str:
        v = v.upper()
        if len(v) != 1 or not (v.isascii() and v.isalnum()):
            raise ValueError("file_id_modifier must be one character A-Z or 0-9")
        return v

    @property
    def odfi(self) -> str:
        """Originating DFI identification (8 digits)."""
        return self.originating_dfi or self.immediate_destination[:8]


class OriginatorProfile(BaseModel):
    """Stored per-company pairing of company info and originator overrides."""

    company: CompanyInfo
    originator: OriginatorConfig = OriginatorConfig()

    @classmethod
    def from_stored(cls, item: dict[str, Any], defaults: OriginatorConfig) -> OriginatorProfile:
        """Build a profile from a stored ``{company, originator}`` item.

        Stored originator fields override ``defaults`` one by one; anything
        the item leaves out keeps the default.
        """
        overrides = item.get("originator") or {}
        originator = OriginatorConfig.model_validate({**defaults.model_dump(), **overrides})
        return cls(company=item["company"], originator=originator)
