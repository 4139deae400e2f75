"""Output models: NACHA generation results and export file metadata."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel


class NachaSummary(BaseModel):
    """Control totals of a generated NACHA file."""

    entry_count: int = 0
    entry_hash: int = 0
    total_debit_cents: int = 0
    total_credit_cents: int = 0
    record_count: int = 0
    block_count: int = 0
    effective_date: date | None = None

    @property
    def total_debits(self) -> Decimal:
        return Decimal(self.total_debit_cents) / 100

    @property
    def total_credits(self) -> Decimal:
        return Decimal(self.total_credit_cents) / 100


class NachaGenerationResult(BaseModel):
    """A generated NACHA file plus where it was stored."""

    batch_id: str
    company_id: str
    file_name: str
    content: str
    summary: NachaSummary
    path: str = ""


class ExportFile(BaseModel):
    """Metadata for an exported output file."""

    filename: str
    file_type: str  # txt, csv, json
    path: str = ""
    record_count: int = 0
    batch_id: str = ""
    content: str = ""
