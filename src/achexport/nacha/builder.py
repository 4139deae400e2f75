"""NACHA file builder — one batch of PPD entries into a 94-character flat file.

Record order: file header (1), batch header (5), one entry detail (6) per
entry in input order, batch control (8), file control (9), then filler
records of ``9`` until the record count is a multiple of the blocking factor.
Lines are joined with CRLF.

The builder does not check routing checksums or account formats; run
``validate_entries`` first. It does refuse to emit a mis-aligned record.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Sequence

from achexport.core.exceptions import FieldOverflowError
from achexport.models.ach import Batch, CompanyInfo, Entry, OriginatorConfig, TransactionType
from achexport.models.outputs import NachaSummary
from achexport.nacha.layout import (
    BATCH_CONTROL,
    BATCH_HEADER,
    BLOCKING_FACTOR,
    ENTRY_DETAIL,
    FILE_CONTROL,
    FILE_HEADER,
    FILLER_RECORD,
)
from achexport.nacha.validators import compute_entry_hash, generate_trace_number, to_cents

logger = logging.getLogger(__name__)

LINE_TERMINATOR = "\r\n"
BATCH_NUMBER = 1

TRANSACTION_CODES: dict[TransactionType, str] = {
    TransactionType.CREDIT: "22",  # checking deposit
    TransactionType.DEBIT: "27",  # checking debit
}


class NachaFileBuilder:
    """Renders the records of a single-batch NACHA file.

    Company and originator settings are injected at construction time; the
    clock is injectable so output is reproducible.
    """

    def __init__(
        self,
        company: CompanyInfo,
        originator: OriginatorConfig | None = None,
        *,
        now: datetime | None = None,
    ) -> None:
        self._company = company
        self._originator = originator or OriginatorConfig()
        self._now = now or datetime.now()

    @property
    def originating_dfi(self) -> str:
        return self._originator.odfi

    def file_header(self) -> str:
        o = self._originator
        return FILE_HEADER.render(
            immediate_destination=o.immediate_destination,
            immediate_origin=o.immediate_origin or self._company.company_id,
            file_creation_date=self._now.strftime("%y%m%d"),
            file_creation_time=self._now.strftime("%H%M"),
            file_id_modifier=o.file_id_modifier,
            immediate_destination_name=o.immediate_destination_name or self._company.company_name,
            immediate_origin_name=o.immediate_origin_name or self._company.company_name,
            reference_code=o.reference_code,
        )

    def batch_header(self, batch: Batch) -> str:
        o = self._originator
        effective = batch.scheduled_date.strftime("%y%m%d")
        return BATCH_HEADER.render(
            service_class_code=o.service_class_code,
            company_name=self._company.company_name,
            company_discretionary_data=o.company_discretionary_data,
            company_id=self._company.company_id,
            standard_entry_class=o.standard_entry_class,
            entry_description=o.entry_description,
            descriptive_date=effective,
            effective_entry_date=effective,
            originating_dfi=self.originating_dfi,
            batch_number=BATCH_NUMBER,
        )

    def entry_detail(self, entry: Entry, sequence: int) -> str:
        routing = entry.routing_number
        if len(routing) != 9:
            raise FieldOverflowError(
                ENTRY_DETAIL.name, "routing_number", routing, 9,
                f"expected 9 digits, got {len(routing)}",
            )
        return ENTRY_DETAIL.render(
            transaction_code=TRANSACTION_CODES[entry.transaction_type],
            receiving_dfi=routing[:8],
            check_digit=routing[8],
            account_number=entry.account_number,
            amount=to_cents(entry.amount),
            individual_id=entry.payee_id,
            individual_name=entry.payee_name,
            trace_number=generate_trace_number(self.originating_dfi, sequence),
        )

    def batch_control(self, summary: NachaSummary) -> str:
        return BATCH_CONTROL.render(
            service_class_code=self._originator.service_class_code,
            entry_count=summary.entry_count,
            entry_hash=summary.entry_hash,
            total_debit=summary.total_debit_cents,
            total_credit=summary.total_credit_cents,
            company_id=self._company.company_id,
            originating_dfi=self.originating_dfi,
            batch_number=BATCH_NUMBER,
        )

    def file_control(self, summary: NachaSummary) -> str:
        return FILE_CONTROL.render(
            batch_count=1,
            block_count=summary.block_count,
            entry_count=summary.entry_count,
            entry_hash=summary.entry_hash,
            total_debit=summary.total_debit_cents,
            total_credit=summary.total_credit_cents,
        )

    @staticmethod
    def summarize(batch: Batch, entries: Sequence[Entry]) -> NachaSummary:
        """Control totals for a batch; debit and credit cents partitioned by type."""
        debit = sum(to_cents(e.amount) for e in entries if e.transaction_type == TransactionType.DEBIT)
        credit = sum(to_cents(e.amount) for e in entries if e.transaction_type == TransactionType.CREDIT)
        records = len(entries) + 4
        return NachaSummary(
            entry_count=len(entries),
            entry_hash=compute_entry_hash(e.routing_number for e in entries),
            total_debit_cents=debit,
            total_credit_cents=credit,
            record_count=math.ceil(records / BLOCKING_FACTOR) * BLOCKING_FACTOR,
            block_count=math.ceil(records / BLOCKING_FACTOR),
            effective_date=batch.scheduled_date,
        )

    def build(self, batch: Batch, entries: Sequence[Entry]) -> tuple[str, NachaSummary]:
        """Render the whole file; returns (content, control totals)."""
        lines = [self.file_header(), self.batch_header(batch)]
        lines.extend(self.entry_detail(entry, seq) for seq, entry in enumerate(entries, start=1))

        summary = self.summarize(batch, entries)
        lines.append(self.batch_control(summary))
        lines.append(self.file_control(summary))

        while len(lines) % BLOCKING_FACTOR:
            lines.append(FILLER_RECORD)

        logger.info(
            "Built NACHA file for batch %s",
            batch.id,
            extra={
                "batch_id": batch.id,
                "entry_count": summary.entry_count,
                "entry_hash": summary.entry_hash,
                "total_debit_cents": summary.total_debit_cents,
                "total_credit_cents": summary.total_credit_cents,
            },
        )
        return LINE_TERMINATOR.join(lines), summary


def build_nacha_file(
    batch: Batch,
    entries: Sequence[Entry],
    company: CompanyInfo,
    originator: OriginatorConfig | None = None,
    *,
    now: datetime | None = None,
) -> str:
    """Produce the CRLF-joined NACHA file for one batch."""
    content, _ = NachaFileBuilder(company, originator, now=now).build(batch, entries)
    return content
