"""NachaExportService — validate, build, store and audit one batch file.

Bank account numbers live only in the file body. They are never logged,
cached, or written to the audit trail.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Literal

from achexport.core.config import AppSettings
from achexport.core.exceptions import BatchValidationError
from achexport.core.protocols import IAuditLog, IFileStore, IOriginatorStore
from achexport.models.ach import Batch, OriginatorProfile
from achexport.models.outputs import ExportFile, NachaGenerationResult
from achexport.nacha.builder import NachaFileBuilder
from achexport.nacha.exports import format_ach_csv, format_ach_json
from achexport.nacha.validators import validate_entries

logger = logging.getLogger(__name__)

ExportFormat = Literal["csv", "json"]

_CONTENT_TYPES = {
    "txt": "text/plain",
    "csv": "text/csv",
    "json": "application/json",
}


def _file_stem(batch: Batch) -> str:
    return f"ACH_{batch.id}_{batch.scheduled_date.strftime('%Y%m%d')}"


def nacha_file_name(batch: Batch) -> str:
    return f"{_file_stem(batch)}.txt"


class NachaExportService:
    """Generates NACHA files and export variants for disbursement batches.

    Settings, originator store, file store, and audit log are injected at
    construction time.
    """

    def __init__(
        self,
        *,
        settings: AppSettings,
        originators: IOriginatorStore,
        file_store: IFileStore,
        audit_log: IAuditLog,
    ) -> None:
        self._settings = settings
        self._originators = originators
        self._files = file_store
        self._audit = audit_log

    def resolve_originator(self, company_id: str) -> OriginatorProfile:
        """Stored company profile with its overrides applied over settings defaults."""
        item = self._originators.get_originator(company_id)
        return OriginatorProfile.from_stored(item, self._settings.originator)

    def validate(self, batch: Batch) -> list[str]:
        return validate_entries(batch.entries, self._settings.validation)

    def generate(self, batch: Batch, company_id: str, *, now: datetime | None = None) -> NachaGenerationResult:
        """Validate and format ``batch``, store the file, and record an audit event.

        Raises:
            BatchValidationError: one or more entries failed validation.
            OriginatorNotFoundError: no profile stored for ``company_id``.
        """
        logger.info(
            "Generating NACHA file for batch %s", batch.id,
            extra={"batch_id": batch.id, "company_id": company_id, "entry_count": len(batch.entries)},
        )
        profile = self.resolve_originator(company_id)

        issues = self.validate(batch)
        if issues:
            logger.warning(
                "Batch %s rejected with %d issue(s)", batch.id, len(issues),
                extra={"batch_id": batch.id},
            )
            raise BatchValidationError(batch.id, issues)

        builder = NachaFileBuilder(profile.company, profile.originator, now=now)
        content, summary = builder.build(batch, batch.entries)

        file_name = nacha_file_name(batch)
        path = self._files.write(
            f"nacha/{company_id}/{file_name}",
            content.encode("ascii"),
            _CONTENT_TYPES["txt"],
            metadata={"batch_id": batch.id, "company_id": company_id},
        )
        self._audit.record(
            batch.id,
            company_id,
            "nacha_file_generated",
            {
                "file_name": file_name,
                "total_entries": summary.entry_count,
                "total_credits": summary.total_credits,
                "total_debits": summary.total_debits,
                "entry_hash": summary.entry_hash,
                "effective_date": batch.scheduled_date.isoformat(),
            },
        )
        logger.info(
            "NACHA file generated: %s", file_name,
            extra={
                "batch_id": batch.id,
                "entry_count": summary.entry_count,
                "total_credit_cents": summary.total_credit_cents,
                "total_debit_cents": summary.total_debit_cents,
            },
        )
        return NachaGenerationResult(
            batch_id=batch.id,
            company_id=company_id,
            file_name=file_name,
            content=content,
            summary=summary,
            path=path,
        )

    def export(self, batch: Batch, fmt: ExportFormat) -> ExportFile:
        """Write the CSV or JSON variant of ``batch`` under ``exports/``."""
        if fmt == "csv":
            content = format_ach_csv(batch.entries)
        elif fmt == "json":
            content = format_ach_json(batch, batch.entries)
        else:
            raise ValueError(f"unsupported export format {fmt!r}")

        filename = f"{_file_stem(batch)}.{fmt}"
        path = self._files.write(
            f"exports/{filename}", content.encode("utf-8"), _CONTENT_TYPES[fmt],
            metadata={"batch_id": batch.id},
        )
        logger.info("Exported batch %s as %s", batch.id, fmt, extra={"batch_id": batch.id})
        return ExportFile(
            filename=filename,
            file_type=fmt,
            path=path,
            record_count=len(batch.entries),
            batch_id=batch.id,
            content=content,
        )
