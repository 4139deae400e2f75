"""achexport exception hierarchy."""

from __future__ import annotations


class AchExportError(Exception):
    """Base exception for all achexport errors."""


class RecordLayoutError(AchExportError):
    """A fixed-width record layout table is malformed."""


class FieldOverflowError(AchExportError):
    """A value does not fit the fixed-width field it is rendered into."""

    def __init__(self, record: str, field: str, value: str, width: int, reason: str = "") -> None:
        self.record = record
        self.field = field
        self.value = value
        self.width = width
        detail = reason or f"{len(value)} chars exceeds width {width}"
        super().__init__(f"{record}.{field}: {detail}")


class BatchValidationError(AchExportError):
    """A batch failed pre-build validation."""

    def __init__(self, batch_id: str, issues: list[str]) -> None:
        self.batch_id = batch_id
        self.issues = list(issues)
        super().__init__(f"Batch {batch_id} failed validation with {len(self.issues)} issue(s)")


class OriginatorNotFoundError(AchExportError):
    """No ACH originator profile stored for a company."""

    def __init__(self, company_id: str) -> None:
        self.company_id = company_id
        super().__init__(f"No ACH originator profile for company {company_id!r}")


class CacheError(AchExportError):
    """Redis cache operation failed."""


class ExportStoreError(AchExportError):
    """Reading or writing a generated file failed."""


class AuditLogError(AchExportError):
    """Writing an audit event failed."""
