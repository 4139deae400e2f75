"""Protocol interfaces for the achexport persistence seams.

The service layer only talks to these Protocols. Production backends
(DynamoDB, Redis, S3) and the in-memory test doubles satisfy them
structurally; no inheritance required.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from achexport.core.types import BatchId, CompanyId, JsonDict


# ---------------------------------------------------------------------------
# Originator profiles
# ---------------------------------------------------------------------------

@runtime_checkable
class IOriginatorStore(Protocol):
    """Per-company ACH originator settings (company info + header overrides)."""

    def get_originator(self, company_id: CompanyId) -> JsonDict: ...

    def put_originator(self, company_id: CompanyId, profile: JsonDict) -> None: ...


# ---------------------------------------------------------------------------
# Cache backend
# ---------------------------------------------------------------------------

@runtime_checkable
class ICacheBackend(Protocol):
    """Redis-compatible cache interface."""

    def get(self, key: str) -> str | None: ...

    def setex(self, key: str, ttl: int, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


# ---------------------------------------------------------------------------
# File store
# ---------------------------------------------------------------------------

@runtime_checkable
class IFileStore(Protocol):
    """S3-compatible storage for generated NACHA and export files."""

    def read(self, path: str) -> bytes: ...

    def write(
        self, path: str, data: bytes, content_type: str = "application/octet-stream",
        metadata: dict[str, str] | None = None,
    ) -> str: ...

    def list_files(self, prefix: str) -> list[str]: ...


# ---------------------------------------------------------------------------
# Audit log
# ---------------------------------------------------------------------------

@runtime_checkable
class IAuditLog(Protocol):
    """Append-only record of file generation events."""

    def record(
        self, batch_id: BatchId, company_id: CompanyId, action_type: str, details: dict[str, Any]
    ) -> None: ...

    def events_for_batch(self, batch_id: BatchId) -> list[JsonDict]: ...
