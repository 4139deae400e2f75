"""In-memory backends for unit tests — dict-backed fakes."""

from __future__ import annotations

import copy
from typing import Any

from achexport.core.exceptions import ExportStoreError, OriginatorNotFoundError


class MemoryOriginatorStore:
    """Dict-backed IOriginatorStore for unit tests."""

    def __init__(self) -> None:
        self._profiles: dict[str, dict[str, Any]] = {}

    def get_originator(self, company_id: str) -> dict[str, Any]:
        if company_id not in self._profiles:
            raise OriginatorNotFoundError(company_id)
        return copy.deepcopy(self._profiles[company_id])

    def put_originator(self, company_id: str, profile: dict[str, Any]) -> None:
        self._profiles[company_id] = copy.deepcopy(profile)


class MemoryCacheBackend:
    """Dict-backed ICacheBackend for unit tests."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._store[key] = value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)


class MemoryFileStore:
    """Dict-backed IFileStore for unit tests."""

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}
        self.metadata: dict[str, dict[str, str]] = {}

    def read(self, path: str) -> bytes:
        try:
            return self._files[path]
        except KeyError as exc:
            raise ExportStoreError(f"No file at {path!r}") from exc

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream",
              metadata: dict[str, str] | None = None) -> str:
        self._files[path] = data
        self.metadata[path] = dict(metadata or {})
        return path

    def list_files(self, prefix: str) -> list[str]:
        return [k for k in self._files if k.startswith(prefix)]


class MemoryAuditLog:
    """List-backed IAuditLog for unit tests."""

    def __init__(self) -> None:
        self.events: list[dict[str, Any]] = []

    def record(self, batch_id: str, company_id: str, action_type: str,
               details: dict[str, Any]) -> None:
        self.events.append({
            "batch_id": batch_id,
            "company_id": company_id,
            "action_type": action_type,
            "action_details": dict(details),
        })

    def events_for_batch(self, batch_id: str) -> list[dict[str, Any]]:
        return [e for e in self.events if e["batch_id"] == batch_id]
