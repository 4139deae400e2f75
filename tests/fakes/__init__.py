"""Shared test doubles — re-export memory backends."""

from __future__ import annotations

from achexport.persistence.memory_backend import (
    MemoryAuditLog,
    MemoryCacheBackend,
    MemoryFileStore,
    MemoryOriginatorStore,
)

__all__ = ["MemoryAuditLog", "MemoryCacheBackend", "MemoryFileStore", "MemoryOriginatorStore"]
