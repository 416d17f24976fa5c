"""Shared test doubles: memory backends plus stores that fail on demand."""

from __future__ import annotations

from hringest.core.exceptions import StoreError
from hringest.models.audit import AuditRecord
from hringest.models.employee import EmployeeRecord
from hringest.models.upload import BulkInsertResult
from hringest.persistence.memory_backend import MemoryAuditStore, MemoryRecordStore


class BrokenRecordStore(MemoryRecordStore):
    """IRecordStore whose writes always fail with a non-conflict error."""

    def insert_many(self, records: list[EmployeeRecord]) -> BulkInsertResult:
        raise StoreError("record store unavailable")


class BrokenAuditStore(MemoryAuditStore):
    """IAuditStore whose writes and reads always fail."""

    def insert_many(self, records: list[AuditRecord]) -> BulkInsertResult:
        raise StoreError("audit store unavailable")

    def find(self, upload_batch: str | None = None) -> list[AuditRecord]:
        raise StoreError("audit store unavailable")


__all__ = ["BrokenAuditStore", "BrokenRecordStore", "MemoryAuditStore", "MemoryRecordStore"]
