"""In-memory backends: dict-backed stores for unit tests and local runs."""

from __future__ import annotations

import threading

from hringest.models.audit import AuditRecord
from hringest.models.employee import EmployeeRecord
from hringest.models.upload import BulkInsertResult


class MemoryRecordStore:
    """Dict-backed IRecordStore keyed by employee_id."""

    def __init__(self) -> None:
        self._records: dict[str, EmployeeRecord] = {}
        self._lock = threading.Lock()

    def insert_many(self, records: list[EmployeeRecord]) -> BulkInsertResult:
        result = BulkInsertResult()
        with self._lock:
            for record in records:
                if record.employee_id in self._records:
                    result.conflicts.append(record.employee_id)
                    continue
                self._records[record.employee_id] = record.model_copy(deep=True)
                result.inserted_count += 1
        return result

    def count(self, upload_batch: str | None = None) -> int:
        return len(self.find(upload_batch))

    def find(self, upload_batch: str | None = None) -> list[EmployeeRecord]:
        with self._lock:
            records = [
                r.model_copy(deep=True) for r in self._records.values()
                if upload_batch is None or r.upload_batch == upload_batch
            ]
        return sorted(records, key=lambda r: r.employee_id)


class MemoryAuditStore:
    """List-backed IAuditStore; appends everything it is given."""

    def __init__(self) -> None:
        self._records: list[AuditRecord] = []
        self._lock = threading.Lock()

    def insert_many(self, records: list[AuditRecord]) -> BulkInsertResult:
        with self._lock:
            self._records.extend(r.model_copy(deep=True) for r in records)
        return BulkInsertResult(inserted_count=len(records))

    def count(self, upload_batch: str | None = None) -> int:
        return len(self.find(upload_batch))

    def find(self, upload_batch: str | None = None) -> list[AuditRecord]:
        with self._lock:
            records = [
                r.model_copy(deep=True) for r in self._records
                if upload_batch is None or r.upload_batch == upload_batch
            ]
        return sorted(records, key=lambda r: r.row_number)
