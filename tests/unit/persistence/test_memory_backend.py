"""Unit tests for the in-memory stores."""

from __future__ import annotations

import threading
from datetime import date
from decimal import Decimal

from hringest.core.protocols import IAuditStore, IRecordStore
from hringest.models.audit import AuditRecord
from hringest.models.employee import EmployeeRecord
from hringest.models.validation import FailureReason
from hringest.persistence.memory_backend import MemoryAuditStore, MemoryRecordStore


def _employee(employee_id: str, batch: str = "b1") -> EmployeeRecord:
    return EmployeeRecord(
        employee_id=employee_id, name="N", email="n@x.io", department="D",
        salary=Decimal("1"), joining_date=date(2020, 1, 1), upload_batch=batch,
    )


def _audit(row_number: int, batch: str = "b1") -> AuditRecord:
    return AuditRecord(
        row_number=row_number, raw_data={}, failure_reason=FailureReason.INVALID_DATE, upload_batch=batch,
    )


class TestProtocols:
    def test_memory_stores_satisfy_protocols(self):
        assert isinstance(MemoryRecordStore(), IRecordStore)
        assert isinstance(MemoryAuditStore(), IAuditStore)


class TestMemoryRecordStore:
    def test_conflicts_skip_only_the_duplicate(self):
        store = MemoryRecordStore()
        store.insert_many([_employee("E1")])

        result = store.insert_many([_employee("E2", "b2"), _employee("E1", "b2"), _employee("E3", "b2")])

        assert result.inserted_count == 2
        assert result.conflicts == ["E1"]
        assert store.count() == 3
        assert store.count("b2") == 2
        assert [r.employee_id for r in store.find("b2")] == ["E2", "E3"]

    def test_concurrent_inserts_commit_each_id_once(self):
        store = MemoryRecordStore()
        results = []

        def worker(batch: str) -> None:
            results.append(store.insert_many([_employee(f"E{i}", batch) for i in range(50)]))

        threads = [threading.Thread(target=worker, args=(f"b{n}",)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert store.count() == 50
        assert sum(r.inserted_count for r in results) == 50
        assert sum(r.conflict_count for r in results) == 150


class TestMemoryAuditStore:
    def test_appends_without_uniqueness(self):
        store = MemoryAuditStore()
        store.insert_many([_audit(3), _audit(2)])
        result = store.insert_many([_audit(2)])

        assert result.inserted_count == 1
        assert store.count("b1") == 3
        assert [r.row_number for r in store.find("b1")] == [2, 2, 3]

    def test_filters_by_batch(self):
        store = MemoryAuditStore()
        store.insert_many([_audit(2, "b1"), _audit(2, "b2")])
        assert store.count("b2") == 1
        assert store.find("missing") == []
