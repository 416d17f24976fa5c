"""Tests for dual-sink persistence."""

from __future__ import annotations

import pytest

from hringest.core.exceptions import StoreError
from hringest.models.validation import FailureReason
from hringest.pipeline.dual_sink import persist_batch
from hringest.pipeline.router import route_rows
from hringest.pipeline.validator import sanitize_employee_data
from tests.fakes import BrokenAuditStore, BrokenRecordStore
from tests.unit.conftest import make_row


def _routed(*rows, batch="batch-1"):
    return route_rows(list(rows), batch, "staff.csv")


class TestPersistBatch:
    def test_writes_both_sinks(self, record_store, audit_store):
        routed = _routed(make_row(employeeid="E1"), make_row(employeeid="E2", email="nope"))

        result = persist_batch(routed, record_store, audit_store)

        assert result.saved_valid == 1
        assert result.saved_invalid == 1
        assert result.duplicates == []
        assert record_store.find("batch-1")[0].employee_id == "E1"
        assert audit_store.find("batch-1")[0].failure_reason == FailureReason.INVALID_EMAIL

    def test_nothing_to_write(self, record_store, audit_store):
        result = persist_batch(_routed(), record_store, audit_store)
        assert (result.saved_valid, result.saved_invalid) == (0, 0)

    def test_existing_employee_id_reduces_saved_valid(self, record_store, audit_store):
        record_store.insert_many([sanitize_employee_data(make_row(employeeid="E1"), "old-batch")])
        routed = _routed(make_row(employeeid="E1"), make_row(employeeid="E2"), make_row(employeeid="E3"))

        result = persist_batch(routed, record_store, audit_store)

        assert result.saved_valid == len(routed.accepted) - 1
        assert result.duplicates == ["E1"]
        assert result.saved_invalid == 0
        assert audit_store.count() == 0

    def test_duplicate_within_one_upload(self, record_store, audit_store):
        routed = _routed(make_row(employeeid="E1"), make_row(employeeid="E1", name="Twin"))

        result = persist_batch(routed, record_store, audit_store)

        assert result.saved_valid == 1
        assert record_store.find()[0].name == "Alice Smith"

    def test_duplicates_audited_when_enabled(self, record_store, audit_store):
        routed = _routed(
            make_row(employeeid="E1"),
            make_row(employeeid="E2", salary="abc"),
            make_row(employeeid="E1", name="Twin"),
        )

        result = persist_batch(routed, record_store, audit_store, audit_duplicates=True)

        assert result.saved_valid == 1
        assert result.saved_invalid == 2
        records = audit_store.find("batch-1")
        assert [r.row_number for r in records] == [3, 4]
        duplicate = records[1]
        assert duplicate.failure_reason == FailureReason.DUPLICATE_EMPLOYEE_ID
        assert duplicate.raw_data["name"] == "Twin"
        assert duplicate.file_name == "staff.csv"
        assert duplicate.validation_errors[0].field == "employeeId"

    def test_non_conflict_record_failure_propagates(self, audit_store):
        with pytest.raises(StoreError):
            persist_batch(_routed(make_row()), BrokenRecordStore(), audit_store)

    def test_audit_failure_propagates(self, record_store):
        with pytest.raises(StoreError):
            persist_batch(_routed(make_row(salary="0")), record_store, BrokenAuditStore())
