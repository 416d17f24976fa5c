"""Integration tests running the upload pipeline against LocalStack DynamoDB."""

from __future__ import annotations

import uuid

import pytest

from hringest.persistence.dynamodb_backend import DynamoDBAuditStore, DynamoDBRecordStore
from hringest.pipeline.service import IngestService
from hringest.pipeline.stats import StatsService
from tests.integration.conftest import LOCALSTACK_URL, requires_localstack

HEADER = "employeeId,name,email,department,salary,joiningDate\n"


@requires_localstack
class TestDynamoDBPipeline:
    @pytest.fixture
    def stores(self, tables):
        return (
            DynamoDBRecordStore(f"hringest-employees{tables}", endpoint_url=LOCALSTACK_URL),
            DynamoDBAuditStore(f"hringest-audit-log{tables}", endpoint_url=LOCALSTACK_URL),
        )

    def test_upload_then_query(self, stores):
        record_store, audit_store = stores
        service = IngestService(record_store=record_store, audit_store=audit_store)
        employee_id = f"E-{uuid.uuid4().hex[:8]}"
        content = (
            HEADER
            + f"{employee_id},Ann,ann@x.io,HR,100,2020-01-01\n"
            + f"{employee_id}-bad,Bob,bademail,HR,100,2020-01-01\n"
        ).encode()

        summary = service.process_upload(content, "int.csv")
        again = service.process_upload(content, "int.csv")

        assert summary.valid_records == 1
        assert again.valid_records == 0
        assert again.duplicates == [employee_id]

        stats = StatsService(record_store=record_store, audit_store=audit_store).batch_stats(summary.batch_id)
        assert stats.failure_breakdown == {"INVALID_EMAIL": 1}
        assert stats.success_rate == "50.00%"
