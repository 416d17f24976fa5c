"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from hringest.core.config import AppSettings
from hringest.core.protocols import IAuditStore, IRecordStore
from hringest.persistence.dynamodb_backend import DynamoDBAuditStore, DynamoDBRecordStore
from hringest.persistence.memory_backend import MemoryAuditStore, MemoryRecordStore


def create_persistence(settings: AppSettings | None = None) -> tuple[IRecordStore, IAuditStore]:
    """Create wired-up store backends from application settings.

    Returns:
        Tuple of (record_store, audit_store).
    """
    if settings is None:
        settings = AppSettings()

    if settings.store_backend == "memory":
        return MemoryRecordStore(), MemoryAuditStore()

    ddb = settings.dynamodb
    record_store = DynamoDBRecordStore(
        table_name=f"{ddb.employee_table}{ddb.table_suffix}",
        region=ddb.region,
        endpoint_url=ddb.endpoint_url,
    )
    audit_store = DynamoDBAuditStore(
        table_name=f"{ddb.audit_table}{ddb.table_suffix}",
        region=ddb.region,
        endpoint_url=ddb.endpoint_url,
    )
    return record_store, audit_store
