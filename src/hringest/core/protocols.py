"""Protocol interfaces for the HR ingest stores.

The pipeline talks to storage only through these Protocols: structural
typing, no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from hringest.models.audit import AuditRecord
from hringest.models.employee import EmployeeRecord
from hringest.models.upload import BulkInsertResult


# ---------------------------------------------------------------------------
# Persistence: Record Store (accepted employees)
# ---------------------------------------------------------------------------

@runtime_checkable
class IRecordStore(Protocol):
    """Employee store enforcing uniqueness on employee_id.

    ``insert_many`` is unordered: a duplicate key skips that record only and
    is reported in ``BulkInsertResult.conflicts``. Any other failure raises
    ``StoreError``.
    """

    def insert_many(self, records: list[EmployeeRecord]) -> BulkInsertResult: ...

    def count(self, upload_batch: str | None = None) -> int: ...

    def find(self, upload_batch: str | None = None) -> list[EmployeeRecord]: ...


# ---------------------------------------------------------------------------
# Persistence: Audit Store (rejected rows)
# ---------------------------------------------------------------------------

@runtime_checkable
class IAuditStore(Protocol):
    """Append-only audit store; no uniqueness constraint."""

    def insert_many(self, records: list[AuditRecord]) -> BulkInsertResult: ...

    def count(self, upload_batch: str | None = None) -> int: ...

    def find(self, upload_batch: str | None = None) -> list[AuditRecord]: ...
