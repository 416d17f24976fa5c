"""Shared unit-test fixtures: fresh in-memory stores and row builders."""

from __future__ import annotations

from datetime import date

import pytest

from tests.fakes import MemoryAuditStore, MemoryRecordStore

TODAY = date(2024, 6, 15)


def make_row(**overrides: str) -> dict[str, str]:
    """A valid normalized row (lowercase headers), with optional overrides."""
    row = {
        "employeeid": "E001",
        "name": "Alice Smith",
        "email": "alice@example.com",
        "department": "Engineering",
        "salary": "85000",
        "joiningdate": "2020-01-15",
    }
    row.update(overrides)
    return row


@pytest.fixture
def record_store():
    return MemoryRecordStore()


@pytest.fixture
def audit_store():
    return MemoryAuditStore()
