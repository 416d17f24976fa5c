"""API fixtures: an app wired to in-memory stores and a TestClient."""

from __future__ import annotations

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from hringest.api.app import create_app
from hringest.core.config import AppSettings

HEADER = "employeeId,name,email,department,salary,joiningDate"


def csv_bytes(*lines: str, header: str = HEADER) -> bytes:
    return ("\n".join([header, *lines]) + "\n").encode()


def yesterday() -> str:
    return (date.today() - timedelta(days=1)).isoformat()


@pytest.fixture
def settings(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    monkeypatch.delenv("MAX_FILE_SIZE", raising=False)
    return AppSettings(store_backend="memory", log_format="text")


@pytest.fixture
def client(settings, record_store, audit_store):
    app = create_app(settings, record_store=record_store, audit_store=audit_store)
    return TestClient(app)


def upload(client: TestClient, content: bytes, filename: str = "employees.csv",
           content_type: str = "text/csv", field: str = "file"):
    return client.post("/api/upload", files={field: (filename, content, content_type)})
