"""Tests for the DynamoDB table creation script."""

from __future__ import annotations

import sys
from pathlib import Path

import boto3
import pytest
from moto import mock_aws

# Make scripts/ importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "scripts"))

from create_tables import create_tables  # noqa: E402


@pytest.fixture
def ddb():
    with mock_aws():
        yield boto3.resource("dynamodb", region_name="us-east-1")


class TestCreateTables:
    def test_creates_both_tables(self, ddb):
        created = create_tables(ddb, suffix="-test")
        tables = ddb.meta.client.list_tables()["TableNames"]
        assert sorted(created) == ["hringest-audit-log-test", "hringest-employees-test"]
        assert sorted(tables) == sorted(created)

    def test_idempotent_skips_existing(self, ddb):
        create_tables(ddb, suffix="-test")
        assert create_tables(ddb, suffix="-test") == []
        assert len(ddb.meta.client.list_tables()["TableNames"]) == 2
