from __future__ import annotations

import os
import sys

import boto3
import pytest
from botocore.exceptions import BotoCoreError, ClientError

LOCALSTACK_URL = os.environ.get("LOCALSTACK_URL", "http://localhost:4566")
REGION = "us-east-1"
TABLE_SUFFIX = "-inttest"


def _dynamodb_reachable() -> bool:
    client = boto3.client("dynamodb", region_name=REGION, endpoint_url=LOCALSTACK_URL)
    try:
        client.list_tables(Limit=1)
    except (BotoCoreError, ClientError):
        return False
    return True


requires_localstack = pytest.mark.skipif(
    not _dynamodb_reachable(),
    reason=f"no DynamoDB endpoint at {LOCALSTACK_URL}",
)


@pytest.fixture(scope="session")
def tables():
    """Employee and audit tables on LocalStack; yields the table suffix."""
    sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "..", "scripts"))
    from create_tables import create_tables

    ddb = boto3.resource("dynamodb", region_name=REGION, endpoint_url=LOCALSTACK_URL)
    create_tables(ddb, suffix=TABLE_SUFFIX)
    return TABLE_SUFFIX
