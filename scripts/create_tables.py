"""Create the DynamoDB tables backing the record and audit stores.

Usage:
    python scripts/create_tables.py --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
from typing import Any

import boto3

TABLE_DEFINITIONS: list[dict[str, Any]] = [
    {"name": "hringest-employees"},
    {"name": "hringest-audit-log"},
]


def create_tables(ddb: Any, suffix: str = "") -> list[str]:
    """Create both PK/SK tables. Skips tables that already exist.

    Returns:
        Names of the tables created by this call.
    """
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])
    created: list[str] = []

    for defn in TABLE_DEFINITIONS:
        table_name = f"{defn['name']}{suffix}"
        if table_name in existing:
            print(f"  Table {table_name} already exists, skipping")
            continue
        client.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        created.append(table_name)
        print(f"  Created table {table_name}")

    return created


def main() -> None:
    parser = argparse.ArgumentParser(description="Create DynamoDB tables for the HR ingest service")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-suffix", default="", help="Table name suffix (e.g. -dev)")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating tables...")
    create_tables(ddb, suffix=args.table_suffix)

    print("Done!")


if __name__ == "__main__":
    main()
