"""DynamoDB backends implementing IRecordStore and IAuditStore.

Employees are keyed ``EMPLOYEE#<employee_id>`` so the uniqueness constraint
is enforced by a conditional put. Audit rows are keyed ``BATCH#<batch>`` /
``ROW#<row_number>`` so a batch query returns them in row order.
"""

from __future__ import annotations

import logging
from decimal import Decimal, DecimalException
from typing import Any, Callable, Iterator

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from hringest.core.exceptions import StoreError
from hringest.models.audit import AuditRecord
from hringest.models.employee import EmployeeRecord
from hringest.models.upload import BulkInsertResult

logger = logging.getLogger(__name__)

_KEY_ATTRS = ("PK", "SK")


def _decode_decimals(item: dict[str, Any]) -> dict[str, Any]:
    """Convert Decimal values in a DynamoDB item to int/float."""
    out: dict[str, Any] = {}
    for k, v in item.items():
        if isinstance(v, Decimal):
            out[k] = int(v) if v == int(v) else float(v)
        elif isinstance(v, dict):
            out[k] = _decode_decimals(v)
        elif isinstance(v, list):
            out[k] = [
                _decode_decimals(i) if isinstance(i, dict)
                else (int(i) if isinstance(i, Decimal) and i == int(i) else float(i) if isinstance(i, Decimal) else i)
                for i in v
            ]
        else:
            out[k] = v
    return out


def _strip_keys(item: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in item.items() if k not in _KEY_ATTRS}


def _paginate(call: Callable[..., dict[str, Any]], **kwargs: Any) -> Iterator[dict[str, Any]]:
    """Yield every page of a Query/Scan, following LastEvaluatedKey."""
    while True:
        resp = call(**kwargs)
        yield resp
        last_key = resp.get("LastEvaluatedKey")
        if not last_key:
            return
        kwargs["ExclusiveStartKey"] = last_key


class _DynamoDBTable:
    """Shared resource and table wiring for both stores."""

    def __init__(self, table_name: str, region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._table_name = table_name
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)
        self._table = self._ddb.Table(table_name)

    def _count(self, upload_batch: str | None) -> int:
        kwargs: dict[str, Any] = {"Select": "COUNT"}
        if upload_batch is not None:
            kwargs["FilterExpression"] = "upload_batch = :batch"
            kwargs["ExpressionAttributeValues"] = {":batch": upload_batch}
        try:
            return sum(page.get("Count", 0) for page in _paginate(self._table.scan, **kwargs))
        except (ClientError, BotoCoreError) as exc:
            raise StoreError(f"DynamoDB count failed on {self._table_name!r}: {exc}") from exc

    def _scan(self, upload_batch: str | None) -> list[dict[str, Any]]:
        kwargs: dict[str, Any] = {}
        if upload_batch is not None:
            kwargs["FilterExpression"] = "upload_batch = :batch"
            kwargs["ExpressionAttributeValues"] = {":batch": upload_batch}
        try:
            return [item for page in _paginate(self._table.scan, **kwargs) for item in page.get("Items", [])]
        except (ClientError, BotoCoreError) as exc:
            raise StoreError(f"DynamoDB scan failed on {self._table_name!r}: {exc}") from exc


class DynamoDBRecordStore(_DynamoDBTable):
    """Production IRecordStore backed by DynamoDB."""

    @staticmethod
    def _to_item(record: EmployeeRecord) -> dict[str, Any]:
        item = record.model_dump(mode="json")
        item["salary"] = record.salary
        item["PK"] = f"EMPLOYEE#{record.employee_id}"
        item["SK"] = "PROFILE"
        return item

    @staticmethod
    def _from_item(item: dict[str, Any]) -> EmployeeRecord:
        data = _decode_decimals(_strip_keys(item))
        data["salary"] = item["salary"]
        return EmployeeRecord.model_validate(data)

    def insert_many(self, records: list[EmployeeRecord]) -> BulkInsertResult:
        """Conditionally put each record; duplicates are skipped, not fatal."""
        result = BulkInsertResult()
        for record in records:
            try:
                self._table.put_item(
                    Item=self._to_item(record),
                    ConditionExpression="attribute_not_exists(PK)",
                )
            except ClientError as exc:
                if exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                    logger.debug("Duplicate employee_id skipped", extra={"employee_id": record.employee_id})
                    result.conflicts.append(record.employee_id)
                    continue
                raise StoreError(
                    f"DynamoDB put failed for employee_id={record.employee_id!r} "
                    f"after {result.inserted_count} inserted: {exc}"
                ) from exc
            except (BotoCoreError, DecimalException) as exc:
                raise StoreError(
                    f"DynamoDB put failed for employee_id={record.employee_id!r} "
                    f"after {result.inserted_count} inserted: {exc}"
                ) from exc
            result.inserted_count += 1
        return result

    def count(self, upload_batch: str | None = None) -> int:
        return self._count(upload_batch)

    def find(self, upload_batch: str | None = None) -> list[EmployeeRecord]:
        records = [self._from_item(item) for item in self._scan(upload_batch)]
        return sorted(records, key=lambda r: r.employee_id)


class DynamoDBAuditStore(_DynamoDBTable):
    """Production IAuditStore backed by DynamoDB."""

    @staticmethod
    def _to_item(record: AuditRecord) -> dict[str, Any]:
        item = record.model_dump(mode="json")
        item["PK"] = f"BATCH#{record.upload_batch}"
        item["SK"] = f"ROW#{record.row_number:08d}"
        return item

    @staticmethod
    def _from_item(item: dict[str, Any]) -> AuditRecord:
        return AuditRecord.model_validate(_decode_decimals(_strip_keys(item)))

    def insert_many(self, records: list[AuditRecord]) -> BulkInsertResult:
        try:
            with self._table.batch_writer() as batch:
                for record in records:
                    batch.put_item(Item=self._to_item(record))
        except (ClientError, BotoCoreError) as exc:
            raise StoreError(f"DynamoDB audit write failed for {len(records)} records: {exc}") from exc
        return BulkInsertResult(inserted_count=len(records))

    def count(self, upload_batch: str | None = None) -> int:
        return self._count(upload_batch)

    def find(self, upload_batch: str | None = None) -> list[AuditRecord]:
        if upload_batch is None:
            records = [self._from_item(item) for item in self._scan(None)]
            return sorted(records, key=lambda r: r.row_number)

        try:
            pages = _paginate(
                self._table.query,
                KeyConditionExpression="PK = :pk",
                ExpressionAttributeValues={":pk": f"BATCH#{upload_batch}"},
                ScanIndexForward=True,
            )
            return [self._from_item(item) for page in pages for item in page.get("Items", [])]
        except (ClientError, BotoCoreError) as exc:
            raise StoreError(f"DynamoDB audit query failed for batch {upload_batch!r}: {exc}") from exc
