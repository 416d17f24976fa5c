"""IngestService: parse, validate/route and persist one uploaded CSV."""

from __future__ import annotations

import logging
import uuid

from hringest.core.exceptions import UploadRejectedError
from hringest.core.protocols import IAuditStore, IRecordStore
from hringest.models.upload import UploadSummary
from hringest.pipeline.csv_parser import find_missing_headers, parse_csv_bytes
from hringest.pipeline.dual_sink import persist_batch
from hringest.pipeline.router import route_rows

logger = logging.getLogger(__name__)


class IngestService:
    """Runs the upload pipeline against injected record and audit stores."""

    def __init__(
        self,
        *,
        record_store: IRecordStore,
        audit_store: IAuditStore,
        audit_duplicates: bool = False,
        require_headers: bool = False,
    ) -> None:
        self._records = record_store
        self._audit = audit_store
        self._audit_duplicates = audit_duplicates
        self._require_headers = require_headers

    def process_upload(self, content: bytes, file_name: str) -> UploadSummary:
        """Process one CSV file end to end.

        Raises:
            UploadRejectedError: The CSV holds no data rows, or lacks required
                columns when header checking is on.
            CSVParseError: The bytes are not readable CSV.
            StoreError: A store failed for a reason other than a duplicate key.
        """
        logger.info(f"Processing file: {file_name}", extra={"file_name": file_name})

        rows = parse_csv_bytes(content)
        if not rows:
            raise UploadRejectedError("CSV file is empty or invalid")

        if self._require_headers:
            missing = find_missing_headers(rows)
            if missing:
                raise UploadRejectedError(
                    "Missing required columns",
                    f"CSV is missing: {', '.join(missing)}",
                    missingHeaders=missing,
                )

        logger.info(f"Total records found: {len(rows)}", extra={"total_records": len(rows)})

        batch_id = str(uuid.uuid4())
        routed = route_rows(rows, batch_id, file_name)
        persisted = persist_batch(
            routed, self._records, self._audit, audit_duplicates=self._audit_duplicates,
        )

        logger.info(
            f"Valid: {persisted.saved_valid} | Invalid: {persisted.saved_invalid}",
            extra={
                "batch_id": batch_id,
                "valid": persisted.saved_valid,
                "invalid": persisted.saved_invalid,
                "duplicates": len(persisted.duplicates),
            },
        )

        return UploadSummary(
            batch_id=batch_id,
            file_name=file_name,
            total_records=len(rows),
            valid_records=persisted.saved_valid,
            invalid_records=persisted.saved_invalid,
            rejected_by_validation=len(routed.rejected),
            duplicates=persisted.duplicates,
        )
