# app/core/importer.py

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from tortoise.exceptions import BaseORMException
from tortoise.transactions import in_transaction

from app.core.config import settings
from app.core.exceptions import CommitFailure, RowCountExceeded, StructuralError
from app.models.db import Buyer
from app.schemas.buyer import REQUIRED_HEADERS, BuyerRecord
from app.schemas.cells import NormalizedRow, row_to_dict
from app.schemas.validation import ImportPreview, RowErrorReport
from app.schemas.validators import validate_row
from app.utils.normalize import normalize_row
from app.utils.parser import check_header, parse_csv

logger = logging.getLogger(__name__)

# Row 1 is the header, so the first data row is row 2
FIRST_DATA_ROW = 2


@dataclass(frozen=True)
class CleanRow:
    row: int
    data: NormalizedRow


@dataclass(frozen=True)
class ImportBatch:
    clean_rows: List[CleanRow] = field(default_factory=list)
    rejected_rows: List[RowErrorReport] = field(default_factory=list)


def check_row_count(count: int, limit: int) -> None:
    if count > limit:
        raise RowCountExceeded(count, limit)


def aggregate(rows: Sequence[NormalizedRow], limit: int = settings.IMPORT_MAX_ROWS) -> ImportBatch:
    """
    Validate every row and split the batch into clean and rejected rows,
    both in input order. Raises RowCountExceeded before touching any row
    when the batch is over the limit.
    """
    check_row_count(len(rows), limit)

    clean: List[CleanRow] = []
    rejected: List[RowErrorReport] = []
    for idx, row in enumerate(rows, start=FIRST_DATA_ROW):
        issues = validate_row(row, row_number=idx)
        if issues:
            rejected.append(RowErrorReport(row=idx, messages=[i.display() for i in issues]))
        else:
            clean.append(CleanRow(row=idx, data=row))
    return ImportBatch(clean_rows=clean, rejected_rows=rejected)


def build_preview(content: bytes, owner_id: str, limit: int = settings.IMPORT_MAX_ROWS) -> ImportPreview:
    """
    Run the whole import pipeline over an uploaded file without persisting
    anything. Structural failures come back as a single row-0 error.
    """
    header: List[str] = []
    try:
        raw_rows, header = parse_csv(content)
        check_header(header, REQUIRED_HEADERS)
        check_row_count(len(raw_rows), limit)
        normalized = [normalize_row(raw, owner_id) for raw in raw_rows]
        batch = aggregate(normalized, limit)
    except StructuralError as e:
        logger.warning(f"Import rejected for owner {owner_id}: {e.message}")
        issue = e.issue
        return ImportPreview(
            headers=header,
            errors=[RowErrorReport(row=issue.row, messages=[issue.display()])],
        )

    total = len(batch.clean_rows) + len(batch.rejected_rows)
    logger.info(
        f"Import preview for owner {owner_id}: {total} rows, "
        f"{len(batch.clean_rows)} clean, {len(batch.rejected_rows)} rejected"
    )
    return ImportPreview(
        headers=header,
        total_rows=total,
        will_succeed=len(batch.clean_rows),
        will_fail=len(batch.rejected_rows),
        rows=[row_to_dict(clean.data) for clean in batch.clean_rows],
        errors=batch.rejected_rows,
    )


async def commit_buyers(owner_id: str, rows: Sequence[BuyerRecord]) -> int:
    """
    Insert the confirmed rows for owner_id in a single transaction.
    Storage errors are raised as CommitFailure with the original message.
    """
    buyers: List[Buyer] = [Buyer(owner_id=owner_id, **record.model_dump()) for record in rows]
    try:
        async with in_transaction() as conn:
            await Buyer.bulk_create(buyers, using_db=conn)
    except BaseORMException as e:
        logger.exception(f"Buyer import failed for owner {owner_id}")
        raise CommitFailure(str(e))
    logger.info(f"Imported {len(buyers)} buyers for owner {owner_id}")
    return len(buyers)

