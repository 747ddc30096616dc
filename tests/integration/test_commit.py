from __future__ import annotations

import pytest
from tortoise import Tortoise
from tortoise.exceptions import OperationalError

from app.core.exceptions import CommitFailure
from app.core.importer import build_preview, commit_buyers
from app.models.db import Buyer
from app.schemas.buyer import BuyerRecord, Status
from app.utils.export import EXPORT_FIELDS, buyers_to_csv

pytestmark = pytest.mark.anyio


@pytest.fixture()
async def db():
    await Tortoise.init(db_url="sqlite://:memory:", modules={"models": ["app.models.db"]})
    await Tortoise.generate_schemas()
    yield
    await Tortoise.close_connections()


def _records(preview):
    return [BuyerRecord.model_validate(row) for row in preview.rows]


async def test_commit_inserts_previewed_rows_for_owner(db, raw_row, make_csv, owner_id):
    header = list(raw_row)
    content = make_csv(header, [list(raw_row.values()), list(raw_row.values())])
    preview = build_preview(content, owner_id)

    inserted = await commit_buyers(owner_id, _records(preview))

    assert inserted == 2
    buyers = await Buyer.filter(owner_id=owner_id).all()
    assert len(buyers) == 2
    assert buyers[0].status == Status.NEW
    assert buyers[0].tags == ["hot", "nri"]
    assert buyers[0].budget_min == 3000000


async def test_commit_failure_is_relayed_verbatim(db, raw_row, make_csv, owner_id, monkeypatch):
    preview = build_preview(make_csv(list(raw_row), [list(raw_row.values())]), owner_id)

    async def broken_bulk_create(*args, **kwargs):
        raise OperationalError("database is locked")

    monkeypatch.setattr(Buyer, "bulk_create", broken_bulk_create)

    with pytest.raises(CommitFailure) as exc:
        await commit_buyers(owner_id, _records(preview))
    assert exc.value.message == "database is locked"
    assert await Buyer.all().count() == 0


async def test_exported_buyers_import_cleanly(db, raw_row, make_csv, owner_id):
    preview = build_preview(make_csv(list(raw_row), [list(raw_row.values())]), owner_id)
    await commit_buyers(owner_id, _records(preview))

    records = await Buyer.filter(owner_id=owner_id).values(*EXPORT_FIELDS.values())
    reimported = build_preview(buyers_to_csv(records).encode("utf-8"), owner_id)

    assert reimported.errors == []
    assert reimported.rows == preview.rows
