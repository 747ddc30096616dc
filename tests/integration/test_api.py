from __future__ import annotations

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.api.buyers import get_committer
from app.core.auth import get_current_user
from app.core.exceptions import CommitFailure
from app.main import app


@pytest.fixture()
def committed():
    return []


@pytest.fixture()
def client(committed):
    async def fake_committer(owner_id, rows):
        committed.append((owner_id, rows))
        return len(rows)

    app.dependency_overrides[get_current_user] = lambda: SimpleNamespace(clerk_id="user_2abc")
    app.dependency_overrides[get_committer] = lambda: fake_committer
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_preview_returns_clean_rows_and_errors(client, raw_row, make_csv):
    bad = dict(raw_row, bhk="")
    content = make_csv(list(raw_row), [list(raw_row.values()), list(bad.values())])

    resp = client.post("/api/buyers/import/preview", files={"file": ("buyers.csv", content, "text/csv")})

    assert resp.status_code == 200
    body = resp.json()
    assert body["will_succeed"] == 1
    assert body["rows"][0]["ownerId"] == "user_2abc"
    assert body["errors"] == [{"row": 3, "messages": ["bhk: BHK is required for Apartment and Villa"]}]


def test_preview_structural_failure(client):
    resp = client.post("/api/buyers/import/preview", files={"file": ("buyers.csv", b"fullName\nJane\n", "text/csv")})

    assert resp.status_code == 200
    errors = resp.json()["errors"]
    assert len(errors) == 1
    assert errors[0]["row"] == 0
    assert errors[0]["messages"][0].startswith("Missing headers: phone, city")


def test_confirm_commits_with_session_owner(client, committed, raw_row, make_csv):
    content = make_csv(list(raw_row), [list(raw_row.values())])
    rows = client.post("/api/buyers/import/preview", files={"file": ("b.csv", content, "text/csv")}).json()["rows"]
    rows[0]["ownerId"] = "someone_else"

    resp = client.post("/api/buyers/import", json={"rows": rows})

    assert resp.status_code == 200
    assert resp.json() == {"inserted": 1}
    owner_id, records = committed[0]
    assert owner_id == "user_2abc"
    assert records[0].full_name == "Jane Doe"
    assert records[0].bhk == "Two"


def test_confirm_without_rows_is_rejected(client, committed):
    resp = client.post("/api/buyers/import", json={"rows": []})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "No valid rows to import"
    assert committed == []


def test_confirm_surfaces_commit_failure(client, raw_row, make_csv):
    async def failing_committer(owner_id, rows):
        raise CommitFailure("UNIQUE constraint failed: buyer.id")

    app.dependency_overrides[get_committer] = lambda: failing_committer
    content = make_csv(list(raw_row), [list(raw_row.values())])
    rows = client.post("/api/buyers/import/preview", files={"file": ("b.csv", content, "text/csv")}).json()["rows"]

    resp = client.post("/api/buyers/import", json={"rows": rows})

    assert resp.status_code == 500
    assert resp.json() == {"errors": [{"row": 0, "messages": ["UNIQUE constraint failed: buyer.id"]}]}


def test_endpoints_require_authentication():
    resp = TestClient(app).post("/api/buyers/import", json={"rows": []})
    assert resp.status_code == 401


def test_preview_rejects_oversized_upload(client, monkeypatch):
    from app.core.config import settings

    monkeypatch.setattr(settings, "IMPORT_MAX_BYTES", 10)
    resp = client.post(
        "/api/buyers/import/preview",
        files={"file": ("buyers.csv", b"fullName,phone\nJane Doe,9876543210\n", "text/csv")},
    )

    assert resp.status_code == 413
