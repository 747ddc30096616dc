# Shared pytest fixtures
from __future__ import annotations

from typing import Callable

import pytest


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def owner_id() -> str:
    return "user_2abc"


@pytest.fixture()
def raw_row() -> dict:
    """A complete, valid raw CSV row for an apartment lead."""
    return {
        "fullName": "Jane Doe",
        "email": "jane.doe@gmail.com",
        "phone": "9876543210",
        "city": "Mohali",
        "propertyType": "Apartment",
        "bhk": "2",
        "purpose": "Buy",
        "budgetMin": "3000000",
        "budgetMax": "4500000",
        "timeline": "0-3m",
        "source": "Website",
        "notes": "Prefers higher floors",
        "tags": "hot, nri",
        "status": "",
    }


@pytest.fixture()
def make_csv() -> Callable[..., bytes]:
    def _make(header: list[str], rows: list[list[str]]) -> bytes:
        lines = [",".join(header)]
        for row in rows:
            lines.append(",".join(f'"{cell}"' for cell in row))
        return ("\n".join(lines) + "\n").encode("utf-8")
    return _make
