from __future__ import annotations

import csv
import io

from app.schemas.buyer import CSV_HEADERS, City, Status
from app.utils.export import buyers_to_csv, format_cell


def test_format_cell():
    assert format_cell(None) == ""
    assert format_cell(City.MOHALI) == "Mohali"
    assert format_cell(500000.0) == "500000"
    assert format_cell(12.5) == "12.5"
    assert format_cell(["hot", "nri"]) == "hot,nri"


def test_buyers_to_csv_uses_canonical_columns():
    records = [
        {
            "full_name": "Jane Doe",
            "email": None,
            "phone": "9876543210",
            "city": City.MOHALI,
            "property_type": "Plot",
            "bhk": None,
            "purpose": "Buy",
            "budget_min": 3000000.0,
            "budget_max": None,
            "timeline": "Exploring",
            "source": "Website",
            "notes": "Call after 6, not before",
            "tags": ["hot"],
            "status": Status.NEW,
        }
    ]
    rows = list(csv.reader(io.StringIO(buyers_to_csv(records))))

    assert rows[0] == CSV_HEADERS
    assert rows[1] == [
        "Jane Doe", "", "9876543210", "Mohali", "Plot", "", "Buy", "3000000", "",
        "Exploring", "Website", "Call after 6, not before", "hot", "New",
    ]


def test_buyers_to_csv_without_records_is_header_only():
    assert buyers_to_csv([]).strip() == ",".join(CSV_HEADERS)
