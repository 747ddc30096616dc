# app/utils/export.py
import csv
import io
from enum import Enum
from typing import Any, Iterable, Mapping

from app.schemas.buyer import CSV_HEADERS

# CSV column -> Buyer model attribute
EXPORT_FIELDS = {
    "fullName": "full_name",
    "email": "email",
    "phone": "phone",
    "city": "city",
    "propertyType": "property_type",
    "bhk": "bhk",
    "purpose": "purpose",
    "budgetMin": "budget_min",
    "budgetMax": "budget_max",
    "timeline": "timeline",
    "source": "source",
    "notes": "notes",
    "tags": "tags",
    "status": "status",
}


def format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def buyers_to_csv(records: Iterable[Mapping[str, Any]]) -> str:
    """
    Serialize stored buyers (dicts keyed by model attribute) to CSV with the
    canonical import columns, so an export can be fed back into an import.
    """
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_HEADERS)
    for record in records:
        writer.writerow([format_cell(record.get(EXPORT_FIELDS[h])) for h in CSV_HEADERS])
    return output.getvalue()
