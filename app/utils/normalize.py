# app/utils/normalize.py

import math
import re
from typing import Any, Dict, List, Mapping, Optional, Union

from app.schemas.buyer import CANONICAL_FIELDS, Status
from app.schemas.cells import (
    ABSENT,
    Absent,
    Cell,
    NormalizedRow,
    Number,
    Text,
    TextList,
    freeze_row,
)

# Historical spellings accepted in import files
BHK_ALIASES = {"0": "Studio", "1": "One", "2": "Two", "3": "Three", "4": "Four"}
TIMELINE_ALIASES = {"0-3m": "ZeroTo3m", "3-6m": "ThreeTo6m", ">6m": "MoreThan6m"}
SOURCE_ALIASES = {"Walk-in": "WalkIn"}

NUMERIC_FIELDS = ("budgetMin", "budgetMax")
# Plain decimal or exponent notation only; no digit separators or hex
NUMBER_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def _clean(value: Any) -> Union[Cell, str, List[str]]:
    """Strip strings; blank or missing values become ABSENT. Typed cells pass through."""
    if value is None or isinstance(value, Absent):
        return ABSENT
    if isinstance(value, Text):
        value = value.value
    if isinstance(value, (Number, TextList)):
        return value
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return Number(value)
    value = str(value).strip()
    return value if value else ABSENT


def canonical_bhk(value: str) -> str:
    if value.lower() == "studio":
        return "Studio"
    return BHK_ALIASES.get(value, value)


def canonical_timeline(value: str) -> str:
    if value.lower() == "exploring":
        return "Exploring"
    return TIMELINE_ALIASES.get(value, value)


def canonical_source(value: str) -> str:
    return SOURCE_ALIASES.get(value, value)


ALIASES = {
    "bhk": canonical_bhk,
    "timeline": canonical_timeline,
    "source": canonical_source,
}


def split_tags(value: Any) -> TextList:
    if isinstance(value, TextList):
        parts = list(value.items)
    elif isinstance(value, list):
        parts = value
    elif isinstance(value, str):
        parts = value.split(",")
    else:
        parts = []
    return TextList(tuple(p.strip() for p in parts if p.strip()))


def parse_number(value: str) -> Optional[Union[int, float]]:
    if not NUMBER_PATTERN.match(value):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def coerce_number(value: Any) -> Cell:
    if isinstance(value, (Number, Absent)):
        return value
    if isinstance(value, str):
        number = parse_number(value)
        return Number(number) if number is not None else Text(value)
    if isinstance(value, TextList):
        return Text(",".join(value.items))
    return Text(",".join(value)) if isinstance(value, list) else ABSENT


def normalize_row(raw: Mapping[str, Any], owner_id: str) -> NormalizedRow:
    """
    Turn one raw CSV row into a read-only mapping of canonical field -> Cell.
    Never fails: values that are still invalid after normalization are kept so
    the validator can report them. Columns outside the canonical set are dropped.
    The file's ownerId column, if any, is always replaced by owner_id.
    Normalizing an already-normalized row returns an equal row.
    """
    cells: Dict[str, Any] = {field: _clean(raw.get(field)) for field in CANONICAL_FIELDS}

    for field, canonical in ALIASES.items():
        if isinstance(cells[field], str):
            cells[field] = canonical(cells[field])

    cells["tags"] = split_tags(cells["tags"])

    for field in NUMERIC_FIELDS:
        cells[field] = coerce_number(cells[field])

    if cells["status"] is ABSENT:
        cells["status"] = Status.NEW.value

    cells["ownerId"] = _clean(owner_id)

    for field, value in cells.items():
        if isinstance(value, str):
            cells[field] = Text(value)
        elif isinstance(value, list):
            cells[field] = Text(",".join(value))

    return freeze_row(cells)
