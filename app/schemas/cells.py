# app/schemas/cells.py

"""
Typed cell values for a normalized import row.

A normalized row maps each canonical field to exactly one of:
    Absent    - the cell was missing or blank
    Text      - a trimmed, non-empty string
    Number    - a finite number parsed from the cell
    TextList  - a list of strings (tags)
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple, Union


@dataclass(frozen=True)
class Absent:
    def __bool__(self) -> bool:
        return False


ABSENT = Absent()


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Number:
    value: Union[int, float]


@dataclass(frozen=True)
class TextList:
    items: Tuple[str, ...] = ()


Cell = Union[Absent, Text, Number, TextList]

NormalizedRow = Mapping[str, Cell]


def freeze_row(cells: Dict[str, Cell]) -> NormalizedRow:
    return MappingProxyType(dict(cells))


def cell_to_python(cell: Cell) -> Any:
    if isinstance(cell, Text):
        return cell.value
    if isinstance(cell, Number):
        return cell.value
    if isinstance(cell, TextList):
        return list(cell.items)
    return None


def row_to_dict(row: NormalizedRow) -> Dict[str, Any]:
    """Plain JSON-friendly dict of a normalized row (Absent becomes None)."""
    return {field: cell_to_python(cell) for field, cell in row.items()}
