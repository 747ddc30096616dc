# app/schemas/validators.py

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from email_validator import EmailNotValidError, validate_email

from app.schemas.buyer import (
    BHK,
    RESIDENTIAL_TYPES,
    City,
    Purpose,
    PropertyType,
    Source,
    Status,
    Timeline,
)
from app.schemas.cells import ABSENT, Cell, NormalizedRow, Number, Text, TextList
from app.schemas.validation import ValidationIssue


class RuleKind(str, Enum):
    ENUM = "enum"
    PATTERN = "pattern"
    LENGTH = "length"
    POSITIVE_NUMBER = "positive_number"
    EMAIL = "email"
    TEXT_LIST = "text_list"


@dataclass(frozen=True)
class FieldRule:
    field: str
    kind: RuleKind
    required: bool = False
    choices: Tuple[str, ...] = ()
    pattern: Optional[re.Pattern] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    message: Optional[str] = None
    required_message: str = "Required"
    min_message: Optional[str] = None
    max_message: Optional[str] = None


@dataclass(frozen=True)
class CrossFieldRule:
    name: str
    field: str
    code: str
    check: Callable[[NormalizedRow], Optional[str]]


def _choices(enum_cls) -> Tuple[str, ...]:
    return tuple(member.value for member in enum_cls)


BUYER_FIELD_RULES: Tuple[FieldRule, ...] = (
    FieldRule(
        "fullName", RuleKind.LENGTH, required=True, min_length=2, max_length=80,
        min_message="Full name must be at least 2 characters",
        max_message="Full name must be at most 80 characters",
    ),
    FieldRule("email", RuleKind.EMAIL, message="Invalid email format"),
    FieldRule(
        "phone", RuleKind.PATTERN, required=True,
        pattern=re.compile(r"^\d{10,15}$"), message="Phone must be 10-15 digits only",
    ),
    FieldRule("city", RuleKind.ENUM, required=True, choices=_choices(City)),
    FieldRule("propertyType", RuleKind.ENUM, required=True, choices=_choices(PropertyType)),
    # presence is decided by bhk_required_for_residential
    FieldRule("bhk", RuleKind.ENUM, choices=_choices(BHK)),
    FieldRule("purpose", RuleKind.ENUM, required=True, choices=_choices(Purpose)),
    FieldRule("budgetMin", RuleKind.POSITIVE_NUMBER, message="Budget min must be positive"),
    FieldRule("budgetMax", RuleKind.POSITIVE_NUMBER, message="Budget max must be positive"),
    FieldRule("timeline", RuleKind.ENUM, required=True, choices=_choices(Timeline)),
    FieldRule("source", RuleKind.ENUM, required=True, choices=_choices(Source)),
    FieldRule("status", RuleKind.ENUM, choices=_choices(Status)),
    FieldRule(
        "notes", RuleKind.LENGTH, max_length=1000,
        max_message="Notes must be at most 1000 characters",
    ),
    FieldRule("tags", RuleKind.TEXT_LIST),
    FieldRule(
        "ownerId", RuleKind.LENGTH, required=True, required_message="Owner ID is required",
    ),
)


def bhk_required_for_residential(row: NormalizedRow) -> Optional[str]:
    property_type = row.get("propertyType", ABSENT)
    if isinstance(property_type, Text) and property_type.value in RESIDENTIAL_TYPES:
        if not row.get("bhk", ABSENT):
            return "BHK is required for Apartment and Villa"
    return None


def budget_ordering(row: NormalizedRow) -> Optional[str]:
    budget_min = row.get("budgetMin", ABSENT)
    budget_max = row.get("budgetMax", ABSENT)
    if isinstance(budget_min, Number) and isinstance(budget_max, Number):
        if budget_max.value < budget_min.value:
            return "Budget max must be greater than or equal to budget min"
    return None


CROSS_FIELD_RULES: Tuple[CrossFieldRule, ...] = (
    CrossFieldRule("bhk_required_for_residential", "bhk", "bhk_required", bhk_required_for_residential),
    CrossFieldRule("budget_ordering", "budgetMax", "budget_order", budget_ordering),
)


def _type_name(cell: Cell) -> str:
    if isinstance(cell, Number):
        return "number"
    if isinstance(cell, TextList):
        return "array"
    return "string"


def check_field(rule: FieldRule, cell: Cell) -> Optional[Tuple[str, str]]:
    """Return (code, message) when the cell breaks the rule, else None."""
    if not cell:
        if rule.required:
            return "required", rule.required_message
        return None

    if rule.kind == RuleKind.POSITIVE_NUMBER:
        if not isinstance(cell, Number):
            return "invalid_type", f"Expected number, received {_type_name(cell)}"
        if not cell.value > 0:
            return "too_small", rule.message
        return None

    if rule.kind == RuleKind.TEXT_LIST:
        if not isinstance(cell, TextList):
            return "invalid_type", f"Expected array, received {_type_name(cell)}"
        return None

    if not isinstance(cell, Text):
        return "invalid_type", f"Expected string, received {_type_name(cell)}"
    value = cell.value

    if rule.kind == RuleKind.ENUM:
        if value not in rule.choices:
            expected = " | ".join(f"'{c}'" for c in rule.choices)
            return "invalid_enum_value", f"Invalid enum value. Expected {expected}, received '{value}'"
    elif rule.kind == RuleKind.PATTERN:
        if not rule.pattern.match(value):
            return "invalid_string", rule.message
    elif rule.kind == RuleKind.EMAIL:
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return "invalid_string", rule.message
    elif rule.kind == RuleKind.LENGTH:
        if rule.min_length is not None and len(value) < rule.min_length:
            return "too_small", rule.min_message
        if rule.max_length is not None and len(value) > rule.max_length:
            return "too_big", rule.max_message
    return None


def validate_row(row: NormalizedRow, row_number: Optional[int] = None) -> List[ValidationIssue]:
    """
    Check one normalized row against every field rule, then every cross-field
    rule. All violations are returned; an empty list means the row is clean.
    """
    issues: List[ValidationIssue] = []

    for rule in BUYER_FIELD_RULES:
        failure = check_field(rule, row.get(rule.field, ABSENT))
        if failure:
            code, message = failure
            issues.append(ValidationIssue(code=code, message=message, field=rule.field, row=row_number))

    for rule in CROSS_FIELD_RULES:
        message = rule.check(row)
        if message:
            issues.append(ValidationIssue(code=rule.code, message=message, field=rule.field, row=row_number))

    return issues
