# app/core/exceptions.py

from typing import List, Sequence

from app.schemas.validation import ValidationIssue


class BuyerImportError(Exception):
    """Base class for failures raised by the buyer import pipeline."""


class StructuralError(BuyerImportError):
    """
    A whole-file failure. Nothing past the failing stage runs, and the
    caller gets a single row-0 issue instead of a per-row report.
    """

    code = "structural_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def issue(self) -> ValidationIssue:
        return ValidationIssue(level="error", code=self.code, message=self.message, field=None, row=0)


class MalformedInput(StructuralError):
    code = "malformed_csv"


class MissingHeaders(StructuralError):
    code = "missing_headers"

    def __init__(self, names: Sequence[str]):
        self.names: List[str] = list(names)
        super().__init__(f"Missing headers: {', '.join(self.names)}")


class RowCountExceeded(StructuralError):
    code = "too_many_rows"

    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(f"CSV has more than {limit} rows. Max {limit} allowed.")


class CommitFailure(BuyerImportError):
    """Storage rejected the batch; message is relayed to the caller as-is."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
