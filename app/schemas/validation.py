# app/schemas/validation.py

from pydantic import BaseModel
from typing import List, Optional, Literal, Dict, Any

from app.schemas.buyer import BuyerRecord


class ValidationIssue(BaseModel):
    level: Literal["error", "warning"] = "error"
    code: str
    message: str
    field: Optional[str] = None
    row: Optional[int] = None

    def display(self) -> str:
        """Human-facing text, prefixed with the owning field when there is one."""
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message


class RowErrorReport(BaseModel):
    row: int
    messages: List[str] = []


class ImportPreview(BaseModel):
    headers: List[str] = []
    total_rows: int = 0
    will_succeed: int = 0
    will_fail: int = 0
    rows: List[Dict[str, Any]] = []
    errors: List[RowErrorReport] = []


class ImportConfirm(BaseModel):
    rows: List[BuyerRecord] = []


class ImportResult(BaseModel):
    inserted: int
