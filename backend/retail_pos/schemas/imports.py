from typing import Literal

from pydantic import BaseModel, Field


class ValidationResult(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)


class ImportRequest(BaseModel):
    format: Literal["csv", "json"] = "csv"
    data: str


class ImportReport(BaseModel):
    entity: str
    valid: bool
    imported: int = 0
    errors: list[str] = Field(default_factory=list)
    summary: str
