"""Parsing and validation of uploaded CSV/JSON data.

Parsers fail closed: malformed input yields an empty list and a log line,
never an exception. Validators collect every problem as a human-readable
message (``Row N: ...``, 1-based) and never mutate the rows they inspect.
"""

import csv
import json
import logging
import math
import re
from collections.abc import Callable, Mapping
from typing import Any

from retail_pos.schemas.imports import ValidationResult

logger = logging.getLogger(__name__)

ImportRow = dict[str, Any]

_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


# ── Parsers ────────────────────────────────────────

def _coerce(cell: str) -> str | int | float:
    value = cell.strip()
    if not _NUMBER.match(value):
        return value
    if value.lstrip("+-").isdigit():
        return int(value)
    return float(value)


def parse_csv(text: str) -> list[ImportRow]:
    """Parse CSV text into rows keyed by the header line.

    Quoted fields may contain commas and doubled quotes. Cells that are
    entirely numeric become ``int``/``float``; short rows are padded with
    ``""`` and blank lines are skipped.
    """
    lines = [line for line in (text or "").strip().splitlines() if line.strip()]
    if not lines:
        return []

    reader = csv.reader(lines, skipinitialspace=True)
    rows: list[ImportRow] = []
    try:
        headers = [header.strip() for header in next(reader)]
        for values in reader:
            cells = [_coerce(value) for value in values]
            rows.append({
                header: cells[index] if index < len(cells) else ""
                for index, header in enumerate(headers)
            })
    except csv.Error as exc:
        logger.error("Error parsing CSV import: %s", exc)
        return []
    return rows


def parse_json(text: str) -> list[Any]:
    """Parse JSON text; a single value is wrapped in a one-element list."""
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        logger.error("Error parsing JSON import: %s", exc)
        return []
    return data if isinstance(data, list) else [data]


PARSERS: dict[str, Callable[[str], list[Any]]] = {
    "csv": parse_csv,
    "json": parse_json,
}


def parse_import(text: str, fmt: str) -> list[Any]:
    try:
        parser = PARSERS[fmt]
    except KeyError:
        raise ValueError(f"Unsupported import format: {fmt}") from None
    return parser(text)


# ── Validators ─────────────────────────────────────

def _is_number(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        text = value.strip()
        return bool(_NUMBER.match(text)) and math.isfinite(float(text))
    return False


def _rows(data: Any) -> list[Mapping[str, Any]] | None:
    if not isinstance(data, list):
        return None
    return [row if isinstance(row, Mapping) else {} for row in data]


def _validate(data: Any, check: Callable[[int, Mapping[str, Any]], list[str]]) -> ValidationResult:
    rows = _rows(data)
    if rows is None:
        return ValidationResult(valid=False, errors=["Data must be an array"])

    errors: list[str] = []
    for index, row in enumerate(rows, start=1):
        errors.extend(check(index, row))
    return ValidationResult(valid=not errors, errors=errors)


def _check_product(n: int, row: Mapping[str, Any]) -> list[str]:
    errors = []
    if not row.get("name"):
        errors.append(f"Row {n}: Missing product name")
    if not _is_number(row.get("price")):
        errors.append(f"Row {n}: Invalid price")
    if not _is_number(row.get("stock")):
        errors.append(f"Row {n}: Invalid stock quantity")
    return errors


def _check_customer(n: int, row: Mapping[str, Any]) -> list[str]:
    errors = []
    if not row.get("name"):
        errors.append(f"Row {n}: Missing customer name")
    email = row.get("email")
    if email and not _EMAIL.match(str(email)):
        errors.append(f"Row {n}: Invalid email format")
    return errors


def _check_supplier(n: int, row: Mapping[str, Any]) -> list[str]:
    errors = []
    if not row.get("name"):
        errors.append(f"Row {n}: Missing supplier name")
    if not (row.get("contactPerson") or row.get("contact_person")):
        errors.append(f"Row {n}: Missing contact person")
    return errors


def validate_products(data: Any) -> ValidationResult:
    return _validate(data, _check_product)


def validate_customers(data: Any) -> ValidationResult:
    return _validate(data, _check_customer)


def validate_suppliers(data: Any) -> ValidationResult:
    return _validate(data, _check_supplier)


VALIDATORS: dict[str, Callable[[Any], ValidationResult]] = {
    "products": validate_products,
    "customers": validate_customers,
    "suppliers": validate_suppliers,
}


def validate_import(entity: str, data: Any) -> ValidationResult:
    """Validate rows for ``entity``; entity types without rules always pass."""
    validator = VALIDATORS.get(entity)
    if validator is None:
        return ValidationResult(valid=True, errors=[])
    return validator(data)


def summarize_errors(errors: list[str], limit: int = 5) -> str:
    """First ``limit`` messages, then a count of the rest."""
    lines = errors[:limit]
    if len(errors) > limit:
        lines.append(f"...and {len(errors) - limit} more errors")
    return "\n".join(lines)
