"""Bulk import of products, customers and suppliers from CSV or JSON."""

import logging
from decimal import Decimal
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from retail_pos.core.access import has_module_access
from retail_pos.core.deps import get_current_user
from retail_pos.core.errors import ServiceUnavailableError
from retail_pos.db.base import get_db
from retail_pos.models import Customer, Product, Supplier
from retail_pos.schemas.auth import CurrentUser
from retail_pos.schemas.imports import ImportReport, ImportRequest
from retail_pos.services.importer import parse_import, summarize_errors, validate_import

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/imports", tags=["imports"])


def _text(row: dict[str, Any], *keys: str) -> str | None:
    for key in keys:
        value = row.get(key)
        if value not in (None, ""):
            return str(value).strip()
    return None


def _product(row: dict[str, Any]) -> dict[str, Any]:
    cost_price = _text(row, "cost_price", "costPrice")
    return {
        "name": str(row["name"]).strip(),
        "category": _text(row, "category"),
        "description": _text(row, "description"),
        "barcode": _text(row, "barcode"),
        "price": Decimal(str(row["price"]).strip()),
        "cost_price": Decimal(cost_price) if cost_price else None,
        "stock": int(float(row["stock"])),
    }


def _customer(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": str(row["name"]).strip(),
        "email": _text(row, "email"),
        "phone": _text(row, "phone"),
        "address": _text(row, "address"),
    }


def _supplier(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": str(row["name"]).strip(),
        "contact_person": _text(row, "contactPerson", "contact_person"),
        "email": _text(row, "email"),
        "phone": _text(row, "phone"),
        "address": _text(row, "address"),
    }


# entity -> (model, row mapper); the entity name doubles as its module id
IMPORTABLE = {
    "products": (Product, _product),
    "customers": (Customer, _customer),
    "suppliers": (Supplier, _supplier),
}


async def run_import(
    entity: str,
    fmt: str,
    text: str,
    current_user: CurrentUser,
    db: AsyncSession,
) -> ImportReport:
    """Parse, validate and insert ``text`` as ``entity`` rows owned by the current user."""
    if entity not in IMPORTABLE:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Cannot import into '{entity}'",
        )
    if not has_module_access(current_user.role, entity):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Role '{current_user.role}' has no access to module '{entity}'",
        )
    if not text or not text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide data to import",
        )

    try:
        rows = parse_import(text, fmt)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    if not rows:
        errors = ["No valid data found to import"]
        return ImportReport(entity=entity, valid=False, errors=errors, summary=summarize_errors(errors))

    result = validate_import(entity, rows)
    if not result.valid:
        logger.info("Rejected %s import with %d errors", entity, len(result.errors))
        return ImportReport(
            entity=entity,
            valid=False,
            errors=result.errors,
            summary=summarize_errors(result.errors),
        )

    model, to_fields = IMPORTABLE[entity]
    try:
        records = [model(owner_id=current_user.id, **to_fields(row)) for row in rows]
    except (ValueError, ArithmeticError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Could not convert imported {entity}: {exc}",
        )

    try:
        db.add_all(records)
        await db.commit()
    except SQLAlchemyError:
        logger.exception("Failed to import %d %s", len(rows), entity)
        await db.rollback()
        raise ServiceUnavailableError(f"Unable to import {entity} right now. Please try again.")

    logger.info("Imported %d %s for %s", len(rows), entity, current_user.id)
    return ImportReport(
        entity=entity,
        valid=True,
        imported=len(rows),
        summary=f"Successfully imported {len(rows)} {entity}",
    )


@router.post("/{entity}", response_model=ImportReport)
async def import_data(
    entity: str,
    body: ImportRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Import pasted CSV/JSON text."""
    return await run_import(entity, body.format, body.data, current_user, db)


@router.post("/{entity}/file", response_model=ImportReport)
async def import_file(
    entity: str,
    file: UploadFile = File(...),
    format: str | None = Form(None),
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Import an uploaded .csv/.json file; format defaults to the file extension."""
    fmt = format or Path(file.filename or "").suffix.lstrip(".").lower() or "csv"
    raw = await file.read()
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Import files must be UTF-8 encoded",
        )
    return await run_import(entity, fmt, text, current_user, db)
