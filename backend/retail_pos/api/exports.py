"""Download the current user's records as CSV, JSON, Excel or PDF."""

from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Response, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from retail_pos.core.access import has_module_access
from retail_pos.core.deps import get_current_user
from retail_pos.core.errors import ServiceUnavailableError
from retail_pos.db.base import get_db
from retail_pos.models import Customer, Product, Sale, Supplier
from retail_pos.schemas.auth import CurrentUser
from retail_pos.services.exporter import NOTICE_DISMISS_SECONDS, ExportFormat, build_export

router = APIRouter(prefix="/exports", tags=["exports"])


def _product_record(product: Product) -> dict[str, Any]:
    return {
        "name": product.name,
        "category": product.category,
        "barcode": product.barcode,
        "price": product.price,
        "cost_price": product.cost_price,
        "stock": product.stock,
        "is_active": product.is_active,
    }


def _customer_record(customer: Customer) -> dict[str, Any]:
    return {
        "name": customer.name,
        "email": customer.email,
        "phone": customer.phone,
        "address": customer.address,
    }


def _supplier_record(supplier: Supplier) -> dict[str, Any]:
    return {
        "name": supplier.name,
        "contact_person": supplier.contact_person,
        "email": supplier.email,
        "phone": supplier.phone,
        "address": supplier.address,
    }


def _sale_record(sale: Sale) -> dict[str, Any]:
    return {
        "invoice_number": sale.invoice_number or str(sale.id),
        "date": sale.created_at,
        "subtotal": sale.subtotal,
        "tax": sale.tax_amount,
        "discount": sale.discount_amount,
        "total": sale.total_amount,
        "payment_method": sale.payment_method.value,
    }


# entity -> (model, record builder, report title)
EXPORTABLE = {
    "products": (Product, _product_record, "Products Report"),
    "customers": (Customer, _customer_record, "Customers Report"),
    "suppliers": (Supplier, _supplier_record, "Suppliers Report"),
    "sales": (Sale, _sale_record, "Sales Report"),
}


@router.get("/{entity}")
async def export_data(
    entity: str,
    format: ExportFormat = Query("csv"),
    user_agent: str | None = Header(None),
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Stream the owner's ``entity`` rows as an attachment named ``<entity>_<date>.<ext>``."""
    if entity not in EXPORTABLE:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Cannot export '{entity}'",
        )
    if not has_module_access(current_user.role, entity):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Role '{current_user.role}' has no access to module '{entity}'",
        )

    model, to_record, title = EXPORTABLE[entity]
    try:
        result = await db.execute(
            select(model)
            .where(model.owner_id == current_user.id)
            .order_by(model.created_at.desc())
        )
        rows = result.scalars().all()
    except SQLAlchemyError:
        raise ServiceUnavailableError(f"Unable to load {entity} for export. Please try again.")

    export = build_export([to_record(row) for row in rows], entity, format, user_agent=user_agent, title=title)

    headers = {"Content-Disposition": f'attachment; filename="{export.filename}"'}
    if export.notice:
        headers["X-Download-Notice"] = export.notice
        headers["X-Notice-Dismiss-After"] = str(NOTICE_DISMISS_SECONDS)

    return Response(content=export.content, media_type=export.media_type, headers=headers)
