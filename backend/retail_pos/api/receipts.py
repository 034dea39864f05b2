"""Receipt endpoints for completed sales."""

from uuid import UUID

from fastapi import APIRouter, Depends, Header, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from retail_pos.core.deps import require_module
from retail_pos.core.errors import NotFoundError
from retail_pos.db.base import get_db
from retail_pos.models.sale import Sale, SaleItem
from retail_pos.schemas.auth import CurrentUser
from retail_pos.services.exporter import NOTICE_DISMISS_SECONDS, is_mobile_user_agent
from retail_pos.services.receipt import (
    RECEIPT_SAVED_NOTICE,
    ReceiptCustomer,
    ReceiptData,
    ReceiptItem,
    format_receipt_text,
    generate_receipt_pdf,
)

router = APIRouter(prefix="/receipts", tags=["receipts"])


async def load_sale(sale_id: UUID, owner_id: UUID, db: AsyncSession) -> Sale:
    """Fetch a sale with customer and item products eagerly loaded."""
    # Lazy loads raise MissingGreenlet under AsyncSession
    result = await db.execute(
        select(Sale)
        .where(Sale.id == sale_id, Sale.owner_id == owner_id)
        .options(
            selectinload(Sale.customer),
            selectinload(Sale.items).selectinload(SaleItem.product),
        )
    )
    sale = result.scalar_one_or_none()
    if not sale:
        raise NotFoundError("Sale not found")
    return sale


def receipt_data_for(sale: Sale) -> ReceiptData:
    customer = sale.customer
    return ReceiptData(
        transaction_id=sale.invoice_number or str(sale.id),
        issued_at=sale.created_at,
        customer=ReceiptCustomer(
            name=customer.name,
            address=customer.address,
            email=customer.email,
            phone=customer.phone,
        ) if customer else None,
        items=[
            ReceiptItem(name=item.product.name, quantity=item.quantity, price=item.unit_price)
            for item in sale.items
        ],
        subtotal=sale.subtotal,
        tax=sale.tax_amount,
        discount=sale.discount_amount,
        total=sale.total_amount,
        payment_method=sale.payment_method.value.title(),
        amount_received=sale.amount_received,
        change=sale.change_amount,
    )


@router.get("/{sale_id}/pdf")
async def get_receipt_pdf(
    sale_id: UUID,
    user_agent: str | None = Header(None),
    current_user: CurrentUser = Depends(require_module("sales")),
    db: AsyncSession = Depends(get_db),
):
    """80mm receipt as a PDF download named ``receipt-<transaction>.pdf``."""
    sale = await load_sale(sale_id, current_user.id, db)
    data = receipt_data_for(sale)

    headers = {"Content-Disposition": f'attachment; filename="receipt-{data.transaction_id}.pdf"'}
    if is_mobile_user_agent(user_agent):
        headers["X-Download-Notice"] = RECEIPT_SAVED_NOTICE
        headers["X-Notice-Dismiss-After"] = str(NOTICE_DISMISS_SECONDS)

    return Response(content=generate_receipt_pdf(data), media_type="application/pdf", headers=headers)


@router.get("/{sale_id}/text", response_class=PlainTextResponse)
async def get_receipt_text(
    sale_id: UUID,
    width: int = 32,
    current_user: CurrentUser = Depends(require_module("sales")),
    db: AsyncSession = Depends(get_db),
):
    """Plain-text receipt preview."""
    sale = await load_sale(sale_id, current_user.id, db)
    return format_receipt_text(receipt_data_for(sale), width=width)
