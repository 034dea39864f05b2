"""WhatsApp sale alerts and receipt messages."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from retail_pos.api.receipts import load_sale
from retail_pos.core.deps import require_module
from retail_pos.db.base import get_db
from retail_pos.schemas.auth import CurrentUser
from retail_pos.schemas.messaging import ReceiptMessageResponse, SaleAlertRequest, SaleAlertResponse
from retail_pos.services.kv_store import KeyValueStore, get_kv_store
from retail_pos.services.whatsapp import (
    build_whatsapp_url,
    generate_sales_notification_message,
    generate_sales_receipt_message,
    is_first_sale_of_day,
    whatsapp_links_for_business,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/messaging", tags=["messaging"])


@router.post("/sale-alert", response_model=SaleAlertResponse)
async def sale_alert(
    body: SaleAlertRequest,
    current_user: CurrentUser = Depends(require_module("sales")),
    store: KeyValueStore = Depends(get_kv_store),
):
    """Build the new-sale alert; business links are returned only for the day's first sale."""
    first_sale = await is_first_sale_of_day(store)
    message = generate_sales_notification_message(
        body.transaction_id,
        body.total_amount,
        body.payment_method,
        body.customer_name,
    )
    links = whatsapp_links_for_business(message) if first_sale else []
    if first_sale:
        logger.info("First sale of the business day: %s", body.transaction_id)
    return SaleAlertResponse(first_sale=first_sale, message=message, links=links)


@router.get("/receipt/{sale_id}", response_model=ReceiptMessageResponse)
async def receipt_message(
    sale_id: UUID,
    phone: str | None = None,
    current_user: CurrentUser = Depends(require_module("sales")),
    db: AsyncSession = Depends(get_db),
):
    """Itemised receipt text, plus a wa.me link when ``phone`` is given."""
    sale = await load_sale(sale_id, current_user.id, db)
    message = generate_sales_receipt_message(
        transaction_id=sale.invoice_number or str(sale.id),
        sale_date=sale.created_at,
        customer_name=sale.customer.name if sale.customer else "Walk-in Customer",
        items=[
            {
                "name": item.product.name,
                "quantity": item.quantity,
                "price": item.unit_price,
                "total_price": item.total_price,
            }
            for item in sale.items
        ],
        subtotal=sale.subtotal,
        discount=sale.discount_amount,
        tax=sale.tax_amount,
        total=sale.total_amount,
        payment_method=sale.payment_method.value.title(),
    )
    link = build_whatsapp_url(phone, message) if phone else None
    return ReceiptMessageResponse(message=message, link=link)
