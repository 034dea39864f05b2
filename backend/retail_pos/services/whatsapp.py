"""WhatsApp message templates and deep links.

Delivery is a wa.me deep link handed back to the caller; there is no
delivery confirmation, retry or queue.
"""

import logging
import re
import urllib.parse
from collections.abc import Iterable
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any

from retail_pos.core.config import settings
from retail_pos.services.currency import format_currency, format_display_date
from retail_pos.services.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

LAST_SALE_KEY = "lastSaleTimestamp"
FIRST_SALE_KEY = "firstSale:{day}"
FIRST_SALE_TTL_SECONDS = 2 * 24 * 60 * 60
WHATSAPP_URL = "https://wa.me/{number}?text={text}"

_NOT_PHONE_CHARS = re.compile(r"[^+\d]")


# ── Business day ───────────────────────────────────

def business_day_start(moment: datetime) -> datetime:
    """02:00 on the calendar date of ``moment``."""
    return datetime.combine(
        moment.date(), time(hour=settings.BUSINESS_DAY_START_HOUR), tzinfo=moment.tzinfo
    )


def business_day_end(moment: datetime) -> datetime:
    """02:00 on the following calendar date."""
    return business_day_start(moment) + timedelta(days=1)


def business_day_of(moment: datetime) -> date:
    """Calendar date of the business day ``moment`` falls in (01:59 counts as yesterday)."""
    if moment < business_day_start(moment):
        return moment.date() - timedelta(days=1)
    return moment.date()


async def is_first_sale_of_day(store: KeyValueStore, now: datetime | None = None) -> bool:
    """Check-and-record whether a sale at ``now`` opens a new business day.

    Records ``now`` as the last sale only when it returns True. An
    unreadable stored timestamp counts as no previous sale. Concurrent
    callers race on a per-business-day ``set_if_absent`` claim, so exactly
    one of them sees True.
    """
    now = now or datetime.now()
    try:
        stored = await store.get(LAST_SALE_KEY)
        if stored:
            try:
                last_sale = datetime.fromisoformat(stored)
            except ValueError:
                logger.warning("Ignoring malformed %s value: %r", LAST_SALE_KEY, stored)
            else:
                if business_day_of(last_sale) >= business_day_of(now):
                    return False

        claim = FIRST_SALE_KEY.format(day=business_day_of(now).isoformat())
        if not await store.set_if_absent(claim, now.isoformat(), ttl_seconds=FIRST_SALE_TTL_SECONDS):
            return False
        await store.set(LAST_SALE_KEY, now.isoformat())
        return True
    except Exception:
        logger.exception("Error checking if first sale of day")
        return False


# ── Links ──────────────────────────────────────────

def format_phone_number(phone_number: str) -> str:
    """Keep digits and the plus sign only."""
    return _NOT_PHONE_CHARS.sub("", phone_number)


def build_whatsapp_url(phone_number: str, message: str) -> str:
    return WHATSAPP_URL.format(
        number=format_phone_number(phone_number),
        text=urllib.parse.quote(message, safe="-_.!~*'()"),
    )


def whatsapp_links_for_business(message: str, numbers: Iterable[str] | None = None) -> list[str]:
    numbers = settings.WHATSAPP_BUSINESS_NUMBERS if numbers is None else numbers
    return [build_whatsapp_url(number, message) for number in numbers]


# ── Templates ──────────────────────────────────────

def generate_sales_notification_message(
    transaction_id: str,
    total_amount: Decimal | float,
    payment_method: str,
    customer_name: str | None = None,
) -> str:
    message = "🔔 *NEW SALE ALERT* 🔔\n\n"
    message += f"Transaction ID: {transaction_id}\n"
    message += f"Amount: {format_currency(total_amount)}\n"
    message += f"Payment Method: {payment_method}\n"

    if customer_name:
        message += f"Customer: {customer_name}\n"

    message += "\nThis is an automated notification from the POS system."
    return message


def _item_total(item: dict[str, Any]) -> Decimal:
    total_price = item.get("total_price") or item.get("totalPrice")
    if total_price:
        return Decimal(str(total_price))
    return Decimal(str(item.get("price", 0))) * int(item.get("quantity", 0))


def generate_sales_receipt_message(
    transaction_id: str,
    sale_date: datetime | str,
    customer_name: str,
    items: list[dict[str, Any]],
    subtotal: Decimal | float,
    discount: Decimal | float,
    tax: Decimal | float,
    total: Decimal | float,
    payment_method: str,
) -> str:
    message = "🧾 *SALES RECEIPT* 🧾\n\n"
    message += f"Transaction ID: {transaction_id}\n"
    message += f"Date: {format_display_date(sale_date)}\n"
    message += f"Customer: {customer_name}\n\n"

    message += "*Items:*\n"
    for item in items:
        message += f"- {item.get('name')} x{item.get('quantity')}: {format_currency(_item_total(item))}\n"

    message += f"\nSubtotal: {format_currency(subtotal)}\n"
    if discount > 0:
        message += f"Discount: -{format_currency(discount)}\n"
    if tax > 0:
        message += f"Tax: {format_currency(tax)}\n"
    message += f"*Total: {format_currency(total)}*\n\n"
    message += f"Payment Method: {payment_method}\n\n"
    message += "Thank you for your business!"
    return message
