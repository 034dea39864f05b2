"""Unit tests for WhatsApp templates, links and the first-sale-of-day gate."""

import asyncio
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock
from urllib.parse import unquote

import pytest

from retail_pos.services.kv_store import InMemoryKeyValueStore, RedisKeyValueStore
from retail_pos.services.whatsapp import (
    LAST_SALE_KEY,
    FIRST_SALE_TTL_SECONDS,
    build_whatsapp_url,
    business_day_end,
    business_day_of,
    business_day_start,
    format_phone_number,
    generate_sales_notification_message,
    generate_sales_receipt_message,
    is_first_sale_of_day,
    whatsapp_links_for_business,
)


# ── Business day ──────────────────────────────────

def test_business_day_boundaries():
    moment = datetime(2024, 6, 1, 9, 0)
    assert business_day_start(moment) == datetime(2024, 6, 1, 2, 0)
    assert business_day_end(moment) == datetime(2024, 6, 2, 2, 0)


@pytest.mark.parametrize(
    "moment, expected",
    [
        (datetime(2024, 6, 1, 1, 59), date(2024, 5, 31)),
        (datetime(2024, 6, 1, 2, 0), date(2024, 6, 1)),
        (datetime(2024, 6, 1, 23, 59), date(2024, 6, 1)),
    ],
)
def test_business_day_of(moment, expected):
    assert business_day_of(moment) == expected


# ── First sale gate ───────────────────────────────

@pytest.mark.asyncio
async def test_first_sale_sequence_across_days():
    store = InMemoryKeyValueStore()

    assert await is_first_sale_of_day(store, datetime(2024, 6, 1, 9, 0)) is True
    assert await is_first_sale_of_day(store, datetime(2024, 6, 1, 14, 0)) is False
    # 01:30 next calendar day still belongs to 1 June
    assert await is_first_sale_of_day(store, datetime(2024, 6, 2, 1, 30)) is False
    assert await is_first_sale_of_day(store, datetime(2024, 6, 2, 2, 5)) is True
    assert await is_first_sale_of_day(store, datetime(2024, 6, 2, 2, 6)) is False


@pytest.mark.asyncio
async def test_only_first_sale_is_recorded():
    store = InMemoryKeyValueStore()
    first = datetime(2024, 6, 1, 9, 0)

    await is_first_sale_of_day(store, first)
    await is_first_sale_of_day(store, datetime(2024, 6, 1, 15, 0))

    assert await store.get(LAST_SALE_KEY) == first.isoformat()


@pytest.mark.asyncio
async def test_sale_before_two_am_with_previous_day_sale():
    store = InMemoryKeyValueStore({LAST_SALE_KEY: datetime(2024, 5, 31, 22, 0).isoformat()})
    assert await is_first_sale_of_day(store, datetime(2024, 6, 1, 1, 59)) is False


@pytest.mark.asyncio
async def test_malformed_stored_value_counts_as_no_sale():
    store = InMemoryKeyValueStore({LAST_SALE_KEY: "yesterday-ish"})
    now = datetime(2024, 6, 1, 10, 0)
    assert await is_first_sale_of_day(store, now) is True
    assert await store.get(LAST_SALE_KEY) == now.isoformat()


@pytest.mark.asyncio
async def test_store_failure_returns_false():
    store = AsyncMock()
    store.get.side_effect = ConnectionError("redis down")
    assert await is_first_sale_of_day(store, datetime(2024, 6, 1, 10, 0)) is False
    store.set.assert_not_called()


class YieldingStore(InMemoryKeyValueStore):
    """Yields to the event loop on every read so concurrent callers interleave."""

    async def get(self, key):
        await asyncio.sleep(0)
        return await super().get(key)


@pytest.mark.asyncio
async def test_concurrent_sales_only_one_is_first():
    store = YieldingStore()
    now = datetime(2024, 6, 1, 9, 0)

    results = await asyncio.gather(*(is_first_sale_of_day(store, now) for _ in range(5)))

    assert results.count(True) == 1
    assert await store.get("firstSale:2024-06-01") == now.isoformat()


@pytest.mark.asyncio
async def test_redis_claim_uses_set_nx_with_expiry():
    client = AsyncMock()
    client.get.return_value = None
    client.set.side_effect = [True, True, None]
    store = RedisKeyValueStore(client)
    now = datetime(2024, 6, 1, 9, 0)

    assert await is_first_sale_of_day(store, now) is True
    client.set.assert_any_await(
        "retail_pos:firstSale:2024-06-01", now.isoformat(), nx=True, ex=FIRST_SALE_TTL_SECONDS,
    )
    client.set.assert_any_await("retail_pos:lastSaleTimestamp", now.isoformat())

    # Another worker already claimed the day; lastSaleTimestamp read is stale
    assert await is_first_sale_of_day(store, now) is False


# ── Links ─────────────────────────────────────────

def test_format_phone_number():
    assert format_phone_number("+255 (711) 299-266") == "+255711299266"


def test_build_whatsapp_url_encodes_message():
    url = build_whatsapp_url("+255 711 299 266", "Hi & bye\n*bold*")
    assert url.startswith("https://wa.me/+255711299266?text=")
    encoded = url.split("text=", 1)[1]
    assert " " not in encoded
    assert "&" not in encoded
    assert unquote(encoded) == "Hi & bye\n*bold*"


def test_links_for_configured_business_numbers():
    links = whatsapp_links_for_business("hello")
    assert links == [
        "https://wa.me/+255711299266?text=hello",
        "https://wa.me/+255787787088?text=hello",
    ]
    assert whatsapp_links_for_business("hello", numbers=[]) == []


# ── Templates ─────────────────────────────────────

def test_sales_notification_message():
    message = generate_sales_notification_message("TXN-9", Decimal("15000"), "Cash", "Amina")
    assert message.startswith("🔔 *NEW SALE ALERT* 🔔\n\n")
    assert "Transaction ID: TXN-9\n" in message
    assert "Amount: TSh 15,000.00\n" in message
    assert "Payment Method: Cash\n" in message
    assert "Customer: Amina\n" in message
    assert message.endswith("This is an automated notification from the POS system.")


def test_sales_notification_without_customer():
    message = generate_sales_notification_message("TXN-9", 10, "Card")
    assert "Customer:" not in message


def test_sales_receipt_message():
    message = generate_sales_receipt_message(
        transaction_id="TXN-9",
        sale_date=datetime(2024, 6, 1, 9, 0),
        customer_name="Amina",
        items=[
            {"name": "Sugar", "quantity": 2, "price": 3000},
            {"name": "Oil", "quantity": 1, "price": 4500, "totalPrice": 4000},
        ],
        subtotal=Decimal("10000"),
        discount=Decimal("500"),
        tax=Decimal("0"),
        total=Decimal("9500"),
        payment_method="Mobile",
    )
    assert "Date: 01/06/2024\n" in message
    assert "- Sugar x2: TSh 6,000.00\n" in message
    assert "- Oil x1: TSh 4,000.00\n" in message
    assert "Discount: -TSh 500.00\n" in message
    assert "Tax:" not in message
    assert "*Total: TSh 9,500.00*" in message
    assert message.endswith("Thank you for your business!")
