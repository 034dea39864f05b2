"""Money and date display helpers (en-TZ conventions)."""

import re
from datetime import date, datetime
from decimal import Decimal

from retail_pos.core.config import settings

_NON_NUMERIC = re.compile(r"[^0-9.\-]+")
_LEADING_NUMBER = re.compile(r"-?(\d+(\.\d*)?|\.\d+)")


def format_currency(amount: Decimal | float | int, symbol: str | None = None) -> str:
    """Format ``amount`` as e.g. ``TSh 1,234.50`` (``-TSh 5.00`` for negatives)."""
    symbol = symbol or settings.CURRENCY_SYMBOL
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol} {abs(value):,.2f}"


def parse_currency(text: str) -> float:
    """Parse a formatted amount back to a number; garbage parses as 0.

    Only the leading numeric part counts, so ``"1.2.3"`` parses as ``1.2``.
    """
    cleaned = _NON_NUMERIC.sub("", text or "")
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return 0.0
    return float(match.group(0))


def format_display_date(value: datetime | date | str) -> str:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return value.strftime(settings.DISPLAY_DATE_FORMAT)
