"""Receipt generation for 80mm slips (PDF) and plain-text previews."""

import io
from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from retail_pos.core.config import settings

RECEIPT_WIDTH = 80 * mm
RECEIPT_HEIGHT = 297 * mm
MARGIN = 5 * mm
MAX_ITEM_NAME = 20

FOOTER_LINES = (
    "Thank you for your business!",
    "Items sold are not returnable",
    "Visit us again soon",
)
RECEIPT_SAVED_NOTICE = "Receipt PDF saved to your device. Check your downloads folder."


class ReceiptLine(BaseModel):
    """Single line in receipt.

    ``amount`` is printed right-aligned on the same row as ``text``.
    ``rule`` lines print a separator instead of text.
    """
    text: str = ""
    amount: str | None = None
    align: Literal["left", "center", "right"] = "left"
    bold: bool = False
    rule: bool = False


class ReceiptCustomer(BaseModel):
    name: str
    address: str | None = None
    email: str | None = None
    phone: str | None = None


class ReceiptItem(BaseModel):
    """Product item in receipt."""
    name: str
    quantity: int = Field(..., ge=0)
    price: Decimal = Field(..., decimal_places=2)

    @property
    def total(self) -> Decimal:
        return self.price * self.quantity


class ReceiptData(BaseModel):
    """Transaction data for a receipt.

    Totals are optional; missing or zero figures are derived from the items.
    """
    transaction_id: str | None = None
    issued_at: datetime | None = None
    customer: ReceiptCustomer | None = None
    items: list[ReceiptItem]

    subtotal: Decimal | None = None
    tax: Decimal | None = None
    discount: Decimal | None = None
    total: Decimal | None = None

    payment_method: str | None = None
    amount_received: Decimal | None = None
    change: Decimal | None = None


class ReceiptTotals(BaseModel):
    subtotal: Decimal
    tax: Decimal
    discount: Decimal
    total: Decimal
    amount_received: Decimal
    change: Decimal


def compute_totals(data: ReceiptData) -> ReceiptTotals:
    """Fill in absent figures: total = subtotal + tax - discount, change = received - total."""
    subtotal = data.subtotal or sum((item.total for item in data.items), Decimal("0"))
    tax = data.tax or Decimal("0")
    discount = data.discount or Decimal("0")
    total = data.total or (subtotal + tax - discount)
    amount_received = data.amount_received or total
    change = data.change or (amount_received - total)
    return ReceiptTotals(
        subtotal=subtotal,
        tax=tax,
        discount=discount,
        total=total,
        amount_received=amount_received,
        change=change,
    )


def _truncate(name: str) -> str:
    return name[:MAX_ITEM_NAME] + "..." if len(name) > MAX_ITEM_NAME else name


def _money(value: Decimal) -> str:
    return f"{value:.2f}"


def generate_receipt_lines(receipt_data: ReceiptData) -> list[ReceiptLine]:
    """Generate formatted receipt lines shared by the PDF and text renderers."""
    lines: list[ReceiptLine] = []
    issued_at = receipt_data.issued_at or datetime.now()
    receipt_number = receipt_data.transaction_id or f"TXN-{int(issued_at.timestamp() * 1000)}"

    # Header - Business info
    lines.append(ReceiptLine(text=settings.BUSINESS_NAME, align="center", bold=True))
    lines.append(ReceiptLine(text=settings.BUSINESS_ADDRESS, align="center"))
    lines.append(ReceiptLine(text=f"Phone: {settings.BUSINESS_PHONE}", align="center"))
    lines.append(ReceiptLine(rule=True))

    # Transaction info
    lines.append(ReceiptLine(text=f"Receipt #: {receipt_number}"))
    lines.append(ReceiptLine(text=f"Date: {issued_at.strftime(settings.DISPLAY_DATE_FORMAT)}"))
    lines.append(ReceiptLine(text=f"Time: {issued_at.strftime('%H:%M:%S')}"))
    lines.append(ReceiptLine(rule=True))

    # Customer info
    customer = receipt_data.customer
    if customer:
        lines.append(ReceiptLine(text="Customer:", bold=True))
        lines.append(ReceiptLine(text=customer.name))
        for detail in (customer.address, customer.email, customer.phone):
            if detail:
                lines.append(ReceiptLine(text=detail))
        lines.append(ReceiptLine(rule=True))

    # Items
    lines.append(ReceiptLine(text="Items:", bold=True))
    for item in receipt_data.items:
        lines.append(ReceiptLine(
            text=f"{_truncate(item.name)}  {item.quantity} @ {_money(item.price)}",
            amount=_money(item.total),
        ))
    lines.append(ReceiptLine(rule=True))

    # Totals
    totals = compute_totals(receipt_data)
    lines.append(ReceiptLine(text="Subtotal:", amount=_money(totals.subtotal)))
    if totals.tax > 0:
        lines.append(ReceiptLine(text="Tax:", amount=_money(totals.tax)))
    if totals.discount > 0:
        lines.append(ReceiptLine(text="Discount:", amount=f"-{_money(totals.discount)}"))
    lines.append(ReceiptLine(text="TOTAL:", amount=_money(totals.total), bold=True))

    # Payment info
    lines.append(ReceiptLine(text="Payment Method:", amount=receipt_data.payment_method or "Cash"))
    lines.append(ReceiptLine(text="Amount Received:", amount=_money(totals.amount_received)))
    lines.append(ReceiptLine(text="Change:", amount=_money(totals.change)))
    lines.append(ReceiptLine(rule=True))

    # Footer
    for footer in FOOTER_LINES:
        lines.append(ReceiptLine(text=footer, align="center"))

    return lines


def format_receipt_text(receipt_data: ReceiptData, width: int = 32) -> str:
    """Generate plain text receipt for preview/testing."""
    rendered = []
    for line in generate_receipt_lines(receipt_data):
        if line.rule:
            rendered.append("-" * width)
        elif line.amount is not None:
            gap = max(width - len(line.text) - len(line.amount), 1)
            rendered.append(line.text + " " * gap + line.amount)
        elif line.align == "center":
            rendered.append(line.text.center(width).rstrip())
        elif line.align == "right":
            rendered.append(line.text.rjust(width))
        else:
            rendered.append(line.text)
    return "\n".join(rendered)


def generate_receipt_pdf(receipt_data: ReceiptData) -> bytes:
    """Draw the receipt on an 80mm x 297mm page."""
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(RECEIPT_WIDTH, RECEIPT_HEIGHT))
    y = RECEIPT_HEIGHT - 10 * mm

    for index, line in enumerate(generate_receipt_lines(receipt_data)):
        if line.rule:
            pdf.line(MARGIN, y + 2 * mm, RECEIPT_WIDTH - MARGIN, y + 2 * mm)
            y -= 3 * mm
            continue

        # Business name is the only 12pt line
        size = 12 if index == 0 else 8
        pdf.setFont("Helvetica-Bold" if line.bold else "Helvetica", size)

        if line.align == "center":
            pdf.drawCentredString(RECEIPT_WIDTH / 2, y, line.text)
        elif line.align == "right":
            pdf.drawRightString(RECEIPT_WIDTH - MARGIN, y, line.text)
        else:
            pdf.drawString(MARGIN, y, line.text)

        if line.amount is not None:
            pdf.drawRightString(RECEIPT_WIDTH - MARGIN, y, line.amount)

        y -= 5 * mm if size == 12 else 4 * mm

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()
