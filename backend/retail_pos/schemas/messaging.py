from decimal import Decimal

from pydantic import BaseModel, Field


class SaleAlertRequest(BaseModel):
    transaction_id: str = Field(..., min_length=1)
    total_amount: Decimal = Field(..., ge=0)
    payment_method: str
    customer_name: str | None = None


class SaleAlertResponse(BaseModel):
    first_sale: bool
    message: str
    links: list[str]


class ReceiptMessageResponse(BaseModel):
    message: str
    link: str | None = None


class LanguagePreference(BaseModel):
    language: str = Field(..., min_length=2, max_length=10)
