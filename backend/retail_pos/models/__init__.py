"""SQLAlchemy models for the retail POS backend."""

from retail_pos.models.user import User
from retail_pos.models.product import Product
from retail_pos.models.customer import Customer
from retail_pos.models.supplier import Supplier
from retail_pos.models.sale import Sale, SaleItem, PaymentMethod

__all__ = [
    "User",
    "Product",
    "Customer",
    "Supplier",
    "Sale",
    "SaleItem",
    "PaymentMethod",
]
