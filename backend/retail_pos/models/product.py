"""Product model."""

from decimal import Decimal

from sqlalchemy import String, Text, Numeric, Integer, Boolean, Index
from sqlalchemy.orm import Mapped, mapped_column

from retail_pos.db.base import Base
from retail_pos.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin, OwnedMixin


class Product(UUIDPrimaryKeyMixin, TimestampMixin, OwnedMixin, Base):
    __tablename__ = "products"
    __table_args__ = (
        Index("ix_products_barcode", "barcode"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    category: Mapped[str | None] = mapped_column(String(100))
    description: Mapped[str | None] = mapped_column(Text)
    barcode: Mapped[str | None] = mapped_column(String(100))
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    cost_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    stock: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Product {self.name} stock={self.stock}>"
