"""Customer model."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from retail_pos.db.base import Base
from retail_pos.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin, OwnedMixin


class Customer(UUIDPrimaryKeyMixin, TimestampMixin, OwnedMixin, Base):
    __tablename__ = "customers"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), index=True)
    phone: Mapped[str | None] = mapped_column(String(20), index=True)
    address: Mapped[str | None] = mapped_column(Text)

    sales = relationship("Sale", back_populates="customer")

    def __repr__(self) -> str:
        return f"<Customer {self.name}>"
