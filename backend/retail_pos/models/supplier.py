"""Supplier model."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from retail_pos.db.base import Base
from retail_pos.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin, OwnedMixin


class Supplier(UUIDPrimaryKeyMixin, TimestampMixin, OwnedMixin, Base):
    __tablename__ = "suppliers"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_person: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(20))
    address: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Supplier {self.name}>"
