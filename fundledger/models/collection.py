"""Collection ORM model (door-to-door fundraising, always revenue)."""

from datetime import date

from sqlalchemy import Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from fundledger.models import Base, BaseModel


class Collection(Base, BaseModel):
    """Fixed-income collection event."""

    __tablename__ = "collections"

    collection_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    team: Mapped[str | None] = mapped_column(String(200), nullable=True)
    amount_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<Collection(id={self.id}, location={self.location!r}, amount_cents={self.amount_cents})>"


__all__ = ["Collection"]
