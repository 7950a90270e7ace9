"""Sponsorship ORM model."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from fundledger.models import Base, BaseModel


class Sponsorship(Base, BaseModel):
    """Sponsor pledge.

    ``promised_cents`` is informational; only ``delivered_cents`` counts
    toward the posted balance.
    """

    __tablename__ = "sponsorships"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    contact: Mapped[str | None] = mapped_column(String(200), nullable=True)
    kind: Mapped[str | None] = mapped_column(String(100), nullable=True)
    promised_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    delivered_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return (
            f"<Sponsorship(id={self.id}, name={self.name!r}, "
            f"promised={self.promised_cents}, delivered={self.delivered_cents})>"
        )


__all__ = ["Sponsorship"]
