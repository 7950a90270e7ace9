"""Movement ORM model for posted revenue/expense entries."""

from datetime import date

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fundledger.models import Base, BaseModel


class Movement(Base, BaseModel):
    """A single posted transaction of the general ledger.

    Amounts are stored non-negative in minor units (cents); the direction
    comes from ``category.kind``. Dinner postings use the descriptions
    generated by ``fundledger.services.posting_service``.
    """

    __tablename__ = "movements"

    movement_date: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
        index=True,
        comment="Date of the movement (optional)",
    )
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id"),
        nullable=False,
        index=True,
        comment="Category carrying the revenue/expense kind",
    )
    description: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
        comment="Free-text description",
    )
    amount_cents: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Amount in minor units, always >= 0",
    )

    category: Mapped["Category"] = relationship(  # noqa: F821
        "Category",
        back_populates="movements",
    )

    __table_args__ = (
        CheckConstraint("amount_cents >= 0", name="ck_movement_amount_non_negative"),
        Index("idx_movement_date_category", "movement_date", "category_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Movement(id={self.id}, date={self.movement_date}, "
            f"category_id={self.category_id}, amount_cents={self.amount_cents})>"
        )


__all__ = ["Movement"]
