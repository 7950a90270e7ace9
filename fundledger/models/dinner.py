"""Dinner ORM models: dinners, their guests and expense line items."""

from datetime import date

from sqlalchemy import Boolean, Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fundledger.models import Base, BaseModel


class Dinner(Base, BaseModel):
    """Fund-raising dinner.

    Revenue is speculative until the dinner is posted (copied into
    movements). Older records only carry ``guest_count`` and an aggregate
    ``expenses_cents``; newer ones register guests and expense lines.
    """

    __tablename__ = "dinners"

    dinner_date: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
        comment="Date of the dinner (optional)",
    )
    title: Mapped[str | None] = mapped_column(
        String(200),
        nullable=True,
        comment="Optional display title",
    )
    price_per_person_cents: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Base per-person price in minor units",
    )
    guest_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Declared guest count (legacy, used when no guests are registered)",
    )
    expenses_cents: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Aggregate expenses (used when no expense lines exist)",
    )

    guests: Mapped[list["DinnerGuest"]] = relationship(
        "DinnerGuest",
        back_populates="dinner",
        cascade="all, delete-orphan",
        order_by="DinnerGuest.id",
    )
    expense_lines: Mapped[list["DinnerExpense"]] = relationship(
        "DinnerExpense",
        back_populates="dinner",
        cascade="all, delete-orphan",
        order_by="DinnerExpense.id",
    )

    def __repr__(self) -> str:
        return f"<Dinner(id={self.id}, date={self.dinner_date}, title={self.title!r})>"


class DinnerGuest(Base, BaseModel):
    """Guest registered for a dinner."""

    __tablename__ = "dinner_guests"

    dinner_id: Mapped[int] = mapped_column(
        ForeignKey("dinners.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    price_cents: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Individual price override (falls back to dinner base price)",
    )
    paid_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    present: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    menu: Mapped[str] = mapped_column(String(30), nullable=False, default="normal")

    dinner: Mapped["Dinner"] = relationship("Dinner", back_populates="guests")

    def __repr__(self) -> str:
        return (
            f"<DinnerGuest(id={self.id}, dinner_id={self.dinner_id}, "
            f"paid_cents={self.paid_cents}, present={self.present})>"
        )


class DinnerExpense(Base, BaseModel):
    """Expense line item of a dinner."""

    __tablename__ = "dinner_expenses"

    dinner_id: Mapped[int] = mapped_column(
        ForeignKey("dinners.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(String(300), nullable=True)
    amount_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    dinner: Mapped["Dinner"] = relationship("Dinner", back_populates="expense_lines")


__all__ = ["Dinner", "DinnerGuest", "DinnerExpense"]
