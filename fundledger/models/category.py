"""Category ORM model: tags movements as revenue or expense."""

from enum import Enum

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fundledger.models import Base, BaseModel


class CategoryKind(str, Enum):
    """Direction of money for every movement in a category."""

    REVENUE = "revenue"
    """Money coming into the fund."""

    EXPENSE = "expense"
    """Money leaving the fund."""


class Category(Base, BaseModel):
    """Ledger category.

    The sign of a movement is never stored on the movement itself: amounts are
    non-negative and the category kind decides whether they add to or subtract
    from the posted balance.
    """

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Category name (e.g., 'Generic', 'Dinners')",
    )
    kind: Mapped[CategoryKind] = mapped_column(
        String(20),
        nullable=False,
        comment="'revenue' or 'expense'",
    )
    planned_cents: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Budgeted amount in minor units (informational)",
    )

    movements: Mapped[list["Movement"]] = relationship(  # noqa: F821
        "Movement",
        back_populates="category",
    )

    __table_args__ = (UniqueConstraint("name", "kind", name="uq_category_name_kind"),)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name!r}, kind={self.kind})>"


__all__ = ["Category", "CategoryKind"]
