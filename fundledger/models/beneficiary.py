"""Beneficiary ORM model (household/couple holding allocated surplus)."""

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fundledger.models import Base, BaseModel


class Beneficiary(Base, BaseModel):
    """Fixed beneficiary account.

    ``balance_cents`` is written only by the allocation ledger and never goes
    below zero.
    """

    __tablename__ = "beneficiaries"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Display name (e.g., 'Couple 3')",
    )
    balance_cents: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Accumulated balance in minor units",
    )

    allocations: Mapped[list["Allocation"]] = relationship(  # noqa: F821
        "Allocation",
        back_populates="beneficiary",
    )

    __table_args__ = (
        CheckConstraint("balance_cents >= 0", name="ck_beneficiary_balance_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Beneficiary(id={self.id}, name={self.name!r}, balance_cents={self.balance_cents})>"


__all__ = ["Beneficiary"]
