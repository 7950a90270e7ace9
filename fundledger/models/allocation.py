"""Allocation ORM model: a grant of remainder to one beneficiary."""

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fundledger.models import Base, BaseModel


class Allocation(Base, BaseModel):
    """Portion of the available remainder granted to a beneficiary.

    Lifecycle: created -> (edited)* -> deleted. Every mutation adjusts
    ``beneficiary.balance_cents`` by the same delta in the same transaction.
    """

    __tablename__ = "allocations"

    beneficiary_id: Mapped[int] = mapped_column(
        ForeignKey("beneficiaries.id"),
        nullable=False,
        index=True,
    )
    amount_cents: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Allocated amount in minor units",
    )
    note: Mapped[str | None] = mapped_column(String(300), nullable=True)

    beneficiary: Mapped["Beneficiary"] = relationship(  # noqa: F821
        "Beneficiary",
        back_populates="allocations",
    )

    __table_args__ = (
        CheckConstraint("amount_cents >= 0", name="ck_allocation_amount_non_negative"),
        Index("idx_allocation_created", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Allocation(id={self.id}, beneficiary_id={self.beneficiary_id}, "
            f"amount_cents={self.amount_cents})>"
        )


__all__ = ["Allocation"]
