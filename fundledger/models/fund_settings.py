"""Fund settings singleton row."""

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from fundledger.models import Base, BaseModel

SETTINGS_ROW_ID = 1
DEFAULT_ROTATION_BLOCK_CENTS = 500000


class FundSettings(Base, BaseModel):
    """Singleton settings row (``id`` is always 1).

    The row doubles as the serialization point for allocation writes: the
    ledger locks it with ``SELECT ... FOR UPDATE`` before re-checking the
    ceiling.
    """

    __tablename__ = "fund_settings"

    festival_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    rotation_block_cents: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=DEFAULT_ROTATION_BLOCK_CENTS,
        comment="Rotation block size in minor units (informational)",
    )
    rotation_start_beneficiary_id: Mapped[int | None] = mapped_column(
        ForeignKey("beneficiaries.id"),
        nullable=True,
        comment="Beneficiary that starts the round-robin cycle",
    )

    __table_args__ = (CheckConstraint(f"id = {SETTINGS_ROW_ID}", name="ck_fund_settings_singleton"),)

    def __repr__(self) -> str:
        return (
            f"<FundSettings(block={self.rotation_block_cents}, "
            f"start_beneficiary_id={self.rotation_start_beneficiary_id})>"
        )


__all__ = ["FundSettings", "SETTINGS_ROW_ID", "DEFAULT_ROTATION_BLOCK_CENTS"]
