"""SQLAlchemy base model with common fields and model exports."""

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

# Base class for all models
Base = declarative_base()


class BaseModel:
    """Base model with common timestamp fields."""

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


# Import models to register them with Base (after Base is defined)
# This must be after Base declaration to avoid circular imports
from fundledger.models.category import Category, CategoryKind  # noqa: E402
from fundledger.models.movement import Movement  # noqa: E402
from fundledger.models.collection import Collection  # noqa: E402
from fundledger.models.sponsorship import Sponsorship  # noqa: E402
from fundledger.models.dinner import Dinner, DinnerExpense, DinnerGuest  # noqa: E402
from fundledger.models.beneficiary import Beneficiary  # noqa: E402
from fundledger.models.allocation import Allocation  # noqa: E402
from fundledger.models.fund_settings import FundSettings  # noqa: E402
from fundledger.models.audit_log import AuditLog  # noqa: E402

__all__ = [
    "Base",
    "BaseModel",
    "Category",
    "CategoryKind",
    "Movement",
    "Collection",
    "Sponsorship",
    "Dinner",
    "DinnerGuest",
    "DinnerExpense",
    "Beneficiary",
    "Allocation",
    "FundSettings",
    "AuditLog",
]
