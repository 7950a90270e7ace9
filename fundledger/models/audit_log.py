"""Audit log model for tracking allocation ledger events."""

from typing import Any

from sqlalchemy import JSON
from sqlalchemy.orm import Mapped, mapped_column

from fundledger.models import Base, BaseModel


class AuditLog(Base, BaseModel):
    """Audit log entry for tracking changes to key entities.

    Records what (action) happened to which entity (entity_type, entity_id)
    and optional field snapshots (changes).
    """

    __tablename__ = "audit_logs"

    entity_type: Mapped[str] = mapped_column(index=False)
    """Entity type being audited: "allocation", "dinner"."""

    entity_id: Mapped[int] = mapped_column(index=False)
    """Primary key of the entity being audited."""

    action: Mapped[str] = mapped_column(index=False)
    """Action performed: "apply", "edit", "delete", "post"."""

    changes: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True, index=False)
    """Optional JSON snapshot of changed fields: {"old_amount": 4000, "new_amount": 5000}."""

    def __repr__(self) -> str:
        return (
            f"<AuditLog(id={self.id}, entity_type={self.entity_type}, entity_id={self.entity_id}, "
            f"action={self.action}, created_at={self.created_at})>"
        )


__all__ = ["AuditLog"]
