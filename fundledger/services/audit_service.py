"""Audit service for logging ledger lifecycle events."""

from sqlalchemy.orm import Session

from fundledger.models.audit_log import AuditLog


class AuditService:
    """Service for audit log operations.

    Provides static method to create minimal audit log entries. The caller
    owns the transaction: entries are added to the session, never committed
    here.
    """

    @staticmethod
    def log(
        db: Session,
        entity_type: str,
        entity_id: int,
        action: str,
        changes: dict | None = None,
    ) -> AuditLog:
        """Create audit log entry (one-liner).

        Args:
            db: Database session
            entity_type: Type of entity ("allocation", "dinner")
            entity_id: Primary key of the entity
            action: Action performed ("apply", "edit", "delete", "post")
            changes: Optional JSON snapshot of changed fields

        Returns:
            Created AuditLog object
        """
        audit = AuditLog(
            entity_type=entity_type,
            entity_id=entity_id,
            action=action,
            changes=changes,
        )
        db.add(audit)
        return audit


__all__ = ["AuditService"]
