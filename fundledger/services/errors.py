"""Ledger error taxonomy.

Every error carries a stable ``code`` and the HTTP status the API layer
answers with, so handlers never need to inspect messages.
"""

from typing import Any, Dict


class LedgerError(Exception):
    """Base ledger error."""

    def __init__(self, message: str, code: str, http_status: int = 400):
        """Initialize error."""
        self.message = message
        self.code = code
        self.http_status = http_status
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable error body."""
        return {"code": self.code, "message": self.message}


class InvalidInputError(LedgerError):
    """Malformed or out-of-range amount, or missing/unknown beneficiary."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, "invalid_input", 400)


class NotFoundError(LedgerError):
    """Referenced allocation or dinner does not exist."""

    def __init__(self, message: str = "Not found"):
        super().__init__(message, "not_found", 404)


class InsufficientRemainderError(LedgerError):
    """Requested amount exceeds the available remainder."""

    def __init__(self, attempted: int, available: int):
        self.attempted = attempted
        self.available = available
        super().__init__(
            f"Requested {attempted} exceeds available remainder {available} (minor units)",
            "insufficient_remainder",
            409,
        )

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["attempted"] = self.attempted
        body["available"] = self.available
        return body


class DataDegradedError(LedgerError):
    """An optional balance source is missing. Recovered inside the calculator."""

    def __init__(self, source: str):
        self.source = source
        super().__init__(f"Balance source unavailable: {source}", "data_degraded", 500)


__all__ = [
    "LedgerError",
    "InvalidInputError",
    "NotFoundError",
    "InsufficientRemainderError",
    "DataDegradedError",
]
