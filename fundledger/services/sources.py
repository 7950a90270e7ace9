"""Detection of optional balance sources on partially migrated databases."""

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from fundledger.services.errors import DataDegradedError


def available_tables(session: Session) -> set[str]:
    """Names of the tables present in the session's database."""
    return set(inspect(session.connection()).get_table_names())


def require_source(tables: set[str], *names: str) -> None:
    """Raise ``DataDegradedError`` for the first missing table in ``names``."""
    for name in names:
        if name not in tables:
            raise DataDegradedError(name)


__all__ = ["available_tables", "require_source"]
