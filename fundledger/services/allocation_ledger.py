"""Allocation ledger: grant, edit and revert portions of the remainder.

Every operation runs as one unit:
1. take the process-wide ledger lock and lock the settings row
   (``SELECT ... FOR UPDATE`` where the database supports it)
2. recompute the available remainder from the current state
3. write the allocation row, the beneficiary balance and an audit entry
4. commit, or roll everything back on any error

so two concurrent grants can never both pass a stale ceiling, and the
allocation rows and the beneficiary balances never diverge.
"""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, NamedTuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from fundledger.models.allocation import Allocation
from fundledger.models.beneficiary import Beneficiary
from fundledger.models.fund_settings import SETTINGS_ROW_ID, FundSettings
from fundledger.services.audit_service import AuditService
from fundledger.services.balance_service import BalanceCalculator, BalanceTotals
from fundledger.services.errors import (
    InsufficientRemainderError,
    InvalidInputError,
    NotFoundError,
)
from fundledger.services.remainder_service import RemainderEngine, applied_remainder
from fundledger.services.settings_service import LedgerSettings

logger = logging.getLogger(__name__)

# Serializes ceiling checks and writes within this process
_LEDGER_LOCK = threading.RLock()


class AllocationHistoryItem(NamedTuple):
    """Allocation row joined with the beneficiary display name."""

    id: int
    created_at: datetime
    beneficiary_id: int
    beneficiary_name: str
    amount_cents: int
    note: str | None


def _validate_amount(amount: object, field: str = "amount") -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidInputError(f"{field} must be an integer number of minor units")
    if amount <= 0:
        raise InvalidInputError(f"{field} must be greater than zero")
    return amount


class AllocationLedger:
    """Reversible ledger of remainder allocations."""

    def __init__(self, session: Session, settings: LedgerSettings | None = None):
        """Initialize ledger.

        Args:
            session: Session for database operations (committed by the ledger)
            settings: Ledger settings used for the ceiling computation
        """
        self.session = session
        self.settings = settings or LedgerSettings()

    @contextmanager
    def _locked_transaction(self) -> Iterator[None]:
        with _LEDGER_LOCK:
            try:
                self.session.execute(
                    select(FundSettings.id)
                    .where(FundSettings.id == SETTINGS_ROW_ID)
                    .with_for_update()
                )
                yield
                self.session.commit()
            except Exception:
                self.session.rollback()
                raise

    def _ceiling(self, exclude_amount: int = 0) -> int:
        """Available remainder, optionally as if ``exclude_amount`` were not allocated."""
        totals = BalanceCalculator(self.session, self.settings).calculate()
        applied = applied_remainder(self.session)
        if exclude_amount:
            totals = BalanceTotals(
                posted_balance=totals.posted_balance,
                projected_surplus=totals.projected_surplus,
                total_beneficiary_balance=max(0, totals.total_beneficiary_balance - exclude_amount),
            )
            applied = max(0, applied - exclude_amount)
        return RemainderEngine(self.settings).compute(totals, applied).available_remainder

    def _adjust_balance(self, beneficiary: Beneficiary, delta: int, allocation_id: int) -> None:
        new_balance = (beneficiary.balance_cents or 0) + delta
        if new_balance < 0:
            logger.warning(
                "Beneficiary %s balance %d cannot absorb %d from allocation %s; clamping to 0",
                beneficiary.id,
                beneficiary.balance_cents,
                delta,
                allocation_id,
            )
            new_balance = 0
        beneficiary.balance_cents = new_balance

    def _get_allocation(self, allocation_id: int) -> Allocation:
        allocation = self.session.get(Allocation, allocation_id)
        if allocation is None:
            raise NotFoundError(f"Allocation {allocation_id} not found")
        return allocation

    def apply(self, beneficiary_id: int | None, amount_cents: int, note: str | None = None) -> Allocation:
        """Grant ``amount_cents`` of the available remainder to a beneficiary.

        Raises:
            InvalidInputError: Unknown/missing beneficiary or amount <= 0
            InsufficientRemainderError: Amount above the available remainder
        """
        if beneficiary_id is None:
            raise InvalidInputError("A beneficiary must be selected")
        amount_cents = _validate_amount(amount_cents)

        with self._locked_transaction():
            beneficiary = self.session.get(Beneficiary, beneficiary_id)
            if beneficiary is None:
                raise InvalidInputError(f"Unknown beneficiary {beneficiary_id}")

            available = self._ceiling()
            if amount_cents > available:
                logger.info(
                    "Rejected allocation to beneficiary %s: attempted=%d available=%d",
                    beneficiary_id,
                    amount_cents,
                    available,
                )
                raise InsufficientRemainderError(attempted=amount_cents, available=available)

            allocation = Allocation(beneficiary_id=beneficiary.id, amount_cents=amount_cents, note=note)
            self.session.add(allocation)
            self.session.flush()
            self._adjust_balance(beneficiary, amount_cents, allocation.id)
            AuditService.log(
                self.session,
                entity_type="allocation",
                entity_id=allocation.id,
                action="apply",
                changes={"beneficiary_id": beneficiary.id, "amount_cents": amount_cents},
            )

        logger.info(
            "Applied allocation %s: beneficiary=%s amount=%d", allocation.id, beneficiary_id, amount_cents
        )
        return allocation

    def edit(self, allocation_id: int, new_amount_cents: int) -> Allocation:
        """Change an allocation's amount, moving the beneficiary balance by the delta.

        An increase must fit in the ceiling re-derived without this
        allocation's old amount.

        Raises:
            NotFoundError: Allocation does not exist
            InvalidInputError: New amount <= 0
            InsufficientRemainderError: Increase above the available remainder
        """
        new_amount_cents = _validate_amount(new_amount_cents, "new amount")

        with self._locked_transaction():
            allocation = self._get_allocation(allocation_id)
            old_amount = allocation.amount_cents
            delta = new_amount_cents - old_amount

            if delta > 0:
                ceiling = self._ceiling(exclude_amount=old_amount)
                if new_amount_cents > ceiling:
                    available = max(0, ceiling - old_amount)
                    logger.info(
                        "Rejected edit of allocation %s: additional=%d available=%d",
                        allocation_id,
                        delta,
                        available,
                    )
                    raise InsufficientRemainderError(attempted=delta, available=available)

            if delta != 0:
                allocation.amount_cents = new_amount_cents
                self._adjust_balance(allocation.beneficiary, delta, allocation.id)
                AuditService.log(
                    self.session,
                    entity_type="allocation",
                    entity_id=allocation.id,
                    action="edit",
                    changes={
                        "beneficiary_id": allocation.beneficiary_id,
                        "old_amount_cents": old_amount,
                        "new_amount_cents": new_amount_cents,
                    },
                )

        logger.info(
            "Edited allocation %s: %d -> %d", allocation_id, old_amount, new_amount_cents
        )
        return allocation

    def delete(self, allocation_id: int) -> None:
        """Remove an allocation and take its amount back from the beneficiary.

        Raises:
            NotFoundError: Allocation does not exist
        """
        with self._locked_transaction():
            allocation = self._get_allocation(allocation_id)
            amount = allocation.amount_cents
            beneficiary_id = allocation.beneficiary_id
            self._adjust_balance(allocation.beneficiary, -amount, allocation.id)
            AuditService.log(
                self.session,
                entity_type="allocation",
                entity_id=allocation.id,
                action="delete",
                changes={"beneficiary_id": beneficiary_id, "amount_cents": amount},
            )
            self.session.delete(allocation)

        logger.info(
            "Deleted allocation %s: beneficiary=%s amount=%d", allocation_id, beneficiary_id, amount
        )

    def list_history(self) -> list[AllocationHistoryItem]:
        """All allocations, newest first, with beneficiary names."""
        stmt = (
            select(Allocation, Beneficiary.name)
            .join(Beneficiary, Beneficiary.id == Allocation.beneficiary_id)
            .order_by(Allocation.created_at.desc(), Allocation.id.desc())
        )
        return [
            AllocationHistoryItem(
                id=allocation.id,
                created_at=allocation.created_at,
                beneficiary_id=allocation.beneficiary_id,
                beneficiary_name=name,
                amount_cents=allocation.amount_cents,
                note=allocation.note,
            )
            for allocation, name in self.session.execute(stmt)
        ]


__all__ = ["AllocationHistoryItem", "AllocationLedger"]
