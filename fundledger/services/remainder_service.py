"""Remainder engine: how much surplus is left to allocate to beneficiaries.

    theoretical = max(0, posted + projected - beneficiary balances)
    available   = max(0, posted - external holdings - applied)

``applied`` is the sum of every recorded allocation. Beneficiary balances
already contain those allocations, so the part of the balances credited
outside the ledger ("external holdings") is ``max(0, balances - applied)``.
``available`` is the hard ceiling for new allocations and never includes
projected dinner profit under the conservative policy.
"""

import logging
from dataclasses import asdict, dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from fundledger.models.allocation import Allocation
from fundledger.services.balance_service import BalanceCalculator, BalanceTotals
from fundledger.services.settings_service import LedgerSettings, RemainderPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemainderResult:
    theoretical_remainder: int
    applied_remainder: int
    available_remainder: int


@dataclass(frozen=True)
class RemainderSummary:
    """Everything the summary screen shows, in minor units."""

    posted_balance: int
    projected_surplus: int
    projected_balance: int
    total_beneficiary_balance: int
    theoretical_remainder: int
    applied_remainder: int
    available_remainder: int

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


class RemainderEngine:
    """Pure computation of the remainders from totals and applied allocations."""

    def __init__(self, settings: LedgerSettings | None = None):
        self.settings = settings or LedgerSettings()

    def compute(self, totals: BalanceTotals, applied: int) -> RemainderResult:
        """Derive theoretical and available remainders.

        Args:
            totals: Output of the balance calculator
            applied: Sum of all recorded allocations

        Returns:
            RemainderResult, every field >= 0
        """
        theoretical = max(
            0,
            totals.posted_balance + totals.projected_surplus - totals.total_beneficiary_balance,
        )
        external_holdings = max(0, totals.total_beneficiary_balance - applied)

        spendable = totals.posted_balance
        if self.settings.remainder_policy == RemainderPolicy.THEORETICAL:
            spendable += totals.projected_surplus

        available = max(0, spendable - external_holdings - applied)
        return RemainderResult(
            theoretical_remainder=theoretical,
            applied_remainder=applied,
            available_remainder=available,
        )

    def summarize(self, totals: BalanceTotals, applied: int) -> RemainderSummary:
        result = self.compute(totals, applied)
        return RemainderSummary(
            posted_balance=totals.posted_balance,
            projected_surplus=totals.projected_surplus,
            projected_balance=totals.projected_balance,
            total_beneficiary_balance=totals.total_beneficiary_balance,
            theoretical_remainder=result.theoretical_remainder,
            applied_remainder=result.applied_remainder,
            available_remainder=result.available_remainder,
        )


def applied_remainder(session: Session) -> int:
    """Sum of all recorded allocations."""
    stmt = select(func.coalesce(func.sum(Allocation.amount_cents), 0))
    return int(session.execute(stmt).scalar_one() or 0)


def get_remainder_summary(session: Session, settings: LedgerSettings | None = None) -> RemainderSummary:
    """Read-only summary over the current state.

    The allocation ledger validates its ceiling through this same path.
    """
    settings = settings or LedgerSettings()
    totals = BalanceCalculator(session, settings).calculate()
    summary = RemainderEngine(settings).summarize(totals, applied_remainder(session))
    logger.debug("Remainder summary: %s", summary)
    return summary


__all__ = [
    "RemainderResult",
    "RemainderSummary",
    "RemainderEngine",
    "applied_remainder",
    "get_remainder_summary",
]
