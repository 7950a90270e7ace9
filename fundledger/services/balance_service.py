"""Balance calculation service for the festival fund.

Posted balance formula:
    Revenue movements - Expense movements + Collections + Delivered sponsorships

Projected surplus:
    Sum over dinners not yet posted of (dinner revenue - dinner expenses)

Total beneficiary balance:
    Sum of every beneficiary's accumulated balance

All figures are integers in minor units. The calculator only reads. A source
whose table does not exist yet (partially migrated database) contributes
zero and is logged as degraded instead of failing the whole computation.
"""

import logging
from collections import defaultdict
from typing import NamedTuple

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from fundledger.models.beneficiary import Beneficiary
from fundledger.models.category import Category, CategoryKind
from fundledger.models.collection import Collection
from fundledger.models.dinner import Dinner, DinnerExpense, DinnerGuest
from fundledger.models.movement import Movement
from fundledger.models.sponsorship import Sponsorship
from fundledger.services.dinner_figures import dinner_profit
from fundledger.services.errors import DataDegradedError
from fundledger.services.posting_service import PostingDetector
from fundledger.services.settings_service import LedgerSettings
from fundledger.services.sources import available_tables, require_source

logger = logging.getLogger(__name__)


class BalanceTotals(NamedTuple):
    """Aggregated balances, in minor units."""

    posted_balance: int
    projected_surplus: int
    total_beneficiary_balance: int

    @property
    def projected_balance(self) -> int:
        return self.posted_balance + self.projected_surplus


class BalanceCalculator:
    """Aggregate the ledger store into posted, projected and beneficiary totals."""

    def __init__(self, session: Session, settings: LedgerSettings | None = None):
        """Initialize with database session.

        Args:
            session: Session for database operations
            settings: Ledger settings (guest counting rule)
        """
        self.session = session
        self.settings = settings or LedgerSettings()
        self._tables: set[str] | None = None

    @property
    def tables(self) -> set[str]:
        if self._tables is None:
            self._tables = available_tables(self.session)
        return self._tables

    def _sum(self, stmt: Select, *sources: str) -> int:
        """Run a scalar SUM, treating a missing source as zero."""
        try:
            require_source(self.tables, *sources)
        except DataDegradedError as e:
            logger.warning("Balance source degraded, counting as zero: %s", e)
            return 0
        return int(self.session.execute(stmt).scalar_one() or 0)

    def _movement_total(self, kind: CategoryKind) -> int:
        stmt = (
            select(func.coalesce(func.sum(Movement.amount_cents), 0))
            .select_from(Movement)
            .join(Category, Category.id == Movement.category_id)
            .where(Category.kind == kind.value)
        )
        return self._sum(stmt, "movements", "categories")

    def posted_balance(self) -> int:
        """Revenue - expenses + collections + delivered sponsorships."""
        revenue = self._movement_total(CategoryKind.REVENUE)
        expenses = self._movement_total(CategoryKind.EXPENSE)
        collections = self._sum(
            select(func.coalesce(func.sum(Collection.amount_cents), 0)), "collections"
        )
        sponsorships = self._sum(
            select(func.coalesce(func.sum(Sponsorship.delivered_cents), 0)), "sponsorships"
        )
        logger.debug(
            "posted: revenue=%d expenses=%d collections=%d sponsorships=%d",
            revenue,
            expenses,
            collections,
            sponsorships,
        )
        return revenue - expenses + collections + sponsorships

    def _grouped(self, model, source: str) -> dict[int, list]:
        """Load child rows of dinners grouped by ``dinner_id``."""
        grouped: dict[int, list] = defaultdict(list)
        try:
            require_source(self.tables, source)
        except DataDegradedError as e:
            logger.warning("Dinner source degraded, using legacy fields: %s", e)
            return grouped
        for row in self.session.execute(select(model).order_by(model.id)).scalars():
            grouped[row.dinner_id].append(row)
        return grouped

    def projected_surplus(self) -> int:
        """Profit of dinners whose revenue is not yet in the movements."""
        try:
            require_source(self.tables, "dinners")
        except DataDegradedError as e:
            logger.warning("Balance source degraded, counting as zero: %s", e)
            return 0

        dinners = list(self.session.execute(select(Dinner).order_by(Dinner.id)).scalars())
        if not dinners:
            return 0

        guests = self._grouped(DinnerGuest, "dinner_guests")
        expense_lines = self._grouped(DinnerExpense, "dinner_expenses")
        posted_ids = PostingDetector(self.session).posted_dinner_ids(dinners)

        total = 0
        for dinner in dinners:
            if dinner.id in posted_ids:
                continue
            total += dinner_profit(
                dinner,
                guests.get(dinner.id),
                expense_lines.get(dinner.id),
                only_present=self.settings.count_only_present_guests,
            )
        return total

    def total_beneficiary_balance(self) -> int:
        return self._sum(
            select(func.coalesce(func.sum(Beneficiary.balance_cents), 0)), "beneficiaries"
        )

    def calculate(self) -> BalanceTotals:
        """Compute all three totals from the current state."""
        self._tables = None
        return BalanceTotals(
            posted_balance=self.posted_balance(),
            projected_surplus=self.projected_surplus(),
            total_beneficiary_balance=self.total_beneficiary_balance(),
        )


__all__ = ["BalanceTotals", "BalanceCalculator"]
