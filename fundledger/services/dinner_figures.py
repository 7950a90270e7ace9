"""Per-dinner revenue and expense figures.

Pure functions over a dinner and its (already loaded) guests and expense
lines. Shared by the balance calculator and the dinner poster so that the
projection and the posted movements always agree.
"""

from typing import Sequence

from fundledger.models.dinner import Dinner, DinnerExpense, DinnerGuest


def dinner_revenue(
    dinner: Dinner,
    guests: Sequence[DinnerGuest] | None = None,
    only_present: bool = False,
) -> int:
    """Revenue actually collected for a dinner, in minor units.

    With registered guests this is the sum of what they paid (optionally
    only guests marked present). Without guests it falls back to the legacy
    ``guest_count * price_per_person_cents``.
    """
    if guests:
        return sum(g.paid_cents or 0 for g in guests if g.present or not only_present)
    return (dinner.guest_count or 0) * (dinner.price_per_person_cents or 0)


def dinner_expected_revenue(dinner: Dinner, guests: Sequence[DinnerGuest] | None = None) -> int:
    """Revenue the dinner should bring in, honoring per-guest price overrides."""
    base = dinner.price_per_person_cents or 0
    if guests:
        return sum(g.price_cents if g.price_cents is not None else base for g in guests)
    return (dinner.guest_count or 0) * base


def dinner_expenses(dinner: Dinner, expense_lines: Sequence[DinnerExpense] | None = None) -> int:
    """Sum of the expense lines, or the aggregate field when there are none."""
    if expense_lines:
        return sum(e.amount_cents or 0 for e in expense_lines)
    return dinner.expenses_cents or 0


def dinner_profit(
    dinner: Dinner,
    guests: Sequence[DinnerGuest] | None = None,
    expense_lines: Sequence[DinnerExpense] | None = None,
    only_present: bool = False,
) -> int:
    """Revenue minus expenses (may be negative)."""
    return dinner_revenue(dinner, guests, only_present) - dinner_expenses(dinner, expense_lines)


__all__ = ["dinner_revenue", "dinner_expected_revenue", "dinner_expenses", "dinner_profit"]
