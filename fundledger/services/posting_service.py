"""Dinner posting: canonical descriptions, detection and the post action.

A dinner is "posted" once its revenue has been copied into a revenue
movement. Posted dinners must stop contributing to the projected surplus,
otherwise their profit would be counted twice.

Description formats:
    canonical  "Dinner — <label> — Revenue"   (label = title, else ISO date, else "#<id>")
    posted     "Dinner — <label> — Revenue (ID:<id>)"   (written by the poster)
    legacy     "Dinner <date|#id> (ID:<id>) — Revenue"

Both the poster and the detector build descriptions through the functions
below; nothing else in the code base formats them.
"""

import logging
import re
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from fundledger.models.category import Category, CategoryKind
from fundledger.models.dinner import Dinner
from fundledger.models.movement import Movement
from fundledger.services.audit_service import AuditService
from fundledger.services.dinner_figures import dinner_expenses, dinner_revenue
from fundledger.services.errors import DataDegradedError, InvalidInputError, NotFoundError
from fundledger.services.settings_service import LedgerSettings
from fundledger.services.sources import available_tables, require_source

logger = logging.getLogger(__name__)

DINNERS_CATEGORY = "Dinners"
DESCRIPTION_PREFIX = "Dinner"
REVENUE_WORD = "Revenue"
EXPENSES_WORD = "Expenses"
SEPARATOR = " — "

_CANONICAL_REVENUE = re.compile(rf"^{DESCRIPTION_PREFIX}{SEPARATOR}(.+){SEPARATOR}{REVENUE_WORD}")
_ID_MARKER = re.compile(r"\(ID:(\d+)\)")


def dinner_label(dinner: Dinner) -> str:
    """Title if set, otherwise ISO date, otherwise ``#<id>``."""
    if dinner.title and dinner.title.strip():
        return dinner.title.strip()
    if dinner.dinner_date is not None:
        return dinner.dinner_date.isoformat()
    return f"#{dinner.id}"


def _label_is_id_marker(dinner: Dinner) -> bool:
    return not (dinner.title and dinner.title.strip()) and dinner.dinner_date is None


def dinner_revenue_description(dinner: Dinner) -> str:
    return SEPARATOR.join((DESCRIPTION_PREFIX, dinner_label(dinner), REVENUE_WORD))


def dinner_expense_description(dinner: Dinner) -> str:
    return SEPARATOR.join((DESCRIPTION_PREFIX, dinner_label(dinner), EXPENSES_WORD))


def dinner_id_marker(dinner: Dinner) -> str:
    """Per-id marker, unique per dinner."""
    return f"(ID:{dinner.id})"


def posted_revenue_description(dinner: Dinner) -> str:
    """Canonical revenue description followed by the id marker, as written by the poster.

    Untitled dinners sharing a date have the same label; the marker keeps
    their postings apart.
    """
    return f"{dinner_revenue_description(dinner)} {dinner_id_marker(dinner)}"


def legacy_revenue_description(dinner: Dinner) -> str:
    when = dinner.dinner_date.isoformat() if dinner.dinner_date is not None else f"#{dinner.id}"
    return f"{DESCRIPTION_PREFIX} {when} {dinner_id_marker(dinner)}{SEPARATOR}{REVENUE_WORD}"


def matches_posting(dinner: Dinner, description: str | None, movement_date: date | None) -> bool:
    """Whether a revenue movement records this dinner's revenue.

    Args:
        dinner: Dinner being checked
        description: Movement description
        movement_date: Movement date

    Returns:
        True for the canonical description on the dinner's date, for any
        description carrying the dinner's id marker, and for looser
        "Dinner ... <label> ... Revenue" texts on the dinner's date. A
        description that names another dinner, by canonical label or by id
        marker, never matches.
    """
    if not description:
        return False
    text = description.strip()

    marked_ids = {int(n) for n in _ID_MARKER.findall(text)}
    if marked_ids:
        return dinner.id in marked_ids and REVENUE_WORD in text

    if dinner.dinner_date is not None and movement_date != dinner.dinner_date:
        return False

    canonical = _CANONICAL_REVENUE.match(text)
    if canonical:
        return canonical.group(1) == dinner_label(dinner)

    # "#<id>" alone is too weak to match on substrings
    if _label_is_id_marker(dinner):
        return False

    return (
        text.startswith(DESCRIPTION_PREFIX)
        and dinner_label(dinner) in text
        and REVENUE_WORD in text
    )


class PostingDetector:
    """Decide which dinners already have a revenue movement."""

    def __init__(self, session: Session):
        """Initialize with database session.

        Args:
            session: Session for database operations
        """
        self.session = session

    def _revenue_movements(self) -> list[tuple[date | None, str]]:
        try:
            require_source(available_tables(self.session), "movements", "categories")
        except DataDegradedError as e:
            logger.warning("Posting detection degraded, no dinner treated as posted: %s", e)
            return []

        stmt = (
            select(Movement.movement_date, Movement.description)
            .join(Category, Category.id == Movement.category_id)
            .where(Category.kind == CategoryKind.REVENUE.value)
            .where(Movement.description.like(f"{DESCRIPTION_PREFIX}%"))
        )
        return [(row.movement_date, row.description) for row in self.session.execute(stmt)]

    def is_posted(self, dinner: Dinner) -> bool:
        """Check one dinner against the current movements."""
        return any(
            matches_posting(dinner, description, movement_date)
            for movement_date, description in self._revenue_movements()
        )

    def posted_dinner_ids(self, dinners: list[Dinner]) -> set[int]:
        """Batch variant of ``is_posted`` reading the movements once."""
        movements = self._revenue_movements()
        return {
            d.id
            for d in dinners
            if any(matches_posting(d, text, when) for when, text in movements)
        }


class DinnerPoster:
    """Copy a dinner's revenue and expenses into movements."""

    def __init__(self, session: Session, settings: LedgerSettings | None = None):
        self.session = session
        self.settings = settings or LedgerSettings()

    def _category(self, kind: CategoryKind) -> Category:
        category = self.session.execute(
            select(Category).where(Category.name == DINNERS_CATEGORY, Category.kind == kind.value)
        ).scalar_one_or_none()
        if category is None:
            category = Category(name=DINNERS_CATEGORY, kind=kind.value, planned_cents=0)
            self.session.add(category)
            self.session.flush()
        return category

    def post(self, dinner_id: int) -> list[Movement]:
        """Post a dinner.

        Args:
            dinner_id: Dinner to post

        Returns:
            Created movements (revenue first, then expenses when non-zero)

        Raises:
            NotFoundError: If the dinner does not exist
            InvalidInputError: If the dinner is already posted
        """
        dinner = self.session.get(Dinner, dinner_id)
        if dinner is None:
            raise NotFoundError(f"Dinner {dinner_id} not found")
        if PostingDetector(self.session).is_posted(dinner):
            raise InvalidInputError(f"Dinner {dinner_id} is already posted")

        try:
            revenue = dinner_revenue(dinner, dinner.guests, self.settings.count_only_present_guests)
            expenses = dinner_expenses(dinner, dinner.expense_lines)

            movements = [
                Movement(
                    movement_date=dinner.dinner_date,
                    category=self._category(CategoryKind.REVENUE),
                    description=posted_revenue_description(dinner),
                    amount_cents=revenue,
                )
            ]
            if expenses > 0:
                movements.append(
                    Movement(
                        movement_date=dinner.dinner_date,
                        category=self._category(CategoryKind.EXPENSE),
                        description=dinner_expense_description(dinner),
                        amount_cents=expenses,
                    )
                )
            self.session.add_all(movements)
            AuditService.log(
                self.session,
                entity_type="dinner",
                entity_id=dinner.id,
                action="post",
                changes={"revenue_cents": revenue, "expenses_cents": expenses},
            )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info(
            "Posted dinner %s (%s): revenue=%d expenses=%d",
            dinner.id,
            dinner_label(dinner),
            revenue,
            expenses,
        )
        return movements


__all__ = [
    "DINNERS_CATEGORY",
    "dinner_label",
    "dinner_revenue_description",
    "dinner_expense_description",
    "dinner_id_marker",
    "legacy_revenue_description",
    "posted_revenue_description",
    "matches_posting",
    "PostingDetector",
    "DinnerPoster",
]
