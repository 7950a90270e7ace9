"""Unit tests for dinner posting descriptions and matching."""

from datetime import date

from fundledger.models import Dinner
from fundledger.services.posting_service import (
    dinner_expense_description,
    dinner_label,
    dinner_revenue_description,
    legacy_revenue_description,
    posted_revenue_description,
    matches_posting,
)

JUNE_1 = date(2026, 6, 1)
JUNE_2 = date(2026, 6, 2)


class TestDinnerLabel:
    """Label fallbacks: title, date, id marker."""

    def test_title_is_stripped(self):
        assert dinner_label(Dinner(id=3, title="  Summer Gala ", dinner_date=JUNE_1)) == "Summer Gala"

    def test_date_when_no_title(self):
        assert dinner_label(Dinner(id=3, title="   ", dinner_date=JUNE_1)) == "2026-06-01"

    def test_id_when_nothing_else(self):
        assert dinner_label(Dinner(id=3)) == "#3"

    def test_descriptions(self):
        dinner = Dinner(id=3, title="Summer Gala")

        assert dinner_revenue_description(dinner) == "Dinner — Summer Gala — Revenue"
        assert dinner_expense_description(dinner) == "Dinner — Summer Gala — Expenses"

    def test_legacy_description(self):
        assert legacy_revenue_description(Dinner(id=3, dinner_date=JUNE_1)) == (
            "Dinner 2026-06-01 (ID:3) — Revenue"
        )
        assert legacy_revenue_description(Dinner(id=3)) == "Dinner #3 (ID:3) — Revenue"


class TestMatchesPosting:
    """Canonical, legacy and fallback matching."""

    def test_canonical_same_date(self):
        dinner = Dinner(id=1, title="Gala", dinner_date=JUNE_1)

        assert matches_posting(dinner, "Dinner — Gala — Revenue", JUNE_1)

    def test_canonical_with_suffix(self):
        dinner = Dinner(id=1, title="Gala", dinner_date=JUNE_1)

        assert matches_posting(dinner, "Dinner — Gala — Revenue (cash)", JUNE_1)

    def test_canonical_other_date_rejected(self):
        dinner = Dinner(id=1, title="Gala", dinner_date=JUNE_1)

        assert not matches_posting(dinner, "Dinner — Gala — Revenue", JUNE_2)
        assert not matches_posting(dinner, "Dinner — Gala — Revenue", None)

    def test_undated_dinner_ignores_movement_date(self):
        dinner = Dinner(id=1, title="Gala")

        assert matches_posting(dinner, "Dinner — Gala — Revenue", JUNE_2)

    def test_expense_description_is_not_a_posting(self):
        dinner = Dinner(id=1, title="Gala", dinner_date=JUNE_1)

        assert not matches_posting(dinner, "Dinner — Gala — Expenses", JUNE_1)

    def test_legacy_marker_matches_regardless_of_date(self):
        dinner = Dinner(id=5, dinner_date=JUNE_1)

        assert matches_posting(dinner, "Dinner 2026-06-01 (ID:5) — Revenue", None)

    def test_legacy_marker_of_other_dinner(self):
        dinner = Dinner(id=5)

        assert not matches_posting(dinner, "Dinner #55 (ID:55) — Revenue", None)

    def test_superset_match_on_label(self):
        dinner = Dinner(id=1, title="Gala", dinner_date=JUNE_1)

        assert matches_posting(dinner, "Dinner Gala - Revenue", JUNE_1)

    def test_id_label_has_no_substring_fallback(self):
        dinner = Dinner(id=5)

        assert matches_posting(dinner, "Dinner — #5 — Revenue", None)
        assert not matches_posting(dinner, "Dinner — #51 — Revenue", None)
        assert not matches_posting(dinner, "Dinner #5 leftovers Revenue", None)

    def test_empty_description(self):
        dinner = Dinner(id=1, title="Gala")

        assert not matches_posting(dinner, None, None)
        assert not matches_posting(dinner, "", None)

    def test_canonical_label_of_longer_title_rejected(self):
        """Posting "Jantar 2" does not post "Jantar" on the same date."""
        jantar = Dinner(id=1, title="Jantar", dinner_date=JUNE_1)
        jantar_2 = Dinner(id=2, title="Jantar 2", dinner_date=JUNE_1)
        description = dinner_revenue_description(jantar_2)

        assert matches_posting(jantar_2, description, JUNE_1)
        assert not matches_posting(jantar, description, JUNE_1)

    def test_other_dinner_id_marker_rejected(self):
        """Untitled dinners on one date are told apart by their id marker."""
        dinner_5 = Dinner(id=5, dinner_date=JUNE_1)
        dinner_7 = Dinner(id=7, dinner_date=JUNE_1)
        description = legacy_revenue_description(dinner_7)

        assert description == "Dinner 2026-06-01 (ID:7) — Revenue"
        assert matches_posting(dinner_7, description, JUNE_1)
        assert not matches_posting(dinner_5, description, JUNE_1)

    def test_marker_wins_over_title(self):
        dinner = Dinner(id=5, title="Gala", dinner_date=JUNE_1)

        assert not matches_posting(dinner, "Dinner Gala (ID:6) — Revenue", JUNE_1)

    def test_posted_description_matches_only_its_dinner(self):
        first = Dinner(id=5, dinner_date=JUNE_1)
        second = Dinner(id=6, dinner_date=JUNE_1)
        description = posted_revenue_description(first)

        assert description == "Dinner — 2026-06-01 — Revenue (ID:5)"
        assert matches_posting(first, description, JUNE_1)
        assert not matches_posting(second, description, JUNE_1)
