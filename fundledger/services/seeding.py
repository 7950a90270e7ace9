"""Idempotent seeding of default rows.

Creates the settings singleton, the default categories and the fixed set of
beneficiaries. Safe to run at every start-up: existing rows are left alone.
"""

import logging
from typing import NamedTuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from fundledger.models.beneficiary import Beneficiary
from fundledger.models.category import Category, CategoryKind
from fundledger.models.fund_settings import SETTINGS_ROW_ID, FundSettings
from fundledger.services.posting_service import DINNERS_CATEGORY

logger = logging.getLogger(__name__)

GENERIC_CATEGORY = "Generic"
DEFAULT_CATEGORIES = [
    (GENERIC_CATEGORY, CategoryKind.REVENUE),
    (GENERIC_CATEGORY, CategoryKind.EXPENSE),
    (DINNERS_CATEGORY, CategoryKind.REVENUE),
    (DINNERS_CATEGORY, CategoryKind.EXPENSE),
]
DEFAULT_BENEFICIARY_COUNT = 11


class SeedSummary(NamedTuple):
    settings_created: bool
    categories_created: int
    beneficiaries_created: int


def seed_defaults(db: Session, beneficiary_count: int = DEFAULT_BENEFICIARY_COUNT) -> SeedSummary:
    """Insert missing default rows and commit.

    Args:
        db: Database session
        beneficiary_count: Beneficiaries to create when the table is empty

    Returns:
        SeedSummary with what was created
    """
    try:
        settings_created = False
        if db.get(FundSettings, SETTINGS_ROW_ID) is None:
            db.add(FundSettings(id=SETTINGS_ROW_ID))
            settings_created = True

        categories_created = 0
        for name, kind in DEFAULT_CATEGORIES:
            exists = db.execute(
                select(Category.id).where(Category.name == name, Category.kind == kind.value)
            ).first()
            if exists is None:
                db.add(Category(name=name, kind=kind.value, planned_cents=0))
                categories_created += 1

        beneficiaries_created = 0
        if db.execute(select(func.count(Beneficiary.id))).scalar_one() == 0:
            for i in range(1, beneficiary_count + 1):
                db.add(Beneficiary(name=f"Couple {i}", balance_cents=0))
            beneficiaries_created = beneficiary_count

        db.commit()
    except Exception:
        db.rollback()
        raise

    summary = SeedSummary(settings_created, categories_created, beneficiaries_created)
    if any(summary):
        logger.info("Seeded defaults: %s", summary._asdict())
    return summary


__all__ = ["SeedSummary", "seed_defaults", "GENERIC_CATEGORY", "DEFAULT_CATEGORIES"]
