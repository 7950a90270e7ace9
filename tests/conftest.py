"""Pytest configuration: in-memory databases and ledger data builders."""

import os

# Set test database URL BEFORE any imports from fundledger
# This ensures the module-level engine never touches a file database
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine, select  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from fundledger.models import (  # noqa: E402
    Base,
    Beneficiary,
    Category,
    CategoryKind,
    Collection,
    Dinner,
    DinnerExpense,
    DinnerGuest,
    Movement,
    Sponsorship,
)
from fundledger.services.seeding import GENERIC_CATEGORY, seed_defaults  # noqa: E402


def _memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def engine():
    """Fresh in-memory engine with every table created."""
    engine = _memory_engine()
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Session seeded with settings, default categories and three beneficiaries."""
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    seed_defaults(session, beneficiary_count=3)
    yield session
    session.close()


class FundBuilder:
    """Small helpers to put ledger facts into a session."""

    def __init__(self, session):
        self.session = session

    def category(self, kind: CategoryKind, name: str = GENERIC_CATEGORY) -> Category:
        return self.session.execute(
            select(Category).where(Category.name == name, Category.kind == kind.value)
        ).scalar_one()

    def movement(
        self,
        kind: CategoryKind,
        amount_cents: int,
        description: str | None = None,
        on: date | None = None,
        category: str = GENERIC_CATEGORY,
    ) -> Movement:
        movement = Movement(
            movement_date=on,
            category_id=self.category(kind, category).id,
            description=description,
            amount_cents=amount_cents,
        )
        self.session.add(movement)
        self.session.commit()
        return movement

    def revenue(self, amount_cents: int, **kwargs) -> Movement:
        return self.movement(CategoryKind.REVENUE, amount_cents, **kwargs)

    def expense(self, amount_cents: int, **kwargs) -> Movement:
        return self.movement(CategoryKind.EXPENSE, amount_cents, **kwargs)

    def collection(self, amount_cents: int, location: str = "Main street") -> Collection:
        collection = Collection(location=location, amount_cents=amount_cents)
        self.session.add(collection)
        self.session.commit()
        return collection

    def sponsorship(self, delivered_cents: int, promised_cents: int = 0, name: str = "Bakery") -> Sponsorship:
        sponsorship = Sponsorship(
            name=name, promised_cents=promised_cents, delivered_cents=delivered_cents
        )
        self.session.add(sponsorship)
        self.session.commit()
        return sponsorship

    def dinner(
        self,
        title: str | None = None,
        on: date | None = None,
        price_per_person_cents: int = 0,
        guest_count: int = 0,
        expenses_cents: int = 0,
        guests: list[tuple[int, bool]] | None = None,
        expense_lines: list[int] | None = None,
    ) -> Dinner:
        """Create a dinner; ``guests`` is a list of (paid_cents, present)."""
        dinner = Dinner(
            title=title,
            dinner_date=on,
            price_per_person_cents=price_per_person_cents,
            guest_count=guest_count,
            expenses_cents=expenses_cents,
        )
        for i, (paid, present) in enumerate(guests or [], start=1):
            dinner.guests.append(DinnerGuest(name=f"Guest {i}", paid_cents=paid, present=present))
        for amount in expense_lines or []:
            dinner.expense_lines.append(DinnerExpense(description="Supplies", amount_cents=amount))
        self.session.add(dinner)
        self.session.commit()
        return dinner

    def beneficiary(self, beneficiary_id: int) -> Beneficiary:
        beneficiary = self.session.get(Beneficiary, beneficiary_id)
        self.session.refresh(beneficiary)
        return beneficiary


@pytest.fixture
def fund(db_session):
    """Builder bound to the seeded session."""
    return FundBuilder(db_session)
