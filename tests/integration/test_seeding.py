"""Integration tests for default-row seeding."""

from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker

from fundledger.models import Beneficiary, Category, FundSettings
from fundledger.services.seeding import DEFAULT_BENEFICIARY_COUNT, seed_defaults
from fundledger.services.settings_service import LedgerSettings, load_ledger_settings


def test_seed_fresh_database(engine):
    session = sessionmaker(bind=engine)()

    summary = seed_defaults(session)

    assert summary.settings_created
    assert summary.categories_created == 4
    assert summary.beneficiaries_created == DEFAULT_BENEFICIARY_COUNT
    names = session.execute(select(Beneficiary.name).order_by(Beneficiary.id)).scalars().all()
    assert names[0] == "Couple 1"
    assert names[-1] == "Couple 11"
    assert all(b == 0 for b in session.execute(select(Beneficiary.balance_cents)).scalars())
    session.close()


def test_seed_is_idempotent(db_session):
    summary = seed_defaults(db_session)

    assert not any(summary)
    assert db_session.execute(select(func.count(Category.id))).scalar_one() == 4
    assert db_session.execute(select(func.count(Beneficiary.id))).scalar_one() == 3
    assert db_session.execute(select(func.count(FundSettings.id))).scalar_one() == 1


def test_seed_keeps_existing_beneficiaries(engine):
    session = sessionmaker(bind=engine)()
    session.add(Beneficiary(name="The Silvas", balance_cents=1_200))
    session.commit()

    summary = seed_defaults(session)

    assert summary.beneficiaries_created == 0
    assert session.execute(select(Beneficiary.name)).scalars().all() == ["The Silvas"]
    session.close()


class TestLoadLedgerSettings:
    """Settings row and environment config combined."""

    def test_defaults_from_seeded_row(self, db_session):
        settings = load_ledger_settings(db_session)

        assert settings == LedgerSettings()

    def test_rotation_fields_from_row(self, db_session):
        row = db_session.get(FundSettings, 1)
        row.rotation_block_cents = 100_000
        row.rotation_start_beneficiary_id = 2
        db_session.commit()

        settings = load_ledger_settings(db_session)

        assert settings.rotation_block_cents == 100_000
        assert settings.rotation_start_beneficiary_id == 2

    def test_missing_row_uses_defaults(self, engine):
        session = sessionmaker(bind=engine)()

        assert load_ledger_settings(session).rotation_block_cents == 500_000
        session.close()
