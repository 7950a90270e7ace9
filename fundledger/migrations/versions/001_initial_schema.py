"""Initial schema: categories, movements, collections, sponsorships, dinners,
beneficiaries, allocations, settings and audit log.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "categories",
        *_timestamps(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("kind", sa.String(length=20), nullable=False),
        sa.Column("planned_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", "kind", name="uq_category_name_kind"),
    )

    op.create_table(
        "movements",
        *_timestamps(),
        sa.Column("movement_date", sa.Date(), nullable=True),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("amount_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.CheckConstraint("amount_cents >= 0", name="ck_movement_amount_non_negative"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_movements_movement_date", "movements", ["movement_date"])
    op.create_index("ix_movements_category_id", "movements", ["category_id"])
    op.create_index("idx_movement_date_category", "movements", ["movement_date", "category_id"])

    op.create_table(
        "collections",
        *_timestamps(),
        sa.Column("collection_date", sa.Date(), nullable=True),
        sa.Column("location", sa.String(length=200), nullable=True),
        sa.Column("team", sa.String(length=200), nullable=True),
        sa.Column("amount_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "sponsorships",
        *_timestamps(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("contact", sa.String(length=200), nullable=True),
        sa.Column("kind", sa.String(length=100), nullable=True),
        sa.Column("promised_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("delivered_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "dinners",
        *_timestamps(),
        sa.Column("dinner_date", sa.Date(), nullable=True),
        sa.Column("title", sa.String(length=200), nullable=True),
        sa.Column("price_per_person_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("guest_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("expenses_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "dinner_guests",
        *_timestamps(),
        sa.Column("dinner_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("price_cents", sa.Integer(), nullable=True),
        sa.Column("paid_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("present", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("menu", sa.String(length=30), nullable=False, server_default="normal"),
        sa.ForeignKeyConstraint(["dinner_id"], ["dinners.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_dinner_guests_dinner_id", "dinner_guests", ["dinner_id"])

    op.create_table(
        "dinner_expenses",
        *_timestamps(),
        sa.Column("dinner_id", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(length=300), nullable=True),
        sa.Column("amount_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.ForeignKeyConstraint(["dinner_id"], ["dinners.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_dinner_expenses_dinner_id", "dinner_expenses", ["dinner_id"])

    op.create_table(
        "beneficiaries",
        *_timestamps(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("balance_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.CheckConstraint("balance_cents >= 0", name="ck_beneficiary_balance_non_negative"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "allocations",
        *_timestamps(),
        sa.Column("beneficiary_id", sa.Integer(), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("note", sa.String(length=300), nullable=True),
        sa.CheckConstraint("amount_cents >= 0", name="ck_allocation_amount_non_negative"),
        sa.ForeignKeyConstraint(["beneficiary_id"], ["beneficiaries.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_allocations_beneficiary_id", "allocations", ["beneficiary_id"])
    op.create_index("idx_allocation_created", "allocations", ["created_at"])

    op.create_table(
        "fund_settings",
        *_timestamps(),
        sa.Column("festival_name", sa.String(length=200), nullable=True),
        sa.Column("rotation_block_cents", sa.Integer(), nullable=False, server_default="500000"),
        sa.Column("rotation_start_beneficiary_id", sa.Integer(), nullable=True),
        sa.CheckConstraint("id = 1", name="ck_fund_settings_singleton"),
        sa.ForeignKeyConstraint(["rotation_start_beneficiary_id"], ["beneficiaries.id"]),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "audit_logs",
        *_timestamps(),
        sa.Column("entity_type", sa.String(), nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("changes", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_table("fund_settings")
    op.drop_index("idx_allocation_created", table_name="allocations")
    op.drop_index("ix_allocations_beneficiary_id", table_name="allocations")
    op.drop_table("allocations")
    op.drop_table("beneficiaries")
    op.drop_index("ix_dinner_expenses_dinner_id", table_name="dinner_expenses")
    op.drop_table("dinner_expenses")
    op.drop_index("ix_dinner_guests_dinner_id", table_name="dinner_guests")
    op.drop_table("dinner_guests")
    op.drop_table("dinners")
    op.drop_table("sponsorships")
    op.drop_table("collections")
    op.drop_index("idx_movement_date_category", table_name="movements")
    op.drop_index("ix_movements_category_id", table_name="movements")
    op.drop_index("ix_movements_movement_date", table_name="movements")
    op.drop_table("movements")
    op.drop_table("categories")
