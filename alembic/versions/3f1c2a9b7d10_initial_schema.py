"""initial schema

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "3f1c2a9b7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "rooms",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("room_type", sa.Text, nullable=False, server_default=""),
        sa.Column("status", sa.String(20), nullable=False, server_default="available"),
        sa.Column("rent", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("deposit", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("electricity_meter", sa.Integer, nullable=False, server_default="0"),
        sa.Column("water_meter", sa.Integer, nullable=False, server_default="0"),
        sa.Column("pending_electricity", sa.Integer, nullable=True),
        sa.Column("pending_water", sa.Integer, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "(pending_electricity IS NULL AND pending_water IS NULL) "
            "OR (pending_electricity IS NOT NULL AND pending_water IS NOT NULL)",
            name="ck_rooms_pending_pair",
        ),
        sa.CheckConstraint(
            "pending_electricity IS NULL OR pending_electricity >= electricity_meter",
            name="ck_rooms_pending_electricity",
        ),
        sa.CheckConstraint(
            "pending_water IS NULL OR pending_water >= water_meter",
            name="ck_rooms_pending_water",
        ),
    )

    op.create_table(
        "invoices",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("room_id", sa.Integer, sa.ForeignKey("rooms.id"), nullable=False),
        sa.Column("month", sa.Integer, nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("rent_amount", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("old_electricity", sa.Integer, nullable=False),
        sa.Column("new_electricity", sa.Integer, nullable=False),
        sa.Column("electricity_rate", sa.BigInteger, nullable=False),
        sa.Column("electricity_usage", sa.Integer, nullable=False),
        sa.Column("electricity_cost", sa.BigInteger, nullable=False),
        sa.Column("old_water", sa.Integer, nullable=False),
        sa.Column("new_water", sa.Integer, nullable=False),
        sa.Column("water_rate", sa.BigInteger, nullable=False),
        sa.Column("water_usage", sa.Integer, nullable=False),
        sa.Column("water_cost", sa.BigInteger, nullable=False),
        sa.Column("internet_fee", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("trash_fee", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("other_fees", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("total", sa.BigInteger, nullable=False),
        sa.Column("paid", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_invoices_period", "invoices", ["year", "month"])
    op.create_index("ix_invoices_room_id", "invoices", ["room_id"])

    op.create_table(
        "expenses",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("amount", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("category", sa.String(100), nullable=False, server_default=""),
        sa.Column("date", sa.String(32), nullable=True),
        sa.Column("month", sa.Integer, nullable=True),
        sa.Column("year", sa.Integer, nullable=True),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_expenses_period", "expenses", ["year", "month"])

    op.create_table(
        "tariff_settings",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("electricity_rate", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("water_rate", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("internet_fee", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("trash_fee", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("other_fees", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("tariff_settings")
    op.drop_index("ix_expenses_period", table_name="expenses")
    op.drop_table("expenses")
    op.drop_index("ix_invoices_room_id", table_name="invoices")
    op.drop_index("ix_invoices_period", table_name="invoices")
    op.drop_table("invoices")
    op.drop_table("rooms")
