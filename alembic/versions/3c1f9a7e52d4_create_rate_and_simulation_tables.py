"""Create rate tables and simulations

Revision ID: 3c1f9a7e52d4
Revises:
Create Date: 2026-10-19 09:12:41.508113

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7e52d4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


RATE = sa.Numeric(precision=8, scale=6)
MONEY = sa.Numeric(precision=15, scale=2)
# Simulation figures keep every digit the calculation produced
EXACT = sa.Numeric()


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "interest_rates",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("category", sa.String(length=20), nullable=False),
        sa.Column("payment_type", sa.String(length=10), nullable=False),
        sa.Column("star_level", sa.Integer(), nullable=False),
        sa.Column("tenor_months", sa.Integer(), nullable=False),
        sa.Column("rate", RATE, nullable=False),
        sa.UniqueConstraint("category", "payment_type", "star_level", "tenor_months"),
    )

    op.create_table(
        "insurance_rates",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("category", sa.String(length=40), nullable=False),
        sa.Column("tenor_years", sa.Integer(), nullable=False),
        sa.Column("label", sa.String(length=100), nullable=False),
        sa.Column("min_price", MONEY, nullable=False),
        sa.Column("max_price", MONEY, nullable=False),
        sa.Column("rate", RATE, nullable=False),
        sa.UniqueConstraint("category", "tenor_years", "label", "min_price"),
    )

    op.create_table(
        "regional_insurance_rates",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("max_price", MONEY, nullable=True),
        sa.Column("tenor_years", sa.Integer(), nullable=False),
        sa.Column("rate", RATE, nullable=False),
        sa.UniqueConstraint("max_price", "tenor_years"),
    )

    op.create_table(
        "simulations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("borrower_name", sa.String(length=100), nullable=False),
        sa.Column("co_borrower_name", sa.String(length=100), nullable=True),
        sa.Column("sales_name", sa.String(length=100), nullable=True),
        sa.Column("unit_name", sa.String(length=100), nullable=True),
        sa.Column("plate_number", sa.String(length=20), nullable=True),
        sa.Column("status", sa.String(length=10), nullable=False),
        sa.Column("category", sa.String(length=20), nullable=False),
        sa.Column("sub_category", sa.String(length=20), nullable=False),
        sa.Column("is_loading_unit", sa.Boolean(), nullable=False),
        sa.Column("vehicle_price", EXACT, nullable=False),
        sa.Column("requested_down_payment_percent", EXACT, nullable=False),
        sa.Column("tenor_months", sa.Integer(), nullable=False),
        sa.Column("payment_type", sa.String(length=10), nullable=False),
        sa.Column("insurance_label", sa.String(length=100), nullable=True),
        sa.Column("star_level", sa.Integer(), nullable=False),
        sa.Column("interest_rate", EXACT, nullable=False),
        sa.Column("insurance_rate", EXACT, nullable=False),
        sa.Column("down_payment_percent", EXACT, nullable=False),
        sa.Column("down_payment_amount", EXACT, nullable=False),
        sa.Column("pure_loan_principal", EXACT, nullable=False),
        sa.Column("insurance_amount", EXACT, nullable=False),
        sa.Column("policy_fee", EXACT, nullable=False),
        sa.Column("total_financed_amount", EXACT, nullable=False),
        sa.Column("total_interest", EXACT, nullable=False),
        sa.Column("total_loan_amount", EXACT, nullable=False),
        sa.Column("installment_divisor", sa.Integer(), nullable=False),
        sa.Column("monthly_installment", EXACT, nullable=False),
        sa.Column("admin_fee", EXACT, nullable=False),
        sa.Column("policy_fee_at_first_payment", EXACT, nullable=False),
        sa.Column("first_installment_due_now", EXACT, nullable=False),
        sa.Column("total_first_payment", EXACT, nullable=False),
        sa.Column("residual_asset_value", EXACT, nullable=False),
        sa.Column("is_special_scenario", sa.Boolean(), nullable=False),
        sa.Column("interest_rate_fallback", sa.Boolean(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_simulations_status", "simulations", ["status"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_simulations_status", table_name="simulations")
    op.drop_table("simulations")
    op.drop_table("regional_insurance_rates")
    op.drop_table("insurance_rates")
    op.drop_table("interest_rates")
