from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from kredit_sim.infra.db.models.base import Base


def _exact() -> Mapped[Decimal]:
    # Unconstrained NUMERIC: amounts are stored exactly as calculated, so a
    # reloaded record still satisfies the breakdown identities
    return mapped_column(Numeric(), nullable=False)


class SimulationRow(Base):
    __tablename__ = "simulations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Borrower
    borrower_name: Mapped[str] = mapped_column(String(100), nullable=False)
    co_borrower_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    sales_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    unit_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    plate_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    status: Mapped[str] = mapped_column(String(10), nullable=False, default="TODO", index=True)

    # Input
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    sub_category: Mapped[str] = mapped_column(String(20), nullable=False)
    is_loading_unit: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    vehicle_price: Mapped[Decimal] = _exact()
    requested_down_payment_percent: Mapped[Decimal] = _exact()
    tenor_months: Mapped[int] = mapped_column(Integer, nullable=False)
    payment_type: Mapped[str] = mapped_column(String(10), nullable=False)
    insurance_label: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Result
    star_level: Mapped[int] = mapped_column(Integer, nullable=False)
    interest_rate: Mapped[Decimal] = _exact()
    insurance_rate: Mapped[Decimal] = _exact()
    down_payment_percent: Mapped[Decimal] = _exact()
    down_payment_amount: Mapped[Decimal] = _exact()
    pure_loan_principal: Mapped[Decimal] = _exact()
    insurance_amount: Mapped[Decimal] = _exact()
    policy_fee: Mapped[Decimal] = _exact()
    total_financed_amount: Mapped[Decimal] = _exact()
    total_interest: Mapped[Decimal] = _exact()
    total_loan_amount: Mapped[Decimal] = _exact()
    installment_divisor: Mapped[int] = mapped_column(Integer, nullable=False)
    monthly_installment: Mapped[Decimal] = _exact()
    admin_fee: Mapped[Decimal] = _exact()
    policy_fee_at_first_payment: Mapped[Decimal] = _exact()
    first_installment_due_now: Mapped[Decimal] = _exact()
    total_first_payment: Mapped[Decimal] = _exact()
    residual_asset_value: Mapped[Decimal] = _exact()
    is_special_scenario: Mapped[bool] = mapped_column(Boolean, nullable=False)
    interest_rate_fallback: Mapped[bool] = mapped_column(Boolean, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
