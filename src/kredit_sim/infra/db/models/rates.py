from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from kredit_sim.infra.db.models.base import Base


class InterestRateRow(Base):
    __tablename__ = "interest_rates"
    __table_args__ = (
        UniqueConstraint("category", "payment_type", "star_level", "tenor_months"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    payment_type: Mapped[str] = mapped_column(String(10), nullable=False)
    star_level: Mapped[int] = mapped_column(Integer, nullable=False)
    tenor_months: Mapped[int] = mapped_column(Integer, nullable=False)
    rate: Mapped[Decimal] = mapped_column(Numeric(precision=8, scale=6), nullable=False)


class InsuranceRateRow(Base):
    __tablename__ = "insurance_rates"
    __table_args__ = (UniqueConstraint("category", "tenor_years", "label", "min_price"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category: Mapped[str] = mapped_column(String(40), nullable=False)
    tenor_years: Mapped[int] = mapped_column(Integer, nullable=False)
    label: Mapped[str] = mapped_column(String(100), nullable=False)
    min_price: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=2), nullable=False)
    max_price: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=2), nullable=False)
    rate: Mapped[Decimal] = mapped_column(Numeric(precision=8, scale=6), nullable=False)


class RegionalInsuranceRateRow(Base):
    """One (price band, tenor year) cell of the regional insurance schedule."""

    __tablename__ = "regional_insurance_rates"
    __table_args__ = (UniqueConstraint("max_price", "tenor_years"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    max_price: Mapped[Decimal | None] = mapped_column(
        Numeric(precision=15, scale=2), nullable=True
    )  # NULL = open-ended top band
    tenor_years: Mapped[int] = mapped_column(Integer, nullable=False)
    rate: Mapped[Decimal] = mapped_column(Numeric(precision=8, scale=6), nullable=False)
