"""PostgreSQL implementation of RateTableRepository."""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from kredit_sim.domain.rates import (
    InsuranceCategory,
    InsuranceRateEntry,
    InterestRateEntry,
    RateTables,
    RegionalInsuranceBand,
)
from kredit_sim.domain.simulation import PaymentType, VehicleCategory
from kredit_sim.infra.db.models.rates import (
    InsuranceRateRow,
    InterestRateRow,
    RegionalInsuranceRateRow,
)
from kredit_sim.ports.rate_table_repository import RateTableRepository


class PostgresRateTableRepository(RateTableRepository):
    """
    PostgreSQL implementation of RateTableRepository.

    - Reads all three tables in the caller's session (one snapshot per request)
    - Keeps insurance rows in id order, so "table order" is insertion order
    - Folds regional (price band, tenor year) cells into RegionalInsuranceBand
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def load(self) -> RateTables:
        interest_rows = self._session.execute(select(InterestRateRow)).scalars().all()
        insurance_rows = (
            self._session.execute(select(InsuranceRateRow).order_by(InsuranceRateRow.id))
            .scalars()
            .all()
        )
        regional_rows = self._session.execute(select(RegionalInsuranceRateRow)).scalars().all()

        return RateTables(
            interest_rates=tuple(self._to_interest_entry(row) for row in interest_rows),
            insurance_rates=tuple(self._to_insurance_entry(row) for row in insurance_rows),
            regional_insurance_bands=self._to_regional_bands(regional_rows),
        )

    def _to_interest_entry(self, row: InterestRateRow) -> InterestRateEntry:
        return InterestRateEntry(
            category=VehicleCategory(row.category),
            payment_type=PaymentType(row.payment_type),
            star_level=row.star_level,
            tenor_months=row.tenor_months,
            rate=row.rate,
        )

    def _to_insurance_entry(self, row: InsuranceRateRow) -> InsuranceRateEntry:
        return InsuranceRateEntry(
            category=InsuranceCategory(row.category),
            tenor_years=row.tenor_years,
            label=row.label,
            min_price=row.min_price,
            max_price=row.max_price,
            rate=row.rate,
        )

    def _to_regional_bands(
        self, rows: Sequence[RegionalInsuranceRateRow]
    ) -> tuple[RegionalInsuranceBand, ...]:
        """
        Group cells by max_price; each band keeps years 1..n up to the first missing year.
        """
        by_band: dict[Decimal | None, dict[int, Decimal]] = defaultdict(dict)
        for row in rows:
            by_band[row.max_price][row.tenor_years] = row.rate

        bands = []
        for max_price, rates in by_band.items():
            rates_by_year = []
            year = 1
            while year in rates:
                rates_by_year.append(rates[year])
                year += 1
            bands.append(RegionalInsuranceBand(max_price=max_price, rates_by_year=tuple(rates_by_year)))

        bands.sort(key=lambda band: (band.max_price is None, band.max_price or Decimal("0")))
        return tuple(bands)
