"""Shared rate-table fixtures.

The schedule is small and hand-picked so expected figures can be worked out
by hand:

- Interest, PASSENGER (ADDB and ADDM) and COMMERCIAL ADDB, tenors 12 and 24:
  rate = 0.08 - 0.005 * (star - 1)  ->  star 1: 0.08, star 5: 0.06, star 7: 0.05
  (COMMERCIAL ADDM has no rows, to exercise the fallback rate)
- Insurance, PASSENGER 1 year: KOMBINASI 0.02 and ALL RISK 0.025 up to 200M,
  ALL RISK 0.022 above; 2 years: ALL RISK 0.04
- Insurance, COMMERCIAL_USED_TRUCK 1 year: 0.03; COMMERCIAL_LOADING 1 year: 0.035
- Regional bands: <= 200M -> (0.03, 0.05), open-ended -> (0.025, 0.045)
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from kredit_sim.domain.rates import (
    InsuranceCategory,
    InsuranceRateEntry,
    InterestRateEntry,
    RateTables,
    RegionalInsuranceBand,
)
from kredit_sim.domain.simulation import PaymentType, VehicleCategory


def interest_rate_for_star(star_level: int) -> Decimal:
    return Decimal("0.08") - Decimal("0.005") * (star_level - 1)


def build_rate_tables() -> RateTables:
    interest_rates = tuple(
        InterestRateEntry(
            category=category,
            payment_type=payment_type,
            star_level=star_level,
            tenor_months=tenor_months,
            rate=interest_rate_for_star(star_level),
        )
        for category, payment_type in (
            (VehicleCategory.PASSENGER, PaymentType.ADDB),
            (VehicleCategory.PASSENGER, PaymentType.ADDM),
            (VehicleCategory.COMMERCIAL, PaymentType.ADDB),
        )
        for tenor_months in (12, 24)
        for star_level in range(1, 8)
    )

    insurance_rates = (
        InsuranceRateEntry(
            category=InsuranceCategory.PASSENGER,
            tenor_years=1,
            label="ALL RISK",
            min_price=Decimal("0"),
            max_price=Decimal("200000000"),
            rate=Decimal("0.025"),
        ),
        InsuranceRateEntry(
            category=InsuranceCategory.PASSENGER,
            tenor_years=1,
            label="KOMBINASI",
            min_price=Decimal("0"),
            max_price=Decimal("200000000"),
            rate=Decimal("0.02"),
        ),
        InsuranceRateEntry(
            category=InsuranceCategory.PASSENGER,
            tenor_years=1,
            label="ALL RISK",
            min_price=Decimal("200000001"),
            max_price=Decimal("1000000000"),
            rate=Decimal("0.022"),
        ),
        InsuranceRateEntry(
            category=InsuranceCategory.PASSENGER,
            tenor_years=2,
            label="ALL RISK",
            min_price=Decimal("0"),
            max_price=Decimal("1000000000"),
            rate=Decimal("0.04"),
        ),
        InsuranceRateEntry(
            category=InsuranceCategory.COMMERCIAL_USED_TRUCK,
            tenor_years=1,
            label="ALL RISK",
            min_price=Decimal("0"),
            max_price=Decimal("1000000000"),
            rate=Decimal("0.03"),
        ),
        InsuranceRateEntry(
            category=InsuranceCategory.COMMERCIAL_LOADING,
            tenor_years=1,
            label="ALL RISK",
            min_price=Decimal("0"),
            max_price=Decimal("1000000000"),
            rate=Decimal("0.035"),
        ),
    )

    regional_insurance_bands = (
        RegionalInsuranceBand(
            max_price=None,
            rates_by_year=(Decimal("0.025"), Decimal("0.045")),
        ),
        RegionalInsuranceBand(
            max_price=Decimal("200000000"),
            rates_by_year=(Decimal("0.03"), Decimal("0.05")),
        ),
    )

    return RateTables(
        interest_rates=interest_rates,
        insurance_rates=insurance_rates,
        regional_insurance_bands=regional_insurance_bands,
    )


@pytest.fixture
def rate_tables() -> RateTables:
    return build_rate_tables()
