#!/usr/bin/env python3
"""
Seed the rate tables with a reference schedule.

Features:
- Deterministic: rates come from fixed formulas, no randomness
- Idempotent: safe to run multiple times (clears before seeding)
- Covers every category / payment type / star level / tenor the API offers

Usage:
    python scripts/seed_rates.py
"""

from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from kredit_sim.domain.rates import InsuranceCategory
from kredit_sim.domain.simulation import TENOR_OPTIONS, PaymentType, VehicleCategory
from kredit_sim.infra.db.models.rates import (
    InsuranceRateRow,
    InterestRateRow,
    RegionalInsuranceRateRow,
)
from kredit_sim.infra.db.session import get_session


# ==============================================================================
# Interest schedule (annual flat rate)
# ==============================================================================

# Star 1 rate for a 1-year tenor
BASE_INTEREST_RATES = {
    (VehicleCategory.PASSENGER, PaymentType.ADDB): Decimal("0.0650"),
    (VehicleCategory.PASSENGER, PaymentType.ADDM): Decimal("0.0600"),
    (VehicleCategory.COMMERCIAL, PaymentType.ADDB): Decimal("0.0800"),
    (VehicleCategory.COMMERCIAL, PaymentType.ADDM): Decimal("0.0750"),
}
INTEREST_STEP_PER_YEAR = Decimal("0.0050")
STAR_DISCOUNT = Decimal("0.0025")  # per star above 1


# ==============================================================================
# Insurance schedule (fraction of vehicle price)
# ==============================================================================

# (min_price, max_price), both inclusive
PRICE_BANDS = [
    (Decimal("0"), Decimal("125000000")),
    (Decimal("125000001"), Decimal("200000000")),
    (Decimal("200000001"), Decimal("400000000")),
    (Decimal("400000001"), Decimal("800000000")),
    (Decimal("800000001"), Decimal("9999999999999")),
]

# Year-1 rate per label for the cheapest band
BASE_INSURANCE_RATES = {
    "ALL RISK": Decimal("0.0250"),
    "KOMBINASI": Decimal("0.0180"),
}
INSURANCE_STEP_PER_YEAR = Decimal("0.0150")  # cumulative premium for each extra year
INSURANCE_BAND_DISCOUNT = Decimal("0.0010")  # per band above the cheapest
COMMERCIAL_LOADING = Decimal("0.0040")

REGIONAL_BAND_LIMITS = [Decimal("100000000"), Decimal("200000000"), Decimal("400000000"), None]
REGIONAL_BASE_RATE = Decimal("0.0300")
REGIONAL_STEP_PER_YEAR = Decimal("0.0200")
REGIONAL_BAND_DISCOUNT = Decimal("0.0020")
REGIONAL_MAX_YEARS = 5


# ==============================================================================
# Row generation
# ==============================================================================


def generate_interest_rows() -> list[InterestRateRow]:
    rows = []
    for (category, payment_type), base in BASE_INTEREST_RATES.items():
        for tenor_months in TENOR_OPTIONS[category]:
            years = tenor_months // 12
            for star_level in range(1, 8):
                rate = base + INTEREST_STEP_PER_YEAR * (years - 1) - STAR_DISCOUNT * (star_level - 1)
                rows.append(
                    InterestRateRow(
                        category=category.value,
                        payment_type=payment_type.value,
                        star_level=star_level,
                        tenor_months=tenor_months,
                        rate=rate,
                    )
                )
    return rows


def generate_insurance_rows() -> list[InsuranceRateRow]:
    rows = []
    for insurance_category in InsuranceCategory:
        is_passenger = insurance_category is InsuranceCategory.PASSENGER
        max_years = 5 if is_passenger else 4
        loading = COMMERCIAL_LOADING if "LOADING" in insurance_category.value else Decimal("0")

        for years in range(1, max_years + 1):
            for band_index, (min_price, max_price) in enumerate(PRICE_BANDS):
                for label, base in BASE_INSURANCE_RATES.items():
                    rate = (
                        base
                        + INSURANCE_STEP_PER_YEAR * (years - 1)
                        - INSURANCE_BAND_DISCOUNT * band_index
                        + loading
                    )
                    rows.append(
                        InsuranceRateRow(
                            category=insurance_category.value,
                            tenor_years=years,
                            label=label,
                            min_price=min_price,
                            max_price=max_price,
                            rate=rate,
                        )
                    )
    return rows


def generate_regional_rows() -> list[RegionalInsuranceRateRow]:
    rows = []
    for band_index, max_price in enumerate(REGIONAL_BAND_LIMITS):
        for years in range(1, REGIONAL_MAX_YEARS + 1):
            rate = (
                REGIONAL_BASE_RATE
                + REGIONAL_STEP_PER_YEAR * (years - 1)
                - REGIONAL_BAND_DISCOUNT * band_index
            )
            rows.append(RegionalInsuranceRateRow(max_price=max_price, tenor_years=years, rate=rate))
    return rows


def seed_rates() -> None:
    """Replace every rate table with the reference schedule."""
    print("🌱 Seeding rate tables...")

    with get_session() as session:
        # Step 1: Clear existing data (idempotent)
        for model in (InterestRateRow, InsuranceRateRow, RegionalInsuranceRateRow):
            deleted_count = session.query(model).delete()
            print(f"🗑️  Deleted {deleted_count} rows from {model.__tablename__}")

        # Step 2: Insert the schedule
        interest_rows = generate_interest_rows()
        insurance_rows = generate_insurance_rows()
        regional_rows = generate_regional_rows()

        session.add_all([*interest_rows, *insurance_rows, *regional_rows])
        session.flush()

        print(f"✅ {len(interest_rows)} interest rates")
        print(f"✅ {len(insurance_rows)} insurance rates")
        print(f"✅ {len(regional_rows)} regional insurance rates")


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    try:
        seed_rates()
    except Exception as e:
        print(f"❌ Error seeding database: {e}", file=sys.stderr)
        sys.exit(1)
