"""Rate resolution for credit simulations.

Picks the interest rate, insurance rate and discount tier ("star level") that
apply to a simulation input, from a read-only snapshot of the rate tables.

Fallback and default-selection rules are exposed as named functions so they
can be swapped or tested on their own:

- default_insurance_label(): lowest-rate candidate when the caller chose none
- PricingPolicy.interest_rate_or_fallback(): rate used when no interest row matches
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from kredit_sim.domain.errors import ValidationError
from kredit_sim.domain.simulation import (
    PaymentType,
    SimulationInput,
    SubCategory,
    VehicleCategory,
)


# ==============================================================================
# Domain Exceptions
# ==============================================================================


class NoInsuranceCandidates(ValidationError):
    """No insurance rate covers the requested category, tenor and price."""

    pass


class UnknownInsuranceLabel(ValidationError):
    """The chosen insurance label is not among the candidates for the request."""

    pass


# ==============================================================================
# Rate table entries
# ==============================================================================


class InsuranceCategory(str, Enum):
    PASSENGER = "PASSENGER"
    COMMERCIAL_USED = "COMMERCIAL_USED"
    COMMERCIAL_LOADING = "COMMERCIAL_LOADING"
    COMMERCIAL_USED_TRUCK = "COMMERCIAL_USED_TRUCK"
    COMMERCIAL_LOADING_TRUCK = "COMMERCIAL_LOADING_TRUCK"
    COMMERCIAL_USED_BUS = "COMMERCIAL_USED_BUS"
    COMMERCIAL_LOADING_BUS = "COMMERCIAL_LOADING_BUS"


class PromoVariant(str, Enum):
    """
    Computation used for the lowest-tier promotional scenario.

    INTEREST_SUPPRESSED: interest forced to 0, two installments waived
        (divisor = tenor - 2). Applies to PASSENGER + ADDB + star 1.
    REGIONAL_OVERRIDE: no down payment, insurance on an inflated base from the
        regional price bands, two installments collected upfront. Applies to
        star 1 regardless of category or payment type.
    """

    INTEREST_SUPPRESSED = "INTEREST_SUPPRESSED"
    REGIONAL_OVERRIDE = "REGIONAL_OVERRIDE"


@dataclass(frozen=True, slots=True)
class InterestRateEntry:
    category: VehicleCategory
    payment_type: PaymentType
    star_level: int
    tenor_months: int
    rate: Decimal  # annual, flat


@dataclass(frozen=True, slots=True)
class InsuranceRateEntry:
    category: InsuranceCategory
    tenor_years: int
    label: str
    min_price: Decimal
    max_price: Decimal
    rate: Decimal  # fraction of vehicle price


@dataclass(frozen=True, slots=True)
class RegionalInsuranceBand:
    max_price: Decimal | None  # None = open-ended top band
    rates_by_year: tuple[Decimal, ...]  # index 0 = tenor year 1


@dataclass(frozen=True, slots=True)
class RateTables:
    """Immutable snapshot of every rate table needed by one calculation or solver run."""

    interest_rates: tuple[InterestRateEntry, ...] = ()
    insurance_rates: tuple[InsuranceRateEntry, ...] = ()
    regional_insurance_bands: tuple[RegionalInsuranceBand, ...] = ()


# ==============================================================================
# Policy
# ==============================================================================


POLICY_FEE = Decimal("100000")
POLICY_FEE_AT_FIRST_PAYMENT = Decimal("50000")
REGIONAL_INSURANCE_SURCHARGE = Decimal("2000000")
DEFAULT_FALLBACK_INTEREST_RATE = Decimal("0")


@dataclass(frozen=True, slots=True)
class PricingPolicy:
    promo_variant: PromoVariant = PromoVariant.INTEREST_SUPPRESSED
    fallback_interest_rate: Decimal = DEFAULT_FALLBACK_INTEREST_RATE
    policy_fee: Decimal = POLICY_FEE
    policy_fee_at_first_payment: Decimal = POLICY_FEE_AT_FIRST_PAYMENT
    regional_insurance_surcharge: Decimal = REGIONAL_INSURANCE_SURCHARGE

    def interest_rate_or_fallback(self, found: Decimal | None) -> Decimal:
        return self.fallback_interest_rate if found is None else found

    def is_special_scenario(
        self,
        category: VehicleCategory,
        payment_type: PaymentType,
        star_level: int,
    ) -> bool:
        if star_level != 1:
            return False
        if self.promo_variant is PromoVariant.REGIONAL_OVERRIDE:
            return True
        return category == VehicleCategory.PASSENGER and payment_type == PaymentType.ADDB


@dataclass(frozen=True, slots=True)
class ResolvedRates:
    star_level: int
    interest_rate: Decimal
    insurance_rate: Decimal
    is_special_scenario: bool
    interest_rate_fallback: bool = False


# ==============================================================================
# Resolution steps
# ==============================================================================


# (lower bound inclusive, star level), highest band first
_STAR_BANDS: tuple[tuple[Decimal, int], ...] = (
    (Decimal("30"), 7),
    (Decimal("25"), 6),
    (Decimal("20"), 5),
    (Decimal("15"), 4),
    (Decimal("10"), 3),
    (Decimal("5"), 2),
)


def star_level(down_payment_percent: Decimal) -> int:
    for lower_bound, level in _STAR_BANDS:
        if down_payment_percent >= lower_bound:
            return level
    return 1


def insurance_category_for(
    category: VehicleCategory,
    sub_category: SubCategory,
    is_loading_unit: bool,
) -> InsuranceCategory:
    if category == VehicleCategory.PASSENGER:
        return InsuranceCategory.PASSENGER

    if sub_category == SubCategory.TRUCK:
        return (
            InsuranceCategory.COMMERCIAL_LOADING_TRUCK
            if is_loading_unit
            else InsuranceCategory.COMMERCIAL_USED_TRUCK
        )
    if sub_category == SubCategory.BUS:
        return (
            InsuranceCategory.COMMERCIAL_LOADING_BUS
            if is_loading_unit
            else InsuranceCategory.COMMERCIAL_USED_BUS
        )
    return (
        InsuranceCategory.COMMERCIAL_LOADING if is_loading_unit else InsuranceCategory.COMMERCIAL_USED
    )


def find_insurance_candidates(
    tables: RateTables,
    insurance_category: InsuranceCategory,
    tenor_months: int,
    vehicle_price: Decimal,
) -> list[InsuranceRateEntry]:
    """
    Insurance entries matching category, tenor and price band, in table order.

    The tenor must be a whole number of years: 18 months matches no entry.
    """
    tenor_years = Decimal(tenor_months) / Decimal(12)
    return [
        entry
        for entry in tables.insurance_rates
        if entry.category == insurance_category
        and entry.tenor_years == tenor_years
        and entry.min_price <= vehicle_price <= entry.max_price
    ]


def default_insurance_label(candidates: list[InsuranceRateEntry]) -> str:
    """
    Label of the lowest-rate candidate (first one wins on ties).

    Raises:
        NoInsuranceCandidates: If there is nothing to choose from
    """
    if not candidates:
        raise NoInsuranceCandidates("No insurance rate available for this vehicle and tenor")
    return min(candidates, key=lambda entry: entry.rate).label


def select_insurance_rate(candidates: list[InsuranceRateEntry], label: str | None) -> Decimal:
    """
    Rate of the candidate carrying ``label``. Never substitutes another candidate.

    Raises:
        NoInsuranceCandidates: If the candidate set is empty
        UnknownInsuranceLabel: If no candidate carries ``label``
    """
    if not candidates:
        raise NoInsuranceCandidates("No insurance rate available for this vehicle and tenor")

    for entry in candidates:
        if entry.label == label:
            return entry.rate

    raise UnknownInsuranceLabel(
        errors=[
            {
                "field": "insurance_label",
                "message": f"Must be one of {[entry.label for entry in candidates]}",
                "code": "UNKNOWN_INSURANCE_LABEL",
            }
        ]
    )


def find_interest_rate(
    tables: RateTables,
    category: VehicleCategory,
    payment_type: PaymentType,
    star_level: int,
    tenor_months: int,
) -> Decimal | None:
    for entry in tables.interest_rates:
        if (
            entry.category == category
            and entry.payment_type == payment_type
            and entry.star_level == star_level
            and entry.tenor_months == tenor_months
        ):
            return entry.rate
    return None


def regional_insurance_rate(
    bands: tuple[RegionalInsuranceBand, ...],
    vehicle_price: Decimal,
    tenor_months: int,
) -> Decimal:
    """
    Rate from the regional price bands; the tenor year is rounded up (18 months -> year 2).

    Raises:
        NoInsuranceCandidates: If no band covers the price or the band has no rate for the year
    """
    year_index = math.ceil(tenor_months / 12) - 1
    ordered = sorted(
        bands,
        key=lambda band: (band.max_price is None, band.max_price or Decimal("0")),
    )

    for band in ordered:
        if band.max_price is None or vehicle_price <= band.max_price:
            if year_index < len(band.rates_by_year):
                return band.rates_by_year[year_index]
            break

    raise NoInsuranceCandidates(
        "No regional insurance rate available for this vehicle and tenor",
        vehicle_price=str(vehicle_price),
        tenor_months=tenor_months,
    )


def resolve_rates(
    tables: RateTables,
    sim_input: SimulationInput,
    policy: PricingPolicy,
) -> ResolvedRates:
    """
    Resolve tier, interest rate and insurance rate for one input.

    The caller must already have applied default_insurance_label() when the
    input carries no label.
    """
    level = star_level(sim_input.down_payment_percent)
    special = policy.is_special_scenario(sim_input.category, sim_input.payment_type, level)

    found = find_interest_rate(
        tables,
        sim_input.category,
        sim_input.payment_type,
        level,
        sim_input.tenor_months,
    )

    if special and policy.promo_variant is PromoVariant.REGIONAL_OVERRIDE:
        insurance_rate = regional_insurance_rate(
            tables.regional_insurance_bands,
            sim_input.vehicle_price,
            sim_input.tenor_months,
        )
    else:
        candidates = find_insurance_candidates(
            tables,
            insurance_category_for(
                sim_input.category, sim_input.sub_category, sim_input.is_loading_unit
            ),
            sim_input.tenor_months,
            sim_input.vehicle_price,
        )
        insurance_rate = select_insurance_rate(candidates, sim_input.insurance_label)

    return ResolvedRates(
        star_level=level,
        interest_rate=policy.interest_rate_or_fallback(found),
        insurance_rate=insurance_rate,
        is_special_scenario=special,
        interest_rate_fallback=found is None,
    )
