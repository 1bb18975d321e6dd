from decimal import Decimal

import pytest

from kredit_sim.domain.rates import (
    InsuranceCategory,
    NoInsuranceCandidates,
    PricingPolicy,
    PromoVariant,
    RateTables,
    UnknownInsuranceLabel,
    default_insurance_label,
    find_insurance_candidates,
    find_interest_rate,
    insurance_category_for,
    regional_insurance_rate,
    resolve_rates,
    select_insurance_rate,
    star_level,
)
from kredit_sim.domain.simulation import (
    PaymentType,
    SimulationInput,
    SubCategory,
    VehicleCategory,
)


def make_input(**overrides) -> SimulationInput:
    values = dict(
        vehicle_price=Decimal("150000000"),
        down_payment_percent=Decimal("20"),
        tenor_months=12,
        category=VehicleCategory.PASSENGER,
        payment_type=PaymentType.ADDB,
        insurance_label="KOMBINASI",
    )
    values.update(overrides)
    return SimulationInput(**values)


# ============================================================================
# STAR LEVEL
# ============================================================================


def test_star_level_sequence():
    percents = [Decimal(p) for p in ("0", "5", "10", "15", "20", "25", "30", "35")]

    assert [star_level(p) for p in percents] == [1, 2, 3, 4, 5, 6, 7, 7]


@pytest.mark.parametrize(
    "percent, expected",
    [
        (Decimal("4.99"), 1),
        (Decimal("9.99"), 2),
        (Decimal("19.999"), 4),
        (Decimal("29.99"), 6),
    ],
)
def test_star_level_lower_bounds_are_inclusive(percent, expected):
    assert star_level(percent) == expected


# ============================================================================
# INSURANCE CATEGORY
# ============================================================================


@pytest.mark.parametrize(
    "category, sub_category, loading, expected",
    [
        (VehicleCategory.PASSENGER, SubCategory.TRUCK, True, InsuranceCategory.PASSENGER),
        (VehicleCategory.COMMERCIAL, SubCategory.PASSENGER, False, InsuranceCategory.COMMERCIAL_USED),
        (VehicleCategory.COMMERCIAL, SubCategory.PASSENGER, True, InsuranceCategory.COMMERCIAL_LOADING),
        (VehicleCategory.COMMERCIAL, SubCategory.TRUCK, False, InsuranceCategory.COMMERCIAL_USED_TRUCK),
        (VehicleCategory.COMMERCIAL, SubCategory.TRUCK, True, InsuranceCategory.COMMERCIAL_LOADING_TRUCK),
        (VehicleCategory.COMMERCIAL, SubCategory.BUS, False, InsuranceCategory.COMMERCIAL_USED_BUS),
        (VehicleCategory.COMMERCIAL, SubCategory.BUS, True, InsuranceCategory.COMMERCIAL_LOADING_BUS),
    ],
)
def test_insurance_category_for(category, sub_category, loading, expected):
    assert insurance_category_for(category, sub_category, loading) is expected


# ============================================================================
# INSURANCE CANDIDATES AND SELECTION
# ============================================================================


def test_candidates_filter_by_category_tenor_and_price(rate_tables):
    candidates = find_insurance_candidates(
        rate_tables, InsuranceCategory.PASSENGER, 12, Decimal("150000000")
    )

    assert [(c.label, c.rate) for c in candidates] == [
        ("ALL RISK", Decimal("0.025")),
        ("KOMBINASI", Decimal("0.02")),
    ]


def test_candidates_price_band_is_inclusive(rate_tables):
    at_max = find_insurance_candidates(
        rate_tables, InsuranceCategory.PASSENGER, 12, Decimal("200000000")
    )
    above = find_insurance_candidates(
        rate_tables, InsuranceCategory.PASSENGER, 12, Decimal("200000001")
    )

    assert {c.label for c in at_max} == {"ALL RISK", "KOMBINASI"}
    assert [(c.label, c.rate) for c in above] == [("ALL RISK", Decimal("0.022"))]


def test_candidates_need_whole_year_tenor(rate_tables):
    """18 months is not a whole number of years, so nothing matches."""
    assert find_insurance_candidates(
        rate_tables, InsuranceCategory.PASSENGER, 18, Decimal("150000000")
    ) == []


def test_default_label_is_lowest_rate(rate_tables):
    candidates = find_insurance_candidates(
        rate_tables, InsuranceCategory.PASSENGER, 12, Decimal("150000000")
    )

    assert default_insurance_label(candidates) == "KOMBINASI"


def test_default_label_with_no_candidates_raises():
    with pytest.raises(NoInsuranceCandidates):
        default_insurance_label([])


def test_select_rate_by_label(rate_tables):
    candidates = find_insurance_candidates(
        rate_tables, InsuranceCategory.PASSENGER, 12, Decimal("150000000")
    )

    assert select_insurance_rate(candidates, "ALL RISK") == Decimal("0.025")


def test_select_unknown_label_raises_with_field_error(rate_tables):
    """An unknown label is rejected, never replaced by another candidate."""
    candidates = find_insurance_candidates(
        rate_tables, InsuranceCategory.PASSENGER, 12, Decimal("150000000")
    )

    with pytest.raises(UnknownInsuranceLabel) as exc_info:
        select_insurance_rate(candidates, "TLO")

    assert exc_info.value.errors[0]["field"] == "insurance_label"
    assert exc_info.value.errors[0]["code"] == "UNKNOWN_INSURANCE_LABEL"


def test_select_from_empty_candidates_raises():
    with pytest.raises(NoInsuranceCandidates, match="No insurance rate available"):
        select_insurance_rate([], "ALL RISK")


# ============================================================================
# INTEREST AND REGIONAL RATES
# ============================================================================


def test_find_interest_rate_exact_match(rate_tables):
    rate = find_interest_rate(rate_tables, VehicleCategory.PASSENGER, PaymentType.ADDB, 5, 12)

    assert rate == Decimal("0.06")


def test_find_interest_rate_missing_returns_none(rate_tables):
    assert find_interest_rate(rate_tables, VehicleCategory.COMMERCIAL, PaymentType.ADDM, 5, 12) is None
    assert find_interest_rate(rate_tables, VehicleCategory.PASSENGER, PaymentType.ADDB, 5, 36) is None


@pytest.mark.parametrize(
    "price, tenor, expected",
    [
        (Decimal("150000000"), 12, Decimal("0.03")),
        (Decimal("200000000"), 12, Decimal("0.03")),
        (Decimal("150000000"), 18, Decimal("0.05")),
        (Decimal("150000000"), 24, Decimal("0.05")),
        (Decimal("500000000"), 12, Decimal("0.025")),
    ],
)
def test_regional_rate_by_band_and_year(rate_tables, price, tenor, expected):
    assert regional_insurance_rate(rate_tables.regional_insurance_bands, price, tenor) == expected


def test_regional_rate_beyond_band_years_raises(rate_tables):
    with pytest.raises(NoInsuranceCandidates, match="regional"):
        regional_insurance_rate(rate_tables.regional_insurance_bands, Decimal("150000000"), 36)


# ============================================================================
# POLICY
# ============================================================================


def test_fallback_rate_used_only_when_missing():
    policy = PricingPolicy(fallback_interest_rate=Decimal("0.07"))

    assert policy.interest_rate_or_fallback(None) == Decimal("0.07")
    assert policy.interest_rate_or_fallback(Decimal("0")) == Decimal("0")


def test_interest_suppressed_scenario_needs_passenger_addb_star_1():
    policy = PricingPolicy()

    assert policy.is_special_scenario(VehicleCategory.PASSENGER, PaymentType.ADDB, 1)
    assert not policy.is_special_scenario(VehicleCategory.PASSENGER, PaymentType.ADDB, 2)
    assert not policy.is_special_scenario(VehicleCategory.PASSENGER, PaymentType.ADDM, 1)
    assert not policy.is_special_scenario(VehicleCategory.COMMERCIAL, PaymentType.ADDB, 1)


def test_regional_override_scenario_needs_star_1_only():
    policy = PricingPolicy(promo_variant=PromoVariant.REGIONAL_OVERRIDE)

    assert policy.is_special_scenario(VehicleCategory.COMMERCIAL, PaymentType.ADDM, 1)
    assert not policy.is_special_scenario(VehicleCategory.PASSENGER, PaymentType.ADDB, 2)


# ============================================================================
# RESOLVE
# ============================================================================


def test_resolve_standard_rates(rate_tables):
    rates = resolve_rates(rate_tables, make_input(), PricingPolicy())

    assert rates.star_level == 5
    assert rates.interest_rate == Decimal("0.06")
    assert rates.insurance_rate == Decimal("0.02")
    assert rates.is_special_scenario is False
    assert rates.interest_rate_fallback is False


def test_resolve_flags_interest_fallback(rate_tables):
    sim_input = make_input(
        category=VehicleCategory.COMMERCIAL,
        sub_category=SubCategory.TRUCK,
        payment_type=PaymentType.ADDM,
        insurance_label="ALL RISK",
    )
    policy = PricingPolicy(fallback_interest_rate=Decimal("0.07"))

    rates = resolve_rates(rate_tables, sim_input, policy)

    assert rates.interest_rate == Decimal("0.07")
    assert rates.interest_rate_fallback is True
    assert rates.insurance_rate == Decimal("0.03")


def test_resolve_special_scenario_at_star_1(rate_tables):
    rates = resolve_rates(rate_tables, make_input(down_payment_percent=Decimal("4.99")), PricingPolicy())

    assert rates.star_level == 1
    assert rates.is_special_scenario is True


def test_resolve_regional_override_uses_band_rate(rate_tables):
    policy = PricingPolicy(promo_variant=PromoVariant.REGIONAL_OVERRIDE)

    rates = resolve_rates(rate_tables, make_input(down_payment_percent=Decimal("0")), policy)

    assert rates.insurance_rate == Decimal("0.03")
    assert rates.interest_rate == Decimal("0.08")


def test_resolve_with_no_insurance_candidates_raises(rate_tables):
    with pytest.raises(NoInsuranceCandidates):
        resolve_rates(rate_tables, make_input(tenor_months=36), PricingPolicy())


def test_resolve_with_empty_tables_raises():
    with pytest.raises(NoInsuranceCandidates):
        resolve_rates(RateTables(), make_input(), PricingPolicy())
