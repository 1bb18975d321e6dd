from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from kredit_sim.domain.rates import (
    PricingPolicy,
    PromoVariant,
    RateTables,
    ResolvedRates,
    default_insurance_label,
    find_insurance_candidates,
    insurance_category_for,
    resolve_rates,
)
from kredit_sim.domain.simulation import (
    INSTALLMENT_ROUNDING_MULTIPLE,
    INTEREST_ROUNDING_MULTIPLE,
    CalculationResult,
    InvalidSimulationInput,
    PaymentType,
    SimulationInput,
    ceil_to_multiple,
    round_to_multiple,
)
from kredit_sim.ports.rate_table_repository import RateTableRepository

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
MONTHS_PER_YEAR = Decimal("12")
WAIVED_INSTALLMENTS = 2
UPFRONT_INSTALLMENTS = 2


def calculate(
    sim_input: SimulationInput,
    rates: ResolvedRates,
    policy: PricingPolicy = PricingPolicy(),
) -> CalculationResult:
    """
    Turn an input plus its resolved rates into the full credit breakdown.

    Pure and deterministic. Rounding is applied exactly twice, in this order:
    - total interest: half-up to the nearest 100
    - monthly installment: up to the next 10,000

    Special scenario (lowest tier), depending on policy.promo_variant:
    - INTEREST_SUPPRESSED: interest rate forced to 0 and the loan spread over
      tenor - 2 installments
    - REGIONAL_OVERRIDE: no down payment; insurance charged on
      price + surcharge; two installments collected at signing instead

    Raises:
        InvalidSimulationInput: If the input is out of range or the installment
            divisor would be <= 0
    """
    sim_input.validate()

    price = sim_input.vehicle_price
    tenor = sim_input.tenor_months
    suppressed = rates.is_special_scenario and policy.promo_variant is PromoVariant.INTEREST_SUPPRESSED
    regional = rates.is_special_scenario and policy.promo_variant is PromoVariant.REGIONAL_OVERRIDE

    interest_rate = ZERO if suppressed else rates.interest_rate

    if regional:
        down_payment_percent = ZERO
        insurance_base = price + policy.regional_insurance_surcharge
    else:
        down_payment_percent = sim_input.down_payment_percent
        insurance_base = price

    down_payment_amount = price * (down_payment_percent / Decimal("100"))
    pure_loan_principal = price - down_payment_amount
    insurance_amount = insurance_base * rates.insurance_rate
    policy_fee = policy.policy_fee

    total_financed_amount = pure_loan_principal + insurance_amount + policy_fee
    raw_interest = total_financed_amount * interest_rate * (Decimal(tenor) / MONTHS_PER_YEAR)
    total_interest = round_to_multiple(raw_interest, INTEREST_ROUNDING_MULTIPLE)
    total_loan_amount = total_financed_amount + total_interest

    installment_divisor = tenor - WAIVED_INSTALLMENTS if suppressed else tenor
    if installment_divisor <= 0:
        raise InvalidSimulationInput(
            f"tenor_months must be > {WAIVED_INSTALLMENTS} for the promotional scenario",
            tenor_months=tenor,
        )

    monthly_installment = ceil_to_multiple(
        total_loan_amount / Decimal(installment_divisor), INSTALLMENT_ROUNDING_MULTIPLE
    )

    if regional:
        first_installment_due_now = monthly_installment * UPFRONT_INSTALLMENTS
    elif sim_input.payment_type == PaymentType.ADDM:
        first_installment_due_now = monthly_installment
    else:
        first_installment_due_now = ZERO

    total_first_payment = (
        down_payment_amount
        + sim_input.admin_fee
        + policy.policy_fee_at_first_payment
        + first_installment_due_now
    )

    return CalculationResult(
        star_level=rates.star_level,
        interest_rate=interest_rate,
        insurance_rate=rates.insurance_rate,
        vehicle_price=price,
        down_payment_amount=down_payment_amount,
        down_payment_percent=down_payment_percent,
        pure_loan_principal=pure_loan_principal,
        insurance_amount=insurance_amount,
        policy_fee=policy_fee,
        total_financed_amount=total_financed_amount,
        total_interest=total_interest,
        total_loan_amount=total_loan_amount,
        installment_divisor=installment_divisor,
        monthly_installment=monthly_installment,
        admin_fee=sim_input.admin_fee,
        policy_fee_at_first_payment=policy.policy_fee_at_first_payment,
        first_installment_due_now=first_installment_due_now,
        total_first_payment=total_first_payment,
        residual_asset_value=price - total_first_payment,
        is_special_scenario=rates.is_special_scenario,
        interest_rate_fallback=rates.interest_rate_fallback,
        category=sim_input.category,
        payment_type=sim_input.payment_type,
        tenor_months=tenor,
        insurance_label=sim_input.insurance_label,
    )


def apply_default_insurance_label(tables: RateTables, sim_input: SimulationInput) -> SimulationInput:
    """
    Fill in the lowest-rate insurance label when the caller chose none.

    Inputs that already carry a label, or that have no candidates at all, are
    returned unchanged; resolve_rates() decides whether that is an error.
    """
    if sim_input.insurance_label:
        return sim_input

    candidates = find_insurance_candidates(
        tables,
        insurance_category_for(sim_input.category, sim_input.sub_category, sim_input.is_loading_unit),
        sim_input.tenor_months,
        sim_input.vehicle_price,
    )
    if not candidates:
        return sim_input

    return sim_input.with_insurance_label(default_insurance_label(candidates))


def log_interest_fallback(result: CalculationResult, policy: PricingPolicy) -> None:
    if result.interest_rate_fallback:
        logger.warning(
            "No interest rate configured, using fallback rate",
            extra={
                "category": result.category.value,
                "payment_type": result.payment_type.value,
                "star_level": result.star_level,
                "tenor_months": result.tenor_months,
                "fallback_interest_rate": str(policy.fallback_interest_rate),
            },
        )


@dataclass(frozen=True, slots=True)
class CalculateCreditSimulation:
    """
    Calculate a credit breakdown for one down-payment percentage.

    Steps:
    - Validate the input (range and type checks)
    - Take one snapshot of the rate tables
    - Apply the default insurance label when none was chosen
    - Resolve tier and rates, then run calculate()
    """

    rate_table_repository: RateTableRepository
    policy: PricingPolicy = field(default_factory=PricingPolicy)

    def execute(self, sim_input: SimulationInput) -> CalculationResult:
        sim_input.validate()

        tables = self.rate_table_repository.load()
        sim_input = apply_default_insurance_label(tables, sim_input)

        rates = resolve_rates(tables, sim_input, self.policy)
        result = calculate(sim_input, rates, self.policy)

        log_interest_fallback(result, self.policy)
        return result
