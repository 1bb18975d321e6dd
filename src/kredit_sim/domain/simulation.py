from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_CEILING, ROUND_HALF_UP
from enum import Enum

from kredit_sim.domain.errors import ValidationError


class InvalidSimulationInput(ValidationError):
    pass


class VehicleCategory(str, Enum):
    PASSENGER = "PASSENGER"
    COMMERCIAL = "COMMERCIAL"


class SubCategory(str, Enum):
    PASSENGER = "PASSENGER"
    TRUCK = "TRUCK"
    BUS = "BUS"


class PaymentType(str, Enum):
    """ADDB: installments in arrears. ADDM: first installment collected at signing."""

    ADDB = "ADDB"
    ADDM = "ADDM"


class TargetKind(str, Enum):
    TOTAL_FIRST_PAYMENT = "TOTAL_FIRST_PAYMENT"
    MONTHLY_INSTALLMENT = "MONTHLY_INSTALLMENT"


MIN_DOWN_PAYMENT_PERCENT = Decimal("0")
MAX_DOWN_PAYMENT_PERCENT = Decimal("99")
DEFAULT_ADMIN_FEE = Decimal("3000000")
# Keeps every derived amount well inside the 28-digit decimal context
MAX_VEHICLE_PRICE = Decimal("100000000000")
MAX_TENOR_MONTHS = 360

INTEREST_ROUNDING_MULTIPLE = 100
INSTALLMENT_ROUNDING_MULTIPLE = 10_000

TENOR_OPTIONS: dict[VehicleCategory, tuple[int, ...]] = {
    VehicleCategory.PASSENGER: (12, 24, 36, 48, 60),
    VehicleCategory.COMMERCIAL: (12, 24, 36, 48),
}


def available_tenors(category: VehicleCategory) -> tuple[int, ...]:
    """Tenor choices offered for a category. Not enforced by SimulationInput.validate()."""
    return TENOR_OPTIONS[category]


def round_to_multiple(value: Decimal, multiple: int) -> Decimal:
    """Round half-up to the nearest multiple (e.g. 7_386_049 -> 7_386_000 for 100)."""
    step = Decimal(multiple)
    return (value / step).quantize(Decimal("1"), rounding=ROUND_HALF_UP) * step


def ceil_to_multiple(value: Decimal, multiple: int) -> Decimal:
    """Round up to the next multiple (e.g. 10_873_834 -> 10_880_000 for 10_000)."""
    step = Decimal(multiple)
    return (value / step).quantize(Decimal("1"), rounding=ROUND_CEILING) * step


@dataclass(frozen=True, slots=True)
class SimulationInput:
    vehicle_price: Decimal
    down_payment_percent: Decimal
    tenor_months: int
    category: VehicleCategory
    payment_type: PaymentType
    sub_category: SubCategory = SubCategory.PASSENGER
    is_loading_unit: bool = False
    admin_fee: Decimal = DEFAULT_ADMIN_FEE
    insurance_label: str | None = None

    def validate(self) -> None:
        """
        Range and type checks only; rate tables are not consulted here.

        Raises:
            InvalidSimulationInput: If any field is out of range
        """
        # Guardrails: prevent float leakage past boundary
        for field_name in ("vehicle_price", "down_payment_percent", "admin_fee"):
            if isinstance(getattr(self, field_name), float):
                raise InvalidSimulationInput(
                    f"{field_name} must be Decimal (no floats past the boundary)"
                )

        if self.vehicle_price <= 0:
            raise InvalidSimulationInput("vehicle_price must be > 0")
        if self.vehicle_price > MAX_VEHICLE_PRICE:
            raise InvalidSimulationInput(f"vehicle_price must be <= {MAX_VEHICLE_PRICE}")
        if not MIN_DOWN_PAYMENT_PERCENT <= self.down_payment_percent <= MAX_DOWN_PAYMENT_PERCENT:
            raise InvalidSimulationInput(
                f"down_payment_percent must be between {MIN_DOWN_PAYMENT_PERCENT} "
                f"and {MAX_DOWN_PAYMENT_PERCENT}"
            )
        if self.tenor_months <= 0:
            raise InvalidSimulationInput("tenor_months must be > 0")
        if self.tenor_months > MAX_TENOR_MONTHS:
            raise InvalidSimulationInput(f"tenor_months must be <= {MAX_TENOR_MONTHS}")
        if self.admin_fee < 0:
            raise InvalidSimulationInput("admin_fee must be >= 0")
        if self.admin_fee > MAX_VEHICLE_PRICE:
            raise InvalidSimulationInput(f"admin_fee must be <= {MAX_VEHICLE_PRICE}")

    def with_down_payment_percent(self, down_payment_percent: Decimal) -> SimulationInput:
        return replace(self, down_payment_percent=down_payment_percent)

    def with_insurance_label(self, insurance_label: str) -> SimulationInput:
        return replace(self, insurance_label=insurance_label)


@dataclass(frozen=True, slots=True)
class CalculationResult:
    """
    Full credit breakdown for one down-payment percentage.

    Rates are decimal fractions (0.06 = 6% per year for interest,
    0.02 = 2% of the vehicle price for insurance).

    Invariants:
    - total_financed_amount = pure_loan_principal + insurance_amount + policy_fee
    - total_loan_amount = total_financed_amount + total_interest
    """

    star_level: int
    interest_rate: Decimal
    insurance_rate: Decimal
    vehicle_price: Decimal
    down_payment_amount: Decimal
    down_payment_percent: Decimal
    pure_loan_principal: Decimal
    insurance_amount: Decimal
    policy_fee: Decimal
    total_financed_amount: Decimal
    total_interest: Decimal
    total_loan_amount: Decimal
    installment_divisor: int
    monthly_installment: Decimal
    admin_fee: Decimal
    policy_fee_at_first_payment: Decimal
    first_installment_due_now: Decimal
    total_first_payment: Decimal
    residual_asset_value: Decimal
    is_special_scenario: bool
    # Context for surfacing soft warnings (e.g. no interest-rate row matched)
    interest_rate_fallback: bool
    category: VehicleCategory
    payment_type: PaymentType
    tenor_months: int
    insurance_label: str | None = None

    def metric(self, kind: TargetKind) -> Decimal:
        if kind is TargetKind.TOTAL_FIRST_PAYMENT:
            return self.total_first_payment
        return self.monthly_installment
