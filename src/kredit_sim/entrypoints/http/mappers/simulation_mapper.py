from __future__ import annotations

from decimal import Decimal, InvalidOperation

from kredit_sim.domain.errors import ValidationError
from kredit_sim.domain.simulation import (
    CalculationResult,
    PaymentType,
    SimulationInput,
    SubCategory,
    TargetKind,
    VehicleCategory,
)
from kredit_sim.entrypoints.http.dtos.simulation import (
    CalculationResultDTO,
    SimulationInputDTO,
    SolveBudgetRequestDTO,
)
from kredit_sim.use_cases.solve_budget import SolveBudgetRequest


def to_decimal(value: str, field: str, errors: list[dict[str, str]]) -> Decimal:
    """Parse a decimal string, collecting a field error instead of raising."""
    try:
        return Decimal(value)
    except (InvalidOperation, ValueError):
        errors.append(
            {
                "field": field,
                "message": f"Must be a valid decimal: {value}",
                "code": "INVALID_DECIMAL",
            }
        )
        return Decimal("0")  # Placeholder to continue validation


def decimal_str(value: Decimal) -> str:
    """Plain notation, never exponent form (Decimal('1E+2') -> '100')."""
    return format(value, "f")


class SimulationMapper:
    """Maps between REST DTOs and domain models for calculations and the budget solver."""

    @staticmethod
    def to_domain_input(dto: SimulationInputDTO, field_prefix: str = "") -> SimulationInput:
        """
        Converts request DTO to domain SimulationInput.

        Handles string → Decimal and string → enum conversion at the boundary.

        Raises:
            ValidationError: If string values cannot be converted to valid Decimals
        """
        errors: list[dict[str, str]] = []

        vehicle_price = to_decimal(dto.vehicle_price, f"{field_prefix}vehicle_price", errors)
        down_payment_percent = to_decimal(
            dto.down_payment_percent, f"{field_prefix}down_payment_percent", errors
        )
        admin_fee = to_decimal(dto.admin_fee, f"{field_prefix}admin_fee", errors)

        if errors:
            raise ValidationError(errors=errors)

        category = VehicleCategory(dto.category)

        return SimulationInput(
            vehicle_price=vehicle_price,
            down_payment_percent=down_payment_percent,
            tenor_months=dto.tenor_months,
            category=category,
            payment_type=PaymentType(dto.payment_type),
            # A passenger vehicle has no commercial sub-category
            sub_category=(
                SubCategory.PASSENGER
                if category is VehicleCategory.PASSENGER
                else SubCategory(dto.sub_category)
            ),
            is_loading_unit=dto.is_loading_unit,
            admin_fee=admin_fee,
            insurance_label=dto.insurance_label or None,
        )

    @staticmethod
    def to_solve_request(dto: SolveBudgetRequestDTO) -> SolveBudgetRequest:
        errors: list[dict[str, str]] = []
        target_value = to_decimal(dto.target_value, "target_value", errors)

        if errors:
            raise ValidationError(errors=errors)

        return SolveBudgetRequest(
            input=SimulationMapper.to_domain_input(dto.simulation, field_prefix="simulation."),
            target_kind=TargetKind(dto.target_kind),
            target_value=target_value,
        )

    @staticmethod
    def to_input_dto(sim_input: SimulationInput) -> SimulationInputDTO:
        return SimulationInputDTO(
            vehicle_price=decimal_str(sim_input.vehicle_price),
            down_payment_percent=decimal_str(sim_input.down_payment_percent),
            tenor_months=sim_input.tenor_months,
            category=sim_input.category.value,
            sub_category=sim_input.sub_category.value,
            is_loading_unit=sim_input.is_loading_unit,
            payment_type=sim_input.payment_type.value,
            admin_fee=decimal_str(sim_input.admin_fee),
            insurance_label=sim_input.insurance_label,
        )

    @staticmethod
    def to_response(result: CalculationResult) -> CalculationResultDTO:
        """
        Converts domain CalculationResult to response DTO.

        Handles Decimal → string conversion at the boundary.
        """
        return CalculationResultDTO(
            star_level=result.star_level,
            interest_rate=decimal_str(result.interest_rate),
            insurance_rate=decimal_str(result.insurance_rate),
            vehicle_price=decimal_str(result.vehicle_price),
            down_payment_amount=decimal_str(result.down_payment_amount),
            down_payment_percent=decimal_str(result.down_payment_percent),
            pure_loan_principal=decimal_str(result.pure_loan_principal),
            insurance_amount=decimal_str(result.insurance_amount),
            policy_fee=decimal_str(result.policy_fee),
            total_financed_amount=decimal_str(result.total_financed_amount),
            total_interest=decimal_str(result.total_interest),
            total_loan_amount=decimal_str(result.total_loan_amount),
            installment_divisor=result.installment_divisor,
            monthly_installment=decimal_str(result.monthly_installment),
            admin_fee=decimal_str(result.admin_fee),
            policy_fee_at_first_payment=decimal_str(result.policy_fee_at_first_payment),
            first_installment_due_now=decimal_str(result.first_installment_due_now),
            total_first_payment=decimal_str(result.total_first_payment),
            residual_asset_value=decimal_str(result.residual_asset_value),
            is_special_scenario=result.is_special_scenario,
            interest_rate_fallback=result.interest_rate_fallback,
            tenor_months=result.tenor_months,
            insurance_label=result.insurance_label,
        )
