from __future__ import annotations

from kredit_sim.domain.errors import ValidationError
from kredit_sim.domain.simulation import SubCategory, VehicleCategory
from kredit_sim.entrypoints.http.dtos.rates import (
    InsuranceOptionDTO,
    InsuranceOptionsQueryDTO,
    InsuranceOptionsResponseDTO,
)
from kredit_sim.entrypoints.http.mappers.simulation_mapper import decimal_str, to_decimal
from kredit_sim.use_cases.list_insurance_options import (
    ListInsuranceOptionsRequest,
    ListInsuranceOptionsResponse,
)


class InsuranceOptionsMapper:
    """Maps between REST DTOs and the insurance-option listing."""

    @staticmethod
    def to_domain_request(dto: InsuranceOptionsQueryDTO) -> ListInsuranceOptionsRequest:
        errors: list[dict[str, str]] = []
        vehicle_price = to_decimal(dto.vehicle_price, "vehicle_price", errors)

        if errors:
            raise ValidationError(errors=errors)

        category = VehicleCategory(dto.category)
        return ListInsuranceOptionsRequest(
            category=category,
            sub_category=(
                SubCategory.PASSENGER
                if category is VehicleCategory.PASSENGER
                else SubCategory(dto.sub_category)
            ),
            is_loading_unit=dto.is_loading_unit,
            tenor_months=dto.tenor_months,
            vehicle_price=vehicle_price,
        )

    @staticmethod
    def to_response(response: ListInsuranceOptionsResponse) -> InsuranceOptionsResponseDTO:
        return InsuranceOptionsResponseDTO(
            options=[
                InsuranceOptionDTO(
                    label=option.label,
                    rate=decimal_str(option.rate),
                    min_price=decimal_str(option.min_price),
                    max_price=decimal_str(option.max_price),
                )
                for option in response.options
            ],
            default_label=response.default_label,
            available_tenors=list(response.available_tenors),
        )
