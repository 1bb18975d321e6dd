from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from kredit_sim.domain.rates import (
    InsuranceRateEntry,
    default_insurance_label,
    find_insurance_candidates,
    insurance_category_for,
)
from kredit_sim.domain.simulation import (
    MAX_TENOR_MONTHS,
    MAX_VEHICLE_PRICE,
    InvalidSimulationInput,
    SubCategory,
    VehicleCategory,
    available_tenors,
)
from kredit_sim.ports.rate_table_repository import RateTableRepository


@dataclass(frozen=True, slots=True)
class ListInsuranceOptionsRequest:
    category: VehicleCategory
    tenor_months: int
    vehicle_price: Decimal
    sub_category: SubCategory = SubCategory.PASSENGER
    is_loading_unit: bool = False

    def validate(self) -> None:
        if self.vehicle_price <= 0:
            raise InvalidSimulationInput("vehicle_price must be > 0")
        if self.vehicle_price > MAX_VEHICLE_PRICE:
            raise InvalidSimulationInput(f"vehicle_price must be <= {MAX_VEHICLE_PRICE}")
        if self.tenor_months <= 0:
            raise InvalidSimulationInput("tenor_months must be > 0")
        if self.tenor_months > MAX_TENOR_MONTHS:
            raise InvalidSimulationInput(f"tenor_months must be <= {MAX_TENOR_MONTHS}")


@dataclass(frozen=True, slots=True)
class ListInsuranceOptionsResponse:
    options: list[InsuranceRateEntry]
    default_label: str | None  # None when there are no options
    available_tenors: tuple[int, ...]


class ListInsuranceOptions:
    """
    List the insurance choices a caller can pick from before calculating.

    An empty option list is a valid answer here; calculating with it is not.
    """

    def __init__(self, rate_table_repository: RateTableRepository) -> None:
        self._repository = rate_table_repository

    def execute(self, request: ListInsuranceOptionsRequest) -> ListInsuranceOptionsResponse:
        request.validate()

        candidates = find_insurance_candidates(
            self._repository.load(),
            insurance_category_for(request.category, request.sub_category, request.is_loading_unit),
            request.tenor_months,
            request.vehicle_price,
        )

        return ListInsuranceOptionsResponse(
            options=candidates,
            default_label=default_insurance_label(candidates) if candidates else None,
            available_tenors=available_tenors(request.category),
        )
