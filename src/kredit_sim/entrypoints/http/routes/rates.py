from typing import Literal

from fastapi import APIRouter, Depends, Query

from kredit_sim.domain.simulation import VehicleCategory, available_tenors
from kredit_sim.entrypoints.http.dependencies import get_list_insurance_options_use_case
from kredit_sim.entrypoints.http.dtos.rates import (
    InsuranceOptionsQueryDTO,
    InsuranceOptionsResponseDTO,
    TenorOptionsResponseDTO,
)
from kredit_sim.entrypoints.http.error_responses import ErrorResponse
from kredit_sim.entrypoints.http.mappers.rates_mapper import InsuranceOptionsMapper
from kredit_sim.use_cases.list_insurance_options import ListInsuranceOptions


router = APIRouter(tags=["Rates"])


@router.get(
    "/tenors",
    response_model=TenorOptionsResponseDTO,
    summary="List tenor options",
    description="Tenors offered for a category: up to 60 months for PASSENGER, 48 for COMMERCIAL.",
)
def get_tenors(
    category: Literal["PASSENGER", "COMMERCIAL"] = Query(examples=["PASSENGER"]),
) -> TenorOptionsResponseDTO:
    return TenorOptionsResponseDTO(
        category=category,
        tenors=list(available_tenors(VehicleCategory(category))),
    )


@router.get(
    "/insurance-options",
    response_model=InsuranceOptionsResponseDTO,
    summary="List insurance options",
    description="""
    Insurance rates matching the vehicle category, tenor (whole years) and price band.

    `default_label` is the lowest-rate option, which calculations use when no
    `insurance_label` is sent. An empty list means calculations for this
    vehicle and tenor will be rejected.

    ## Example
    ```
    GET /v1/insurance-options?category=PASSENGER&tenor_months=12&vehicle_price=150000000
    ```
    """,
    responses={422: {"model": ErrorResponse, "description": "Validation error"}},
)
def get_insurance_options(
    query: InsuranceOptionsQueryDTO = Depends(),
    use_case: ListInsuranceOptions = Depends(get_list_insurance_options_use_case),
) -> InsuranceOptionsResponseDTO:
    request = InsuranceOptionsMapper.to_domain_request(query)
    response = use_case.execute(request)
    return InsuranceOptionsMapper.to_response(response)
