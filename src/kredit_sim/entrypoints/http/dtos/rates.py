from typing import Literal

from pydantic import BaseModel, Field

from kredit_sim.entrypoints.http.dtos.simulation import MONEY_PATTERN


class InsuranceOptionsQueryDTO(BaseModel):
    """Query parameters for listing insurance options."""

    category: Literal["PASSENGER", "COMMERCIAL"]
    sub_category: Literal["PASSENGER", "TRUCK", "BUS"] = "PASSENGER"
    is_loading_unit: bool = False
    tenor_months: int = Field(ge=1, examples=[12])
    vehicle_price: str = Field(pattern=MONEY_PATTERN, examples=["150000000"])


class InsuranceOptionDTO(BaseModel):
    label: str
    rate: str = Field(description="Fraction of the vehicle price")
    min_price: str
    max_price: str


class InsuranceOptionsResponseDTO(BaseModel):
    options: list[InsuranceOptionDTO]
    default_label: str | None = Field(
        description="Lowest-rate option, used when a calculation omits insurance_label"
    )
    available_tenors: list[int]


class TenorOptionsResponseDTO(BaseModel):
    category: str
    tenors: list[int]
