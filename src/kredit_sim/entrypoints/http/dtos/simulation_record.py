from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from kredit_sim.entrypoints.http.dtos.simulation import CalculationResultDTO, SimulationInputDTO

StatusLiteral = Literal["TODO", "PROGRES", "DONE", "REJECT"]


class BorrowerDTO(BaseModel):
    borrower_name: str = Field(min_length=1, max_length=100, examples=["Budi Santoso"])
    co_borrower_name: str | None = Field(default=None, max_length=100)
    sales_name: str | None = Field(default=None, max_length=100)
    unit_name: str | None = Field(default=None, max_length=100, examples=["Avanza 1.3 G"])
    plate_number: str | None = Field(default=None, max_length=20, examples=["B 1234 XYZ"])


class SaveSimulationRequestDTO(BaseModel):
    """Borrower info plus the input to recalculate and store."""

    borrower: BorrowerDTO
    simulation: SimulationInputDTO
    status: StatusLiteral = "TODO"


class SimulationRecordDTO(BaseModel):
    id: int
    status: StatusLiteral
    created_at: datetime | None = None
    borrower: BorrowerDTO
    simulation: SimulationInputDTO
    result: CalculationResultDTO


class SimulationListQueryDTO(BaseModel):
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=20, ge=1, le=200)


class SimulationListResponseDTO(BaseModel):
    simulations: list[SimulationRecordDTO]
    total: int
    offset: int
    limit: int


class StatusUpdateDTO(BaseModel):
    status: StatusLiteral
