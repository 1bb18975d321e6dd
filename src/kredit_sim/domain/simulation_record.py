from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from kredit_sim.domain.errors import ValidationError
from kredit_sim.domain.simulation import CalculationResult, SimulationInput


class SimulationStatus(str, Enum):
    """Follow-up state of a saved simulation (prospect workflow)."""

    TODO = "TODO"
    PROGRES = "PROGRES"
    DONE = "DONE"
    REJECT = "REJECT"


@dataclass(frozen=True, slots=True)
class BorrowerInfo:
    borrower_name: str
    co_borrower_name: str | None = None
    sales_name: str | None = None
    unit_name: str | None = None
    plate_number: str | None = None

    def validate(self) -> None:
        if not self.borrower_name or not self.borrower_name.strip():
            raise ValidationError(
                errors=[
                    {
                        "field": "borrower_name",
                        "message": "Must not be blank",
                        "code": "REQUIRED",
                    }
                ]
            )


@dataclass(frozen=True, slots=True)
class SimulationRecord:
    """A calculation saved together with who it was made for."""

    borrower: BorrowerInfo
    input: SimulationInput
    result: CalculationResult
    status: SimulationStatus = SimulationStatus.TODO
    id: int | None = None  # Assigned by the repository on save
    created_at: datetime | None = None
