"""Save simulation use case."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from kredit_sim.domain.simulation import SimulationInput
from kredit_sim.domain.simulation_record import BorrowerInfo, SimulationRecord, SimulationStatus
from kredit_sim.ports.simulation_repository import SimulationRepository
from kredit_sim.use_cases.calculate_credit_simulation import CalculateCreditSimulation

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SaveSimulationRequest:
    borrower: BorrowerInfo
    input: SimulationInput
    status: SimulationStatus = SimulationStatus.TODO


class SaveSimulation:
    """
    Recalculate and store a simulation for a borrower.

    Responsibilities:
    - Validate borrower info
    - Recompute the breakdown server-side (client-sent figures are never stored)
    - Delegate persistence to the repository
    """

    def __init__(
        self,
        calculate_credit_simulation: CalculateCreditSimulation,
        simulation_repository: SimulationRepository,
    ) -> None:
        self._calculate = calculate_credit_simulation
        self._repository = simulation_repository

    def execute(self, request: SaveSimulationRequest) -> SimulationRecord:
        """
        Raises:
            ValidationError: If borrower info or the simulation input is invalid
        """
        request.borrower.validate()

        result = self._calculate.execute(request.input)

        # Store the label actually priced, so the record replays to the same result
        sim_input = request.input
        if not sim_input.insurance_label and result.insurance_label:
            sim_input = sim_input.with_insurance_label(result.insurance_label)

        record = self._repository.add(
            SimulationRecord(
                borrower=request.borrower,
                input=sim_input,
                result=result,
                status=request.status,
            )
        )

        logger.info(
            "Simulation saved",
            extra={"simulation_id": record.id, "status": record.status.value},
        )
        return record
