from __future__ import annotations

import logging

from kredit_sim.domain.errors import NotFoundError
from kredit_sim.domain.simulation_record import SimulationRecord, SimulationStatus
from kredit_sim.ports.simulation_repository import SimulationRepository
from kredit_sim.use_cases.get_simulation_by_id import validate_simulation_id

logger = logging.getLogger(__name__)


class UpdateSimulationStatus:
    """Move a saved simulation to another status. Any status may follow any other."""

    def __init__(self, simulation_repository: SimulationRepository) -> None:
        self._repository = simulation_repository

    def execute(self, simulation_id: int, status: SimulationStatus) -> SimulationRecord:
        """
        Raises:
            ValidationError: If simulation_id is not positive
            NotFoundError: If no simulation has this id
        """
        validate_simulation_id(simulation_id)

        record = self._repository.update_status(simulation_id, status)

        if record is None:
            raise NotFoundError(resource="Simulation", identifier=str(simulation_id))

        logger.info(
            "Simulation status updated",
            extra={"simulation_id": simulation_id, "status": status.value},
        )
        return record
