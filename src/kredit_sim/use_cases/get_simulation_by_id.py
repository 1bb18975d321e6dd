"""Get saved simulation by ID use case."""

from __future__ import annotations

from kredit_sim.domain.errors import NotFoundError, ValidationError
from kredit_sim.domain.simulation_record import SimulationRecord
from kredit_sim.ports.simulation_repository import SimulationRepository


def validate_simulation_id(simulation_id: int) -> None:
    if simulation_id <= 0:
        raise ValidationError(
            errors=[
                {
                    "field": "simulation_id",
                    "message": "Must be a positive integer",
                    "code": "INVALID_ID",
                }
            ]
        )


class GetSimulationById:
    """
    Use case for retrieving a single saved simulation.

    Responsibilities:
    - Validate the id (must be positive)
    - Delegate to repository for data access
    - Raise NotFoundError if the simulation doesn't exist
    """

    def __init__(self, simulation_repository: SimulationRepository) -> None:
        self._repository = simulation_repository

    def execute(self, simulation_id: int) -> SimulationRecord:
        """
        Raises:
            ValidationError: If simulation_id is not positive
            NotFoundError: If no simulation has this id
        """
        validate_simulation_id(simulation_id)

        record = self._repository.get_by_id(simulation_id)

        if record is None:
            raise NotFoundError(resource="Simulation", identifier=str(simulation_id))

        return record
