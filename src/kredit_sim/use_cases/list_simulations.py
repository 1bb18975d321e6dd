from __future__ import annotations

from kredit_sim.domain.paging import Paging
from kredit_sim.ports.simulation_repository import SimulationPage, SimulationRepository


class ListSimulations:
    """
    Simulation history, newest first.

    Validates paging and delegates to the repository.
    """

    def __init__(self, simulation_repository: SimulationRepository) -> None:
        self._repository = simulation_repository

    def execute(self, paging: Paging) -> SimulationPage:
        """
        Raises:
            PagingValidationError: If paging parameters are invalid
        """
        paging.validate()
        return self._repository.list(paging)
