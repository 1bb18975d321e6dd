from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from kredit_sim.domain.paging import Paging
from kredit_sim.domain.simulation_record import SimulationRecord, SimulationStatus


@dataclass(frozen=True)
class SimulationPage:
    """Page of saved simulations including pagination metadata."""

    records: list[SimulationRecord]
    total_count: int


class SimulationRepository(ABC):
    """
    Port for the saved-simulation record store.

    Contract (Preconditions):
        - paging and ids must be pre-validated by caller (UseCase)
        - Implementations trust inputs are valid and do not re-validate
    """

    @abstractmethod
    def add(self, record: SimulationRecord) -> SimulationRecord:
        """
        Persist a new record.

        Returns:
            The stored record with id and created_at assigned
        """
        ...

    @abstractmethod
    def get_by_id(self, simulation_id: int) -> SimulationRecord | None: ...

    @abstractmethod
    def list(self, paging: Paging) -> SimulationPage:
        """
        List saved simulations, newest first.

        Returns:
            SimulationPage with the requested slice and the total count before paging
        """
        ...

    @abstractmethod
    def update_status(
        self, simulation_id: int, status: SimulationStatus
    ) -> SimulationRecord | None:
        """
        Change the status of a saved simulation.

        Returns:
            The updated record, or None if no record has this id
        """
        ...
