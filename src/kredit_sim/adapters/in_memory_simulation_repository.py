from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

from kredit_sim.domain.paging import Paging
from kredit_sim.domain.simulation_record import SimulationRecord, SimulationStatus
from kredit_sim.ports.simulation_repository import SimulationPage, SimulationRepository


class InMemorySimulationRepository(SimulationRepository):
    """
    Canonical contract implementation for tests.

    - Assigns sequential ids starting at 1
    - Lists newest first (highest id first)
    - Applies paging AFTER ordering
    - Returns total_count of all records before paging
    """

    def __init__(self, records: list[SimulationRecord] | None = None) -> None:
        self._records: dict[int, SimulationRecord] = {}
        self._next_id = 1
        for record in records or []:
            self.add(record)

    def add(self, record: SimulationRecord) -> SimulationRecord:
        stored = replace(
            record,
            id=self._next_id,
            created_at=record.created_at or datetime.now(timezone.utc),
        )
        self._records[stored.id] = stored
        self._next_id += 1
        return stored

    def get_by_id(self, simulation_id: int) -> SimulationRecord | None:
        return self._records.get(simulation_id)

    def list(self, paging: Paging) -> SimulationPage:
        # Trust that UseCase has validated inputs (contract programming)
        ordered = sorted(self._records.values(), key=lambda record: record.id or 0, reverse=True)

        start = paging.offset
        end = paging.offset + paging.limit

        return SimulationPage(records=ordered[start:end], total_count=len(ordered))

    def update_status(
        self, simulation_id: int, status: SimulationStatus
    ) -> SimulationRecord | None:
        record = self._records.get(simulation_id)
        if record is None:
            return None

        updated = replace(record, status=status)
        self._records[simulation_id] = updated
        return updated
