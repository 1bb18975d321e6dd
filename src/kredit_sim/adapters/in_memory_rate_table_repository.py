from __future__ import annotations

from kredit_sim.domain.rates import RateTables
from kredit_sim.ports.rate_table_repository import RateTableRepository


class InMemoryRateTableRepository(RateTableRepository):
    """
    Canonical contract implementation for tests and local runs.

    - Holds one RateTables snapshot
    - replace() swaps the whole snapshot; runs already holding the old one keep it
    """

    def __init__(self, tables: RateTables) -> None:
        self._tables = tables

    def load(self) -> RateTables:
        return self._tables

    def replace(self, tables: RateTables) -> None:
        self._tables = tables
