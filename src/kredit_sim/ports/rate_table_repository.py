from __future__ import annotations

from abc import ABC, abstractmethod

from kredit_sim.domain.rates import RateTables


class RateTableRepository(ABC):
    """
    Port for rate-table data access.

    Contract:
        - load() returns a complete, immutable snapshot
        - Callers take one snapshot per calculation or solver run and never
          re-read mid-run, so a concurrent refresh cannot mix two schedules
    """

    @abstractmethod
    def load(self) -> RateTables:
        """
        Load the current interest, insurance and regional insurance tables.

        Returns:
            RateTables snapshot (tuples, safe to share)
        """
        ...
