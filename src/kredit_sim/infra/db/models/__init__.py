from kredit_sim.infra.db.models.base import Base
from kredit_sim.infra.db.models.rates import (
    InsuranceRateRow,
    InterestRateRow,
    RegionalInsuranceRateRow,
)
from kredit_sim.infra.db.models.simulation import SimulationRow

__all__ = [
    "Base",
    "InsuranceRateRow",
    "InterestRateRow",
    "RegionalInsuranceRateRow",
    "SimulationRow",
]
