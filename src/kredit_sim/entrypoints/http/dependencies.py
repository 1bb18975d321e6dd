"""
Dependency injection for FastAPI routes.

Database sessions, repositories and use cases are built per request.
Only the stateless PricingPolicy (read from the environment) is cached.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from kredit_sim.adapters.postgres_rate_table_repository import PostgresRateTableRepository
from kredit_sim.adapters.postgres_simulation_repository import PostgresSimulationRepository
from kredit_sim.domain.rates import PricingPolicy
from kredit_sim.infra.db.session import get_session
from kredit_sim.infra.settings import pricing_policy
from kredit_sim.ports.rate_table_repository import RateTableRepository
from kredit_sim.ports.simulation_repository import SimulationRepository
from kredit_sim.use_cases.calculate_credit_simulation import CalculateCreditSimulation
from kredit_sim.use_cases.get_simulation_by_id import GetSimulationById
from kredit_sim.use_cases.list_insurance_options import ListInsuranceOptions
from kredit_sim.use_cases.list_simulations import ListSimulations
from kredit_sim.use_cases.save_simulation import SaveSimulation
from kredit_sim.use_cases.solve_budget import SolveBudget
from kredit_sim.use_cases.update_simulation_status import UpdateSimulationStatus


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    get_session() commits when the request succeeds, rolls back on any
    exception and always closes the session.
    """
    with get_session() as session:
        yield session


@lru_cache
def get_pricing_policy() -> PricingPolicy:
    """Pricing policy from the environment, read once per process."""
    return pricing_policy()


def get_rate_table_repository(db: Session = Depends(get_db)) -> RateTableRepository:
    return PostgresRateTableRepository(session=db)


def get_simulation_repository(db: Session = Depends(get_db)) -> SimulationRepository:
    return PostgresSimulationRepository(session=db)


def get_calculate_credit_simulation_use_case(
    rate_tables: RateTableRepository = Depends(get_rate_table_repository),
    policy: PricingPolicy = Depends(get_pricing_policy),
) -> CalculateCreditSimulation:
    return CalculateCreditSimulation(rate_table_repository=rate_tables, policy=policy)


def get_solve_budget_use_case(
    rate_tables: RateTableRepository = Depends(get_rate_table_repository),
    policy: PricingPolicy = Depends(get_pricing_policy),
) -> SolveBudget:
    return SolveBudget(rate_table_repository=rate_tables, policy=policy)


def get_list_insurance_options_use_case(
    rate_tables: RateTableRepository = Depends(get_rate_table_repository),
) -> ListInsuranceOptions:
    return ListInsuranceOptions(rate_table_repository=rate_tables)


def get_save_simulation_use_case(
    calculate: CalculateCreditSimulation = Depends(get_calculate_credit_simulation_use_case),
    simulations: SimulationRepository = Depends(get_simulation_repository),
) -> SaveSimulation:
    """Both repositories share the request's session, so the save is one transaction."""
    return SaveSimulation(calculate_credit_simulation=calculate, simulation_repository=simulations)


def get_list_simulations_use_case(
    simulations: SimulationRepository = Depends(get_simulation_repository),
) -> ListSimulations:
    return ListSimulations(simulation_repository=simulations)


def get_simulation_by_id_use_case(
    simulations: SimulationRepository = Depends(get_simulation_repository),
) -> GetSimulationById:
    return GetSimulationById(simulation_repository=simulations)


def get_update_simulation_status_use_case(
    simulations: SimulationRepository = Depends(get_simulation_repository),
) -> UpdateSimulationStatus:
    return UpdateSimulationStatus(simulation_repository=simulations)
