from fastapi import APIRouter, Depends, Path, status

from kredit_sim.domain.paging import Paging
from kredit_sim.domain.simulation_record import SimulationStatus
from kredit_sim.entrypoints.http.dependencies import (
    get_calculate_credit_simulation_use_case,
    get_list_simulations_use_case,
    get_save_simulation_use_case,
    get_simulation_by_id_use_case,
    get_solve_budget_use_case,
    get_update_simulation_status_use_case,
)
from kredit_sim.entrypoints.http.dtos.simulation import (
    CalculationResultDTO,
    SimulationInputDTO,
    SolveBudgetRequestDTO,
)
from kredit_sim.entrypoints.http.dtos.simulation_record import (
    SaveSimulationRequestDTO,
    SimulationListQueryDTO,
    SimulationListResponseDTO,
    SimulationRecordDTO,
    StatusUpdateDTO,
)
from kredit_sim.entrypoints.http.error_responses import ErrorResponse
from kredit_sim.entrypoints.http.mappers.simulation_mapper import SimulationMapper
from kredit_sim.entrypoints.http.mappers.simulation_record_mapper import SimulationRecordMapper
from kredit_sim.use_cases.calculate_credit_simulation import CalculateCreditSimulation
from kredit_sim.use_cases.get_simulation_by_id import GetSimulationById
from kredit_sim.use_cases.list_simulations import ListSimulations
from kredit_sim.use_cases.save_simulation import SaveSimulation
from kredit_sim.use_cases.solve_budget import SolveBudget
from kredit_sim.use_cases.update_simulation_status import UpdateSimulationStatus


router = APIRouter(tags=["Simulations"])

VALIDATION_RESPONSE = {422: {"model": ErrorResponse, "description": "Validation error"}}
NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": "Simulation not found"}}


@router.post(
    "/simulations/calculate",
    response_model=CalculationResultDTO,
    summary="Calculate credit simulation",
    description="""
    Calculate down payment, insurance, flat interest, monthly installment and
    first payment (TDP) for one down-payment percentage.

    ## Monetary Values
    - All monetary values and rates are decimal strings (e.g., "150000000")
    - Rates are fractions: "0.06" means 6% per year

    ## Rounding
    - Total interest: half-up to the nearest 100
    - Monthly installment: up to the next 10,000

    ## Insurance
    - When `insurance_label` is omitted the lowest-rate option is used
    - No option for the price/tenor → 422

    ## Interest
    - When no interest rate matches, the configured fallback rate is used and
      `interest_rate_fallback` is true
    """,
    responses=VALIDATION_RESPONSE,
)
def calculate_simulation(
    payload: SimulationInputDTO,
    use_case: CalculateCreditSimulation = Depends(get_calculate_credit_simulation_use_case),
) -> CalculationResultDTO:
    """Parse → map → execute → map → return."""
    sim_input = SimulationMapper.to_domain_input(payload)
    result = use_case.execute(sim_input)
    return SimulationMapper.to_response(result)


@router.post(
    "/simulations/solve",
    response_model=CalculationResultDTO,
    summary="Solve down payment for a budget",
    description="""
    Find the down-payment percentage (0-99) whose total first payment or
    monthly installment is closest to `target_value`.

    Runs a fixed 50-step bisection and returns the closest trial's full
    breakdown. `simulation.down_payment_percent` is ignored.
    """,
    responses=VALIDATION_RESPONSE,
)
def solve_budget(
    payload: SolveBudgetRequestDTO,
    use_case: SolveBudget = Depends(get_solve_budget_use_case),
) -> CalculationResultDTO:
    request = SimulationMapper.to_solve_request(payload)
    result = use_case.execute(request)
    return SimulationMapper.to_response(result)


@router.post(
    "/simulations",
    response_model=SimulationRecordDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Save simulation",
    description="Recalculate the submitted input server-side and store it with borrower details.",
    responses=VALIDATION_RESPONSE,
)
def save_simulation(
    payload: SaveSimulationRequestDTO,
    use_case: SaveSimulation = Depends(get_save_simulation_use_case),
) -> SimulationRecordDTO:
    request = SimulationRecordMapper.to_save_request(payload)
    record = use_case.execute(request)
    return SimulationRecordMapper.to_response(record)


@router.get(
    "/simulations",
    response_model=SimulationListResponseDTO,
    summary="List saved simulations",
    description="Saved simulations, newest first. Default limit 20, max 200.",
    responses=VALIDATION_RESPONSE,
)
def list_simulations(
    query: SimulationListQueryDTO = Depends(),
    use_case: ListSimulations = Depends(get_list_simulations_use_case),
) -> SimulationListResponseDTO:
    page = use_case.execute(Paging(offset=query.offset, limit=query.limit))
    return SimulationRecordMapper.to_list_response(page, offset=query.offset, limit=query.limit)


@router.get(
    "/simulations/{simulation_id}",
    response_model=SimulationRecordDTO,
    summary="Get saved simulation",
    responses={**VALIDATION_RESPONSE, **NOT_FOUND_RESPONSE},
)
def get_simulation(
    simulation_id: int = Path(description="Saved simulation id"),
    use_case: GetSimulationById = Depends(get_simulation_by_id_use_case),
) -> SimulationRecordDTO:
    record = use_case.execute(simulation_id)
    return SimulationRecordMapper.to_response(record)


@router.patch(
    "/simulations/{simulation_id}/status",
    response_model=SimulationRecordDTO,
    summary="Update simulation status",
    description="Move a saved simulation to TODO, PROGRES, DONE or REJECT.",
    responses={**VALIDATION_RESPONSE, **NOT_FOUND_RESPONSE},
)
def update_simulation_status(
    payload: StatusUpdateDTO,
    simulation_id: int = Path(description="Saved simulation id"),
    use_case: UpdateSimulationStatus = Depends(get_update_simulation_status_use_case),
) -> SimulationRecordDTO:
    record = use_case.execute(simulation_id, SimulationStatus(payload.status))
    return SimulationRecordMapper.to_response(record)
