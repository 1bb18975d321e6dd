"""
Test suite for the /v1/simulations routes.

Routes run against real use cases backed by in-memory repositories, injected
through dependency_overrides:
- Payloads are validated and mapped to domain inputs
- Money and rates come back as decimal strings
- Domain errors become structured 404/422 responses
"""

from __future__ import annotations

from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from kredit_sim.adapters.in_memory_rate_table_repository import InMemoryRateTableRepository
from kredit_sim.adapters.in_memory_simulation_repository import InMemorySimulationRepository
from kredit_sim.domain.rates import PricingPolicy, RateTables
from kredit_sim.entrypoints.http.dependencies import (
    get_calculate_credit_simulation_use_case,
    get_list_simulations_use_case,
    get_save_simulation_use_case,
    get_simulation_by_id_use_case,
    get_solve_budget_use_case,
    get_update_simulation_status_use_case,
)
from kredit_sim.entrypoints.http.exception_handlers import register_exception_handlers
from kredit_sim.entrypoints.http.routes.simulations import router
from kredit_sim.use_cases.calculate_credit_simulation import CalculateCreditSimulation
from kredit_sim.use_cases.get_simulation_by_id import GetSimulationById
from kredit_sim.use_cases.list_simulations import ListSimulations
from kredit_sim.use_cases.save_simulation import SaveSimulation
from kredit_sim.use_cases.solve_budget import SolveBudget
from kredit_sim.use_cases.update_simulation_status import UpdateSimulationStatus

SIMULATION = {
    "vehicle_price": "150000000",
    "down_payment_percent": "20",
    "tenor_months": 12,
    "category": "PASSENGER",
    "payment_type": "ADDB",
}


@pytest.fixture
def simulation_repository() -> InMemorySimulationRepository:
    return InMemorySimulationRepository()


@pytest.fixture
def app(rate_tables: RateTables, simulation_repository: InMemorySimulationRepository) -> FastAPI:
    """Test app wired to in-memory repositories."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")

    rates = InMemoryRateTableRepository(rate_tables)
    calculate = CalculateCreditSimulation(rate_table_repository=rates, policy=PricingPolicy())

    test_app.dependency_overrides[get_calculate_credit_simulation_use_case] = lambda: calculate
    test_app.dependency_overrides[get_solve_budget_use_case] = lambda: SolveBudget(
        rate_table_repository=rates
    )
    test_app.dependency_overrides[get_save_simulation_use_case] = lambda: SaveSimulation(
        calculate_credit_simulation=calculate, simulation_repository=simulation_repository
    )
    test_app.dependency_overrides[get_list_simulations_use_case] = lambda: ListSimulations(
        simulation_repository
    )
    test_app.dependency_overrides[get_simulation_by_id_use_case] = lambda: GetSimulationById(
        simulation_repository
    )
    test_app.dependency_overrides[get_update_simulation_status_use_case] = (
        lambda: UpdateSimulationStatus(simulation_repository)
    )
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


def save(client: TestClient, name: str = "Budi Santoso") -> dict:
    response = client.post(
        "/v1/simulations",
        json={"borrower": {"borrower_name": name}, "simulation": SIMULATION},
    )
    assert response.status_code == 201
    return response.json()


# ==============================================================================
# POST /v1/simulations/calculate
# ==============================================================================


def test_calculate_returns_full_breakdown(client: TestClient) -> None:
    response = client.post("/v1/simulations/calculate", json=SIMULATION)

    assert response.status_code == 200
    data = response.json()
    assert data["star_level"] == 5
    assert data["interest_rate"] == "0.060"
    assert data["insurance_label"] == "KOMBINASI"
    assert data["down_payment_amount"] == "30000000"
    assert data["total_financed_amount"] == "123100000"
    assert data["total_interest"] == "7386000"
    assert data["total_loan_amount"] == "130486000"
    assert data["monthly_installment"] == "10880000"
    assert data["total_first_payment"] == "33050000"
    assert data["residual_asset_value"] == "116950000"
    assert data["is_special_scenario"] is False
    assert data["interest_rate_fallback"] is False


def test_calculate_money_fields_are_strings(client: TestClient) -> None:
    data = client.post("/v1/simulations/calculate", json=SIMULATION).json()

    for field in ("vehicle_price", "monthly_installment", "total_first_payment", "insurance_rate"):
        assert isinstance(data[field], str)


def test_calculate_no_insurance_candidates_is_422(client: TestClient) -> None:
    response = client.post("/v1/simulations/calculate", json={**SIMULATION, "tenor_months": 36})

    assert response.status_code == 422
    assert response.json() == {
        "detail": "No insurance rate available for this vehicle and tenor",
        "code": "VALIDATION_ERROR",
    }


def test_calculate_unknown_insurance_label_is_422(client: TestClient) -> None:
    response = client.post("/v1/simulations/calculate", json={**SIMULATION, "insurance_label": "TLO"})

    assert response.status_code == 422
    assert response.json()["errors"][0]["code"] == "UNKNOWN_INSURANCE_LABEL"


def test_calculate_down_payment_out_of_range_is_422(client: TestClient) -> None:
    response = client.post(
        "/v1/simulations/calculate", json={**SIMULATION, "down_payment_percent": "100"}
    )

    assert response.status_code == 422
    assert "down_payment_percent must be between 0 and 99" in response.json()["detail"]


def test_calculate_rejects_malformed_price(client: TestClient) -> None:
    response = client.post("/v1/simulations/calculate", json={**SIMULATION, "vehicle_price": "abc"})

    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert data["errors"][0]["field"] == "vehicle_price"


def test_calculate_rejects_price_with_too_many_digits(client: TestClient) -> None:
    response = client.post(
        "/v1/simulations/calculate", json={**SIMULATION, "vehicle_price": "1" + "0" * 34}
    )

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "vehicle_price"


def test_calculate_price_above_cap_is_422(client: TestClient) -> None:
    response = client.post(
        "/v1/simulations/calculate", json={**SIMULATION, "vehicle_price": "100000000001"}
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "vehicle_price must be <= 100000000000"


def test_calculate_rejects_unknown_category(client: TestClient) -> None:
    response = client.post("/v1/simulations/calculate", json={**SIMULATION, "category": "BOAT"})

    assert response.status_code == 422


def test_calculate_delegates_to_use_case(app: FastAPI, client: TestClient) -> None:
    mock_use_case = Mock()
    mock_use_case.execute.side_effect = RuntimeError("database is down")
    app.dependency_overrides[get_calculate_credit_simulation_use_case] = lambda: mock_use_case

    response = client.post("/v1/simulations/calculate", json=SIMULATION)

    mock_use_case.execute.assert_called_once()
    assert response.status_code == 500
    assert response.json()["code"] == "INTERNAL_ERROR"


# ==============================================================================
# POST /v1/simulations/solve
# ==============================================================================


def test_solve_total_first_payment(client: TestClient) -> None:
    response = client.post(
        "/v1/simulations/solve",
        json={
            "target_kind": "TOTAL_FIRST_PAYMENT",
            "target_value": "33050000",
            "simulation": SIMULATION,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert abs(float(data["down_payment_percent"]) - 20) < 0.01
    assert abs(float(data["total_first_payment"]) - 33050000) < 1


def test_solve_rejects_zero_target(client: TestClient) -> None:
    response = client.post(
        "/v1/simulations/solve",
        json={"target_kind": "TOTAL_FIRST_PAYMENT", "target_value": "0", "simulation": SIMULATION},
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "target_value must be > 0"


def test_solve_prefixes_nested_field_errors(client: TestClient) -> None:
    response = client.post(
        "/v1/simulations/solve",
        json={
            "target_kind": "MONTHLY_INSTALLMENT",
            "target_value": "10880000",
            "simulation": {**SIMULATION, "tenor_months": 0},
        },
    )

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "simulation.tenor_months"


# ==============================================================================
# Saved simulations
# ==============================================================================


def test_save_recalculates_and_returns_record(client: TestClient) -> None:
    data = save(client)

    assert data["id"] == 1
    assert data["status"] == "TODO"
    assert data["borrower"]["borrower_name"] == "Budi Santoso"
    assert data["simulation"]["insurance_label"] == "KOMBINASI"
    assert data["result"]["total_first_payment"] == "33050000"
    assert data["created_at"] is not None


def test_save_rejects_missing_borrower_name(client: TestClient) -> None:
    response = client.post(
        "/v1/simulations",
        json={"borrower": {"borrower_name": ""}, "simulation": SIMULATION},
    )

    assert response.status_code == 422


def test_save_rejects_blank_borrower_name(client: TestClient) -> None:
    response = client.post(
        "/v1/simulations",
        json={"borrower": {"borrower_name": "   "}, "simulation": SIMULATION},
    )

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "borrower_name"


def test_list_newest_first(client: TestClient) -> None:
    save(client, "First")
    save(client, "Second")

    response = client.get("/v1/simulations", params={"limit": 1})

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert data["limit"] == 1
    assert [s["borrower"]["borrower_name"] for s in data["simulations"]] == ["Second"]


def test_list_rejects_oversized_page(client: TestClient) -> None:
    response = client.get("/v1/simulations", params={"limit": 201})

    assert response.status_code == 422


def test_get_simulation(client: TestClient) -> None:
    saved = save(client)

    response = client.get(f"/v1/simulations/{saved['id']}")

    assert response.status_code == 200
    assert response.json()["result"] == saved["result"]


def test_get_missing_simulation_is_404(client: TestClient) -> None:
    response = client.get("/v1/simulations/42")

    assert response.status_code == 404
    assert response.json() == {
        "detail": "Simulation with identifier '42' not found",
        "code": "NOT_FOUND",
    }


def test_get_non_positive_id_is_422(client: TestClient) -> None:
    response = client.get("/v1/simulations/0")

    assert response.status_code == 422
    assert response.json()["errors"][0]["code"] == "INVALID_ID"


def test_update_status(client: TestClient) -> None:
    saved = save(client)

    response = client.patch(f"/v1/simulations/{saved['id']}/status", json={"status": "DONE"})

    assert response.status_code == 200
    assert response.json()["status"] == "DONE"
    assert client.get(f"/v1/simulations/{saved['id']}").json()["status"] == "DONE"


def test_update_status_rejects_unknown_status(client: TestClient) -> None:
    saved = save(client)

    response = client.patch(f"/v1/simulations/{saved['id']}/status", json={"status": "LOST"})

    assert response.status_code == 422


def test_update_status_missing_simulation_is_404(client: TestClient) -> None:
    response = client.patch("/v1/simulations/9/status", json={"status": "DONE"})

    assert response.status_code == 404
