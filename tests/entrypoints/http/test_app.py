"""
Unit tests for FastAPI application setup.

- build_app() metadata and docs URLs
- Router registration (health at root, everything else under /v1)
- Exception handlers are installed
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from kredit_sim.entrypoints.http.app import build_app


# ==============================================================================
# Application Creation
# ==============================================================================


def test_build_app_returns_new_instance_each_call() -> None:
    app1 = build_app()
    app2 = build_app()

    assert isinstance(app1, FastAPI)
    assert app1 is not app2


def test_app_metadata() -> None:
    app = build_app()

    assert app.title == "Kredit Sim API"
    assert app.version == "0.1.0"
    assert "credit simulation" in app.description
    assert app.docs_url == "/docs"
    assert app.redoc_url == "/redoc"
    assert app.openapi_url == "/openapi.json"


# ==============================================================================
# Routes
# ==============================================================================


def test_registered_paths() -> None:
    paths = {route.path for route in build_app().routes}

    assert {
        "/health",
        "/v1/tenors",
        "/v1/insurance-options",
        "/v1/simulations/calculate",
        "/v1/simulations/solve",
        "/v1/simulations",
        "/v1/simulations/{simulation_id}",
        "/v1/simulations/{simulation_id}/status",
    } <= paths


def test_health_is_not_versioned() -> None:
    client = TestClient(build_app())

    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/v1/health").status_code == 404


def test_tenors_needs_no_database() -> None:
    client = TestClient(build_app())

    response = client.get("/v1/tenors", params={"category": "COMMERCIAL"})

    assert response.status_code == 200
    assert response.json()["tenors"] == [12, 24, 36, 48]


# ==============================================================================
# OpenAPI
# ==============================================================================


def test_openapi_schema_documents_error_responses() -> None:
    schema = build_app().openapi()

    calculate = schema["paths"]["/v1/simulations/calculate"]["post"]
    assert "422" in calculate["responses"]
    assert "ErrorResponse" in schema["components"]["schemas"]


def test_exception_handlers_registered() -> None:
    app = build_app()

    assert Exception in app.exception_handlers
    assert ValueError in app.exception_handlers
