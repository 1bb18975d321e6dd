from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from kredit_sim.entrypoints.http.exception_handlers import register_exception_handlers
from kredit_sim.entrypoints.http.routes.health import router as health_router
from kredit_sim.entrypoints.http.routes.rates import router as rates_router
from kredit_sim.entrypoints.http.routes.simulations import router as simulations_router
from kredit_sim.infra.db.session import dispose_engine


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    dispose_engine()


def build_app() -> FastAPI:
    app = FastAPI(
        title="Kredit Sim API",
        description="""
        Vehicle credit simulation API.

        ## Features
        - Calculate down payment, insurance, flat interest, installment and TDP
        - Solve the down payment that meets a first-payment or installment budget
        - List insurance and tenor options
        - Save simulations and track their follow-up status

        ## Authentication
        Not handled by this service; deploy behind an authenticating gateway.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(rates_router, prefix="/v1")
    app.include_router(simulations_router, prefix="/v1")

    return app


app = build_app()
