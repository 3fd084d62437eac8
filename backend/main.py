"""OCPP Scenario Builder: FastAPI backend."""
import logging
import os
import subprocess
import sys

from fastapi import FastAPI

# Session lifecycle, export and library events at INFO.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logging.getLogger("scenario_core").setLevel(logging.INFO)
from fastapi.middleware.cors import CORSMiddleware

from api.builder import router as builder_router
from api.catalog import router as catalog_router
from api.routes import router
from api.scenarios import router as scenarios_router
from schemas.health import HealthResponse
from scenario_core import sessions
from utils.config import CORS_ORIGINS

app = FastAPI(
    title="OCPP Scenario Builder",
    description="Builds OCPP load and chaos test scenarios for the simulator's execution engine",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api")
app.include_router(builder_router, prefix="/api")
app.include_router(catalog_router, prefix="/api")
app.include_router(scenarios_router, prefix="/api")


@app.get("/api/health", response_model=HealthResponse)
def api_health() -> HealthResponse:
    """Explicit health route so /api/health is always available."""
    return HealthResponse(open_sessions=sessions.count())


@app.on_event("startup")
def startup() -> None:
    """Run DB migrations for the scenario library."""
    if os.environ.get("TESTING") == "true":
        return
    backend_dir = os.path.dirname(os.path.abspath(__file__))
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        cwd=backend_dir,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise RuntimeError(f"Alembic upgrade failed: {result.stderr or result.stdout}")


@app.get("/")
def root() -> dict:
    """Root redirect/info."""
    return {"service": "ocpp-scenario-builder", "docs": "/docs", "health": "/api/health"}
