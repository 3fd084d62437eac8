"""Configuration from environment."""
import os

PORT = int(os.environ.get("PORT", "8001"))

# When TESTING=true, use test DB URL so tests never touch production.
if os.environ.get("TESTING") == "true":
    DATABASE_URL = os.environ.get("TESTING_DATABASE_URL", "sqlite:///:memory:")
else:
    DATABASE_URL = os.environ.get(
        "DATABASE_URL",
        "sqlite:///./scenario_builder.db",
    )

# Backend endpoint pre-filled into every new scenario draft.
DEFAULT_CSMS_ENDPOINT = os.environ.get("DEFAULT_CSMS_ENDPOINT", "ws://localhost:8080/ocpp")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000",
    ).split(",")
    if origin.strip()
]

# Open builder sessions kept in memory; the oldest is evicted beyond this.
MAX_BUILDER_SESSIONS = int(os.environ.get("MAX_BUILDER_SESSIONS", "100"))
