"""
Runtime settings read from the environment (``.env`` loaded in dev).

Rate tables are not settings: they live in ``app.config`` so a saved
estimate always recomputes to the same figures.
"""
import os

from dotenv import load_dotenv

load_dotenv()

APP_NAME: str = "Design Dialogues Estimator API"
APP_VERSION: str = os.getenv("APP_VERSION", "1.0.0")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
JSON_LOGS: bool = os.getenv("LOG_FORMAT", "json").lower() != "text"

_cors_default = "http://localhost:5173,http://localhost:8080"
CORS_ORIGINS: list[str] = [
    o.strip() for o in os.getenv("CORS_ORIGINS", _cors_default).split(",") if o.strip()
]
