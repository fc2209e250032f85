"""
Design Dialogues Estimator API
FastAPI backend serving the cost estimate ("Project Passport"), renovation
timeline and layout audit engines to the SPA.
"""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import settings
from app.api.estimate_routes import audit_router, router as estimate_router
from app.services.logging_config import setup_logging
from app.services.middleware import RequestTimingMiddleware

setup_logging(level=settings.LOG_LEVEL, json_output=settings.JSON_LOGS)
logger = logging.getLogger("design-dialogues")

# Record process start time for uptime calculation
_PROCESS_START = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} starting")
    yield
    logger.info("Shutting down")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Tier-aware interior design cost estimates, renovation timelines and layout audits",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# CORS — restricted to allowed origins from env
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept", "X-Requested-With", "X-Request-ID"],
)
# Request timing + X-Request-ID must be outermost so it wraps all other middleware
app.add_middleware(RequestTimingMiddleware)

app.include_router(estimate_router)
app.include_router(audit_router)


@app.get("/health")
async def health_check():
    return {
        "status": "active",
        "version": settings.APP_VERSION,
        "uptime_seconds": round(time.monotonic() - _PROCESS_START, 1),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
