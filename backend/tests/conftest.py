"""
conftest.py — Shared pytest fixtures for the Design Dialogues backend test suite.

No database or external service fixtures are defined here. The engine tests
are pure unit tests; the API tests drive the FastAPI app in-process.

Import-path bootstrapping:
    The ``backend/`` directory is inserted into sys.path so that all
    ``app.*`` imports resolve correctly regardless of where pytest is invoked.
"""

import sys
import os
from datetime import datetime

import pytest

# ---------------------------------------------------------------------------
# Ensure ``backend/`` is on the import path before any app imports occur.
# ---------------------------------------------------------------------------
_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def costing_engine():
    """CostingEngine with the default rate tables."""
    from app.services.costing_engine import CostingEngine
    return CostingEngine()


@pytest.fixture(scope="session")
def timeline_engine():
    """TimelineEngine with the default duration tables."""
    from app.services.timeline_engine import TimelineEngine
    return TimelineEngine()


@pytest.fixture(scope="session")
def audit_engine():
    from app.services.audit_engine import AuditEngine
    return AuditEngine()


# ---------------------------------------------------------------------------
# Shared inputs
# ---------------------------------------------------------------------------

@pytest.fixture
def all_services():
    from app.services.costing_engine import ServiceSelection
    return ServiceSelection(space_planning=True, interior_finishes=True, furnishing_decor=True)


@pytest.fixture
def no_services():
    from app.services.costing_engine import ServiceSelection
    return ServiceSelection(space_planning=False, interior_finishes=False, furnishing_decor=False)


@pytest.fixture
def standard_inputs(all_services):
    """
    Reference apartment: 60 m², kitchen 3 lm, wardrobes 2 lm, all services,
    no renovation, not urgent.
    """
    from app.services.costing_engine import ProjectInputs
    return ProjectInputs(
        area=60.0,
        is_renovation=False,
        is_urgent=False,
        services=all_services,
        kitchen_length=3.0,
        wardrobe_length=2.0,
    )


@pytest.fixture
def monday():
    """Fixed anchor date used by the timeline tests."""
    return datetime(2026, 3, 2)


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def client():
    from fastapi.testclient import TestClient
    from app.main import app
    with TestClient(app) as c:
        yield c
