"""
Estimate API Routes

POST /api/estimates/cost          — grouped cost estimate with ±15 % band
POST /api/estimates/timeline      — phased roadmap + phase states at "now"
POST /api/estimates/phase-states  — phase states only
GET  /api/estimates/household     — household-size recommendations
GET  /api/estimates/pricing       — rate tables, tooltips and service descriptions
GET  /api/audit/checklist         — visible layout audit checklist
POST /api/audit/score             — audit score, traffic-light level, worst category and per-category stats

The engines are pure and cheap; every slider tick may call these routes.
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Query

from app.config import (
    APPLIANCE_PACKAGES,
    BASE_RATES,
    CURRENCY,
    DESIGN_RATES,
    FURNITURE_PERCENTAGE,
    KITCHEN_RATES,
    PRICE_VARIANCE,
    RENOVATION_RATE,
    SERVICE_DESCRIPTIONS,
    TIER_DURATIONS,
    TIER_PHILOSOPHY,
    TIER_TOOLTIPS,
    TIER_VALUES,
    URGENCY_SURCHARGE,
    WARDROBE_RATES,
)
from app.models.estimate_models import (
    AuditScoreRequest,
    AuditScoreResponse,
    AuditVariablesIn,
    CostCalculationOut,
    CostRequest,
    HouseholdResponse,
    PhaseStateOut,
    TimelineCalculationOut,
    TimelineRequest,
    TimelineResponse,
)
from app.services.audit_engine import AuditEngine
from app.services.costing_engine import CostingEngine
from app.services.household_engine import household_recommendations, kitchen_status
from app.services.labels import dict_resolver, resolve_label
from app.services.timeline_engine import TimelineEngine, calculate_phase_states

router = APIRouter(prefix="/api/estimates", tags=["Estimates"])
audit_router = APIRouter(prefix="/api/audit", tags=["Layout Audit"])
logger = logging.getLogger("design-dialogues.estimate-routes")

costing_engine = CostingEngine()
timeline_engine = TimelineEngine()
audit_engine = AuditEngine()


def _resolver(labels: Optional[Dict[str, str]]):
    return dict_resolver(labels) if labels else resolve_label


def _schedule(req: TimelineRequest):
    # TimelineRequest already rejects a double anchor with a 422
    return timeline_engine.schedule(
        req.tier,
        req.is_renovation,
        req.services.to_selection(),
        start_date=req.start_date,
        move_in_date=req.move_in_date,
        is_urgent=req.is_urgent,
        now=req.now,
        label_resolver=_resolver(req.labels),
    )


# ── Cost ─────────────────────────────────────────────────────────────────────

@router.post("/cost", response_model=CostCalculationOut)
async def estimate_cost(req: CostRequest):
    """Itemized cost breakdown for one tier."""
    calc = costing_engine.calculate(req.to_inputs(), req.tier, _resolver(req.labels))
    return CostCalculationOut.model_validate(calc)


# ── Timeline ─────────────────────────────────────────────────────────────────

@router.post("/timeline", response_model=TimelineResponse)
async def estimate_timeline(req: TimelineRequest):
    """Roadmap with calendar dates. Phase states are evaluated at ``now`` (default: server clock)."""
    timeline = _schedule(req)
    now = req.now or datetime.now()
    states = calculate_phase_states(timeline.phases, now)
    return TimelineResponse(
        timeline=TimelineCalculationOut.model_validate(timeline),
        evaluated_at=now,
        phase_states=[PhaseStateOut.model_validate(s) for s in states.values()],
    )


@router.post("/phase-states", response_model=List[PhaseStateOut])
async def estimate_phase_states(req: TimelineRequest):
    timeline = _schedule(req)
    states = calculate_phase_states(timeline.phases, req.now or datetime.now())
    return [PhaseStateOut.model_validate(s) for s in states.values()]


# ── Household ────────────────────────────────────────────────────────────────

@router.get("/household", response_model=HouseholdResponse)
async def household(
    adults: int = Query(2, ge=0, le=50),
    children: int = Query(0, ge=0, le=50),
    kitchen_length: Optional[float] = Query(None, ge=0),
):
    """Recommended joinery lengths and seating for a household; optional kitchen status."""
    result = household_recommendations(adults, children)
    if kitchen_length is not None:
        result["kitchen_status"] = kitchen_status(kitchen_length, adults, children)
    return result


# ── Pricing tables ───────────────────────────────────────────────────────────

@router.get("/pricing")
async def pricing_tables():
    """Static rate tables per tier, for the tier selector and tooltips."""
    return {
        "currency": CURRENCY,
        "price_variance": PRICE_VARIANCE,
        "urgency_surcharge": URGENCY_SURCHARGE,
        "renovation_rate": RENOVATION_RATE,
        "furniture_percentage": FURNITURE_PERCENTAGE,
        "tiers": {
            tier.value: {
                "philosophy": TIER_PHILOSOPHY[tier],
                "base_rate": BASE_RATES[tier],
                "design_rate": DESIGN_RATES[tier],
                "kitchen_rate": KITCHEN_RATES[tier],
                "wardrobe_rate": WARDROBE_RATES[tier],
                "appliance_package": APPLIANCE_PACKAGES[tier],
                "total_weeks": sum(TIER_DURATIONS[tier].values()),
                "tooltips": {category: texts[tier] for category, texts in TIER_TOOLTIPS.items()},
                "services": {service: texts[tier] for service, texts in SERVICE_DESCRIPTIONS.items()},
            }
            for tier in TIER_VALUES
        },
    }


# ── Layout audit ─────────────────────────────────────────────────────────────

@audit_router.get("/checklist")
async def audit_checklist(
    adults: int = Query(2, ge=0, le=50),
    children: int = Query(0, ge=0, le=50),
    work_from_home: bool = Query(False),
):
    variables = AuditVariablesIn(
        number_of_adults=adults, number_of_children=children, work_from_home=work_from_home,
    ).to_variables()
    return audit_engine.build_checklist(variables)


@audit_router.post("/score", response_model=AuditScoreResponse)
async def audit_score(req: AuditScoreRequest):
    variables = req.variables.to_variables()
    visible = audit_engine.visible_item_ids(variables)
    categories = {
        category.id: audit_engine.category_stats(category.id, req.responses, variables)
        for category in audit_engine.visible_categories(variables)
    }
    return AuditScoreResponse(
        score=audit_engine.score(req.responses, variables),
        level=audit_engine.score_level(req.responses, variables),
        worst_category=audit_engine.worst_category(req.responses, variables),
        visible_items=len(visible),
        categories=categories,
    )
