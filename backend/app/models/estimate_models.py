"""
Request / response contracts for the estimate and audit routes.

Inputs accept both the SPA's camelCase keys and snake_case. Responses are
read straight off the engine dataclasses (``from_attributes``).
"""
from datetime import date, datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.config import DEFAULT_TIER, PricingTier
from app.services.audit_engine import AUDIT_RESPONSES, AuditVariables
from app.services.costing_engine import ProjectInputs, ServiceSelection

AuditResponse = Literal[AUDIT_RESPONSES]


# ── Requests ──────────────────────────────────────────────────────────────────

class ServiceSelectionIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    space_planning: bool = Field(True, alias="spacePlanning")
    interior_finishes: bool = Field(True, alias="interiorFinishes")
    furnishing_decor: bool = Field(True, alias="furnishingDecor")

    def to_selection(self) -> ServiceSelection:
        return ServiceSelection(
            space_planning=self.space_planning,
            interior_finishes=self.interior_finishes,
            furnishing_decor=self.furnishing_decor,
        )


class CostRequest(BaseModel):
    """Project inputs as persisted by the SPA. Missing numbers fall back to defaults."""
    model_config = ConfigDict(populate_by_name=True, json_schema_extra={
        "example": {
            "tier": "Standard",
            "area": 60,
            "isRenovation": False,
            "isUrgent": False,
            "services": {"spacePlanning": True, "interiorFinishes": True, "furnishingDecor": True},
            "kitchenLength": 3,
            "wardrobeLength": 2,
        }
    })

    tier: PricingTier = DEFAULT_TIER
    area: Optional[float] = Field(None, ge=0, description="Floor area in m²")
    number_of_adults: Optional[int] = Field(None, ge=0, alias="numberOfAdults")
    number_of_children: Optional[int] = Field(None, ge=0, alias="numberOfChildren")
    is_renovation: bool = Field(False, alias="isRenovation")
    is_urgent: bool = Field(False, alias="isUrgent")
    services: ServiceSelectionIn = Field(default_factory=ServiceSelectionIn)
    kitchen_length: Optional[float] = Field(None, ge=0, alias="kitchenLength", description="Linear meters")
    wardrobe_length: Optional[float] = Field(None, ge=0, alias="wardrobeLength", description="Linear meters")
    labels: Optional[Dict[str, str]] = Field(None, description="Translated labels keyed by i18n key")

    def to_inputs(self) -> ProjectInputs:
        return ProjectInputs(
            area=self.area,
            number_of_adults=self.number_of_adults,
            number_of_children=self.number_of_children,
            is_renovation=self.is_renovation,
            is_urgent=self.is_urgent,
            services=self.services.to_selection(),
            kitchen_length=self.kitchen_length,
            wardrobe_length=self.wardrobe_length,
        )


class TimelineRequest(BaseModel):
    """Timeline inputs; pass ``startDate`` or ``moveInDate``, never both."""
    model_config = ConfigDict(populate_by_name=True)

    tier: PricingTier = DEFAULT_TIER
    is_renovation: bool = Field(False, alias="isRenovation")
    is_urgent: bool = Field(False, alias="isUrgent")
    services: ServiceSelectionIn = Field(
        default_factory=lambda: ServiceSelectionIn(furnishing_decor=False)
    )
    start_date: Optional[date] = Field(None, alias="startDate")
    move_in_date: Optional[date] = Field(None, alias="moveInDate")
    now: Optional[datetime] = Field(None, description="Evaluate phase states at this instant")
    labels: Optional[Dict[str, str]] = None

    @model_validator(mode="after")
    def _single_anchor(self):
        if self.start_date is not None and self.move_in_date is not None:
            raise ValueError("Provide either startDate or moveInDate, not both")
        # Phase dates are naive local midnights; compare against local wall time
        if self.now is not None and self.now.tzinfo is not None:
            self.now = self.now.astimezone().replace(tzinfo=None)
        return self


class AuditVariablesIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    number_of_adults: int = Field(2, ge=0, alias="numberOfAdults")
    number_of_children: int = Field(0, ge=0, alias="numberOfChildren")
    work_from_home: bool = Field(False, alias="workFromHome")

    def to_variables(self) -> AuditVariables:
        return AuditVariables(
            number_of_adults=self.number_of_adults,
            number_of_children=self.number_of_children,
            work_from_home=self.work_from_home,
        )


class AuditScoreRequest(BaseModel):
    responses: Dict[str, AuditResponse] = Field(default_factory=dict)
    variables: AuditVariablesIn = Field(default_factory=AuditVariablesIn)


# ── Responses ─────────────────────────────────────────────────────────────────

class _FromEngine(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class CostLineItemOut(_FromEngine):
    key: str
    label: str
    tooltip: str
    value: int
    group: str


class CostGroupOut(_FromEngine):
    key: str
    header: str
    total: int
    items: List[CostLineItemOut]


class CostCalculationOut(_FromEngine):
    tier: PricingTier
    currency: str
    total: int
    low_estimate: int
    high_estimate: int
    summary_low: int
    summary_high: int
    subtotal: int
    furniture: int
    renovation_cost: int
    urgency_surcharge: int
    group_totals: Dict[str, int]
    grouped_line_items: List[CostGroupOut]


class TimelineTaskOut(_FromEngine):
    id: str
    label: str
    button_variant: str
    is_critical: bool
    requires_service: Optional[str] = None


class TimelinePhaseOut(_FromEngine):
    id: str
    title: str
    site_status: str
    week_start: int
    week_end: int
    weeks: int
    start_date: datetime
    end_date: datetime
    date_range: str
    tasks: List[TimelineTaskOut]


class PhaseStateOut(_FromEngine):
    phase_id: str
    is_active: bool
    is_urgent: bool
    is_overdue: bool


class TimelineCalculationOut(_FromEngine):
    tier: PricingTier
    total_weeks: int
    start_date: datetime
    end_date: datetime
    anchor: str
    phases: List[TimelinePhaseOut]


class TimelineResponse(BaseModel):
    timeline: TimelineCalculationOut
    evaluated_at: datetime
    phase_states: List[PhaseStateOut]


class HouseholdResponse(BaseModel):
    number_of_adults: int
    number_of_children: int
    number_of_people: int
    kitchen_linear_m: float
    tall_units: int
    entrance_wardrobe_m: float
    master_wardrobe_m: float
    kids_wardrobe_m: Optional[float] = None
    general_storage_m: float
    dining_seats: int
    living_seats: int
    laundry_setup: str
    bathrooms: int
    kitchen_status: Optional[str] = None


class AuditScoreResponse(BaseModel):
    score: Optional[int]
    level: Optional[Literal["green", "amber", "red"]] = None
    worst_category: Optional[str] = Field(None, description="Lowest-scoring category with a fail")
    visible_items: int
    categories: Dict[str, Dict[str, int]]
