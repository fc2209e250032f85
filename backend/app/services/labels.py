"""Default English label resolver for engine output (i18n keys -> text)."""
from typing import Callable, Dict

LabelResolver = Callable[[str], str]

EN_LABELS: Dict[str, str] = {
    # Cost categories
    "cost.interiorDesign": "Interior Design",
    "cost.constructionFinish": "Construction & Finish",
    "cost.materials": "Materials",
    "cost.kitchen": "Kitchen",
    "cost.wardrobes": "Wardrobes",
    "cost.appliances": "Appliances",
    "cost.furniture": "Furniture",
    "cost.renovationPrep": "Renovation Prep",
    "cost.urgency": "Rush Scheduling Premium",
    "cost.prepWorkTooltip": "Demolition, debris removal, and surface preparation before new works begin",
    "cost.urgencyTooltip": "Compressed schedule with parallel crews and priority ordering from suppliers",

    # Cost groups
    "cost.projectShell": "PROJECT & SHELL",
    "cost.fixedJoinery": "FIXED JOINERY",
    "cost.movablesTech": "MOVABLES & TECH",
    "cost.renovationGroup": "RENOVATION",

    # Timeline phases
    "timeline.phases.prep.title": "Renovation Prep",
    "timeline.phases.prep.site": "Permits, testing and demolition",
    "timeline.phases.vision.title": "The Vision",
    "timeline.phases.vision.site": "Site untouched, design on paper",
    "timeline.phases.logistics.title": "Logistics",
    "timeline.phases.logistics.site": "Contractor booked, long-lead orders placed",
    "timeline.phases.infrastructure.title": "Rough Works",
    "timeline.phases.infrastructure.site": "Walls open, wiring and plumbing in progress",
    "timeline.phases.finishes.title": "Finishes",
    "timeline.phases.finishes.site": "Flooring, paint and tiling",
    "timeline.phases.assembly.title": "Assembly",
    "timeline.phases.assembly.site": "Joinery installed, furniture arriving",

    # Timeline tasks
    "timeline.tasks.apply-permits": "Apply for renovation permits",
    "timeline.tasks.asbestos-test": "Order asbestos and hazardous material test",
    "timeline.tasks.demo-plan": "Approve demolition plan",
    "timeline.tasks.hire-designer": "Hire an interior designer",
    "timeline.tasks.approve-concept": "Approve design concept",
    "timeline.tasks.approve-technical": "Approve technical drawings",
    "timeline.tasks.hire-contractor": "Hire a general contractor",
    "timeline.tasks.order-tiles-plumbing": "Order tiles and plumbing fixtures",
    "timeline.tasks.order-doors": "Order interior doors",
    "timeline.tasks.order-kitchen-joinery": "Order kitchen and joinery",
    "timeline.tasks.socket-walkthrough": "Socket and switch walkthrough",
    "timeline.tasks.order-flooring": "Order flooring",
    "timeline.tasks.buy-lighting": "Buy light fixtures",
    "timeline.tasks.schedule-cleaners": "Schedule post-construction cleaning",
    "timeline.tasks.order-sofa-curtains": "Order sofa and curtains",
    "timeline.tasks.defect-check": "Final defect check",

    # Audit categories
    "audit.category.storage.title": "Storage",
    "audit.category.social.title": "Social Spaces",
    "audit.category.kitchen.title": "Kitchen",
    "audit.category.bedroom.title": "Bedroom",
    "audit.category.bathroom.title": "Bathroom",
    "audit.category.homeOffice.title": "Home Office",
    "audit.category.power.title": "Power & Lighting",
    "audit.category.doors.title": "Doors & Circulation",
}


def resolve_label(key: str) -> str:
    """Return the English text for ``key``; unknown keys resolve to themselves."""
    return EN_LABELS.get(key, key)


def dict_resolver(labels: Dict[str, str]) -> LabelResolver:
    """Build a resolver over ``labels`` that falls back to the English table."""
    def _resolve(key: str) -> str:
        return labels.get(key) or resolve_label(key)
    return _resolve
