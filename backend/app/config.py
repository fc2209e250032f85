"""
Estimation configuration — single source of truth for tiers, rate tables,
phase durations, phase templates, task definitions and tier tooltips.

Import from here in all engines and routes rather than hardcoding values.
Nothing in this module is mutated at runtime: a saved set of project inputs
must reproduce the same estimate when it is reloaded.
"""
from __future__ import annotations

from enum import Enum


# ── Tiers ─────────────────────────────────────────────────────────────────────

class PricingTier(str, Enum):
    BUDGET = "Budget"
    STANDARD = "Standard"
    PREMIUM = "Premium"


DEFAULT_TIER: PricingTier = PricingTier.STANDARD
TIER_VALUES: list[PricingTier] = [PricingTier.BUDGET, PricingTier.STANDARD, PricingTier.PREMIUM]

TIER_PHILOSOPHY: dict[PricingTier, str] = {
    PricingTier.BUDGET: "Simple, practical materials and solutions, well suited for lightly used spaces or rentals.",
    PricingTier.STANDARD: "A thoughtful balance of cost, quality, and aesthetics for comfortable everyday living.",
    PricingTier.PREMIUM: "Exceptional materials and a refined, memorable experience of space.",
}


# ── Rate tables (EUR) ─────────────────────────────────────────────────────────

# Construction base rate per m²; split 60 % labour / 40 % materials
BASE_RATES: dict[PricingTier, float] = {
    PricingTier.BUDGET: 350.0,
    PricingTier.STANDARD: 550.0,
    PricingTier.PREMIUM: 900.0,
}
CONSTRUCTION_SHARE: float = 0.6
MATERIALS_SHARE: float = 0.4

# Interior design project fee per m²
DESIGN_RATES: dict[PricingTier, float] = {
    PricingTier.BUDGET: 40.0,
    PricingTier.STANDARD: 50.0,
    PricingTier.PREMIUM: 60.0,
}

# Kitchen & joinery per linear meter
KITCHEN_RATES: dict[PricingTier, float] = {
    PricingTier.BUDGET: 800.0,
    PricingTier.STANDARD: 1200.0,
    PricingTier.PREMIUM: 2000.0,
}

# Built-in wardrobes per linear meter
WARDROBE_RATES: dict[PricingTier, float] = {
    PricingTier.BUDGET: 600.0,
    PricingTier.STANDARD: 800.0,
    PricingTier.PREMIUM: 1000.0,
}

# Home appliances, flat package per tier
APPLIANCE_PACKAGES: dict[PricingTier, float] = {
    PricingTier.BUDGET: 3000.0,
    PricingTier.STANDARD: 6000.0,
    PricingTier.PREMIUM: 12000.0,
}

RENOVATION_RATE: float = 150.0          # per m², tier-independent
FURNITURE_PERCENTAGE: float = 0.20      # of the pre-furniture subtotal
PRICE_VARIANCE: float = 0.15            # ±15 % estimate band
URGENCY_SURCHARGE: float = 0.20         # +20 % rush premium
ROUNDING_GRANULARITY: int = 100         # line items and band bounds
SUMMARY_ROUNDING_GRANULARITY: int = 1000  # compact headline range
CURRENCY: str = "EUR"


# ── Input defaults (substituted for missing / NaN slider values) ─────────────
INPUT_DEFAULTS: dict[str, float] = {
    "area": 50.0,
    "number_of_adults": 2,
    "number_of_children": 0,
    "kitchen_length": 4.0,
    "wardrobe_length": 3.0,
}


# ── Cost categories and display groups ───────────────────────────────────────
# category key -> (label i18n key, owning group)
COST_CATEGORIES: dict[str, tuple[str, str]] = {
    "interior_design":    ("cost.interiorDesign", "project_shell"),
    "construction":       ("cost.constructionFinish", "project_shell"),
    "materials":          ("cost.materials", "project_shell"),
    "urgency":            ("cost.urgency", "project_shell"),
    "kitchen":            ("cost.kitchen", "fixed_joinery"),
    "wardrobes":          ("cost.wardrobes", "fixed_joinery"),
    "appliances":         ("cost.appliances", "fixed_joinery"),
    "furniture":          ("cost.furniture", "movables_tech"),
    "renovation":         ("cost.renovationPrep", "renovation"),
}

# Display order of groups and their header i18n keys
COST_GROUPS: list[tuple[str, str]] = [
    ("project_shell", "cost.projectShell"),
    ("fixed_joinery", "cost.fixedJoinery"),
    ("movables_tech", "cost.movablesTech"),
    ("renovation", "cost.renovationGroup"),
]

# Tier-aware tooltips explaining why prices differ
TIER_TOOLTIPS: dict[str, dict[PricingTier, str]] = {
    "interior_design": {
        PricingTier.BUDGET: "Functional layouts with basic lighting — one pendant per room and standard ergonomics",
        PricingTier.STANDARD: "Detailed plans with layered lighting zones, optimized circulation, and custom details",
        PricingTier.PREMIUM: "Full 3D visualization, bespoke lighting design, premium ergonomics, and meticulous detailing",
    },
    "construction": {
        PricingTier.BUDGET: "Standard finishes, basic plastering, and cost-effective flooring installation",
        PricingTier.STANDARD: "Quality workmanship, smooth finishes, and precise detailing throughout",
        PricingTier.PREMIUM: "Artisan-level craftsmanship, seamless finishes, and premium installation techniques",
    },
    "materials": {
        PricingTier.BUDGET: "Practical materials — laminate flooring, standard tiles, and basic fixtures",
        PricingTier.STANDARD: "Quality mid-range — engineered wood, porcelain tiles, and branded fixtures",
        PricingTier.PREMIUM: "Luxury selection — natural stone, hardwood, designer fixtures, and premium hardware",
    },
    "kitchen": {
        PricingTier.BUDGET: "MDF carcasses with laminate finish, standard hardware, and practical worktops",
        PricingTier.STANDARD: "Solid wood frames, soft-close mechanisms, and engineered stone surfaces",
        PricingTier.PREMIUM: "Solid timber construction, premium hardware, natural stone worktops, and bespoke details",
    },
    "appliances": {
        PricingTier.BUDGET: "Reliable brands covering essential functions — practical and efficient",
        PricingTier.STANDARD: "Premium brands with advanced features — better performance and longevity",
        PricingTier.PREMIUM: "Top-tier brands — professional-grade performance, smart features, and integrated design",
    },
    "wardrobes": {
        PricingTier.BUDGET: "Melamine finish with basic internal layout and standard fittings",
        PricingTier.STANDARD: "Painted MDF, customized internals, soft-close doors, and quality accessories",
        PricingTier.PREMIUM: "Lacquered or veneer finish, LED lighting, premium fittings, and bespoke organization",
    },
    "furniture": {
        PricingTier.BUDGET: "Functional basics — mix of ready-made pieces from reliable brands",
        PricingTier.STANDARD: "Quality mid-range — coordinated selection from established furniture brands",
        PricingTier.PREMIUM: "Designer pieces, custom upholstery, and investment furniture built to last decades",
    },
}

# Tier-independent tooltips (resolved through the label resolver)
STATIC_TOOLTIP_KEYS: dict[str, str] = {
    "renovation": "cost.prepWorkTooltip",
    "urgency": "cost.urgencyTooltip",
}

# Service card descriptions per (service, tier)
SERVICE_DESCRIPTIONS: dict[str, dict[PricingTier, str]] = {
    "space_planning": {
        PricingTier.BUDGET: "Standardized Basics. Application of generic layout rules. Focuses on the fastest, most obvious solutions to keep design time and complexity to a minimum.",
        PricingTier.STANDARD: "Ergonomic Optimization. Flow optimized for specific lifestyle habits. Involves custom zoning and solving specific spatial challenges.",
        PricingTier.PREMIUM: "Complete spatial transformation. Includes moving walls, integrated joinery detailing, and advanced lighting architecture.",
    },
    "interior_finishes": {
        PricingTier.BUDGET: "Single-Source Selection. Materials selected from consolidated vendors. Optimizes design hours while ensuring a clean result.",
        PricingTier.STANDARD: "Cross-Supplier Curation. Textures matched across multiple specialized suppliers to create unique aesthetic depth.",
        PricingTier.PREMIUM: "Unrestricted Sourcing. Global procurement scope. Includes rare natural materials, trade-only surfaces, and custom elements.",
    },
    "furnishing_decor": {
        PricingTier.BUDGET: "Retail Specification. Selection of ready-to-ship, in-stock items from major retailers. Focuses on budget control.",
        PricingTier.STANDARD: "Semi-Custom Mix. Blends retail items with semi-custom selections. Includes fabric matching and dimension checks.",
        PricingTier.PREMIUM: "Bespoke Commissioning. Specification of trade-only brands. Includes exact sizing, custom upholstery, and made-to-measure detailing.",
    },
}


# ── Timeline durations (weeks) ────────────────────────────────────────────────
# Core phases in execution order; proportions roughly 20/10/30/20/20 %.
CORE_PHASES: list[str] = ["vision", "logistics", "infrastructure", "finishes", "assembly"]

TIER_DURATIONS: dict[PricingTier, dict[str, int]] = {
    PricingTier.BUDGET:   {"vision": 2, "logistics": 1, "infrastructure": 3, "finishes": 2, "assembly": 2},
    PricingTier.STANDARD: {"vision": 3, "logistics": 2, "infrastructure": 4, "finishes": 3, "assembly": 3},
    PricingTier.PREMIUM:  {"vision": 4, "logistics": 3, "infrastructure": 6, "finishes": 6, "assembly": 5},
}

RENOVATION_PREP_WEEKS: int = 2
URGENT_SCHEDULE_FACTOR: float = 0.8     # core phases compressed to 80 %
PHASE_URGENCY_WINDOW_DAYS: int = 3      # final days of a phase flagged urgent


# ── Phase templates ───────────────────────────────────────────────────────────
PHASE_TEMPLATES: dict[str, dict] = {
    "renovation": {
        "id": "phase-0",
        "title_key": "timeline.phases.prep.title",
        "site_status_key": "timeline.phases.prep.site",
        "tasks": ["apply-permits", "asbestos-test", "demo-plan"],
    },
    "vision": {
        "id": "phase-1",
        "title_key": "timeline.phases.vision.title",
        "site_status_key": "timeline.phases.vision.site",
        "tasks": ["hire-designer", "approve-concept", "approve-technical"],
    },
    "logistics": {
        "id": "phase-2",
        "title_key": "timeline.phases.logistics.title",
        "site_status_key": "timeline.phases.logistics.site",
        "tasks": ["hire-contractor", "order-tiles-plumbing"],
    },
    "infrastructure": {
        "id": "phase-3",
        "title_key": "timeline.phases.infrastructure.title",
        "site_status_key": "timeline.phases.infrastructure.site",
        "tasks": ["order-doors", "order-kitchen-joinery", "socket-walkthrough"],
    },
    "finishes": {
        "id": "phase-4",
        "title_key": "timeline.phases.finishes.title",
        "site_status_key": "timeline.phases.finishes.site",
        "tasks": ["order-flooring", "buy-lighting", "schedule-cleaners"],
    },
    "assembly": {
        "id": "phase-5",
        "title_key": "timeline.phases.assembly.title",
        "site_status_key": "timeline.phases.assembly.site",
        "tasks": ["order-sofa-curtains", "defect-check"],
    },
}

# task id -> metadata; labels come from the resolver (timeline.tasks.<id>)
TASK_DEFINITIONS: dict[str, dict] = {
    # Phase 0: renovation prep
    "apply-permits":         {"button_variant": "outline"},
    "asbestos-test":         {"button_variant": "outline"},
    "demo-plan":             {"button_variant": "solid"},
    # Phase 1: vision
    "hire-designer":         {"button_variant": "solid", "requires_service": "space_planning"},
    "approve-concept":       {"button_variant": "outline"},
    "approve-technical":     {"button_variant": "outline"},
    # Phase 2: logistics
    "hire-contractor":       {"button_variant": "solid"},
    "order-tiles-plumbing":  {"button_variant": "outline"},
    # Phase 3: infrastructure
    "order-doors":           {"button_variant": "solid"},
    "order-kitchen-joinery": {"button_variant": "solid", "requires_service": "interior_finishes"},
    "socket-walkthrough":    {"button_variant": "outline"},
    # Phase 4: finishes
    "order-flooring":        {"button_variant": "outline"},
    "buy-lighting":          {"button_variant": "outline"},
    "schedule-cleaners":     {"button_variant": "outline"},
    # Phase 5: assembly
    "order-sofa-curtains":   {"button_variant": "outline", "requires_service": "furnishing_decor"},
    "defect-check":          {"button_variant": "outline", "is_critical": True},
}


# ── Household sizing (ergonomic standards) ────────────────────────────────────
KITCHEN_BASE_M: float = 3.0             # covers two people
KITCHEN_PER_EXTRA_ADULT_M: float = 0.6
KITCHEN_PER_CHILD_M: float = 0.4
KITCHEN_UNDERBUILT_TOLERANCE_M: float = 0.9
KITCHEN_OVERBUILT_TOLERANCE_M: float = 1.5
