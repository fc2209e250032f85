"""
CostingEngine — tier-aware cost estimate ("Project Passport") for interior
design projects.

Covers:
  - Interior design fee (area-priced, gated by Space Planning)
  - Construction & finish / materials split of the area base rate
  - Kitchen and wardrobe joinery by linear meter, appliance packages
  - Renovation prep (independent of the selected services)
  - Furniture as a share of everything else (gated by Furnishing & Decor)
  - Rush premium for urgent projects
  - ±15 % estimate band and grouping into display groups

Every call is pure: identical inputs give identical output, so the caller
persists only the inputs and recomputes on load.
"""

import logging
import math
import numbers
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Union

from app.config import (
    APPLIANCE_PACKAGES,
    BASE_RATES,
    CONSTRUCTION_SHARE,
    COST_CATEGORIES,
    COST_GROUPS,
    DESIGN_RATES,
    FURNITURE_PERCENTAGE,
    INPUT_DEFAULTS,
    KITCHEN_RATES,
    MATERIALS_SHARE,
    PRICE_VARIANCE,
    RENOVATION_RATE,
    ROUNDING_GRANULARITY,
    STATIC_TOOLTIP_KEYS,
    SUMMARY_ROUNDING_GRANULARITY,
    TIER_TOOLTIPS,
    URGENCY_SURCHARGE,
    WARDROBE_RATES,
    PricingTier,
)
from app.services.labels import LabelResolver, resolve_label

logger = logging.getLogger("design-dialogues.costing")


# ---------------------------------------------------------------------------
# Input guards
# ---------------------------------------------------------------------------

def safe_number(value: Any, default: float) -> float:
    """
    Return ``value`` as a float, or ``default`` when it is missing, not a
    number, NaN or infinite. Sliders emit such values transiently.
    Any real number type (int, float, Decimal, Fraction, numpy scalars) is accepted.
    """
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal)):
        return float(default)
    if isinstance(value, Decimal) and not value.is_finite():
        return float(default)
    value = float(value)
    if not math.isfinite(value):
        return float(default)
    return value


def round_to(value: float, granularity: int = ROUNDING_GRANULARITY) -> int:
    """Round half-up to the nearest multiple of ``granularity``."""
    return int(math.floor(value / granularity + 0.5)) * granularity


def coerce_tier(tier: Union[PricingTier, str]) -> PricingTier:
    if isinstance(tier, PricingTier):
        return tier
    for candidate in PricingTier:
        if str(tier).strip().lower() == candidate.value.lower():
            return candidate
    raise ValueError(f"Unknown pricing tier '{tier}'")


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------

_CAMEL_KEYS = {
    "spacePlanning": "space_planning",
    "interiorFinishes": "interior_finishes",
    "furnishingDecor": "furnishing_decor",
    "numberOfAdults": "number_of_adults",
    "numberOfChildren": "number_of_children",
    "isRenovation": "is_renovation",
    "isUrgent": "is_urgent",
    "kitchenLength": "kitchen_length",
    "wardrobeLength": "wardrobe_length",
}


def _snake(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {_CAMEL_KEYS.get(k, k): v for k, v in data.items()}


@dataclass(frozen=True)
class ServiceSelection:
    space_planning: bool = True
    interior_finishes: bool = True
    furnishing_decor: bool = True

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ServiceSelection":
        data = _snake(data or {})
        return cls(**{k: bool(data[k]) for k in ("space_planning", "interior_finishes", "furnishing_decor") if k in data})

    def is_enabled(self, service: str) -> bool:
        return bool(getattr(self, service))


@dataclass(frozen=True)
class ProjectInputs:
    area: float = INPUT_DEFAULTS["area"]
    number_of_adults: int = INPUT_DEFAULTS["number_of_adults"]
    number_of_children: int = INPUT_DEFAULTS["number_of_children"]
    is_renovation: bool = False
    is_urgent: bool = False
    services: ServiceSelection = field(default_factory=ServiceSelection)
    kitchen_length: float = INPUT_DEFAULTS["kitchen_length"]
    wardrobe_length: float = INPUT_DEFAULTS["wardrobe_length"]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProjectInputs":
        """Build inputs from a persisted form payload (camelCase or snake_case)."""
        data = _snake(data)
        kwargs = {k: v for k, v in data.items() if k in cls.__dataclass_fields__ and k != "services"}
        services = data.get("services")
        if not isinstance(services, ServiceSelection):
            services = ServiceSelection.from_dict(services)
        return cls(services=services, **kwargs)


@dataclass
class CostLineItem:
    key: str
    label: str
    tooltip: str
    value: int
    group: str


@dataclass
class CostGroup:
    key: str
    header: str
    items: List[CostLineItem] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(item.value for item in self.items)


@dataclass
class CostCalculation:
    tier: PricingTier
    total: int
    low_estimate: int
    high_estimate: int
    summary_low: int
    summary_high: int
    subtotal: int
    furniture: int
    renovation_cost: int
    urgency_surcharge: int
    grouped_line_items: List[CostGroup]
    group_totals: Dict[str, int]
    currency: str = "EUR"

    @property
    def line_items(self) -> List[CostLineItem]:
        return [item for group in self.grouped_line_items for item in group.items]


# ---------------------------------------------------------------------------
# CostingEngine
# ---------------------------------------------------------------------------

class CostingEngine:
    """
    Cost Calculation Engine.

    Rates default to ``app.config``; ``pricing_overrides`` may replace any
    scalar rate (``renovation_rate``, ``furniture_percentage``,
    ``price_variance``, ``urgency_surcharge``, ``rounding_granularity``) or
    any per-tier table (``base_rates``, ``design_rates``, ``kitchen_rates``,
    ``wardrobe_rates``, ``appliance_packages``) for this instance only.
    """

    def __init__(self, pricing_overrides: Optional[Dict[str, Any]] = None) -> None:
        cfg = pricing_overrides or {}

        self.base_rates: Dict[PricingTier, float] = self._tier_table(BASE_RATES, cfg.get("base_rates"))
        self.design_rates: Dict[PricingTier, float] = self._tier_table(DESIGN_RATES, cfg.get("design_rates"))
        self.kitchen_rates: Dict[PricingTier, float] = self._tier_table(KITCHEN_RATES, cfg.get("kitchen_rates"))
        self.wardrobe_rates: Dict[PricingTier, float] = self._tier_table(WARDROBE_RATES, cfg.get("wardrobe_rates"))
        self.appliance_packages: Dict[PricingTier, float] = self._tier_table(
            APPLIANCE_PACKAGES, cfg.get("appliance_packages")
        )

        self.renovation_rate: float = float(cfg.get("renovation_rate", RENOVATION_RATE))
        self.furniture_percentage: float = float(cfg.get("furniture_percentage", FURNITURE_PERCENTAGE))
        self.price_variance: float = float(cfg.get("price_variance", PRICE_VARIANCE))
        self.urgency_surcharge: float = float(cfg.get("urgency_surcharge", URGENCY_SURCHARGE))
        self.granularity: int = int(cfg.get("rounding_granularity", ROUNDING_GRANULARITY))
        self.summary_granularity: int = int(
            cfg.get("summary_rounding_granularity", SUMMARY_ROUNDING_GRANULARITY)
        )

    @staticmethod
    def _tier_table(
        defaults: Dict[PricingTier, float], override: Optional[Mapping[Any, Any]]
    ) -> Dict[PricingTier, float]:
        table = dict(defaults)
        for tier, rate in (override or {}).items():
            table[coerce_tier(tier)] = float(rate)
        return table

    # ------------------------------------------------------------------
    # 1. Raw category values
    # ------------------------------------------------------------------

    def category_values(self, inputs: ProjectInputs, tier: PricingTier) -> Dict[str, int]:
        """
        Rounded value of every category before furniture and urgency.
        Categories whose owning service is off are 0.
        """
        area = safe_number(inputs.area, INPUT_DEFAULTS["area"])
        kitchen_length = safe_number(inputs.kitchen_length, INPUT_DEFAULTS["kitchen_length"])
        wardrobe_length = safe_number(inputs.wardrobe_length, INPUT_DEFAULTS["wardrobe_length"])
        services = inputs.services
        g = self.granularity

        values = dict.fromkeys(("interior_design", "construction", "materials",
                                "kitchen", "wardrobes", "appliances", "renovation"), 0)

        if services.space_planning:
            values["interior_design"] = round_to(area * self.design_rates[tier], g)

        if services.interior_finishes:
            construction_base = area * self.base_rates[tier]
            values["construction"] = round_to(construction_base * CONSTRUCTION_SHARE, g)
            values["materials"] = round_to(construction_base * MATERIALS_SHARE, g)
            values["kitchen"] = round_to(kitchen_length * self.kitchen_rates[tier], g)
            values["wardrobes"] = round_to(wardrobe_length * self.wardrobe_rates[tier], g)
            values["appliances"] = round_to(self.appliance_packages[tier], g)

        # Renovation prep is independent of the selected services
        if inputs.is_renovation:
            values["renovation"] = round_to(area * self.renovation_rate, g)

        return values

    # ------------------------------------------------------------------
    # 2. Full calculation
    # ------------------------------------------------------------------

    def calculate(
        self,
        inputs: ProjectInputs,
        tier: Union[PricingTier, str],
        label_resolver: Optional[LabelResolver] = None,
    ) -> CostCalculation:
        """
        Compute the grouped estimate for ``inputs`` at ``tier``.

        Order of operations:
            subtotal  = design + construction + materials + joinery + appliances + renovation
            furniture = round(subtotal × furniture %)            (Furnishing & Decor only)
            urgency   = round((subtotal + furniture) × surcharge) (urgent projects only)
            total     = subtotal + furniture + urgency
            low/high  = round(total × (1 ∓ variance))
        """
        tier = coerce_tier(tier)
        resolve = label_resolver or resolve_label
        g = self.granularity

        values = self.category_values(inputs, tier)
        subtotal = sum(values.values())

        values["furniture"] = (
            round_to(subtotal * self.furniture_percentage, g)
            if inputs.services.furnishing_decor else 0
        )
        pre_urgency_total = subtotal + values["furniture"]

        values["urgency"] = (
            round_to(pre_urgency_total * self.urgency_surcharge, g)
            if inputs.is_urgent else 0
        )
        total = pre_urgency_total + values["urgency"]

        low_estimate = round_to(total * (1 - self.price_variance), g)
        high_estimate = round_to(total * (1 + self.price_variance), g)

        groups = self._group(values, tier, resolve)

        logger.debug(
            "cost estimate computed",
            extra={"tier": tier.value, "total": total, "groups": len(groups)},
        )

        return CostCalculation(
            tier=tier,
            total=total,
            low_estimate=low_estimate,
            high_estimate=high_estimate,
            summary_low=round_to(low_estimate, self.summary_granularity),
            summary_high=round_to(high_estimate, self.summary_granularity),
            subtotal=subtotal,
            furniture=values["furniture"],
            renovation_cost=values["renovation"],
            urgency_surcharge=values["urgency"],
            grouped_line_items=groups,
            group_totals={key: sum(values[c] for c, (_, grp) in COST_CATEGORIES.items() if grp == key)
                          for key, _ in COST_GROUPS},
        )

    # ------------------------------------------------------------------
    # 3. Grouping (pure projection; never changes totals)
    # ------------------------------------------------------------------

    def _group(
        self, values: Dict[str, int], tier: PricingTier, resolve: LabelResolver
    ) -> List[CostGroup]:
        groups: List[CostGroup] = []
        for group_key, header_key in COST_GROUPS:
            group = CostGroup(key=group_key, header=resolve(header_key))
            for category, (label_key, owner) in COST_CATEGORIES.items():
                if owner != group_key or values.get(category, 0) <= 0:
                    continue
                group.items.append(CostLineItem(
                    key=category,
                    label=resolve(label_key),
                    tooltip=tooltip_for(category, tier, resolve),
                    value=values[category],
                    group=group_key,
                ))
            if group.items:
                groups.append(group)
        return groups


def tooltip_for(category: str, tier: Union[PricingTier, str], resolve: LabelResolver = resolve_label) -> str:
    """Explanatory text for a (category, tier) pair; empty for unknown categories."""
    tier = coerce_tier(tier)
    if category in TIER_TOOLTIPS:
        return TIER_TOOLTIPS[category][tier]
    if category in STATIC_TOOLTIP_KEYS:
        return resolve(STATIC_TOOLTIP_KEYS[category])
    return ""


_default_engine = CostingEngine()


def calculate_cost(
    inputs: ProjectInputs,
    tier: Union[PricingTier, str],
    label_resolver: Optional[LabelResolver] = None,
) -> CostCalculation:
    """Module-level shortcut using the default rate tables."""
    return _default_engine.calculate(inputs, tier, label_resolver)
