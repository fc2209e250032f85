"""
audit_engine.py — Layout-quality audit checklist.

Eight categories of ergonomic checks. Some items carry a recommended value
derived from the household (e.g. kitchen length), some are only shown for
certain households (kids' wardrobe, home office). The score counts only
visible items answered pass or fail.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from app.services import household_engine as household
from app.services.costing_engine import safe_number
from app.services.labels import LabelResolver, resolve_label

logger = logging.getLogger("design-dialogues.audit")

AUDIT_RESPONSES = ("pass", "fail", "unknown", "na")

# Score-level thresholds (percent)
GREEN_THRESHOLD = 80
AMBER_THRESHOLD = 50


@dataclass(frozen=True)
class AuditVariables:
    number_of_adults: int = 2
    number_of_children: int = 0
    work_from_home: bool = False

    @property
    def number_of_people(self) -> int:
        return self.number_of_adults + self.number_of_children

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "AuditVariables":
        data = data or {}
        adults = data.get("number_of_adults", data.get("numberOfAdults"))
        children = data.get("number_of_children", data.get("numberOfChildren"))
        wfh = data.get("work_from_home", data.get("workFromHome", False))
        return cls(
            number_of_adults=int(safe_number(adults, 2)),
            number_of_children=int(safe_number(children, 0)),
            work_from_home=bool(wfh),
        )


@dataclass(frozen=True)
class AuditItem:
    id: str
    question_key: str
    tooltip_key: str
    calculate_value: Optional[Callable[[AuditVariables], Any]] = None
    show_if: Optional[Callable[[AuditVariables], bool]] = None

    def is_visible(self, variables: Optional[AuditVariables]) -> bool:
        return variables is None or self.show_if is None or self.show_if(variables)


@dataclass(frozen=True)
class AuditCategory:
    id: str
    items: List[AuditItem] = field(default_factory=list)
    show_if: Optional[Callable[[AuditVariables], bool]] = None

    @property
    def title_key(self) -> str:
        return f"audit.category.{self.id}.title"

    def is_visible(self, variables: Optional[AuditVariables]) -> bool:
        return variables is None or self.show_if is None or self.show_if(variables)

    def visible_items(self, variables: Optional[AuditVariables]) -> List[AuditItem]:
        return [item for item in self.items if item.is_visible(variables)]


def _item(category: str, slug: str, name: str, value=None, show_if=None) -> AuditItem:
    return AuditItem(
        id=f"{category}-{slug}",
        question_key=f"audit.item.{category}.{name}",
        tooltip_key=f"audit.tooltip.{category}.{name}",
        calculate_value=value,
        show_if=show_if,
    )


AUDIT_CATEGORIES: List[AuditCategory] = [
    AuditCategory("storage", [
        _item("storage", "hallway-wardrobe", "hallwayWardrobe",
              value=lambda v: household.entrance_wardrobe_length(v.number_of_adults, v.number_of_children)),
        _item("storage", "master-wardrobe", "masterWardrobe",
              value=lambda v: household.master_wardrobe_length(v.number_of_adults)),
        _item("storage", "kids-wardrobe", "kidsWardrobe",
              value=lambda v: household.kids_wardrobe_length(v.number_of_children),
              show_if=lambda v: v.number_of_children > 0),
        _item("storage", "general", "general",
              value=lambda v: household.general_storage_length(v.number_of_people)),
        _item("storage", "utility", "utility"),
        _item("storage", "entry-drop", "entryDrop"),
    ]),
    AuditCategory("social", [
        _item("social", "dining-count", "diningCount",
              value=lambda v: household.dining_seats(v.number_of_people)),
        _item("social", "chair-clearance", "chairClearance"),
        _item("social", "sofa-capacity", "sofaCapacity",
              value=lambda v: household.living_seats(v.number_of_people)),
        _item("social", "conversation", "conversation"),
        _item("social", "traffic-paths", "trafficPaths"),
    ]),
    AuditCategory("kitchen", [
        _item("kitchen", "linear", "linear",
              value=lambda v: household.kitchen_linear_length(v.number_of_adults, v.number_of_children)),
        _item("kitchen", "tall-units", "tallUnits",
              value=lambda v: household.tall_units(v.number_of_people)),
        _item("kitchen", "triangle", "triangle"),
        _item("kitchen", "prep-zone", "prepZone"),
        _item("kitchen", "aisle-width", "aisleWidth"),
        _item("kitchen", "dishwasher-trap", "dishwasherTrap"),
        _item("kitchen", "fridge-door", "fridgeDoor"),
        _item("kitchen", "fridge-oven", "fridgeOven"),
    ]),
    AuditCategory("bedroom", [
        _item("bedroom", "bed-access", "bedAccess"),
        _item("bedroom", "nightstands", "nightstands"),
        _item("bedroom", "door-conflict", "doorConflict"),
        _item("bedroom", "sightlines", "sightlines"),
        _item("bedroom", "acoustics", "acoustics"),
    ]),
    AuditCategory("bathroom", [
        _item("bathroom", "ratio", "ratio",
              value=lambda v: household.bathroom_count(v.number_of_people),
              show_if=lambda v: v.number_of_people > 3),
        _item("bathroom", "laundry", "laundry",
              value=lambda v: household.laundry_setup(v.number_of_people),
              show_if=lambda v: v.number_of_people > 3),
        _item("bathroom", "door-swing", "doorSwing"),
        _item("bathroom", "elbow-room", "elbowRoom"),
        _item("bathroom", "shower-head", "showerHead"),
    ]),
    AuditCategory("homeOffice", [
        _item("homeOffice", "work-zone", "workZone"),
        _item("homeOffice", "natural-light", "naturalLight"),
    ], show_if=lambda v: v.work_from_home),
    AuditCategory("power", [
        _item("power", "bed-charging", "bedCharging"),
        _item("power", "sofa-power", "sofaPower"),
        _item("power", "entry-charging", "entryCharging"),
        _item("power", "work-power", "workPower"),
        _item("power", "task-lighting", "taskLighting"),
    ]),
    AuditCategory("doors", [
        _item("doors", "door-to-door", "doorToDoor"),
        _item("doors", "appliance-to-person", "applianceToPerson"),
        _item("doors", "appliance-to-appliance", "applianceToAppliance"),
        _item("doors", "circulation-blocking", "circulationBlocking"),
    ]),
]


def _pass_ratio(answers: Iterable[Optional[str]]) -> Optional[int]:
    """round(pass / (pass + fail) × 100); None when nothing was answered pass or fail."""
    passed = failed = 0
    for answer in answers:
        if answer == "pass":
            passed += 1
        elif answer == "fail":
            failed += 1
    answered = passed + failed
    if answered == 0:
        return None
    return int(math.floor(passed / answered * 100 + 0.5))


class AuditEngine:
    """Visibility, scoring, traffic-light level and per-category stats for the layout audit."""

    def __init__(self, categories: Optional[List[AuditCategory]] = None) -> None:
        self.categories = AUDIT_CATEGORIES if categories is None else categories
        self._index = {c.id: c for c in self.categories}

    def visible_categories(self, variables: Optional[AuditVariables] = None) -> List[AuditCategory]:
        return [c for c in self.categories if c.is_visible(variables)]

    def visible_item_ids(self, variables: Optional[AuditVariables] = None) -> List[str]:
        """All item ids, filtered by category and item visibility when variables are given."""
        return [
            item.id
            for category in self.visible_categories(variables)
            for item in category.visible_items(variables)
        ]

    def score(
        self, responses: Mapping[str, str], variables: Optional[AuditVariables] = None
    ) -> Optional[int]:
        """
        Score = round(pass / (pass + fail) × 100) over visible items.
        ``unknown`` and ``na`` answers are excluded; None when nothing was answered.
        """
        return _pass_ratio(responses.get(item_id) for item_id in self.visible_item_ids(variables))

    def category_score(
        self,
        category_id: str,
        responses: Mapping[str, str],
        variables: Optional[AuditVariables] = None,
    ) -> Optional[int]:
        """Same ratio as ``score`` restricted to one category's visible items."""
        category = self._index.get(category_id)
        if category is None:
            return None
        return _pass_ratio(responses.get(item.id) for item in category.visible_items(variables))

    def score_level(
        self, responses: Mapping[str, str], variables: Optional[AuditVariables] = None
    ) -> Optional[str]:
        """
        Traffic-light verdict, capped by the weakest visible category:
          green  score >= 80 and no category below 80
          amber  score >= 50 and no category below 50
          red    otherwise
        None when nothing was answered.
        """
        score = self.score(responses, variables)
        if score is None:
            return None

        category_scores = [
            s for s in (self.category_score(c.id, responses, variables)
                        for c in self.visible_categories(variables))
            if s is not None
        ]
        worst = min(category_scores) if category_scores else score

        if score >= GREEN_THRESHOLD and worst >= GREEN_THRESHOLD:
            return "green"
        if score >= AMBER_THRESHOLD and worst >= AMBER_THRESHOLD:
            return "amber"
        return "red"

    def worst_category(
        self, responses: Mapping[str, str], variables: Optional[AuditVariables] = None
    ) -> Optional[str]:
        """Id of the lowest-scoring visible category with at least one fail; None if nothing failed."""
        failing = []
        for category in self.visible_categories(variables):
            stats = self.category_stats(category.id, responses, variables)
            if stats["fail"] == 0:
                continue
            failing.append((self.category_score(category.id, responses, variables), category.id))
        if not failing:
            return None
        # min() keeps catalogue order among equal scores
        return min(failing, key=lambda pair: pair[0])[1]

    def category_stats(
        self,
        category_id: str,
        responses: Mapping[str, str],
        variables: Optional[AuditVariables] = None,
    ) -> Dict[str, int]:
        stats = dict.fromkeys(AUDIT_RESPONSES + ("total",), 0)
        category = self._index.get(category_id)
        if category is None:
            return stats

        items = category.visible_items(variables)
        stats["total"] = len(items)
        for item in items:
            answer = responses.get(item.id)
            if answer in AUDIT_RESPONSES:
                stats[answer] += 1
        return stats

    def build_checklist(
        self,
        variables: AuditVariables,
        responses: Optional[Mapping[str, str]] = None,
        label_resolver: Optional[LabelResolver] = None,
    ) -> List[Dict[str, Any]]:
        """Visible categories with their items, recommended values and current answers."""
        resolve = label_resolver or resolve_label
        responses = responses or {}
        checklist = []
        for category in self.visible_categories(variables):
            checklist.append({
                "id": category.id,
                "title": resolve(category.title_key),
                "score": self.category_score(category.id, responses, variables),
                "stats": self.category_stats(category.id, responses, variables),
                "items": [
                    {
                        "id": item.id,
                        "question_key": item.question_key,
                        "tooltip_key": item.tooltip_key,
                        "recommended_value": item.calculate_value(variables) if item.calculate_value else None,
                        "response": responses.get(item.id),
                    }
                    for item in category.visible_items(variables)
                ],
            })
        logger.debug("audit checklist built", extra={"categories": len(checklist)})
        return checklist
