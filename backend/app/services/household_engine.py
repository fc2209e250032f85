"""
household_engine.py — Household-size recommendations (ergonomic standards).

Small pure formulas over (adults, children) used to flag under- or
over-built joinery next to the cost sliders, and to fill the recommended
values of the layout audit checklist.
"""

import math
from typing import Any, Dict

from app.config import (
    INPUT_DEFAULTS,
    KITCHEN_BASE_M,
    KITCHEN_OVERBUILT_TOLERANCE_M,
    KITCHEN_PER_CHILD_M,
    KITCHEN_PER_EXTRA_ADULT_M,
    KITCHEN_UNDERBUILT_TOLERANCE_M,
)
from app.services.costing_engine import safe_number


def _household(adults: Any, children: Any) -> tuple:
    a = safe_number(adults, INPUT_DEFAULTS["number_of_adults"])
    c = safe_number(children, INPUT_DEFAULTS["number_of_children"])
    return a, c


def _one_decimal(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


# Storage ---------------------------------------------------------------

def entrance_wardrobe_length(adults: float, children: float) -> float:
    """0.6 m per adult + 0.4 m per child + 0.6 m seasonal buffer."""
    a, c = _household(adults, children)
    return _one_decimal(a * 0.6 + c * 0.4 + 0.6)


def master_wardrobe_length(adults: float) -> float:
    """1.8 m for one adult, 2.4 m for two or more."""
    a, _ = _household(adults, 0)
    return 2.4 if a >= 2 else 1.8


def kids_wardrobe_length(children: float) -> float:
    """0.8 m per child + 0.4 m shared buffer."""
    _, c = _household(2, children)
    return _one_decimal(c * 0.8 + 0.4)


def general_storage_length(people: float) -> float:
    """1.0 m base + 0.4 m per person."""
    return _one_decimal(1.0 + safe_number(people, 2) * 0.4)


# Kitchen ---------------------------------------------------------------

def kitchen_linear_length(adults: float, children: float) -> float:
    """3.0 m for two people + 0.6 m per extra adult + 0.4 m per child."""
    a, c = _household(adults, children)
    extra_adults = max(0.0, a - 2)
    return _one_decimal(KITCHEN_BASE_M + extra_adults * KITCHEN_PER_EXTRA_ADULT_M + c * KITCHEN_PER_CHILD_M)


def tall_units(people: float) -> int:
    """One tall kitchen unit per two people, rounded up."""
    return int(math.ceil(safe_number(people, 2) / 2))


def kitchen_status(length: float, adults: float, children: float) -> str:
    """'underbuilt' | 'optimal' | 'overbuilt' relative to the recommended length."""
    recommended = kitchen_linear_length(adults, children) or KITCHEN_BASE_M
    value = safe_number(length, INPUT_DEFAULTS["kitchen_length"])
    if value < recommended - KITCHEN_UNDERBUILT_TOLERANCE_M:
        return "underbuilt"
    if value > recommended + KITCHEN_OVERBUILT_TOLERANCE_M:
        return "overbuilt"
    return "optimal"


# Social / wet rooms ------------------------------------------------------

def dining_seats(people: float) -> int:
    """Household members + 2 guest seats."""
    return int(safe_number(people, 2)) + 2


def living_seats(people: float) -> int:
    """Household members + 1 lounging buffer."""
    return int(safe_number(people, 2)) + 1


def laundry_setup(people: float) -> str:
    p = safe_number(people, 2)
    if p <= 3:
        return "integrated"
    if p <= 5:
        return "niche"
    return "room"


def bathroom_count(people: float) -> int:
    """One bathroom per three people, rounded up."""
    return int(math.ceil(safe_number(people, 2) / 3))


def household_recommendations(adults: float, children: float) -> Dict[str, Any]:
    """Every recommendation for one household in a single dict."""
    a, c = _household(adults, children)
    people = a + c
    return {
        "number_of_adults": int(a),
        "number_of_children": int(c),
        "number_of_people": int(people),
        "kitchen_linear_m": kitchen_linear_length(a, c),
        "tall_units": tall_units(people),
        "entrance_wardrobe_m": entrance_wardrobe_length(a, c),
        "master_wardrobe_m": master_wardrobe_length(a),
        "kids_wardrobe_m": kids_wardrobe_length(c) if c > 0 else None,
        "general_storage_m": general_storage_length(people),
        "dining_seats": dining_seats(people),
        "living_seats": living_seats(people),
        "laundry_setup": laundry_setup(people),
        "bathrooms": bathroom_count(people),
    }
