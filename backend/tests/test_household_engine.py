"""
test_household_engine.py — Unit tests for household-size recommendations.

Covers joinery lengths, kitchen build status, seating, laundry and
bathroom counts for representative households.
"""

import pytest

from app.services.household_engine import (
    bathroom_count,
    dining_seats,
    entrance_wardrobe_length,
    general_storage_length,
    household_recommendations,
    kids_wardrobe_length,
    kitchen_linear_length,
    kitchen_status,
    laundry_setup,
    living_seats,
    master_wardrobe_length,
    tall_units,
)


class TestStorage:

    @pytest.mark.parametrize("adults, children, expected", [
        (1, 0, 1.2),
        (2, 0, 1.8),
        (2, 2, 2.6),
        (3, 1, 2.8),
    ])
    def test_entrance_wardrobe(self, adults, children, expected):
        assert entrance_wardrobe_length(adults, children) == expected

    def test_master_wardrobe_single_vs_couple(self):
        assert master_wardrobe_length(1) == 1.8
        assert master_wardrobe_length(2) == 2.4
        assert master_wardrobe_length(4) == 2.4

    def test_kids_wardrobe(self):
        assert kids_wardrobe_length(1) == 1.2
        assert kids_wardrobe_length(3) == 2.8

    def test_general_storage(self):
        assert general_storage_length(2) == 1.8
        assert general_storage_length(5) == 3.0


class TestKitchen:

    @pytest.mark.parametrize("adults, children, expected", [
        (1, 0, 3.0),
        (2, 0, 3.0),
        (2, 2, 3.8),
        (4, 0, 4.2),
        (3, 1, 4.0),
    ])
    def test_linear_length(self, adults, children, expected):
        assert kitchen_linear_length(adults, children) == expected

    @pytest.mark.parametrize("people, units", [(1, 1), (2, 1), (3, 2), (4, 2), (5, 3)])
    def test_tall_units(self, people, units):
        assert tall_units(people) == units

    @pytest.mark.parametrize("length, status", [
        (2.0, "underbuilt"),
        (2.2, "optimal"),
        (3.0, "optimal"),
        (4.5, "optimal"),
        (4.6, "overbuilt"),
    ])
    def test_status_for_couple(self, length, status):
        """Couple: recommended 3.0 m, tolerated 2.1 – 4.5 m."""
        assert kitchen_status(length, 2, 0) == status

    def test_status_uses_default_for_nan(self):
        # default kitchen length is 4.0 m
        assert kitchen_status(float("nan"), 2, 0) == "optimal"


class TestSeatingAndWetRooms:

    def test_seats(self):
        assert dining_seats(2) == 4
        assert living_seats(2) == 3
        assert dining_seats(5) == 7

    @pytest.mark.parametrize("people, setup", [
        (1, "integrated"), (3, "integrated"), (4, "niche"), (5, "niche"), (6, "room"),
    ])
    def test_laundry(self, people, setup):
        assert laundry_setup(people) == setup

    @pytest.mark.parametrize("people, count", [(1, 1), (3, 1), (4, 2), (6, 2), (7, 3)])
    def test_bathrooms(self, people, count):
        assert bathroom_count(people) == count


class TestRecommendations:

    def test_couple(self):
        rec = household_recommendations(2, 0)
        assert rec["number_of_people"] == 2
        assert rec["kitchen_linear_m"] == 3.0
        assert rec["kids_wardrobe_m"] is None
        assert rec["laundry_setup"] == "integrated"

    def test_family_of_four(self):
        rec = household_recommendations(2, 2)
        assert rec == {
            "number_of_adults": 2,
            "number_of_children": 2,
            "number_of_people": 4,
            "kitchen_linear_m": 3.8,
            "tall_units": 2,
            "entrance_wardrobe_m": 2.6,
            "master_wardrobe_m": 2.4,
            "kids_wardrobe_m": 2.0,
            "general_storage_m": 2.6,
            "dining_seats": 6,
            "living_seats": 5,
            "laundry_setup": "niche",
            "bathrooms": 2,
        }

    def test_missing_values_use_defaults(self):
        assert household_recommendations(None, float("nan")) == household_recommendations(2, 0)
