"""Integration tests for the estimate and audit endpoints.

Drives the FastAPI app in-process and verifies status codes, response
shapes and that the routes hand inputs to the engines unchanged.
"""

STANDARD_PAYLOAD = {
    "tier": "Standard",
    "area": 60,
    "isRenovation": False,
    "isUrgent": False,
    "services": {"spacePlanning": True, "interiorFinishes": True, "furnishingDecor": True},
    "kitchenLength": 3,
    "wardrobeLength": 2,
}


class TestHealthAndMiddleware:

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "active"
        assert "version" in body

    def test_request_id_generated(self, client):
        resp = client.get("/health")
        assert resp.headers["X-Request-ID"]
        assert float(resp.headers["X-Process-Time"]) >= 0

    def test_request_id_echoed(self, client):
        resp = client.get("/api/estimates/pricing", headers={"X-Request-ID": "trace-123"})
        assert resp.headers["X-Request-ID"] == "trace-123"


class TestCostEndpoint:

    def test_standard_estimate(self, client):
        resp = client.post("/api/estimates/cost", json=STANDARD_PAYLOAD)
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 56_600
        assert data["low_estimate"] == 48_100
        assert data["high_estimate"] == 65_100
        assert data["summary_low"] == 48_000
        assert data["summary_high"] == 65_000
        assert data["currency"] == "EUR"
        assert [g["key"] for g in data["grouped_line_items"]] == [
            "project_shell", "fixed_joinery", "movables_tech",
        ]
        assert data["group_totals"]["project_shell"] == 36_000
        assert data["group_totals"]["renovation"] == 0

    def test_group_totals_match_items(self, client):
        data = client.post("/api/estimates/cost", json={**STANDARD_PAYLOAD, "isRenovation": True}).json()
        for group in data["grouped_line_items"]:
            assert group["total"] == sum(item["value"] for item in group["items"])

    def test_empty_body_uses_defaults(self, client):
        resp = client.post("/api/estimates/cost", json={})
        assert resp.status_code == 200
        assert resp.json()["tier"] == "Standard"
        assert resp.json()["total"] > 0

    def test_labels_translate_output(self, client):
        payload = {**STANDARD_PAYLOAD, "labels": {"cost.kitchen": "Küche"}}
        data = client.post("/api/estimates/cost", json=payload).json()
        labels = [item["label"] for g in data["grouped_line_items"] for item in g["items"]]
        assert "Küche" in labels

    def test_unknown_tier_rejected(self, client):
        resp = client.post("/api/estimates/cost", json={**STANDARD_PAYLOAD, "tier": "Luxury"})
        assert resp.status_code == 422

    def test_negative_area_rejected(self, client):
        resp = client.post("/api/estimates/cost", json={**STANDARD_PAYLOAD, "area": -5})
        assert resp.status_code == 422


class TestTimelineEndpoints:

    def test_timeline_forward(self, client):
        resp = client.post("/api/estimates/timeline", json={
            "tier": "Standard",
            "startDate": "2026-03-02",
            "now": "2026-03-05T12:00:00",
        })
        assert resp.status_code == 200
        data = resp.json()
        timeline = data["timeline"]
        assert timeline["total_weeks"] == 15
        assert timeline["anchor"] == "start"
        assert timeline["start_date"].startswith("2026-03-02")
        assert timeline["phases"][0]["date_range"] == "Mar 02 - Mar 23"
        active = [s["phase_id"] for s in data["phase_states"] if s["is_active"]]
        assert active == ["phase-1"]

    def test_timeline_default_services_skip_furnishing(self, client):
        data = client.post("/api/estimates/timeline", json={"startDate": "2026-03-02"}).json()
        assembly = data["timeline"]["phases"][-1]
        assert [t["id"] for t in assembly["tasks"]] == ["defect-check"]

    def test_timeline_backward(self, client):
        data = client.post("/api/estimates/timeline", json={
            "tier": "Budget", "isRenovation": True, "moveInDate": "2026-09-01",
        }).json()
        assert data["timeline"]["anchor"] == "move_in"
        assert data["timeline"]["total_weeks"] == 12
        assert data["timeline"]["end_date"].startswith("2026-09-01")

    def test_both_anchors_rejected(self, client):
        resp = client.post("/api/estimates/timeline", json={
            "startDate": "2026-03-02", "moveInDate": "2026-09-01",
        })
        assert resp.status_code == 422

    def test_phase_states(self, client):
        resp = client.post("/api/estimates/phase-states", json={
            "tier": "Standard", "startDate": "2026-03-02", "now": "2026-03-20T00:00:00",
        })
        assert resp.status_code == 200
        states = {s["phase_id"]: s for s in resp.json()}
        assert states["phase-1"]["is_active"]
        assert states["phase-1"]["is_urgent"]
        assert not states["phase-1"]["is_overdue"]
        assert not states["phase-2"]["is_active"]


class TestReferenceEndpoints:

    def test_household(self, client):
        resp = client.get("/api/estimates/household", params={"adults": 2, "children": 2, "kitchen_length": 2.5})
        assert resp.status_code == 200
        data = resp.json()
        assert data["kitchen_linear_m"] == 3.8
        assert data["kitchen_status"] == "underbuilt"
        assert data["bathrooms"] == 2

    def test_household_without_kitchen(self, client):
        data = client.get("/api/estimates/household").json()
        assert data["kitchen_status"] is None
        assert data["kids_wardrobe_m"] is None

    def test_pricing_tables(self, client):
        data = client.get("/api/estimates/pricing").json()
        assert set(data["tiers"]) == {"Budget", "Standard", "Premium"}
        assert data["tiers"]["Standard"]["base_rate"] == 550
        assert data["tiers"]["Premium"]["total_weeks"] == 24
        assert data["price_variance"] == 0.15


class TestAuditEndpoints:

    def test_checklist(self, client):
        resp = client.get("/api/audit/checklist", params={"adults": 2, "children": 0})
        assert resp.status_code == 200
        assert len(resp.json()) == 7

    def test_checklist_with_home_office(self, client):
        data = client.get("/api/audit/checklist", params={"work_from_home": True}).json()
        assert "homeOffice" in [c["id"] for c in data]

    def test_score(self, client):
        resp = client.post("/api/audit/score", json={
            "responses": {
                "kitchen-linear": "pass",
                "kitchen-triangle": "pass",
                "doors-door-to-door": "pass",
                "power-sofa-power": "fail",
            },
            "variables": {"numberOfAdults": 2, "numberOfChildren": 0},
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["score"] == 75
        assert data["visible_items"] == 35
        assert data["categories"]["kitchen"]["pass"] == 2

    def test_score_rejects_unknown_answer(self, client):
        resp = client.post("/api/audit/score", json={"responses": {"kitchen-linear": "maybe"}})
        assert resp.status_code == 422

    def test_score_level_capped_by_failed_category(self, client):
        resp = client.post("/api/audit/score", json={
            "responses": {
                "kitchen-linear": "pass",
                "kitchen-tall-units": "pass",
                "kitchen-triangle": "pass",
                "kitchen-prep-zone": "pass",
                "doors-door-to-door": "fail",
            },
        })
        data = resp.json()
        assert data["score"] == 80
        assert data["level"] == "red"
        assert data["worst_category"] == "doors"

    def test_score_level_absent_without_answers(self, client):
        data = client.post("/api/audit/score", json={}).json()
        assert data["score"] is None
        assert data["level"] is None
        assert data["worst_category"] is None
