"""Tests for the Flask app."""

import pytest

from main import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


class TestFlaskApp:
    """Test the Flask routes and responses."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json()["status"] == "healthy"

    def test_api_info(self, client):
        body = client.get("/api").get_json()
        assert body["status"] == "ok"
        assert "/calculate [POST]" in body["endpoints"].values()

    def test_defaults(self, client):
        body = client.get("/defaults").get_json()
        assert body["summary"]["converted_wse"]["value"] == 90
        assert body["scenarios"]["standard"]["display"]["total"] == "$34,100"

    def test_calculate(self, client):
        response = client.post("/calculate", json={"custom_commission_pct": 20})
        assert response.status_code == 200
        body = response.get_json()
        assert body["scenarios"]["custom"]["mgmt_fee_commission"] == 21600.0
        assert body["scenarios"]["custom"]["display"]["uplift_pct"] == "172.8%"

    def test_calculate_zero_book(self, client):
        response = client.post("/calculate", json={"tiers": [{"label": "Tier 1", "amount": 0, "pct": 5}]})
        body = response.get_json()
        assert body["scenarios"]["custom"]["uplift_pct"] is None
        assert body["scenarios"]["custom"]["display"]["uplift_pct"] == "—"

    def test_calculate_invalid_json(self, client):
        response = client.post("/calculate", data="not json", content_type="application/json")
        assert response.status_code == 400

    def test_calculate_validation_error(self, client):
        response = client.post("/calculate", json={"mode": "by_guess"})
        assert response.status_code == 400
        assert response.get_json()["status"] == "validation_failed"

    def test_update(self, client):
        response = client.post("/update", json={
            "inputs": {"book_portion_pct": 50},
            "operations": [{"op": "reset"}],
        })
        assert response.status_code == 200
        assert response.get_json()["inputs"]["book_portion_pct"] == 100.0

    def test_update_operations_must_be_list(self, client):
        response = client.post("/update", json={"inputs": {}, "operations": {"op": "reset"}})
        assert response.status_code == 400

    def test_cors_header(self, client):
        response = client.get("/health", headers={"Origin": "http://example.com"})
        assert "Access-Control-Allow-Origin" in response.headers
