"""Tests for the FastAPI simulation endpoints."""

import pytest
from fastapi.testclient import TestClient

from pathcast.config import Settings
from pathcast.web.app import create_app


@pytest.fixture
def settings():
    return Settings(simulation_num_paths=200, simulation_max_paths=1000)


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))


class TestHealth:
    def test_health(self, client):
        resp = client.get("/api/v1/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
        assert resp.json()["service"] == "pathcast-api"


class TestSimulationEndpoint:
    def test_simulation(self, client, realistic_prices):
        resp = client.post("/api/v1/simulation", json={
            "prices": realistic_prices, "days": 20, "seed": 5,
        })
        assert resp.status_code == 200
        body = resp.json()["data"]
        assert len(body["data"]) == 21
        assert body["num_simulations"] == 200
        assert body["stats"]["current"] == pytest.approx(realistic_prices[-1])
        assert len(body["data"][0]["samples"]) == 30
        final = body["data"][-1]
        assert body["stats"]["projected_median"] == final["median"]
        assert final["range"] == [final["p5"], final["p95"]]

    def test_default_days(self, client, example_prices):
        resp = client.post("/api/v1/simulation", json={"prices": example_prices})
        assert resp.status_code == 200
        assert resp.json()["data"]["horizon_days"] == 20

    def test_seed_reproducibility(self, client, example_prices):
        payload = {"prices": example_prices, "days": 50, "seed": 9}
        r1 = client.post("/api/v1/simulation", json=payload).json()["data"]
        r2 = client.post("/api/v1/simulation", json=payload).json()["data"]
        assert r1 == r2

    def test_path_count_capped(self, client, example_prices):
        resp = client.post("/api/v1/simulation", json={
            "prices": example_prices, "num_simulations": 50_000,
        })
        assert resp.status_code == 200
        assert resp.json()["data"]["num_simulations"] == 1000

    def test_disallowed_horizon(self, client, example_prices):
        resp = client.post("/api/v1/simulation", json={"prices": example_prices, "days": 7})
        assert resp.status_code == 422
        assert "days must be one of" in resp.json()["detail"]

    def test_any_horizon_when_unrestricted(self, example_prices):
        client = TestClient(create_app(Settings(allowed_horizons=[])))
        resp = client.post("/api/v1/simulation", json={"prices": example_prices, "days": 7})
        assert resp.status_code == 200
        assert len(resp.json()["data"]["data"]) == 8

    def test_empty_prices(self, client):
        resp = client.post("/api/v1/simulation", json={"prices": []})
        assert resp.status_code == 404

    def test_degenerate_prices(self, client):
        resp = client.post("/api/v1/simulation", json={"prices": [100.0, 101.0]})
        assert resp.status_code == 422
        assert "log returns" in resp.json()["detail"]

    def test_negative_price(self, client):
        resp = client.post("/api/v1/simulation", json={"prices": [100.0, -1.0, 101.0]})
        assert resp.status_code == 422

    def test_non_positive_path_count(self, client, example_prices):
        resp = client.post("/api/v1/simulation", json={
            "prices": example_prices, "num_simulations": 0,
        })
        assert resp.status_code == 422
        assert "num_simulations must be positive" in resp.json()["detail"]
