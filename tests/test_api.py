import pytest
from fastapi.testclient import TestClient

from pick3_lottery.main import app
from pick3_lottery.services.lottery_service import LotteryService

IMPORT_TEXT = "\n".join(f"{i:04d} {i % 10} {(i * 3) % 10} {(i * 7) % 10}" for i in range(1, 61))


@pytest.fixture
def client():
    with TestClient(app) as c:
        app.state.service = LotteryService()
        yield c


def test_import_and_list(client):
    r = client.post("/api/v1/draws/import", json={"text": IMPORT_TEXT + "\nbroken"})
    assert r.status_code == 200
    assert r.json()["imported"] == 60

    draws = client.get("/api/v1/draws").json()
    assert len(draws) == 60
    assert draws[0]["period"] == "0001"

    export = client.get("/api/v1/draws/export")
    assert export.text.splitlines()[0] == "0001\t1\t3\t7"


def test_add_and_delete_draw(client):
    r = client.post("/api/v1/draws", json={"period": "0001", "hundred": 1, "ten": 2, "one": 3})
    assert r.status_code == 201
    draw_id = r.json()["id"]

    assert client.post("/api/v1/draws", json={"period": "0002", "hundred": 10, "ten": 2, "one": 3}).status_code == 422
    assert client.delete(f"/api/v1/draws/{draw_id}").status_code == 204
    assert client.delete(f"/api/v1/draws/{draw_id}").status_code == 404


def test_prediction_flow(client):
    assert client.post("/api/v1/predictions", json={}).status_code == 422
    assert client.get("/api/v1/predictions/current").status_code == 404

    client.post("/api/v1/draws/import", json={"text": IMPORT_TEXT})
    r = client.post("/api/v1/predictions", json={"window_size": 20})
    assert r.status_code == 200
    body = r.json()
    assert body["period"] == "0061"
    assert len(body["hundred"]) == 10

    assert client.get("/api/v1/predictions/current").json()["period"] == "0061"
    assert len(client.get("/api/v1/predictions/history").json()) == 1

    r = client.post("/api/v1/predictions/validate", json={"period": "0061", "hundred": 1, "ten": 2, "one": 3})
    assert r.status_code == 200
    assert r.json()["period"] == "0061"

    summary = client.get("/api/v1/stats/summary").json()
    assert summary["total_draws"] == 60
    assert len(client.get("/api/v1/stats/validations").json()) == 1


def test_features(client):
    assert client.get("/api/v1/features").status_code == 404
    client.post("/api/v1/draws/import", json={"text": IMPORT_TEXT})
    r = client.get("/api/v1/features", params={"window": 10})
    assert r.status_code == 200
    assert r.json()["window_size"] == 10


def test_backtest_errors_map_to_400(client):
    r = client.post("/api/v1/stats/backtest", json={"test_size": 50})
    assert r.status_code == 400

    client.post("/api/v1/draws/import", json={"text": IMPORT_TEXT})
    r = client.post("/api/v1/stats/backtest", json={"window_size": 10, "test_size": 10})
    assert r.status_code == 200
    assert r.json()["summary"]["total_predictions"] == 10


def test_window_setting(client):
    assert client.put("/api/v1/settings/window", json={"window_size": 40}).json()["window_size"] == 40
    assert client.get("/api/v1/settings/window").json()["window_size"] == 40
    assert client.put("/api/v1/settings/window", json={"window_size": 2}).status_code == 400


def test_clear_all(client):
    client.post("/api/v1/draws/import", json={"text": IMPORT_TEXT})
    assert client.delete("/api/v1/draws").status_code == 204
    assert client.get("/api/v1/draws").json() == []
