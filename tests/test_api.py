import pytest
from fastapi.testclient import TestClient

from api import app
from conftest import PICKUP_BLOCK, as_message


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["version"] == app.version


def test_parse_returns_runs(client, multi_run_message):
    resp = client.post("/parse", json={"message": multi_run_message})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert [run["flight_number"] for run in body["runs"]] == ["AA123", "DL1466", "UA456"]


def test_parse_failure_is_reported_in_body(client):
    resp = client.post("/parse", json={"message": "   "})

    assert resp.status_code == 200
    assert resp.json() == {
        "success": False,
        "runs": [],
        "errors": ["Empty message provided"],
        "warnings": [],
    }


def test_parse_rejects_wrong_shape(client):
    resp = client.post("/parse", json={"message": ["not", "a", "string"]})
    assert resp.status_code == 422


def test_convert_returns_form_record(client, pickup_message):
    run = client.post("/parse", json={"message": pickup_message}).json()["runs"][0]
    resp = client.post("/convert", json={"run": run, "base_date": "2024-01-01"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["scheduledTime"] == "2024-01-01T11:00"
    assert body["flightNumber"] == "AA123"
    assert body["dropoffLocation"] == "Teton Village Hotel"
    assert body["status"] == "scheduled"


def test_import_converts_every_run(client, multi_run_message):
    resp = client.post("/import", json={"message": multi_run_message, "base_date": "2024-02-02"})

    assert resp.status_code == 200
    body = resp.json()
    assert len(body["result"]["runs"]) == 3
    assert len(body["records"]) == 3
    assert body["records"][0]["scheduledTime"] == "2024-02-02T11:00"


def test_detect(client):
    yes = client.post("/detect", json={"message": as_message(PICKUP_BLOCK)})
    no = client.post("/detect", json={"message": "see you at dinner"})

    assert yes.json() == {"is_schedule": True}
    assert no.json() == {"is_schedule": False}
