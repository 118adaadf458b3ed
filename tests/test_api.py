import json

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from config import Settings


@pytest.fixture
def client():
    settings = Settings(prove_delay_ms=0, verify_delay_ms=0, log_level="WARNING")
    return TestClient(create_app(settings))


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["target"] == 67


def test_evaluate_endpoint(client):
    resp = client.post("/evaluate", json={"expression": "60 plus 7"})

    body = resp.json()
    assert resp.status_code == 200
    assert body["ok"] is True
    assert body["result"] == 67
    assert body["equals_target"] is True
    assert body["normalized"] == "60+7"


def test_evaluate_endpoint_reports_failure_with_sentinel(client):
    body = client.post("/evaluate", json={"expression": "(("}).json()

    assert body["ok"] is False
    assert body["result"] == 0
    assert body["equals_target"] is False
    assert body["error"]["code"] == "UNEXPECTED_END"


def test_proof_endpoint(client):
    resp = client.post("/proof", json={"expression": "5! - 53"})

    body = resp.json()
    assert resp.status_code == 200
    assert body["result"] == 67
    assert body["proof"]["publicSignals"] == ["67"]
    assert len(body["proof"]["a"]) == 3


def test_proof_endpoint_rejects_invalid_expression(client):
    resp = client.post("/proof", json={"expression": "67/0"})

    assert resp.status_code == 422
    assert resp.json()["detail"]["error"]["code"] == "DIVISION_BY_ZERO"


def test_verify_endpoint_round_trip(client):
    proof = client.post("/proof", json={"expression": "60 plus 7"}).json()["proof"]

    valid = client.post("/verify", json={"proof": proof, "expected": 67}).json()
    invalid = client.post("/verify", json={"proof": proof, "expected": 68}).json()

    assert valid["status"] == "valid" and valid["valid"] is True
    assert invalid["status"] == "invalid" and invalid["valid"] is False


def test_verify_raw_endpoint(client):
    proof = client.post("/proof", json={"expression": "60 plus 7"}).json()["proof"]
    payload = {
        "a": json.dumps(proof["a"]),
        "b": json.dumps(proof["b"]),
        "c": json.dumps(proof["c"]),
        "publicSignals": json.dumps(proof["publicSignals"]),
        "expected": "67",
    }

    resp = client.post("/verify/raw", json=payload)

    assert resp.status_code == 200
    assert resp.json()["valid"] is True


def test_verify_raw_endpoint_reports_decode_error_as_400(client):
    payload = {"a": "[", "b": "[]", "c": "[]", "publicSignals": '["67"]'}

    resp = client.post("/verify/raw", json=payload)

    body = resp.json()
    assert resp.status_code == 400
    assert body["status"] == "decode_error"
    assert body["issues"][0]["field_path"] == "a"
    assert body["issues"][0]["code"] == "INVALID_JSON"


def test_verify_document_endpoint(client):
    proof = client.post("/proof", json={"expression": "60 plus 7"}).json()["proof"]
    legacy = {
        "pi_a": proof["a"],
        "pi_b": proof["b"],
        "pi_c": proof["c"],
        "publicSignals": proof["publicSignals"],
    }

    resp = client.post("/verify/document", json={"document": json.dumps(legacy)})

    assert resp.status_code == 200
    assert resp.json()["status"] == "valid"


def test_verify_document_endpoint_reports_decode_error_as_400(client):
    resp = client.post("/verify/document", json={"document": "nope"})

    assert resp.status_code == 400
    assert resp.json()["issues"][0]["code"] == "INVALID_JSON"


def test_terminal_endpoint_round_trips_history(client):
    first = client.post("/terminal", json={"input": "2+2"}).json()
    second = client.post(
        "/terminal",
        json={"input": "60 plus 7", "history": first["messages"]},
    ).json()

    assert len(second["messages"]) == len(first["messages"]) + len(second["added"])
    assert second["added"][-1]["type"] == "verification"
    assert second["added"][-1]["verified"] is True
    proof_messages = [m for m in second["added"] if m["type"] == "proof"]
    assert proof_messages[0]["proof"]["publicSignals"] == ["67"]
