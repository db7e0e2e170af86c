from __future__ import annotations

from fastapi.testclient import TestClient

from interpolate.main import create_app
from interpolate.settings import Settings


def get_client(**overrides: object) -> TestClient:
    app = create_app(Settings(**overrides))
    return TestClient(app)


def test_healthz() -> None:
    client = get_client()
    resp = client.get("/healthz")

    assert resp.status_code == 200
    assert resp.text == "ok\n"


def test_parse_returns_normalized_template() -> None:
    client = get_client()
    resp = client.post(
        "/parse",
        json={"template": "Hello, {name}! You are {age} years old.", "source": "greeting"},
    )
    body = resp.json()

    assert resp.status_code == 200
    assert body["normalized"] == "Hello, {__0}! You are {__1} years old."
    assert body["identifiers"] == ["age", "name"]
    assert body["slots"] == {"name": 0, "age": 1}
    assert body["source"] == "greeting"
    assert body["anomalies"] == []


def test_parse_malformed_template_is_not_an_error() -> None:
    client = get_client()
    resp = client.post("/parse", json={"template": "Hello {name"})
    body = resp.json()

    assert resp.status_code == 200
    assert body["normalized"] == "Hello {name"
    assert body["anomalies"] == ["unterminated_placeholder@6"]


def test_parse_batch() -> None:
    client = get_client()
    resp = client.post("/parse/batch", json={"templates": ["{a}", "{{}}", "{}"]})
    results = resp.json()["results"]

    assert resp.status_code == 200
    assert [item["normalized"] for item in results] == ["{__0}", "{}", "{__0}"]


def test_parse_requires_api_key_when_enabled() -> None:
    client = get_client(REQUIRE_API_KEY=True, API_KEY="s3cret")

    denied = client.post("/parse", json={"template": "{x}"})
    allowed = client.post("/parse", json={"template": "{x}"}, headers={"X-API-Key": "s3cret"})

    assert denied.status_code == 401
    assert allowed.status_code == 200


def test_parse_rejects_large_body() -> None:
    client = get_client(MAX_REQUEST_SIZE_BYTES=32)
    resp = client.post("/parse", json={"template": "x" * 100})

    assert resp.status_code == 413


def test_metrics_endpoint() -> None:
    client = get_client()
    client.post("/parse", json={"template": "{a} {0x}"})
    resp = client.get("/metrics")

    assert resp.status_code == 200
    assert "interpolate_templates_total" in resp.text
    assert "interpolate_recoveries_total" in resp.text


def test_metrics_disabled() -> None:
    client = get_client(METRICS_ENABLED=False)
    resp = client.get("/metrics")

    assert resp.status_code == 404


def test_parse_request_fields_are_template_and_source() -> None:
    from interpolate.main import ParseRequestModel

    assert set(ParseRequestModel.model_fields) == {"template", "source"}


def test_parse_ignores_unknown_request_fields() -> None:
    client = get_client()
    resp = client.post("/parse", json={"template": "{x}", "metadata": {"tenant": "acme"}})
    body = resp.json()

    assert resp.status_code == 200
    assert "metadata" not in body
    assert body["normalized"] == "{__0}"


def test_api_key_required_but_not_configured() -> None:
    client = get_client(REQUIRE_API_KEY=True)
    resp = client.post("/parse", json={"template": "{x}"}, headers={"X-API-Key": "anything"})

    assert resp.status_code == 500
