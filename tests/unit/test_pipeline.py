from __future__ import annotations

from interpolate.pipeline import ParseRequest, run_pipeline
from interpolate.settings import Settings


def test_pipeline_parses_template() -> None:
    settings = Settings()
    result = run_pipeline(ParseRequest(template="Hi {name}", source="greeting"), settings=settings)

    assert result.result.normalized == "Hi {__0}"
    assert result.result.identifiers == ("name",)
    assert result.source == "greeting"
    assert result.version == settings.service_version
    assert result.latency_ms >= 0


def test_pipeline_returns_oversized_template_unparsed() -> None:
    settings = Settings(MAX_TEMPLATE_CHARS=5)
    result = run_pipeline(ParseRequest(template="Hello {name}"), settings=settings)

    assert result.result.normalized == "Hello {name}"
    assert result.result.identifiers == ()
    assert result.result.anomalies == ["template_too_large"]


def test_pipeline_asdict_shape() -> None:
    settings = Settings(SERVICE_VERSION="test", METRICS_ENABLED=False)
    payload = run_pipeline(ParseRequest(template="{} {x:>2}"), settings=settings).asdict()

    assert payload["normalized"] == "{__0} {__1:>2}"
    assert payload["identifiers"] == ["x"]
    assert payload["slots"] == {"x": 1}
    assert payload["placeholder_count"] == 2
    assert payload["version"] == "test"
    assert payload["source"] is None


def test_parse_request_carries_only_template_and_source() -> None:
    assert set(ParseRequest.__dataclass_fields__) == {"template", "source"}
