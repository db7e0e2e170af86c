"""Prometheus metrics helpers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from interpolate.recovery import anomaly_reason

REGISTRY = CollectorRegistry()

PARSE_LATENCY = Histogram(
    "interpolate_parse_latency_seconds",
    "Latency of template parse executions",
    buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5),
    registry=REGISTRY,
)

TEMPLATES_TOTAL = Counter(
    "interpolate_templates_total",
    "Number of templates parsed",
    registry=REGISTRY,
)

PLACEHOLDERS_TOTAL = Counter(
    "interpolate_placeholders_total",
    "Number of resolved placeholders grouped by kind",
    labelnames=("kind",),
    registry=REGISTRY,
)

RECOVERIES_TOTAL = Counter(
    "interpolate_recoveries_total",
    "Number of recovered malformed spans grouped by reason",
    labelnames=("reason",),
    registry=REGISTRY,
)


def observe_parse(
    *, latency_ms: float, kind_counts: Mapping[str, int], anomalies: Sequence[str]
) -> None:
    PARSE_LATENCY.observe(latency_ms / 1000.0)
    TEMPLATES_TOTAL.inc()
    for kind, count in kind_counts.items():
        if count:
            PLACEHOLDERS_TOTAL.labels(kind=kind).inc(count)
    for entry in anomalies:
        RECOVERIES_TOTAL.labels(reason=anomaly_reason(entry) or "unknown").inc()


def render_metrics() -> tuple[bytes, str]:
    payload = generate_latest(REGISTRY)
    return payload, CONTENT_TYPE_LATEST
