"""Pipeline orchestration for the parse service."""

from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import Any

import structlog

from interpolate import metrics
from interpolate.parser import ParseResult, parse_template
from interpolate.recovery import RecoveryReason, format_anomaly
from interpolate.settings import Settings

LOGGER = structlog.get_logger(__name__)


@dataclass(slots=True)
class ParseRequest:
    template: str
    source: str | None = None


@dataclass(slots=True)
class PipelineResult:
    result: ParseResult
    source: str | None
    latency_ms: float
    version: str

    def asdict(self) -> dict[str, Any]:
        payload = self.result.asdict()
        payload.update(
            {
                "source": self.source,
                "latency_ms": self.latency_ms,
                "version": self.version,
            }
        )
        return payload


def run_pipeline(parse_request: ParseRequest, *, settings: Settings) -> PipelineResult:
    """Parse a single template under the configured size limit.

    Templates longer than ``max_template_chars`` are returned unparsed with a
    ``template_too_large`` anomaly rather than rejected.
    """

    start = perf_counter()
    template = parse_request.template
    LOGGER.info("pipeline.start", source=parse_request.source, length=len(template))

    if len(template) > settings.max_template_chars:
        LOGGER.warning(
            "template_too_large",
            source=parse_request.source,
            length=len(template),
            limit=settings.max_template_chars,
        )
        result = ParseResult(
            normalized=template,
            anomalies=[format_anomaly(RecoveryReason.TEMPLATE_TOO_LARGE)],
        )
    else:
        result = parse_template(template)

    latency_ms = (perf_counter() - start) * 1000
    if settings.metrics_enabled:
        metrics.observe_parse(
            latency_ms=latency_ms,
            kind_counts=result.kind_counts,
            anomalies=result.anomalies,
        )

    LOGGER.info(
        "pipeline.end",
        source=parse_request.source,
        identifiers=len(result.identifiers),
        placeholders=result.placeholder_count,
        anomalies=len(result.anomalies),
        latency_ms=latency_ms,
    )

    return PipelineResult(
        result=result,
        source=parse_request.source,
        latency_ms=latency_ms,
        version=settings.service_version,
    )
