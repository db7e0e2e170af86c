"""HTTP surface for template parsing: single and batch parse endpoints."""

from __future__ import annotations

import asyncio
from typing import Annotated

import structlog
from fastapi import Depends, FastAPI, Header, HTTPException, Request, Response, status
from pydantic import BaseModel

from interpolate import metrics
from interpolate.logs import configure_logging
from interpolate.pipeline import ParseRequest, PipelineResult, run_pipeline
from interpolate.settings import Settings, get_settings

SettingsDep = Annotated[Settings, Depends(get_settings)]

_access_logger = structlog.get_logger("interpolate.access")

_PARSE_PATHS = frozenset({"/parse", "/parse/batch"})


async def require_api_key(
    request: Request,
    settings: SettingsDep,
    x_api_key: str | None = Header(default=None),
) -> None:
    """Reject parse and metrics calls without the configured ``X-API-Key``."""
    if not settings.require_api_key:
        return
    if settings.api_key is None:
        _access_logger.error("api_key_missing_from_settings", endpoint=request.url.path)
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, detail="API key not configured")
    if x_api_key != settings.api_key:
        _access_logger.warning(
            "api_key_rejected",
            endpoint=request.url.path,
            header_present=x_api_key is not None,
        )
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="unauthorized")


def _declared_body_size(request: Request) -> int | None:
    try:
        return int(request.headers["content-length"])
    except (KeyError, ValueError):
        return None


class ParseRequestModel(BaseModel):
    template: str
    source: str | None = None


class BatchParseRequestModel(BaseModel):
    templates: list[str]


class ParseResponseModel(BaseModel):
    normalized: str
    identifiers: list[str]
    slots: dict[str, int]
    placeholder_count: int
    anomalies: list[str]
    source: str | None = None
    latency_ms: float
    version: str


class BatchParseResponseModel(BaseModel):
    results: list[ParseResponseModel]


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Interpolate", version=settings.service_version)
    app.dependency_overrides[get_settings] = lambda: settings
    parse_semaphore = asyncio.Semaphore(settings.max_concurrent_parse_requests)

    async def _run(requests: list[ParseRequest]) -> list[PipelineResult]:
        def _work() -> list[PipelineResult]:
            return [run_pipeline(item, settings=settings) for item in requests]

        async with parse_semaphore:
            try:
                return await asyncio.wait_for(
                    asyncio.to_thread(_work),
                    timeout=settings.request_timeout_seconds,
                )
            except asyncio.TimeoutError:
                _access_logger.warning(
                    "parse_timed_out",
                    templates=len(requests),
                    timeout_seconds=settings.request_timeout_seconds,
                )
                raise HTTPException(
                    status_code=status.HTTP_408_REQUEST_TIMEOUT,
                    detail="request timeout",
                ) from None

    @app.middleware("http")
    async def limit_parse_body(request: Request, call_next):
        declared = _declared_body_size(request)
        if (
            request.url.path in _PARSE_PATHS
            and declared is not None
            and declared > settings.max_request_size_bytes
        ):
            _access_logger.warning(
                "parse_body_rejected",
                endpoint=request.url.path,
                content_length=declared,
                max_bytes=settings.max_request_size_bytes,
            )
            return Response(
                content="template payload too large",
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                media_type="text/plain",
            )
        return await call_next(request)

    @app.get("/healthz", response_class=Response)
    async def healthz() -> Response:
        return Response(content="ok\n", media_type="text/plain")

    @app.post("/parse", response_model=ParseResponseModel)
    async def parse_endpoint(
        request: ParseRequestModel,
        _: None = Depends(require_api_key),
    ) -> ParseResponseModel:
        (result,) = await _run([ParseRequest(template=request.template, source=request.source)])
        return ParseResponseModel(**result.asdict())

    @app.post("/parse/batch", response_model=BatchParseResponseModel)
    async def parse_batch_endpoint(
        request: BatchParseRequestModel,
        _: None = Depends(require_api_key),
    ) -> BatchParseResponseModel:
        results = await _run([ParseRequest(template=template) for template in request.templates])
        return BatchParseResponseModel(
            results=[ParseResponseModel(**result.asdict()) for result in results]
        )

    @app.get("/metrics")
    async def metrics_endpoint(_: None = Depends(require_api_key)) -> Response:
        if not settings.metrics_enabled:
            raise HTTPException(status_code=404, detail="metrics disabled")
        payload, content_type = metrics.render_metrics()
        return Response(content=payload, media_type=content_type)

    return app


app = create_app()
