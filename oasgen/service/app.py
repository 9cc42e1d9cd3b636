"""FastAPI application serving generated OpenAPI documents."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Optional

try:  # pragma: no cover - optional dependency
    from fastapi import Body, FastAPI, Query
    from fastapi.responses import JSONResponse, Response
    from pydantic import BaseModel

    _FASTAPI_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - service mode optional
    FastAPI = None  # type: ignore[assignment]
    Body = None  # type: ignore[assignment]
    Query = None  # type: ignore[assignment]
    JSONResponse = None  # type: ignore[assignment]
    Response = None  # type: ignore[assignment]
    BaseModel = object  # type: ignore[assignment]
    _FASTAPI_AVAILABLE = False

from ..config import (
    GeneratorOptions,
    HeterogeneousArraySpecifier,
    OasGenConfig,
    OpenAPIVersion,
    load_config,
)
from ..discovery import DiscoveryError
from ..generator import OpenAPIGenerator
from ..logging import get_logger
from ..sources import load_discovery

OPENAPI_MEDIA_TYPE = "application/openapi+yaml"

DiscoveryLoader = Callable[..., Any]


class HealthResponse(BaseModel):
    status: str


def create_app(
    config: OasGenConfig | None = None,
    discovery_loader: DiscoveryLoader = load_discovery,
) -> FastAPI:
    """Create the FastAPI application exposing the generator."""

    if not _FASTAPI_AVAILABLE:  # pragma: no cover - validated via unit tests
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install oasgen[service]`."
        )

    settings = config or load_config(Path.cwd())
    logger = get_logger("service")
    app = FastAPI(title="oasgen", version="1.0.0")

    async def _generate(options: GeneratorOptions, discovery: Any) -> str:
        def _run() -> str:
            return OpenAPIGenerator(options).generate(discovery)

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _run)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/api/openapi")
    async def live_document(
        async_interface: Optional[bool] = Query(None, alias="async"),
    ) -> Response:
        """Translate the configured server's live discovery document."""

        def _load() -> Any:
            return discovery_loader(settings.source.url, timeout=settings.source.timeout)

        loop = asyncio.get_running_loop()
        discovery = await loop.run_in_executor(None, _load)
        options = settings.options.with_overrides(async_interface=async_interface)
        document = await _generate(options, discovery)
        return Response(content=document, media_type=OPENAPI_MEDIA_TYPE)

    @app.post("/api/openapi")
    async def translate_document(
        discovery: Any = Body(...),
        openapi_version: Optional[OpenAPIVersion] = Query(None),
        heterogeneous_array: Optional[HeterogeneousArraySpecifier] = Query(None),
        async_interface: Optional[bool] = Query(None, alias="async"),
    ) -> Response:
        """Translate a discovery document posted as the request body."""
        options = settings.options.with_overrides(
            openapi_version=openapi_version,
            heterogeneous_array=heterogeneous_array,
            async_interface=async_interface,
        )
        document = await _generate(options, discovery)
        return Response(content=document, media_type=OPENAPI_MEDIA_TYPE)

    @app.exception_handler(DiscoveryError)
    async def discovery_error_handler(_: Any, exc: DiscoveryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(_: Any, exc: RuntimeError) -> JSONResponse:
        logger.warning("Discovery document unavailable: %s", exc)
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000, config: OasGenConfig | None = None
) -> None:  # pragma: no cover - integration path
    if not _FASTAPI_AVAILABLE:
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install oasgen[service]`."
        )

    try:
        import uvicorn
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "uvicorn is required to run the service. Install it with `pip install uvicorn`."
        ) from exc

    app = create_app(config)
    uvicorn.run(app, host=host, port=port)
