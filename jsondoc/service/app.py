"""FastAPI application entrypoint for jsondoc service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..emitter import DocumentEmitter, RenderReport
from ..loader import ModelError, parse_model


class SerializeRequest(BaseModel):
    classes: List[Dict[str, Any]]
    references: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


class FailureResponse(BaseModel):
    name: str
    error: str


class SerializeResponse(BaseModel):
    documents: Dict[str, Dict[str, Any]]
    failures: List[FailureResponse]


class HealthResponse(BaseModel):
    status: str


def _default_emitter() -> DocumentEmitter:
    return DocumentEmitter()


def create_app(
    emitter_factory: Callable[[], DocumentEmitter] = _default_emitter,
) -> FastAPI:
    """Create the FastAPI application exposing the serializer."""

    app = FastAPI(title="jsondoc Service", version="1.0.0")

    async def get_emitter() -> DocumentEmitter:
        return emitter_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/serialize", response_model=SerializeResponse)
    async def serialize(
        payload: SerializeRequest,
        emitter: DocumentEmitter = Depends(get_emitter),
    ) -> SerializeResponse:
        def _run() -> RenderReport:
            model = parse_model(payload.model_dump())
            return emitter.render(model.classes)

        # Serialization is CPU bound; keep it off the event loop.
        report = await asyncio.get_running_loop().run_in_executor(None, _run)
        return SerializeResponse(
            documents=report.documents,
            failures=[
                FailureResponse(name=failure.qualified_name, error=failure.error)
                for failure in report.failures
            ],
        )

    @app.exception_handler(ModelError)
    async def model_error_handler(_: Any, exc: ModelError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
