"""FastAPI application entrypoint for repolens service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ..analyzers import discover_scanners
from ..analyzers.duplicates import DEFAULT_MAX_PAIRS
from ..collector import FileCollector
from ..config import ConfigError, RepoLensConfig
from ..engine import HeuristicEngine
from ..logging import get_logger
from ..models import FileBlob, HeuristicSummary

logger = get_logger("service")


class FilePayload(BaseModel):
    path: str
    content: str
    size: int = Field(default=0, ge=0)
    language: Optional[str] = None


class AnalyzeOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    max_pairs: Optional[int] = Field(default=None, ge=0, alias="maxPairs")


class AnalyzeRequest(BaseModel):
    files: List[FilePayload]
    options: Optional[AnalyzeOptions] = None


class ScanRequest(BaseModel):
    path: str
    max_pairs: Optional[int] = Field(default=None, ge=0)


class IssuePayload(BaseModel):
    type: str
    category: str
    file: str
    severity: str
    message: str
    line: Optional[int] = None
    snippet: Optional[str] = None
    impact: Optional[str] = None
    remediation: Optional[str] = None


class DuplicateClusterPayload(BaseModel):
    files: List[str]
    similarity: float


class StatsPayload(BaseModel):
    filesAnalyzed: int
    bytesAnalyzed: int


class SummaryResponse(BaseModel):
    issues: List[IssuePayload]
    duplicateClusters: List[DuplicateClusterPayload]
    stats: StatsPayload


class HealthResponse(BaseModel):
    status: str


def _default_engine() -> HeuristicEngine:
    return HeuristicEngine()


def _default_collector() -> FileCollector:
    return FileCollector()


def create_app(
    engine_factory: Callable[[], HeuristicEngine] = _default_engine,
    collector_factory: Callable[[], FileCollector] = _default_collector,
) -> FastAPI:
    """Create the FastAPI application exposing repolens analysis."""

    app = FastAPI(title="RepoLens Service", version="1.0.0")

    async def get_engine() -> HeuristicEngine:
        return engine_factory()

    async def get_collector() -> FileCollector:
        return collector_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/analyze", response_model=SummaryResponse, response_model_exclude_none=True)
    async def analyze(
        payload: AnalyzeRequest,
        engine: HeuristicEngine = Depends(get_engine),
    ) -> Dict[str, Any]:
        files = [FileBlob.from_dict(item.model_dump()) for item in payload.files]
        max_pairs = payload.options.max_pairs if payload.options is not None else None

        def _run() -> HeuristicSummary:
            return engine.analyze(files, max_pairs=max_pairs)

        summary = await asyncio.get_running_loop().run_in_executor(None, _run)
        return summary.to_dict()

    @app.post("/scan", response_model=SummaryResponse, response_model_exclude_none=True)
    async def scan(
        payload: ScanRequest,
        engine: HeuristicEngine = Depends(get_engine),
        collector: FileCollector = Depends(get_collector),
    ) -> Dict[str, Any]:
        def _run() -> HeuristicSummary:
            files = collector.collect(payload.path)
            logger.info("Scanning %d files under %s", len(files), payload.path)
            return engine.analyze(files, max_pairs=payload.max_pairs)

        summary = await asyncio.get_running_loop().run_in_executor(None, _run)
        return summary.to_dict()

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(_: Any, exc: NotADirectoryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(_: Any, exc: RuntimeError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def create_configured_app(config: RepoLensConfig) -> FastAPI:
    """Build the app with engine and collector settings taken from ``config``."""
    try:
        scanners = discover_scanners(config.analysis.scanners)
    except (ValueError, TypeError) as exc:
        raise ConfigError(str(exc)) from exc

    def _engine() -> HeuristicEngine:
        return HeuristicEngine(scanners, max_pairs=config.analysis.max_pairs)

    def _collector() -> FileCollector:
        return FileCollector(config.collect)

    return create_app(_engine, _collector)


def run_service(
    host: str = "127.0.0.1",
    port: int = 8000,
    config: RepoLensConfig | None = None,
) -> None:  # pragma: no cover - integration path
    if config is None:
        app = create_app()
        max_pairs = DEFAULT_MAX_PAIRS
    else:
        app = create_configured_app(config)
        max_pairs = config.analysis.max_pairs
    logger.info("Starting service on %s:%d (max pairs %d)", host, port, max_pairs)
    uvicorn.run(app, host=host, port=port)
