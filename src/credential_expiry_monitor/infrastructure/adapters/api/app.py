"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import FastAPI, HTTPException, status
from fastapi.responses import JSONResponse

from .models import (
    ErrorResponse,
    HealthResponse,
    RunResponse,
    RunSummaryResponse,
    StatisticsResponse,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable, Coroutine

    from ....application.use_cases import RunResult

logger = logging.getLogger(__name__)


def _result_to_response(result: RunResult) -> RunSummaryResponse:
    """Convert a run result to API response (no credential details)."""
    return RunSummaryResponse(
        run_date=result.run_date,
        finished_at=result.finished_at,
        summary=result.get_summary(),
        snapshot_key=result.export.key if result.export else None,
        statistics=StatisticsResponse(
            applications_scanned=result.collection.applications_scanned,
            applications_failed=result.collection.failure_count,
            credentials_collected=result.records_collected,
            alerts_matched=result.events_matched,
            alerts_sent=result.dispatch.sent,
            alerts_failed=result.dispatch.failed,
            alerts_skipped=result.dispatch.skipped,
            snapshots_deleted=result.retention.deleted if result.retention else 0,
        ),
        dry_run=result.dry_run,
    )


class ApiState:
    """Shared state for API endpoints."""

    def __init__(
        self,
        run_func: Callable[[], Coroutine[None, None, RunResult]],
        version: str = "1.0.0",
    ) -> None:
        """Initialize API state."""
        self.run_func = run_func
        self.version = version
        self.last_result: RunResult | None = None


def create_app(
    run_func: Callable[[], Coroutine[None, None, RunResult]],
    version: str = "1.0.0",
) -> FastAPI:
    """
    Create FastAPI application.

    Args:
        run_func: Async function executing one expiry run.
        version: Application version string.

    Returns:
        Configured FastAPI application.
    """
    state = ApiState(run_func=run_func, version=version)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler."""
        logger.info("API server starting...")
        yield
        logger.info("API server shutting down...")

    app = FastAPI(
        title="Credential Expiry Monitor API",
        description="Inventory Entra ID application certificates and secrets and alert owners "
        "before they expire. **No credential details are exposed through this API.**",
        version=version,
        lifespan=lifespan,
        responses={
            500: {"model": ErrorResponse, "description": "Internal server error"},
        },
    )

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            version=state.version,
            timestamp=datetime.now(UTC),
        )

    @app.get(
        "/api/v1/runs/latest",
        response_model=RunSummaryResponse,
        tags=["Runs"],
        summary="Get latest run",
        responses={
            404: {"model": ErrorResponse, "description": "No run yet"},
        },
    )
    async def get_latest_run() -> RunSummaryResponse:
        if state.last_result is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No run available. Trigger one first using POST /api/v1/runs",
            )
        return _result_to_response(state.last_result)

    @app.post(
        "/api/v1/runs",
        response_model=RunResponse,
        tags=["Runs"],
        summary="Trigger a run",
        description="Collect the inventory, export the snapshot and send due alerts now.",
    )
    async def trigger_run() -> RunResponse:
        try:
            logger.info("API: Triggering expiry run...")
            result = await state.run_func()
        except Exception as e:
            logger.exception("API: Expiry run failed")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Expiry run failed: {e}",
            ) from e

        state.last_result = result
        return RunResponse(
            success=result.success,
            message="Run completed successfully" if result.success else "Run completed with errors",
            run=_result_to_response(result),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc: Exception) -> JSONResponse:  # noqa: ARG001
        """Handle uncaught exceptions."""
        logger.exception("Unhandled exception in API")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "detail": str(exc)},
        )

    return app
