"""API response models (no credential details exposed)."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "unhealthy"]
    version: str
    timestamp: datetime


class StatisticsResponse(BaseModel):
    """Run counters (no details)."""

    applications_scanned: int = Field(description="Applications listed in the directory")
    applications_failed: int = Field(description="Applications whose fetch failed")
    credentials_collected: int = Field(description="Credential records collected")
    alerts_matched: int = Field(description="Credentials whose countdown hit a threshold")
    alerts_sent: int = Field(description="Alert emails accepted by the transport")
    alerts_failed: int = Field(description="Alert emails the transport rejected")
    alerts_skipped: int = Field(description="Alerts without any owner email")
    snapshots_deleted: int = Field(description="Snapshots removed by retention")


class RunSummaryResponse(BaseModel):
    """Summary of a completed run."""

    run_date: date
    finished_at: datetime
    summary: str = Field(description="Human-readable summary")
    snapshot_key: str | None = Field(default=None, description="Key of the exported snapshot")
    statistics: StatisticsResponse
    dry_run: bool


class RunResponse(BaseModel):
    """Response from triggering a run."""

    success: bool
    message: str
    run: RunSummaryResponse | None = None


class ErrorResponse(BaseModel):
    """Error response."""

    error: str
    detail: str | None = None
