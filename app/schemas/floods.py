from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FloodStats(BaseModel):
    """Dataset-wide statistics over the historical flood point layer."""

    model_config = ConfigDict(frozen=True)

    record_count: int | None = Field(None, description="Number of recorded flood events.")
    avg_intensity: float | None = Field(None, description="Mean flood intensity.")
    avg_duration: float | None = Field(None, description="Mean flood duration (days).")
    latest_date: datetime | None = Field(None, description="Most recent recorded event.")


class FloodStatsResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    stats: FloodStats
    generated_at: datetime
