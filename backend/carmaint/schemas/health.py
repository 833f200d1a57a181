"""
Response models for the liveness and readiness probes.
"""

from datetime import datetime
from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness: the process is up and serving requests."""
    status: Literal["ok"]
    timestamp: datetime = Field(description="Server time (UTC)")


class HealthCheckDetail(BaseModel):
    """
    Outcome of one dependency check.

    Attributes:
        healthy: Whether the dependency answered in time
        latency_ms: How long the check took
        error: Short reason when unhealthy
    """
    healthy: bool
    latency_ms: Optional[float] = None
    error: Optional[str] = None


class ReadinessResponse(BaseModel):
    """
    Readiness: all dependencies answered.

    ``status`` is ``not_ready`` (served with HTTP 503) as soon as one
    entry in ``checks`` is unhealthy.
    """
    status: Literal["ready", "not_ready"]
    checks: Dict[str, HealthCheckDetail] = Field(description="Per-dependency results keyed by name")
    timestamp: datetime = Field(description="Server time (UTC)")
