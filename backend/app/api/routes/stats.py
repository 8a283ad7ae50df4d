from datetime import datetime, timezone

from fastapi import APIRouter

from app.core.config import settings
from app.schemas.agent_schema import HealthResponse, StatsResponse
from app.services.ingestion_store import ingestion_store


router = APIRouter()


def format_uptime(seconds: float) -> str:
    """Whole seconds in h/m/s form, same as the agent's uptime field."""
    total = max(int(seconds), 0)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{minutes}m{secs}s"
    return f"{secs}s"


@router.get("/stats", response_model=StatsResponse)
def get_stats():
    now = datetime.now(timezone.utc)
    counts = ingestion_store.stats(now)

    return StatsResponse(
        **counts.model_dump(),
        server_uptime=format_uptime(ingestion_store.uptime_seconds(now)),
        last_updated=now,
    )


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
    )
