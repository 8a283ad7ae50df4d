from datetime import datetime, timezone

from app.core.config import settings
from app.schemas.agent_schema import LivenessStatus


def classify_liveness(last_seen: datetime, now: datetime | None = None) -> LivenessStatus:
    """
    online  : last envelope younger than ONLINE_WINDOW_SECONDS
    warning : younger than ACTIVE_WINDOW_SECONDS
    offline : anything older
    """
    now = now or datetime.now(timezone.utc)
    age = (now - last_seen).total_seconds()

    if age < settings.ONLINE_WINDOW_SECONDS:
        return LivenessStatus.online
    if age < settings.ACTIVE_WINDOW_SECONDS:
        return LivenessStatus.warning
    return LivenessStatus.offline


def is_active(last_seen: datetime, now: datetime | None = None) -> bool:
    """Within the active window used for the stats counter."""
    now = now or datetime.now(timezone.utc)
    return (now - last_seen).total_seconds() < settings.ACTIVE_WINDOW_SECONDS
