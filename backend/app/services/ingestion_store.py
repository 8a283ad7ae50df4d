import threading
from collections import deque
from datetime import datetime, timezone
from typing import Deque

from app.core.config import settings
from app.core.exceptions import AgentNotFoundError
from app.schemas.agent_schema import AgentSummary, StoreStats
from app.schemas.envelope_schema import Envelope
from app.services.liveness import classify_liveness, is_active


class IngestionStore:
    """
    In-memory per-agent history of envelopes.

    Each history is append-only and bounded; once it exceeds the cap the
    oldest envelopes are dropped first. A single lock covers the whole
    agent map, so stores and reads for different agents serialize.
    """

    def __init__(self, max_history: int | None = None):
        self._lock = threading.Lock()
        self._histories: dict[str, Deque[Envelope]] = {}
        self._max_history = max_history or settings.MAX_HISTORY_PER_AGENT
        self.started_at = datetime.now(timezone.utc)

    def store(self, envelope: Envelope) -> None:
        timestamp = envelope.timestamp or datetime.now(timezone.utc)
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        if timestamp is not envelope.timestamp:
            envelope = envelope.model_copy(update={"timestamp": timestamp})

        with self._lock:
            history = self._histories.get(envelope.agent_id)
            if history is None:
                history = deque()
                self._histories[envelope.agent_id] = history

            history.append(envelope)
            while len(history) > self._max_history:
                history.popleft()

    def list_agents(self, now: datetime | None = None) -> list[AgentSummary]:
        now = now or datetime.now(timezone.utc)
        with self._lock:
            agents = []
            for agent_id, history in self._histories.items():
                if not history:
                    continue
                last = history[-1]
                agents.append(
                    AgentSummary(
                        agent_id=agent_id,
                        hostname=last.hostname,
                        last_seen=last.timestamp,
                        data_count=len(history),
                        status=classify_liveness(last.timestamp, now),
                    )
                )
            return agents

    def get_history(self, agent_id: str, limit: int) -> tuple[list[Envelope], int]:
        """
        Most recent `limit` envelopes in chronological order, plus the
        total number retained for the agent.
        """
        with self._lock:
            history = self._histories.get(agent_id)
            if history is None:
                raise AgentNotFoundError(agent_id)

            total = len(history)
            start = max(total - max(limit, 0), 0)
            return [history[i] for i in range(start, total)], total

    def stats(self, now: datetime | None = None) -> StoreStats:
        now = now or datetime.now(timezone.utc)
        with self._lock:
            return StoreStats(
                total_agents=len(self._histories),
                active_agents=sum(
                    1 for h in self._histories.values()
                    if h and is_active(h[-1].timestamp, now)
                ),
                total_records=sum(len(h) for h in self._histories.values()),
            )

    def uptime_seconds(self, now: datetime | None = None) -> float:
        now = now or datetime.now(timezone.utc)
        return (now - self.started_at).total_seconds()

    def reset(self) -> None:
        """
        Test isolation hook.
        Drops every history and restarts the uptime clock.
        """
        with self._lock:
            self._histories.clear()
            self.started_at = datetime.now(timezone.utc)


ingestion_store = IngestionStore()
