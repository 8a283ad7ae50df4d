from fastapi import APIRouter, Query

from app.core.config import settings
from app.schemas.agent_schema import AgentHistoryResponse, AgentListResponse
from app.services.ingestion_store import ingestion_store


router = APIRouter()


# ─────────────────────────────────────────────
# LIST AGENTS
# ─────────────────────────────────────────────
@router.get("/agents", response_model=AgentListResponse)
def list_agents():
    return AgentListResponse(agents=ingestion_store.list_agents())


# ─────────────────────────────────────────────
# AGENT HISTORY
# ─────────────────────────────────────────────
@router.get("/agents/{agent_id}/data", response_model=AgentHistoryResponse)
def get_agent_data(
    agent_id: str,
    limit: int = Query(settings.DEFAULT_HISTORY_LIMIT, ge=1),
):
    if limit > settings.MAX_HISTORY_PER_AGENT:
        limit = settings.MAX_HISTORY_PER_AGENT

    envelopes, total = ingestion_store.get_history(agent_id, limit)

    return AgentHistoryResponse(
        agent_id=agent_id,
        data=[e.to_wire() for e in envelopes],
        total=total,
    )
