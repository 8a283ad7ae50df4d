from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class LivenessStatus(str, Enum):
    online = "online"
    warning = "warning"
    offline = "offline"


class AgentSummary(BaseModel):
    agent_id: str
    hostname: str
    last_seen: datetime
    data_count: int
    status: LivenessStatus


class AgentListResponse(BaseModel):
    agents: list[AgentSummary]


class AgentHistoryResponse(BaseModel):
    agent_id: str
    data: list[dict]
    total: int


class StoreStats(BaseModel):
    total_agents: int
    active_agents: int
    total_records: int


class StatsResponse(StoreStats):
    server_uptime: str
    last_updated: datetime


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
