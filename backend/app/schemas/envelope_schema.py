from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


# ─────────────────────────────────────────────
# ENUMS
# ─────────────────────────────────────────────


class Protocol(str, Enum):
    tcp = "tcp"
    udp = "udp"


class ConnectionState(str, Enum):
    ESTABLISHED = "ESTABLISHED"
    SYN_SENT = "SYN_SENT"
    SYN_RECV = "SYN_RECV"
    FIN_WAIT1 = "FIN_WAIT1"
    FIN_WAIT2 = "FIN_WAIT2"
    TIME_WAIT = "TIME_WAIT"
    CLOSE = "CLOSE"
    CLOSE_WAIT = "CLOSE_WAIT"
    LAST_ACK = "LAST_ACK"
    LISTEN = "LISTEN"
    CLOSING = "CLOSING"
    UNKNOWN = "UNKNOWN"


# ─────────────────────────────────────────────
# SNAPSHOT CATEGORIES
# ─────────────────────────────────────────────


class ProcessRecord(BaseModel):
    pid: int = Field(..., ge=0)
    name: str
    cmdline: str = ""
    user: str = "unknown"
    cpu: str = "0%"
    memory: str = "0MB"


class ConnectionRecord(BaseModel):
    protocol: Protocol
    local_addr: str
    local_port: int = Field(..., ge=0, le=65535)
    remote_addr: str
    remote_port: int = Field(..., ge=0, le=65535)
    state: ConnectionState = ConnectionState.UNKNOWN
    pid: int = 0


class SystemFacts(BaseModel):
    hostname: str
    os: str
    kernel: str
    uptime: str
    load_average: str
    cpu_usage: float = 0.0
    memory_usage: float = 0.0
    disk_usage: float = 0.0


class Snapshot(BaseModel):
    """
    Closed set of categories. A category the agent has disabled is
    absent (None) rather than empty.
    """

    processes: list[ProcessRecord] | None = None
    network: list[ConnectionRecord] | None = None
    system: SystemFacts | None = None

    model_config = {"extra": "forbid"}


# ─────────────────────────────────────────────
# ENVELOPE
# ─────────────────────────────────────────────


class Envelope(BaseModel):
    agent_id: str = Field(..., min_length=1, max_length=255)
    hostname: str = Field(..., max_length=255)

    # Replaced by the receipt time on ingestion.
    timestamp: datetime | None = None

    data: Snapshot = Field(default_factory=Snapshot)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)
