"""
Mini-HIDS Agent — Telemetry Records

Fixed-schema records produced by the collectors. The JSON field names are
the wire names expected by the collector.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Optional


class Protocol(str, Enum):
    TCP = "tcp"
    UDP = "udp"


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


# Placeholders: these fields are not computed by the agent.
UNKNOWN_USER = "unknown"
ZERO_CPU = "0%"
ZERO_MEMORY = "0MB"


@dataclass(frozen=True)
class ProcessRecord:
    pid: int
    name: str
    cmdline: str
    user: str = UNKNOWN_USER
    cpu: str = ZERO_CPU
    memory: str = ZERO_MEMORY


@dataclass(frozen=True)
class ConnectionRecord:
    protocol: Protocol
    local_addr: str
    local_port: int
    remote_addr: str
    remote_port: int
    state: ConnectionState
    pid: int = 0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["protocol"] = self.protocol.value
        data["state"] = self.state.value
        return data


@dataclass(frozen=True)
class SystemFacts:
    hostname: str
    os: str
    kernel: str
    uptime: str
    load_average: str
    cpu_usage: float = 0.0
    memory_usage: float = 0.0
    disk_usage: float = 0.0


@dataclass(frozen=True)
class Snapshot:
    """
    One sampling instant. A category left as None was disabled and is
    omitted from the wire form entirely.
    """
    processes: Optional[tuple] = None
    network: Optional[tuple] = None
    system: Optional[SystemFacts] = None


@dataclass
class Envelope:
    agent_id: str
    hostname: str
    timestamp: str
    data: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "agent_id": self.agent_id,
            "hostname": self.hostname,
            "timestamp": self.timestamp,
            "data": serialize_snapshot(self.data),
        }


def serialize_snapshot(data: dict) -> dict:
    """Turn an exported snapshot mapping into JSON-ready values."""
    out = {}
    if "processes" in data:
        out["processes"] = [asdict(p) for p in data["processes"]]
    if "network" in data:
        out["network"] = [c.to_dict() for c in data["network"]]
    if "system" in data:
        out["system"] = asdict(data["system"])
    return out
