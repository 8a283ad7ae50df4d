import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.ingestion_store import ingestion_store


@pytest.fixture(autouse=True)
def reset_state():
    ingestion_store.reset()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def envelope_payload():
    def build(agent_id: str = "h1", hostname: str | None = None, processes=None):
        return {
            "agent_id": agent_id,
            "hostname": hostname or agent_id,
            "timestamp": "2024-01-01T00:00:00Z",
            "data": {
                "processes": processes if processes is not None else [
                    {
                        "pid": 1,
                        "name": "systemd",
                        "cmdline": "/sbin/init splash",
                        "user": "unknown",
                        "cpu": "0%",
                        "memory": "0MB",
                    }
                ],
            },
        }
    return build
