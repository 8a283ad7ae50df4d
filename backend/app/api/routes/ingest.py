import logging
from datetime import datetime, timezone

from fastapi import APIRouter, status

from app.schemas.envelope_schema import Envelope
from app.services.ingestion_store import ingestion_store

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/agent/data", status_code=status.HTTP_200_OK)
def ingest_agent_data(envelope: Envelope):
    # Receipt time replaces the agent-supplied timestamp.
    envelope.timestamp = datetime.now(timezone.utc)

    ingestion_store.store(envelope)

    data = envelope.data
    logger.info(
        "agent_data_received",
        extra={
            "extra_data": {
                "agent_id": envelope.agent_id,
                "hostname": envelope.hostname,
                "processes": len(data.processes) if data.processes is not None else None,
                "connections": len(data.network) if data.network is not None else None,
            }
        },
    )

    return {"status": "success"}
