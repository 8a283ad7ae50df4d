from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging import configure_logging
from app.core.exceptions import (
    AgentNotFoundError,
    agent_not_found_handler,
    validation_exception_handler,
)
from app.core.security import RequestGuardMiddleware
from app.core.security_headers import NoCacheHeadersMiddleware
from app.api.routes import agents, ingest, stats


configure_logging()

app = FastAPI(
    title=settings.APP_NAME,
    description="Mini-HIDS — central collector. "
                "Ingests agent telemetry snapshots, keeps a bounded "
                "per-host history, and reports agent liveness.",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(RequestGuardMiddleware)
app.add_middleware(NoCacheHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


# ─────────────────────────────────────────────
# Root route (service index)
# ─────────────────────────────────────────────
@app.get("/", tags=["root"])
async def root():
    prefix = settings.API_PREFIX
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": f"{prefix}/health",
        "endpoints": {
            "ingest": f"{prefix}/agent/data",
            "agents": f"{prefix}/agents",
            "agent_data": f"{prefix}/agents/{{agent_id}}/data",
            "stats": f"{prefix}/stats",
        },
    }


# ─────────────────────────────────────────────
# Exception handlers
# ─────────────────────────────────────────────
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(AgentNotFoundError, agent_not_found_handler)


# ─────────────────────────────────────────────
# API routes
# ─────────────────────────────────────────────
app.include_router(ingest.router, prefix=settings.API_PREFIX, tags=["ingest"])
app.include_router(agents.router, prefix=settings.API_PREFIX, tags=["agents"])
app.include_router(stats.router, prefix=settings.API_PREFIX, tags=["stats"])
