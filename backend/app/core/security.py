import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from starlette import status

from app.core.config import settings
from app.core.logging import request_id_ctx_var


class RequestGuardMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):

        # ─────────────────────────────────────────────
        # 1️⃣ Request ID
        # ─────────────────────────────────────────────
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        request_id_ctx_var.set(request_id)

        # ─────────────────────────────────────────────
        # 2️⃣ Enforce JSON on ingestion (POST) only
        # ─────────────────────────────────────────────
        if request.method == "POST":
            content_type = request.headers.get("content-type", "")
            if "application/json" not in content_type:
                return JSONResponse(
                    status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                    content={
                        "error": "invalid_content_type",
                        "message": "Only application/json supported",
                        "request_id": request_id,
                    },
                )

            # ─────────────────────────────────────────
            # 3️⃣ Enforce Max Body Size
            # ─────────────────────────────────────────
            body = await request.body()
            if len(body) > settings.MAX_REQUEST_SIZE:
                return JSONResponse(
                    status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                    content={
                        "error": "payload_too_large",
                        "message": "Request exceeds maximum allowed size",
                        "request_id": request_id,
                    },
                )

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response
