# app/core/middleware.py
import time
import uuid
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from app.core.config import settings

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class CatalogRequestMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an id, rejects oversized bodies and logs one line
    per catalog call.
    """

    def __init__(self, app, max_size: int = settings.MAX_REQUEST_SIZE):
        super().__init__(app)
        self.max_size = max_size

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        content_length = request.headers.get("content-length")
        if content_length and int(content_length) > self.max_size:
            logger.warning(
                f"Rejected {request.method} {request.url.path}: body of {content_length} bytes",
                extra={"request_id": request_id},
            )
            response = JSONResponse(
                status_code=413,
                content={
                    "error_code": "PAYLOAD_TOO_LARGE",
                    "message": f"Request payload exceeds maximum size of {self.max_size} bytes",
                },
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        response.headers[REQUEST_ID_HEADER] = request_id

        # health probes would drown the catalog traffic
        if request.url.path != "/health":
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms} ms)",
                extra={"request_id": request_id},
            )
        return response


def register_middlewares(app: FastAPI):
    """Registers the request middleware and CORS."""
    app.add_middleware(CatalogRequestMiddleware, max_size=settings.MAX_REQUEST_SIZE)

    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
