"""CORS and per-request access logging."""

import uuid
import time
import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from rbac_admin.core.config import settings

logger = logging.getLogger("rbac_admin.requests")

DENIED = (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Tag each request with a server-generated id and log who did what.

    ``request.state.actor_id`` is filled in by ``get_current_actor`` once the
    bearer token is resolved; anonymous and rejected requests log ``-``.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = uuid.uuid4().hex
        request.state.request_id = request_id
        request.state.actor_id = None
        start_time = time.time()

        response: Response = await call_next(request)

        duration = round((time.time() - start_time) * 1000, 2)
        response.headers["X-Request-Id"] = request_id

        actor_id = getattr(request.state, "actor_id", None)
        level = logging.WARNING if response.status_code in DENIED else logging.INFO
        logger.log(
            level,
            "[%s] actor=%s %s %s %s %sms",
            request_id,
            actor_id if actor_id is not None else "-",
            request.method,
            request.url.path,
            response.status_code,
            duration,
        )
        return response


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(AccessLogMiddleware)
