from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response

from app.models import Envelope
from app.routers.users import parse_user_id, respond

logger = logging.getLogger("users_api")
access_logger = logging.getLogger("users_api.access")

REQUEST_ID_HEADER = "X-Request-ID"


async def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    # FastAPI decodes the body before the handler runs; the path id still gets checked first.
    raw_id = request.path_params.get("user_id")
    if raw_id is not None and parse_user_id(raw_id) is None:
        return respond(Envelope(message="invalid uuid"), 400)

    # Body params are untyped, so the only way to get here is a body that isn't JSON.
    return respond(Envelope(message="invalid request"), 422)


def install(app: FastAPI) -> None:
    """Request id, access log and crash recovery for every request."""

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            # A broken handler must not take the process down; answer 500 and keep serving.
            logger.exception("Unhandled error", extra={"request_id": request_id})
            response = respond(Envelope(message="internal server error"), 500)

        response.headers[REQUEST_ID_HEADER] = request_id
        access_logger.info(
            "%s %s %s %.1fms [%s]",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000.0,
            request_id,
        )
        return response

    app.add_exception_handler(RequestValidationError, request_validation_handler)
