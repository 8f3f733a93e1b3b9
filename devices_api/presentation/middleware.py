"""
HTTP Middleware - Presentation Layer

Request-scoped plumbing wrapped around every route: request id
propagation, access logging, a per-request deadline and a last-resort
error handler. From the outside in the chain is
recover -> request id -> access log -> timeout -> router.
"""

import asyncio
from time import perf_counter
from typing import Awaitable, Callable
from uuid import uuid4

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from devices_api.shared import (
    REQUEST_ID_HEADER,
    bind_request_context,
    clear_request_context,
    get_logger,
)

logger = get_logger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]


async def access_log_middleware(request: Request, call_next: CallNext) -> Response:
    start = perf_counter()
    response = await call_next(request)
    logger.info(
        "http.request",
        method=request.method,
        path=request.url.path,
        status=response.status_code,
        duration_ms=round((perf_counter() - start) * 1000, 3),
    )
    return response


async def request_id_middleware(request: Request, call_next: CallNext) -> Response:
    """Reuse the caller's X-Request-ID or mint one, and echo it back."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
    request.state.request_id = request_id
    bind_request_context(request_id=request_id)
    try:
        response = await call_next(request)
    finally:
        clear_request_context()
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


class TimeoutMiddleware:
    """
    Cancel requests that run longer than ``timeout_seconds``.

    Plain ASGI middleware: the downstream app runs inside ``wait_for``, so
    on expiry the route task and the store call it awaits are cancelled.
    A 503 is sent when the response has not started yet.
    """

    def __init__(self, app: ASGIApp, timeout_seconds: float) -> None:
        self.app = app
        self.timeout_seconds = timeout_seconds

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(
                self.app(scope, receive, send_wrapper), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning(
                "http.request.timeout",
                method=scope.get("method"),
                path=scope.get("path"),
                request_id=scope.get("state", {}).get("request_id"),
                timeout_seconds=self.timeout_seconds,
                response_started=response_started,
            )
            if response_started:
                return
            response = JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"detail": "timeout"},
            )
            await response(scope, receive, send)


async def recover_middleware(request: Request, call_next: CallNext) -> Response:
    try:
        return await call_next(request)
    except Exception as exc:
        logger.error(
            "http.request.unhandled_error",
            method=request.method,
            path=request.url.path,
            request_id=getattr(request.state, "request_id", None),
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "internal server error"},
        )


def register_middleware(app: FastAPI, request_timeout_seconds: float) -> None:
    """Install the middleware chain; the last one added runs first."""
    app.add_middleware(TimeoutMiddleware, timeout_seconds=request_timeout_seconds)
    app.middleware("http")(access_log_middleware)
    app.middleware("http")(request_id_middleware)
    app.middleware("http")(recover_middleware)
