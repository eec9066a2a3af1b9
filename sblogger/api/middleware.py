"""
Request Logging Middleware
--------------------------
Wires the facade into a FastAPI app. Every request gets a trace id (taken
from `X-Trace-Id`, or freshly generated) and a bound logger that carries
`trace_id` + `stack`, exposed to handlers as `request.state.logger`.

Events emitted: request_received → request_completed | request_failed.
Handler exceptions are logged and re-raised; the app's own exception
handlers still decide the response.
"""

import time
import uuid

from fastapi import FastAPI, Request

from sblogger.core.logging import Logger
from sblogger.models.schemas import Stack

TRACE_HEADER = "X-Trace-Id"


def install_request_logging(
    app: FastAPI,
    logger: Logger,
    *,
    stack: Stack = Stack.NODE,
) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        trace_id = request.headers.get(TRACE_HEADER) or str(uuid.uuid4())
        log = logger.bind(trace_id=trace_id, stack=stack)
        request.state.trace_id = trace_id
        request.state.logger = log

        t_start = time.monotonic()
        route = {"method": request.method, "path": request.url.path}

        log.info(
            "request_received",
            {**route, "ip": request.client.host if request.client else "unknown"},
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            latency_ms = int((time.monotonic() - t_start) * 1000)
            log.error("request_failed", {**route, "latency_ms": latency_ms, "error": exc})
            raise

        latency_ms = int((time.monotonic() - t_start) * 1000)
        log.info(
            "request_completed",
            {**route, "status_code": response.status_code, "latency_ms": latency_ms},
        )
        response.headers[TRACE_HEADER] = trace_id
        return response
