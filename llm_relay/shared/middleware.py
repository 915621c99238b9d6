import time
import uuid
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from llm_relay.shared.config import logger

class RequestTracingMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an ID (taken from X-Request-ID or generated),
    reports the handling time in X-Process-Time and logs the outcome.

    For streamed replies the time covers the upstream handshake only, not the
    byte copy that follows.
    """
    async def dispatch(
        self, request: Request, call_next
    ) -> Response:
        request_id = request.headers.get('X-Request-ID') or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)

        logger.info(
            "Request completed: id=%s %s %s -> %s in %.4fs",
            request_id, request.method, request.url.path,
            response.status_code, process_time,
            extra={
                "req_id": request_id,
                "status": response.status_code,
                "duration_sec": round(process_time, 4),
            }
        )
        return response
