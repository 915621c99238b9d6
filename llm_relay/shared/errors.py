"""
Typed failures raised by the relay.
Each carries the status code and message rendered back to the caller as
``{"error": message}``.
"""

from fastapi import Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from llm_relay.shared.constants import CORS_HEADERS


class RelayError(Exception):
    """Base class for every failure the relay reports to its caller."""
    status_code = 500
    message = "Internal relay error"
    # Label used for the relay_requests_total counter
    outcome = "proxy_error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class MethodNotAllowedError(RelayError):
    status_code = 405
    outcome = "client_error"
    message = "Only POST requests are allowed"


class MissingApiKeyError(RelayError):
    status_code = 500
    outcome = "config_error"
    message = "Server error: missing API key"


class InvalidJsonError(RelayError):
    status_code = 400
    outcome = "client_error"
    message = "Invalid JSON in request body"


class MissingFieldsError(RelayError):
    status_code = 400
    outcome = "client_error"
    message = 'Missing "prompt" or "model_name" in request body'


class UpstreamStatusError(RelayError):
    """OpenRouter answered with a non-success status."""
    outcome = "upstream_error"

    def __init__(self, status_code: int, error_text: str):
        self.error_text = error_text
        super().__init__(f"Error from OpenRouter: {error_text}", status_code)


class ProxyError(RelayError):
    """The upstream call itself failed (network error, unreadable body...)."""
    status_code = 500

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Error proxying to OpenRouter: {reason}")


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=CORS_HEADERS,
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """
    The router answers methods outside RELAY_METHODS itself; give those the
    same 405 body and headers as the relay.
    """
    if exc.status_code == 405:
        return await relay_error_handler(request, MethodNotAllowedError())
    return await http_exception_handler(request, exc)
