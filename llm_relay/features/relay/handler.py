# llm_relay/features/relay/handler.py
from fastapi import Depends, Request
from fastapi.responses import JSONResponse, Response, StreamingResponse
from starlette.background import BackgroundTask

from llm_relay.shared.config import OpenRouterConfig, logger
from llm_relay.shared.constants import CORS_HEADERS, EVENT_STREAM_HEADERS
from llm_relay.shared.dependencies import get_openrouter_client, get_openrouter_config
from llm_relay.shared.errors import (
    MethodNotAllowedError,
    MissingApiKeyError,
    ProxyError,
    RelayError,
)
from llm_relay.shared.metrics import RELAY_REQUESTS
from llm_relay.shared.utils import describe_error

from .client import OpenRouterClient
from .command import RelayRequest, parse_relay_request
from .stream import relay_stream

class RelayHandler:
    def __init__(
        self,
        openrouter_client: OpenRouterClient = Depends(get_openrouter_client),
        settings: OpenRouterConfig = Depends(get_openrouter_config),
    ):
        self._client = openrouter_client
        self._settings = settings

    async def handle(self, request: Request) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)

        mode = "none"
        try:
            if request.method != "POST":
                raise MethodNotAllowedError()
            # Checked before reading the body so a misconfigured deployment
            # fails the same way for every request.
            if not self._settings.api_key:
                raise MissingApiKeyError()

            relay_request = parse_relay_request(await request.body())
            mode = "stream" if relay_request.is_streaming else "buffered"
            logger.info(
                "Received request for model: %s, streaming: %s",
                relay_request.model_name, relay_request.is_streaming
            )
            response = await self._relay(relay_request)
        except RelayError as e:
            RELAY_REQUESTS.labels(mode=mode, outcome=e.outcome).inc()
            raise

        RELAY_REQUESTS.labels(mode=mode, outcome="ok").inc()
        return response

    async def _relay(self, request: RelayRequest) -> Response:
        try:
            if request.is_streaming:
                upstream = await self._client.send_stream(request)
                return StreamingResponse(
                    relay_stream(upstream, request.model_name),
                    status_code=200,
                    headers={**EVENT_STREAM_HEADERS, **CORS_HEADERS},
                    # Closes the upstream even when the body is never iterated
                    background=BackgroundTask(upstream.aclose),
                )

            completion = await self._client.send_non_stream(request)
            return JSONResponse(content=completion, headers=CORS_HEADERS)
        except RelayError:
            raise
        except Exception as e:
            message = describe_error(e)
            logger.exception("Proxy error: %s", message)
            raise ProxyError(message) from e
