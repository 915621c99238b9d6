# llm_relay/features/relay/client.py
import httpx
from typing import Any, Dict

from llm_relay.shared.config import OpenRouterConfig, logger
from llm_relay.shared.errors import UpstreamStatusError
from llm_relay.shared.utils import mask_key

from .command import RelayRequest

class OpenRouterClient:
    """Sends a single chat completion request to OpenRouter, without retries."""

    def __init__(self, http_client: httpx.AsyncClient, settings: OpenRouterConfig):
        self._client = http_client
        self._settings = settings

    def build_headers(self, request: RelayRequest) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._settings.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": request.referer or self._settings.default_referer,
            "X-Title": request.title or self._settings.default_title,
        }

    async def open(self, request: RelayRequest) -> httpx.Response:
        """
        Posts the request and returns the response with its body still unread.
        A non-success status is turned into an UpstreamStatusError carrying
        OpenRouter's own status code and error text.
        """
        logger.info(
            "Forwarding to OpenRouter with key %s for model '%s' (stream=%s).",
            mask_key(self._settings.api_key), request.model_name, request.is_streaming
        )
        upstream_request = self._client.build_request(
            "POST",
            self._settings.completions_url,
            json=request.to_upstream().model_dump(),
            headers=self.build_headers(request),
        )
        response = await self._client.send(upstream_request, stream=True)

        if not response.is_success:
            try:
                await response.aread()
                error_text = response.text
            finally:
                await response.aclose()
            logger.error("HTTP error from OpenRouter: %s - %s", response.status_code, error_text)
            raise UpstreamStatusError(response.status_code, error_text)
        return response

    async def send_non_stream(self, request: RelayRequest) -> Any:
        """Sends a non-streaming request and returns the decoded JSON body."""
        response = await self.open(request)
        try:
            await response.aread()
        finally:
            await response.aclose()
        completion = response.json()
        logger.info("Completed non-streaming request for model '%s'.", request.model_name)
        return completion

    async def send_stream(self, request: RelayRequest) -> httpx.Response:
        """Opens a streaming request; the caller copies the body with relay_stream."""
        response = await self.open(request)
        logger.info("Starting streaming response for model '%s'.", request.model_name)
        return response
