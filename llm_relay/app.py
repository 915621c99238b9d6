#!/usr/bin/env python3
"""
Application factory for the LLM relay.
"""

from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from llm_relay.shared.config import RelayConfig, logger
from llm_relay.shared.errors import RelayError, http_error_handler, relay_error_handler
from llm_relay.shared.middleware import RequestTracingMiddleware
from llm_relay.features.relay.endpoints import router as relay_router


def build_http_client(config: RelayConfig) -> httpx.AsyncClient:
    """Creates the pooled client used for every upstream call."""
    client_kwargs = {"timeout": config.openrouter.timeout}
    if config.request_proxy.enabled and config.request_proxy.url:
        client_kwargs["proxy"] = config.request_proxy.url
        logger.info("Using proxy for httpx client: %s", config.request_proxy.url)
    return httpx.AsyncClient(**client_kwargs)


def create_app(config: RelayConfig, http_client: Optional[httpx.AsyncClient] = None) -> FastAPI:
    """
    Builds the relay app around an explicit configuration.
    An http_client may be supplied (tests pass one over a mock transport);
    the app then leaves closing it to the caller.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan resources."""
        owns_client = http_client is None
        app.state.http_client = http_client or build_http_client(config)
        if not config.openrouter.api_key:
            logger.warning("No OpenRouter API key configured; every request will fail with 500.")
        logger.info("Application startup complete")
        yield
        if owns_client:
            await app.state.http_client.aclose()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title="LLM Relay",
        description="Relays chat completion requests to OpenRouter with a server-held key",
        version="1.0.0",
        lifespan=lifespan,
        # Every path belongs to the relay, including the default docs routes.
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.config = config

    app.add_exception_handler(RelayError, relay_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.include_router(relay_router)

    app.add_middleware(RequestTracingMiddleware)
    return app
