#!/usr/bin/env python3
"""
Dependency provider functions for the application.
"""

from fastapi import Depends, Request
import httpx

from llm_relay.shared.config import OpenRouterConfig, RelayConfig
from llm_relay.features.relay.client import OpenRouterClient

def get_http_client(request: Request) -> httpx.AsyncClient:
    """Returns the shared httpx.AsyncClient instance."""
    return request.app.state.http_client

def get_relay_config(request: Request) -> RelayConfig:
    """Returns the configuration the app was created with."""
    return request.app.state.config

def get_openrouter_config(config: RelayConfig = Depends(get_relay_config)) -> OpenRouterConfig:
    """Returns the upstream section of the configuration."""
    return config.openrouter

def get_openrouter_client(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    settings: OpenRouterConfig = Depends(get_openrouter_config),
) -> OpenRouterClient:
    """Builds a per-request OpenRouterClient over the shared connection pool."""
    return OpenRouterClient(http_client, settings)
