#!/usr/bin/env python3
"""
Configuration module for the LLM relay.
Loads settings from a YAML file and initializes logging with Pydantic validation.
"""

import os
import sys
import logging
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from llm_relay.shared.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_REFERER,
    DEFAULT_TITLE,
    LOGGER_NAME,
)

CONFIG_FILE = os.environ.get("LLM_RELAY_CONFIG", "config.yml")

logger = logging.getLogger(LOGGER_NAME)


class ServerConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    host: str = "0.0.0.0"
    port: int = 8787
    log_level: str = "INFO"
    http_log_level: str = "INFO"
    metrics_port: Optional[int] = None


class OpenRouterConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    default_referer: str = DEFAULT_REFERER
    default_title: str = DEFAULT_TITLE
    timeout: Optional[float] = 600.0

    @property
    def completions_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/chat/completions"


class RequestProxyConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    enabled: bool = False
    url: Optional[str] = None


class RelayConfig(BaseModel):
    """Validated relay configuration, handed to the app at construction time."""
    model_config = ConfigDict(populate_by_name=True)

    server: ServerConfig = Field(default_factory=ServerConfig)
    openrouter: OpenRouterConfig = Field(default_factory=OpenRouterConfig)
    request_proxy: RequestProxyConfig = Field(
        default_factory=RequestProxyConfig, alias="requestProxy"
    )


def read_config_file(path: str) -> dict:
    """Read the raw YAML mapping; a missing file means all defaults."""
    try:
        with open(path, encoding="utf-8") as file:
            return yaml.safe_load(file) or {}
    except FileNotFoundError:
        return {}


def load_config(path: Optional[str] = None) -> RelayConfig:
    """Load and validate configuration with Pydantic models."""
    path = path or CONFIG_FILE
    try:
        config_data = read_config_file(path)
        if not isinstance(config_data, dict):
            print(f"Error in configuration {path}: expected a mapping of sections")
            sys.exit(1)
        # A bare "section:" key means that section keeps its defaults
        config_data = {k: v for k, v in config_data.items() if v is not None}

        # Environment variable override for the upstream credential
        if "OPENROUTER_API_KEY" in os.environ:
            openrouter = config_data.get("openrouter", {})
            if isinstance(openrouter, dict):
                config_data["openrouter"] = {**openrouter, "api_key": os.environ["OPENROUTER_API_KEY"]}

        return RelayConfig.model_validate(config_data)
    except (yaml.YAMLError, ValidationError) as e:
        print(f"Error in configuration {path}: {e}")
        sys.exit(1)


def setup_logging(config_: RelayConfig) -> logging.Logger:
    """Configure logging based on validated configuration."""
    log_level = config_.server.log_level
    log_level_int = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level_int,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.setLevel(log_level_int)
    logger.info("Logging level set to %s", log_level)
    return logger
