#!/usr/bin/env python3
"""
LLM Relay
Forwards chat completion requests to OpenRouter, injecting a server-held API key.
"""

import uvicorn
from prometheus_client import start_http_server

from llm_relay.app import create_app
from llm_relay.shared.config import load_config, setup_logging
from llm_relay.shared.utils import get_local_ip

config = load_config()
logger = setup_logging(config)
app = create_app(config)

if __name__ == "__main__":
    host = config.server.host
    port = config.server.port

    display_host = get_local_ip() if host == "0.0.0.0" else host
    logger.warning("Starting LLM Relay on %s:%s", host, port)
    logger.warning("Relay URL: http://%s:%s/", display_host, port)

    if config.server.metrics_port:
        start_http_server(config.server.metrics_port)
        logger.warning("Metrics: http://%s:%s/metrics", display_host, config.server.metrics_port)

    log_config = uvicorn.config.LOGGING_CONFIG
    http_log_level = config.server.http_log_level.upper()
    log_config["loggers"]["uvicorn.access"]["level"] = http_log_level

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_config=log_config,
        timeout_graceful_shutdown=30,
        server_header=False
    )
