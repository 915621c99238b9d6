#!/usr/bin/env python3
"""
Metrics definitions for the LLM relay.
"""

import prometheus_client

RELAY_REQUESTS = prometheus_client.Counter(
    'relay_requests_total',
    'Chat completion requests handled by the relay',
    ['mode', 'outcome'],
)
STREAMED_BYTES = prometheus_client.Counter(
    'relay_streamed_bytes_total',
    'Bytes copied from OpenRouter to callers in streaming mode',
)
