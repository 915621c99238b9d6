"""Byte pipe between an open OpenRouter response and the caller."""
from typing import AsyncIterator

import httpx

from llm_relay.shared.config import logger
from llm_relay.shared.metrics import STREAMED_BYTES


async def relay_stream(response: httpx.Response, model: str) -> AsyncIterator[bytes]:
    """
    Copy the upstream body to the caller chunk by chunk, in order and untouched.

    The payload is never parsed. A transport failure after the first byte can
    no longer be reported as JSON, so it is logged and simply ends the stream.
    The upstream response is always closed when copying stops.
    """
    total = 0
    try:
        async for chunk in response.aiter_bytes():
            total += len(chunk)
            STREAMED_BYTES.inc(len(chunk))
            yield chunk
    except httpx.HTTPError as e:
        logger.error("Stream from OpenRouter interrupted for model '%s': %s", model, e)
    finally:
        await response.aclose()
        logger.info("Stream finished for model '%s' (%d bytes relayed).", model, total)
