LOGGER_NAME = "llm-relay"

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_REFERER = "https://llm-proxy.abyzov.workers.dev/"
DEFAULT_TITLE = "LLM Proxy Worker"

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    # Browsers may cache the pre-flight approval for a day
    "Access-Control-Max-Age": "86400",
}

EVENT_STREAM_HEADERS = {
    "Content-Type": "text/event-stream",
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}

# Every method is routed to the relay so it can answer 405 itself.
RELAY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
