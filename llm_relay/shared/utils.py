import socket

from llm_relay.shared.constants import UNKNOWN_ERROR_MESSAGE


def mask_key(key: str) -> str:
    """Mask an API key for logging, keeping only its first and last 4 characters."""
    if not key:
        return "<none>"
    if len(key) <= 8:
        return "****"
    return f"{key[:4]}...{key[-4:]}"


def describe_error(error: object) -> str:
    """
    Best-effort human readable text for a caught error of unknown shape.
    Uses the error's message when it has one, the value itself when it is
    already text, and a generic fallback otherwise.
    """
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    if isinstance(error, BaseException):
        text = str(error)
        if text:
            return text
        return UNKNOWN_ERROR_MESSAGE
    if isinstance(error, str) and error:
        return error
    return UNKNOWN_ERROR_MESSAGE


def get_local_ip() -> str:
    """Best guess at the LAN address, used only for the startup banner."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        try:
            # No packet is sent; connecting a UDP socket only picks a route.
            sock.connect(("10.255.255.255", 1))
            return sock.getsockname()[0]
        except OSError:
            return "127.0.0.1"
