from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from llm_relay.shared.constants import RELAY_METHODS
from .handler import RelayHandler

router = APIRouter()

@router.api_route(
    "/{path:path}",
    methods=RELAY_METHODS,
    response_model=None,
    include_in_schema=False,
)
async def relay(
    request: Request,
    handler: RelayHandler = Depends(RelayHandler)
) -> Response:
    """Relays a chat completion request to OpenRouter, whatever the path."""
    return await handler.handle(request)
