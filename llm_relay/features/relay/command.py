import json
from typing import Any, List, Optional

from pydantic import BaseModel, ValidationError

from llm_relay.shared.errors import InvalidJsonError, MissingFieldsError

class ChatMessage(BaseModel):
    role: str
    content: str

class ChatCompletionPayload(BaseModel):
    """Body sent to OpenRouter's chat completions endpoint."""
    messages: List[ChatMessage]
    model: str
    stream: bool = False

class RelayRequest(BaseModel):
    """Body accepted from callers of the relay."""
    prompt: Optional[str] = None
    model_name: Optional[str] = None
    stream: Any = False
    referer: Optional[str] = None
    title: Optional[str] = None

    @property
    def is_streaming(self) -> bool:
        # Only a JSON ``true`` opts into streaming.
        return self.stream is True

    def to_upstream(self) -> ChatCompletionPayload:
        return ChatCompletionPayload(
            messages=[ChatMessage(role="user", content=self.prompt)],
            model=self.model_name,
            stream=self.is_streaming,
        )

def _reject_constant(name: str):
    # NaN and Infinity are accepted by the json module but are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")

def parse_relay_request(body: bytes) -> RelayRequest:
    """Decode and validate a raw request body, raising a RelayError on bad input."""
    try:
        data = json.loads(body, parse_constant=_reject_constant)
    except ValueError:
        raise InvalidJsonError()

    if not isinstance(data, dict):
        raise MissingFieldsError()

    try:
        relay_request = RelayRequest.model_validate(data)
    except ValidationError:
        raise MissingFieldsError()

    if not relay_request.prompt or not relay_request.model_name:
        raise MissingFieldsError()
    return relay_request
