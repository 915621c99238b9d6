import httpx
import pytest
from fastapi.testclient import TestClient

from llm_relay.app import create_app
from llm_relay.shared.config import RelayConfig

TEST_KEY = "sk-or-v1-test-0000000000000000"


class FakeOpenRouter:
    """Mock transport handler recording every upstream request it receives."""

    def __init__(self):
        self.requests = []
        self.responder = lambda request: httpx.Response(
            200, json={"id": "gen-1", "choices": [{"message": {"role": "assistant", "content": "Hi"}}]}
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def upstream():
    return FakeOpenRouter()


@pytest.fixture
def make_client(upstream):
    opened = []

    def _make(api_key: str = TEST_KEY, **openrouter) -> TestClient:
        config = RelayConfig.model_validate({"openrouter": {"api_key": api_key, **openrouter}})
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
        test_client = TestClient(create_app(config, http_client=http_client))
        test_client.__enter__()
        opened.append(test_client)
        return test_client

    yield _make
    for test_client in opened:
        test_client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()
