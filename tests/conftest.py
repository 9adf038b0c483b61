import json

import httpx
import pytest

from core.config import Settings
from core.perplexity import PerplexityClient
from tools.dispatcher import SearchDispatcher

BASE_URL = "https://api.perplexity.test"


@pytest.fixture
def settings():
    return Settings(api_key="pplx-test-key", base_url=BASE_URL, timeout_seconds=5.0)


@pytest.fixture
def paris_reply():
    return {
        "id": "cmpl-1",
        "model": "llama-3.1-sonar-small-128k-online",
        "created": 1700000000,
        "citations": ["https://x"],
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": "Paris"},
            }
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }


class RecordingUpstream:
    """httpx MockTransport handler that records requests and replays one response."""

    def __init__(self, status_code=200, body=None, raises=None):
        self.status_code = status_code
        self.body = body
        self.raises = raises
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raises is not None:
            raise self.raises
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, text=self.body or "")

    @property
    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def upstream_factory():
    return RecordingUpstream


@pytest.fixture
def make_dispatcher(settings):
    def _make(upstream):
        client = PerplexityClient(settings, transport=httpx.MockTransport(upstream))
        return SearchDispatcher(client), client

    return _make
