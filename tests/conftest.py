from __future__ import annotations

import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from kachy.client import KachyClient
from kachy.config import KachyConfig

KACHY_ENV_VARS = (
    "KACHY_ACCESS_KEY",
    "KACHY_BASE_URL",
    "KACHY_TIMEOUT",
    "KACHY_MAX_RETRIES",
    "KACHY_RETRY_DELAY",
    "KACHY_POOL_SIZE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in KACHY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class Recorder:
    """MockTransport handler that records requests and replies from a callback."""

    def __init__(self, reply: Callable[[httpx.Request, Dict[str, Any]], httpx.Response]) -> None:
        self.reply = reply
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = json.loads(request.content) if request.content else {}
        return self.reply(request, body)

    def body(self, index: int = -1) -> Dict[str, Any]:
        return json.loads(self.requests[index].content)


@pytest.fixture()
async def make_client():
    clients: List[KachyClient] = []

    def factory(reply, **overrides) -> tuple[KachyClient, Recorder]:
        recorder = Recorder(reply)
        options = dict(base_url="https://test.api.kachy.com", timeout=10)
        options.update(overrides)
        cfg = KachyConfig("test-secret", **options)
        client = KachyClient(cfg, transport=httpx.MockTransport(recorder))
        clients.append(client)
        return client, recorder

    yield factory

    for client in clients:
        await client.close()
