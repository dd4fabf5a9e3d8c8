from __future__ import annotations

import httpx
import pytest

import kachy
from kachy.client import KachyClient
from kachy.config import KachyConfig


@pytest.fixture(autouse=True)
def reset_default_client(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(kachy, "_default_client", None)


def test_get_client_before_init_fails() -> None:
    with pytest.raises(kachy.KachyNotInitializedError, match="not initialized"):
        kachy.get_client()


@pytest.mark.asyncio
async def test_calls_before_init_fail() -> None:
    with pytest.raises(kachy.KachyNotInitializedError):
        await kachy.get("k")
    with pytest.raises(kachy.KachyNotInitializedError):
        kachy.pipeline()


@pytest.mark.asyncio
async def test_init_installs_default_client() -> None:
    client = kachy.init("test-secret", base_url="https://test.api.kachy.com", timeout=10)

    assert kachy.get_client() is client
    assert client.config.base_url == "https://test.api.kachy.com"
    assert client.config.timeout == 10

    await kachy.close()
    assert client.closed
    with pytest.raises(kachy.KachyNotInitializedError):
        kachy.get_client()


@pytest.mark.asyncio
async def test_init_reads_access_key_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KACHY_ACCESS_KEY", "env-secret")
    monkeypatch.setenv("KACHY_POOL_SIZE", "3")

    client = kachy.init()

    assert client.config.access_key == "env-secret"
    assert client.config.pool_size == 3
    await kachy.close()


def test_init_without_any_key_fails() -> None:
    with pytest.raises(kachy.KachyConfigurationError, match="environment variable is required"):
        kachy.init()


@pytest.mark.asyncio
async def test_close_twice_is_safe() -> None:
    kachy.init("test-secret")
    await kachy.close()
    await kachy.close()


@pytest.mark.asyncio
async def test_convenience_functions_delegate(monkeypatch: pytest.MonkeyPatch) -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        return httpx.Response(
            200,
            json={
                "success": True,
                "value": "v",
                "deleted": True,
                "exists": False,
                "ttl": 42,
                "result": "PONG",
            },
        )

    client = KachyClient(KachyConfig("test-secret"), transport=httpx.MockTransport(handler))
    monkeypatch.setattr(kachy, "_default_client", client)

    assert await kachy.set("k", "v", ex=5) is True
    assert await kachy.get("k") == "v"
    assert await kachy.delete("k") is True
    assert await kachy.exists("k") is False
    assert await kachy.expire("k", 5) is True
    assert await kachy.ttl("k") == 42
    assert await kachy.valkey("ping") == "PONG"
    assert await kachy.pipeline().valkey("ping").execute() == ["PONG"]

    assert seen == [
        ("POST", "/valkey/set"),
        ("GET", "/valkey/get/k"),
        ("DELETE", "/valkey/del/k"),
        ("GET", "/valkey/exists/k"),
        ("POST", "/valkey/expire"),
        ("GET", "/valkey/ttl/k"),
        ("POST", "/valkey/exec"),
        ("POST", "/valkey/exec"),
    ]
    await kachy.close()


@pytest.mark.asyncio
async def test_init_from_env_keeps_explicit_options(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KACHY_ACCESS_KEY", "env-secret")
    monkeypatch.setenv("KACHY_BASE_URL", "https://env.api.kachy.com")

    client = kachy.init(base_url="https://explicit.api.kachy.com")

    assert client.config.access_key == "env-secret"
    assert client.config.base_url == "https://explicit.api.kachy.com"
    await kachy.close()
