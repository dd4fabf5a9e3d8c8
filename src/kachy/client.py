"""Async HTTP client for the Kachy Valkey service."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from .config import KachyConfig
from .errors import KachyConnectionError, KachyResponseError, map_http_error, map_transport_error
from .models import (
    DeleteResponse,
    ExecResponse,
    ExistsResponse,
    ExpireResponse,
    GetResponse,
    SetResponse,
    TtlResponse,
)
from .pipeline import KachyPipeline

logger = logging.getLogger("kachy.client")

ModelT = TypeVar("ModelT", bound=BaseModel)


def _key_path(endpoint: str, key: str) -> str:
    return f"/valkey/{endpoint}/{quote(key, safe='')}"


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class KachyClient:
    """Issues one authenticated HTTP request per key-value operation.

    Holds no state beyond its :class:`KachyConfig` and the underlying
    ``httpx.AsyncClient``; connection pooling is left to httpx.
    """

    def __init__(self, config: KachyConfig, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout,
            headers=dict(config.headers),
            limits=httpx.Limits(max_connections=config.pool_size, max_keepalive_connections=config.pool_size),
            transport=transport,
        )
        self._closed = False

    @property
    def config(self) -> KachyConfig:
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> "KachyClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._config.access_key}"}

    async def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> httpx.Response:
        if self._closed:
            raise KachyConnectionError("Client is closed")
        logger.debug("Kachy request method=%s path=%s", method, path)
        try:
            response = await self._client.request(method, path, json=payload, headers=self._headers())
        except httpx.RequestError as exc:
            error = map_transport_error(exc)
            logger.warning("Kachy request failed method=%s path=%s error=%s", method, path, error.message)
            raise error from exc
        except (TypeError, ValueError) as exc:
            # body encoding: bytes, arbitrary objects, NaN/inf
            error = KachyConnectionError(f"Request failed: {exc}")
            logger.warning("Kachy request not sent method=%s path=%s error=%s", method, path, error.message)
            raise error from exc

        if response.status_code >= 400:
            error = map_http_error(response.status_code, response.reason_phrase, _json_or_none(response))
            logger.warning(
                "Kachy request failed method=%s path=%s status=%s", method, path, response.status_code
            )
            raise error
        return response

    async def _call(
        self,
        model: Type[ModelT],
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> ModelT:
        response = await self._request(method, path, payload)
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise KachyResponseError(
                f"Malformed response from {path}: {exc}", status_code=response.status_code
            ) from exc

    async def set(self, key: str, value: str, ex: Optional[int] = None) -> bool:
        """Set ``key`` to ``value``, expiring after ``ex`` seconds when given."""
        payload: Dict[str, Any] = {"key": key, "value": value}
        if ex is not None:
            payload["ex"] = ex
        result = await self._call(SetResponse, "POST", "/valkey/set", payload)
        return result.success

    async def get(self, key: str) -> Optional[str]:
        """Return the value stored at ``key``, or ``None`` if it is missing."""
        result = await self._call(GetResponse, "GET", _key_path("get", key))
        return result.value

    async def delete(self, key: str) -> bool:
        result = await self._call(DeleteResponse, "DELETE", _key_path("del", key))
        return result.deleted

    async def exists(self, key: str) -> bool:
        result = await self._call(ExistsResponse, "GET", _key_path("exists", key))
        return result.exists

    async def expire(self, key: str, seconds: int) -> bool:
        result = await self._call(ExpireResponse, "POST", "/valkey/expire", {"key": key, "seconds": seconds})
        return result.success

    async def ttl(self, key: str) -> int:
        """Remaining time to live in seconds.

        Server sentinels (``-1`` no expiry, ``-2`` missing key) are returned
        unchanged.
        """
        result = await self._call(TtlResponse, "GET", _key_path("ttl", key))
        return result.ttl

    async def valkey(self, command: str, *args: Any) -> Any:
        """Run an arbitrary command through the service's exec endpoint."""
        payload = {"command": command.upper(), "args": list(args)}
        result = await self._call(ExecResponse, "POST", "/valkey/exec", payload)
        return result.result

    redis = valkey

    def pipeline(self) -> KachyPipeline:
        return KachyPipeline(self)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._client.aclose()


__all__ = ["KachyClient"]
