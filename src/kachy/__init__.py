"""Kachy Valkey Python client.

Example:
    >>> import asyncio
    >>> import kachy
    >>>
    >>> async def main():
    ...     kachy.init("my-access-key")
    ...     await kachy.set("greeting", "hello", ex=60)
    ...     print(await kachy.get("greeting"))
    ...     await kachy.close()
    >>>
    >>> asyncio.run(main())

The module-level functions act on one process-wide client installed by
:func:`init` and released by :func:`close`. Code that prefers explicit
ownership can build a :class:`KachyClient` directly.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .client import KachyClient
from .config import KachyConfig, __version__
from .errors import (
    KachyAuthenticationError,
    KachyConfigurationError,
    KachyConnectionError,
    KachyError,
    KachyNotInitializedError,
    KachyResponseError,
)
from .pipeline import CommandError, KachyPipeline, QueuedCommand

logging.getLogger("kachy").addHandler(logging.NullHandler())

_default_client: Optional[KachyClient] = None


def init(access_key: Optional[str] = None, **options: Any) -> KachyClient:
    """Create the process-wide client.

    Without ``access_key`` the key is read from ``KACHY_ACCESS_KEY``; other
    unset options fall back to their ``KACHY_*`` variables as usual. Any
    previously installed client is replaced but not closed.
    """
    global _default_client
    if access_key is None:
        config = KachyConfig.from_env(**options)
    else:
        config = KachyConfig(access_key, **options)
    _default_client = KachyClient(config)
    return _default_client


def get_client() -> KachyClient:
    if _default_client is None:
        raise KachyNotInitializedError("Kachy client not initialized. Call kachy.init() first.")
    return _default_client


async def set(key: str, value: str, ex: Optional[int] = None) -> bool:
    return await get_client().set(key, value, ex)


async def get(key: str) -> Optional[str]:
    return await get_client().get(key)


async def delete(key: str) -> bool:
    return await get_client().delete(key)


async def exists(key: str) -> bool:
    return await get_client().exists(key)


async def expire(key: str, seconds: int) -> bool:
    return await get_client().expire(key, seconds)


async def ttl(key: str) -> int:
    return await get_client().ttl(key)


async def valkey(command: str, *args: Any) -> Any:
    return await get_client().valkey(command, *args)


def pipeline() -> KachyPipeline:
    return get_client().pipeline()


async def close() -> None:
    global _default_client
    client, _default_client = _default_client, None
    if client is not None:
        await client.close()


__all__ = [
    "__version__",
    "KachyClient",
    "KachyConfig",
    "KachyPipeline",
    "QueuedCommand",
    "CommandError",
    "KachyError",
    "KachyConfigurationError",
    "KachyConnectionError",
    "KachyAuthenticationError",
    "KachyResponseError",
    "KachyNotInitializedError",
    "init",
    "get_client",
    "set",
    "get",
    "delete",
    "exists",
    "expire",
    "ttl",
    "valkey",
    "pipeline",
    "close",
]
