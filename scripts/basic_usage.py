"""Walk through the Kachy Valkey client against a live service.

Requires KACHY_ACCESS_KEY (and optionally KACHY_BASE_URL) in the environment.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import sys

import kachy

logger = logging.getLogger("kachy.example")


async def main() -> None:
    kachy.init()
    try:
        await kachy.set("greeting", "Hello, World!")
        await kachy.set("session:abc", "active", ex=3600)
        print(f"Greeting: {await kachy.get('greeting')}")
        print(f"Greeting exists: {await kachy.exists('greeting')}")
        print(f"Session TTL: {await kachy.ttl('session:abc')} seconds")

        await kachy.valkey("HSET", "user:123:profile", "age", "30", "city", "New York")
        profile = await kachy.valkey("HMGET", "user:123:profile", "age", "city")
        print(f"User profile: {json.dumps(profile)}")

        results = await kachy.pipeline().set("batch:1", "value1").set("batch:2", "value2").execute()
        print(f"Pipeline results: {results}")

        for key in ("greeting", "session:abc", "user:123:profile", "batch:1", "batch:2"):
            await kachy.delete(key)
    except kachy.KachyError as exc:
        logger.error("Example failed kind=%s error=%s", exc.kind, exc.message)
        raise
    finally:
        await kachy.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    if not os.environ.get("KACHY_ACCESS_KEY"):
        print("KACHY_ACCESS_KEY environment variable is required", file=sys.stderr)
        sys.exit(1)
    asyncio.run(main())
