"""Client-side command pipeline for batched Valkey operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from .errors import KachyError

if TYPE_CHECKING:  # pragma: no cover
    from .client import KachyClient

logger = logging.getLogger("kachy.pipeline")


@dataclass(frozen=True)
class QueuedCommand:
    name: str
    args: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class CommandError:
    """Placed in :meth:`KachyPipeline.execute` results where a command failed."""

    command: str
    kind: str
    message: str

    @classmethod
    def from_exception(cls, command: str, exc: KachyError) -> "CommandError":
        return cls(command=command, kind=exc.kind, message=exc.message)


class KachyPipeline:
    """Queues commands and replays them one by one through a client.

    This is not a server-side transaction: commands run sequentially and a
    failing command does not stop the ones after it. A pipeline must not be
    shared between concurrent tasks.
    """

    def __init__(self, client: "KachyClient") -> None:
        self._client = client
        self._commands: List[QueuedCommand] = []

    def _queue(self, name: str, *args: Any) -> "KachyPipeline":
        self._commands.append(QueuedCommand(name=name.upper(), args=args))
        return self

    def set(self, key: str, value: str, ex: Optional[int] = None) -> "KachyPipeline":
        if ex is not None:
            return self._queue("SET", key, value, "EX", ex)
        return self._queue("SET", key, value)

    def get(self, key: str) -> "KachyPipeline":
        return self._queue("GET", key)

    def delete(self, key: str) -> "KachyPipeline":
        return self._queue("DEL", key)

    def exists(self, key: str) -> "KachyPipeline":
        return self._queue("EXISTS", key)

    def expire(self, key: str, seconds: int) -> "KachyPipeline":
        return self._queue("EXPIRE", key, seconds)

    def ttl(self, key: str) -> "KachyPipeline":
        return self._queue("TTL", key)

    def valkey(self, command: str, *args: Any) -> "KachyPipeline":
        return self._queue(command, *args)

    redis = valkey

    async def execute(self) -> List[Any]:
        if not self._commands:
            return []

        commands, self._commands = self._commands, []
        results: List[Any] = []
        for command in commands:
            try:
                results.append(await self._client.valkey(command.name, *command.args))
            except KachyError as exc:
                logger.warning("Pipeline command failed command=%s error=%s", command.name, exc.message)
                results.append(CommandError.from_exception(command.name, exc))
        return results

    def clear(self) -> "KachyPipeline":
        self._commands.clear()
        return self

    @property
    def commands(self) -> Tuple[QueuedCommand, ...]:
        return tuple(self._commands)

    def __len__(self) -> int:
        return len(self._commands)


__all__ = ["CommandError", "KachyPipeline", "QueuedCommand"]
