"""
Schoolgate Remote Collaborator Boundary

The remote school-management client is treated as an opaque RPC
surface: operation name -> (parameters) -> result, or an exception.
Authentication, transport and retries belong to the client, not here.

OperationTable adapts either a plain mapping of callables or an existing
client object. Client methods are bound by explicit name only, normally
the names of the operation catalog; nothing is discovered by inspecting
the client.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from schoolgate.exceptions import RemoteOperationNotFoundError

RemoteHandler = Callable[[dict[str, Any]], Any] | Callable[[dict[str, Any]], Awaitable[Any]]


@runtime_checkable
class RemoteClient(Protocol):
    """Anything that can run a named remote operation."""

    async def call(self, operation: str, params: dict[str, Any]) -> Any: ...


class OperationTable:
    """RemoteClient over an explicit name -> handler mapping.

    Handlers receive the parameter dict as a single positional argument
    and may be sync or async.
    """

    def __init__(self, handlers: Mapping[str, RemoteHandler] | None = None):
        self._handlers: dict[str, RemoteHandler] = dict(handlers or {})

    @classmethod
    def from_client(cls, client: Any, names: Iterable[str]) -> OperationTable:
        """Bind the listed methods of a client object.

        Names the client does not implement are skipped; calling them
        later fails with RemoteOperationNotFoundError.
        """
        handlers: dict[str, RemoteHandler] = {}
        for name in names:
            method = getattr(client, name, None)
            if callable(method):
                handlers[name] = method
        return cls(handlers)

    def add(self, name: str, handler: RemoteHandler) -> None:
        self._handlers[name] = handler

    async def call(self, operation: str, params: dict[str, Any]) -> Any:
        handler = self._handlers.get(operation)
        if handler is None:
            raise RemoteOperationNotFoundError(operation)
        result = handler(params)
        if asyncio.iscoroutine(result):
            result = await result
        return result

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
