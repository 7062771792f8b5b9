"""Internal async helpers shared by the engine and the drivers."""

from __future__ import annotations

import inspect
from typing import Any


async def _maybe_await(value: Any) -> Any:
    """Await awaitables and return non-awaitable values unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


async def _maybe_close(obj: Any) -> None:
    close = getattr(obj, "close", None)
    if callable(close):
        await _maybe_await(close())
