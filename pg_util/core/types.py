"""Shared core type aliases used across contracts, executors, and ports."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Union

NamedParams = Dict[str, Any]
PositionalParams = Sequence[Any]
QueryParams = Union[PositionalParams, NamedParams, None]

RowMapping = Mapping[str, Any]
Rows = List[RowMapping]
MaybeRow = Optional[RowMapping]

ReleaseFn = Callable[[], Union[None, Awaitable[None]]]
QueryFn = Callable[[str, QueryParams], Awaitable[Rows]]
