"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

This module defines request/result types shared by cache and runtime modules.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import (
    Any,
    Generic,
    Literal,
    TypeAlias,
    TypeVar,
)

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | list["JSONValue"] | dict[str, "JSONValue"]
JSONObject: TypeAlias = dict[str, JSONValue]

Role = Literal["user", "assistant", "system", "tool"]
MessageContent: TypeAlias = str | list[JSONObject]

R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class Message:
    """Normalized chat message payload."""
    role: Role
    content: MessageContent
    name: str | None = None


@dataclass(frozen=True, slots=True)
class InvocationRequest:
    """
    Structured payload passed to one external call.

    Only `messages`, `response_format` and `output_schema` participate in
    cache key derivation. `metadata` travels with the request for the
    external call (model name, trace ids, ...) but never changes the key.
    """
    messages: tuple[Message, ...] | list[Message]
    response_format: Any = None
    output_schema: Any = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class InvocationResult(Generic[R]):
    """Outcome of one `RetryableInvoker.invoke` call."""
    payload: R
    from_cache: bool
    retry_count: int


ExternalCall: TypeAlias = Callable[[InvocationRequest], Awaitable[Any]]
