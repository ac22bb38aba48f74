"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Deterministic cache-key fingerprints for invocation requests.
"""

from __future__ import annotations

import dataclasses
import hashlib
import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from ..errors import CacheKeyError
from ..types import InvocationRequest, Message

DEFAULT_NAMESPACE = "llm"


def _normalize_descriptor(value: Any) -> Any:
    """Convert response-format/output-schema descriptors into plain JSON data."""
    if value is None:
        return None
    if isinstance(value, type) and issubclass(value, BaseModel):
        return value.model_json_schema()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, Mapping):
        return {str(k): _normalize_descriptor(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_descriptor(v) for v in value]
    return value


def _normalize_message(message: Message | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(message, Mapping):
        role = message.get("role")
        name = message.get("name")
        content = message.get("content")
    else:
        role, name, content = message.role, message.name, message.content
    return {
        "role": role,
        "name": name,
        "content": _normalize_descriptor(content),
    }


def build_cache_key(request: InvocationRequest, *, namespace: str = DEFAULT_NAMESPACE) -> str:
    """
    Build a stable fingerprint for `request`.

    Messages, response format and output schema are encoded together as one
    sorted-key JSON array, hashed with SHA-256 and prefixed with `namespace`.
    Any difference in those fields yields a different key; `metadata` is
    ignored.

    Raises:
        CacheKeyError: if a component is not JSON serializable.
    """
    try:
        payload = [
            [_normalize_message(m) for m in request.messages],
            _normalize_descriptor(request.response_format),
            _normalize_descriptor(request.output_schema),
        ]
        normalized = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            separators=(",", ":"),
            allow_nan=False,
        )
    except (TypeError, ValueError) as error:
        raise CacheKeyError(f"Request is not serializable for caching: {error}") from error
    digest = hashlib.sha256(normalized.encode("utf-8")).hexdigest()
    return f"{namespace}:{digest}"


class CacheKeyBuilder:
    """Callable key builder bound to one namespace (for example `llm`, `image`)."""

    def __init__(self, namespace: str = DEFAULT_NAMESPACE) -> None:
        key = namespace.strip()
        if not key:
            raise CacheKeyError("Cache key namespace must be non-empty")
        self.namespace = key

    def build(self, request: InvocationRequest) -> str:
        return build_cache_key(request, namespace=self.namespace)

    __call__ = build
