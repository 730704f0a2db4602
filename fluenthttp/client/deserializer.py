"""Typed deserialization of response bodies.

A :class:`TypeReference` names the target type explicitly, generic
parameters included::

    handler = target.get(response_type=TypeReference(list[User]))

Plain classes are accepted wherever a ``TypeReference`` is and are wrapped on
the fly. Validation is done by :class:`pydantic.TypeAdapter`, so pydantic
models, dataclasses, ``TypedDict`` and builtin containers all work.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Type, TypeVar, Union

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from fluenthttp.exceptions import ResponseDeserializationException

from .response_context import ResponseContext

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TypeReference(Generic[T]):
    """Explicit descriptor of a result type such as ``list[Foo]``.

    The validator is built up front, so a type pydantic cannot handle is
    rejected with :class:`ValueError` where the reference is created.
    """

    def __init__(self, tp: Any) -> None:
        if tp is None:
            raise ValueError("type must not be None")
        self.type = tp
        try:
            self._adapter = TypeAdapter(tp)
        except PydanticSchemaGenerationError as exc:
            raise ValueError(f"Cannot deserialize into {tp!r}: {exc}") from exc

    @classmethod
    def of(cls, tp: Union["TypeReference[T]", Type[T], Any]) -> "TypeReference[T]":
        if isinstance(tp, TypeReference):
            return tp
        return cls(tp)

    @property
    def adapter(self) -> TypeAdapter:
        return self._adapter

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TypeReference) and other.type == self.type

    def __hash__(self) -> int:
        return hash(self.type)

    def __repr__(self) -> str:
        return f"TypeReference({self.type!r})"


class ResponseDeserializer(ABC):
    """Converts a :class:`ResponseContext` into an instance of a target type."""

    @abstractmethod
    def deserialize(self, context: ResponseContext, type_ref: TypeReference[T]) -> T:
        """Read the body held by ``context`` into ``type_ref.type``."""


class DefaultResponseDeserializer(ResponseDeserializer):
    """``str`` and ``bytes`` are returned as is, everything else is read as JSON.

    JSON is parsed from the raw bytes as UTF-8 unless the response declares
    another charset. An empty body yields ``None`` for JSON targets.
    """

    def deserialize(self, context: ResponseContext, type_ref: TypeReference[T]) -> T:
        if type_ref.type is bytes:
            raw = context.get_content_as_bytes()
            return raw if raw is not None else b""  # type: ignore[return-value]
        if type_ref.type is str:
            return context.get_content_as_string()  # type: ignore[return-value]

        raw = context.get_content_as_bytes()
        if raw is None or not raw.strip():
            logger.debug("Empty body, nothing to deserialize into %r", type_ref.type)
            return None  # type: ignore[return-value]

        content_type = context.get_content_type()
        charset = content_type.charset if content_type is not None else None
        payload: Union[str, bytes] = raw
        if charset is not None and charset != "utf-8":
            try:
                payload = raw.decode(charset)
            except UnicodeDecodeError as exc:
                raise ResponseDeserializationException(
                    f"Response body is not valid {charset}: {exc}", raw.decode(charset, errors="replace")
                ) from exc

        try:
            return type_ref.adapter.validate_json(payload)
        except ValidationError as exc:
            text = payload if isinstance(payload, str) else payload.decode("utf-8", errors="replace")
            logger.debug("Failed to deserialize %r from %s", type_ref.type, text, exc_info=True)
            raise ResponseDeserializationException(
                f"Unable to deserialize response body into {type_ref.type!r}: {exc}", text
            ) from exc


__all__ = ["TypeReference", "ResponseDeserializer", "DefaultResponseDeserializer"]
