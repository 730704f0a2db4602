"""Argument validation helpers used by the request builders."""

from typing import Any, Optional, TypeVar

T = TypeVar("T")


def not_null(value: Optional[T], name: str) -> T:
    """Return ``value`` or raise :class:`ValueError` when it is ``None``."""
    if value is None:
        raise ValueError(f"{name} must not be None")
    return value


def not_blank(value: Optional[str], name: str) -> str:
    """Return ``value`` or raise when it is ``None``, empty or whitespace."""
    not_null(value, name)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must not be blank")
    return value


def check(expression: Any, message: str) -> None:
    if not expression:
        raise ValueError(message)
