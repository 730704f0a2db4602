"""Value types shared by the request builder and the transport."""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from email.message import Message
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat


class HttpMethod(str, Enum):
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"
    TRACE = "TRACE"


@dataclass(frozen=True)
class Header:
    """A single HTTP header. Names compare case-insensitively via :meth:`matches`."""

    name: str
    value: Optional[str] = None

    def matches(self, name: str) -> bool:
        return self.name.lower() == name.lower()

    def __str__(self) -> str:
        return f"{self.name}: {self.value if self.value is not None else ''}"


@dataclass(frozen=True)
class NameValuePair:
    """A query parameter. Keys are not unique within a request."""

    name: str
    value: Optional[str] = None


@dataclass(frozen=True)
class ContentType:
    """Parsed ``Content-Type`` header value."""

    mime_type: str
    charset: Optional[str] = None
    params: Tuple[Tuple[str, str], ...] = field(default=())

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ContentType"]:
        """Parse a header value such as ``text/html; charset=ISO-8859-1``.

        Returns ``None`` for an absent or blank value. Raises
        :class:`ValueError` when the declared charset is unknown to Python.
        """
        if value is None or not value.strip():
            return None
        msg = Message()
        msg["content-type"] = value
        params = tuple(
            (k.lower(), v) for k, v in msg.get_params()[1:] if k.lower() != "charset"
        )
        charset = msg.get_param("charset")
        if isinstance(charset, tuple):
            charset = charset[2]
        if charset:
            try:
                charset = codecs.lookup(str(charset)).name
            except LookupError as exc:
                raise ValueError(f"Unsupported charset: {charset}") from exc
        return cls(mime_type=msg.get_content_type(), charset=charset or None, params=params)

    @classmethod
    def create(cls, mime_type: str, charset: Optional[str] = None) -> "ContentType":
        if charset:
            charset = codecs.lookup(charset).name
        return cls(mime_type=mime_type.lower(), charset=charset)

    def __str__(self) -> str:
        parts = [self.mime_type]
        if self.charset:
            parts.append(f"charset={self.charset}")
        parts.extend(f"{k}={v}" for k, v in self.params)
        return "; ".join(parts)


APPLICATION_JSON = ContentType.create("application/json", "utf-8")
TEXT_PLAIN = ContentType.create("text/plain", "utf-8")
APPLICATION_OCTET_STREAM = ContentType.create("application/octet-stream")


class RequestConfig(BaseModel):
    """Per-request transport settings.

    The builder only carries this object; :class:`RequestsTransport` is the one
    that reads it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    connect_timeout: Optional[PositiveFloat] = Field(default=None, description="Seconds to wait for a connection")
    read_timeout: Optional[PositiveFloat] = Field(default=None, description="Seconds to wait between bytes")
    allow_redirects: bool = True
    verify: bool = True
    proxies: Dict[str, str] = Field(default_factory=dict)

    def timeout(self) -> Optional[Tuple[Optional[float], Optional[float]]]:
        if self.connect_timeout is None and self.read_timeout is None:
            return None
        return (self.connect_timeout, self.read_timeout)


__all__ = [
    "HttpMethod",
    "Header",
    "NameValuePair",
    "ContentType",
    "RequestConfig",
    "APPLICATION_JSON",
    "TEXT_PLAIN",
    "APPLICATION_OCTET_STREAM",
]
