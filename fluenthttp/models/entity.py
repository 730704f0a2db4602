"""Request and response bodies.

An entity produces bytes and may declare a content type and a length hint
(``-1`` when unknown). Request entities built from in-memory data can be read
repeatedly; a :class:`ResponseEntity` hands out its stream exactly once.
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from typing import BinaryIO, Optional, Union

import requests

from fluenthttp.exceptions import ContentConsumedException
from fluenthttp.utils import not_null

from .http_models import APPLICATION_OCTET_STREAM, ContentType

logger = logging.getLogger(__name__)


class HttpEntity(ABC):
    """Byte-producing content with optional type and length metadata."""

    @abstractmethod
    def get_content(self) -> Optional[BinaryIO]:
        """Return the body stream, or ``None`` when there is no body."""

    @property
    @abstractmethod
    def content_type(self) -> Optional[str]:
        """Raw ``Content-Type`` header value, if declared."""

    @property
    @abstractmethod
    def content_length(self) -> int:
        """Length hint in bytes, ``-1`` when unknown."""


class ByteArrayEntity(HttpEntity):
    def __init__(self, data: bytes, content_type: Union[ContentType, str, None] = APPLICATION_OCTET_STREAM) -> None:
        self._data = bytes(not_null(data, "data"))
        self._content_type = str(content_type) if content_type is not None else None

    def get_content(self) -> BinaryIO:
        return io.BytesIO(self._data)

    @property
    def content_type(self) -> Optional[str]:
        return self._content_type

    @property
    def content_length(self) -> int:
        return len(self._data)

    @property
    def data(self) -> bytes:
        return self._data


class StringEntity(ByteArrayEntity):
    """Text body encoded with ``charset`` (UTF-8 unless told otherwise)."""

    def __init__(self, text: str, charset: str = "utf-8", mime_type: str = "text/plain") -> None:
        not_null(text, "text")
        content_type = ContentType.create(mime_type, charset)
        super().__init__(text.encode(content_type.charset), content_type)
        self.text = text


class InputStreamEntity(HttpEntity):
    """Wraps a caller-supplied stream. The stream can be sent only once."""

    def __init__(self, stream: BinaryIO, length: int = -1, content_type: Union[ContentType, str, None] = None) -> None:
        self._stream: Optional[BinaryIO] = not_null(stream, "stream")
        self._length = length
        self._content_type = str(content_type) if content_type is not None else None

    def get_content(self) -> BinaryIO:
        if self._stream is None:
            raise ContentConsumedException("Stream entity has already been consumed")
        stream, self._stream = self._stream, None
        return stream

    @property
    def content_type(self) -> Optional[str]:
        return self._content_type

    @property
    def content_length(self) -> int:
        return self._length


class ResponseEntity(HttpEntity):
    """Adapts a streamed :class:`requests.Response` body into an entity."""

    def __init__(self, response: requests.Response) -> None:
        self._response = not_null(response, "response")
        self._consumed = False

    def get_content(self) -> Optional[BinaryIO]:
        if self._consumed:
            raise ContentConsumedException("Response content has already been consumed")
        self._consumed = True
        raw = self._response.raw
        if raw is None:
            return None
        # let urllib3 undo gzip/deflate transfer encodings
        if hasattr(raw, "decode_content"):
            raw.decode_content = True
        return raw

    @property
    def content_type(self) -> Optional[str]:
        return self._response.headers.get("Content-Type")

    @property
    def content_length(self) -> int:
        value = self._response.headers.get("Content-Length")
        if value is None:
            return -1
        try:
            return int(value.strip())
        except ValueError:
            logger.debug("Ignoring malformed Content-Length %r", value)
            return -1

    def close(self) -> None:
        self._response.close()


__all__ = [
    "HttpEntity",
    "ByteArrayEntity",
    "StringEntity",
    "InputStreamEntity",
    "ResponseEntity",
]
