"""Content access for a received response entity."""

from __future__ import annotations

import io
import locale
import logging
from typing import BinaryIO, Optional

import urllib3

from fluenthttp.exceptions import ContentTooLargeException, ResponseException
from fluenthttp.models import ContentType, HttpEntity
from fluenthttp.utils import not_null

logger = logging.getLogger(__name__)

MAX_CONTENT_LENGTH = 2**31 - 1
DEFAULT_BUFFER_SIZE = 4096


class ResponseContext:
    """Wraps exactly one :class:`HttpEntity` for the lifetime of one response.

    The underlying stream is not rewindable: once :meth:`get_content` or
    :meth:`get_content_as_string` has read it, later reads of a response
    entity raise :class:`~fluenthttp.exceptions.ContentConsumedException`.
    """

    def __init__(self, entity: HttpEntity, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        self._entity = not_null(entity, "entity")
        self._buffer_size = buffer_size if buffer_size > 0 else DEFAULT_BUFFER_SIZE

    @property
    def entity(self) -> HttpEntity:
        return self._entity

    def get_content(self) -> Optional[BinaryIO]:
        """Return the entity stream unmodified."""
        try:
            return self._entity.get_content()
        except OSError as exc:
            raise ResponseException(f"Unable to obtain response content: {exc}") from exc

    def get_content_as_bytes(self) -> Optional[bytes]:
        """Drain the stream into memory without decoding it.

        Applies the same length guard as :meth:`get_content_as_string`.
        Returns ``None`` when the entity has no stream.
        """
        buffer_size = self._content_length_to_int(self._buffer_size)
        stream = self.get_content()
        if stream is None:
            logger.debug("Response has no content stream")
            return None

        output = io.BytesIO()
        try:
            while True:
                chunk = stream.read(buffer_size)
                if not chunk:
                    break
                output.write(chunk)
        except (OSError, urllib3.exceptions.HTTPError) as exc:
            raise ResponseException(f"Failed to read response content: {exc}") from exc
        return output.getvalue()

    def get_content_as_string(self) -> Optional[str]:
        """Drain the stream and decode it.

        The charset declared in the content type wins; without one the
        platform default charset is used. Returns ``None`` when the entity has
        no stream and ``""`` when the stream is present but empty.
        """
        content = self.get_content_as_bytes()
        if content is None:
            return None

        content_type = self.get_content_type()
        charset = content_type.charset if content_type is not None else None
        if charset is None:
            charset = locale.getpreferredencoding(False)
        try:
            result = content.decode(charset)
        except UnicodeDecodeError as exc:
            raise ResponseException(f"Response content is not valid {charset}: {exc}") from exc

        logger.debug("Content is: %s", result)
        return result

    def get_content_type(self) -> Optional[ContentType]:
        try:
            return ContentType.parse(self._entity.content_type)
        except ValueError as exc:
            raise ResponseException(str(exc)) from exc

    def get_content_length(self) -> int:
        return self._entity.content_length

    def _content_length_to_int(self, default_value: int) -> int:
        content_length = self.get_content_length()
        if content_length > MAX_CONTENT_LENGTH:
            raise ContentTooLargeException(content_length)
        # a zero-sized read buffer would never make progress
        return content_length if content_length > 0 else default_value


__all__ = ["ResponseContext", "MAX_CONTENT_LENGTH", "DEFAULT_BUFFER_SIZE"]
