"""Results returned by :meth:`WebTarget.request`."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, BinaryIO, Callable, Generic, Optional, TypeVar

import requests
from requests.structures import CaseInsensitiveDict

from fluenthttp.exceptions import (
    HttpRequestError,
    MissingResponseBodyException,
    UnexpectedStatusCodeException,
    UnsupportedContentOperationException,
)
from fluenthttp.models import ContentType, Header, ResponseEntity

from .deserializer import DefaultResponseDeserializer, ResponseDeserializer, TypeReference
from .response_context import DEFAULT_BUFFER_SIZE, ResponseContext

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code < 300


class Response:
    """Untyped response with streaming access to the body.

    The connection stays checked out until :meth:`close` is called, so use it
    as a context manager::

        with target.get() as response:
            text = response.get_content_as_string()
    """

    def __init__(
        self,
        response: requests.Response,
        deserializer: Optional[ResponseDeserializer] = None,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        self._response = response
        self._entity = ResponseEntity(response)
        self._context = ResponseContext(self._entity, buffer_size)
        self._deserializer = deserializer or DefaultResponseDeserializer()

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------
    def __enter__(self) -> "Response":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying connection back to the transport."""
        self._entity.close()

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def reason(self) -> Optional[str]:
        return self._response.reason

    @property
    def headers(self) -> CaseInsensitiveDict:
        return self._response.headers

    @property
    def uri(self) -> str:
        return self._response.url

    @property
    def elapsed(self) -> timedelta:
        return self._response.elapsed

    @property
    def is_success(self) -> bool:
        return is_success_status(self.status_code)

    def get_first_header(self, name: str) -> Optional[Header]:
        value = self._response.headers.get(name)
        return Header(name, value) if value is not None else None

    def get_content(self) -> Optional[BinaryIO]:
        return self._context.get_content()

    def get_content_as_string(self) -> Optional[str]:
        return self._context.get_content_as_string()

    def get_content_type(self) -> Optional[ContentType]:
        return self._context.get_content_type()

    def get_content_length(self) -> int:
        return self._context.get_content_length()

    def read_entity(self, response_type: Any) -> Any:
        """Deserialize the body into ``response_type`` (a class or :class:`TypeReference`)."""
        return self._deserializer.deserialize(self._context, TypeReference.of(response_type))

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}] {self.uri}>"


class ResponseHandler(Generic[T]):
    """Typed snapshot of a completed exchange.

    Built once the body has been deserialized (success) or captured as
    :attr:`error_text` (non-2xx). The connection is already released.
    """

    def __init__(
        self,
        *,
        status_code: int,
        uri: str,
        headers: CaseInsensitiveDict,
        content: Optional[T] = None,
        content_type: Optional[ContentType] = None,
        error_text: Optional[str] = None,
        elapsed: Optional[timedelta] = None,
        response_type: Optional[TypeReference[T]] = None,
    ) -> None:
        self._status_code = status_code
        self._uri = uri
        self._headers = headers
        self._content = content
        self._content_type = content_type
        self._error_text = error_text
        self._elapsed = elapsed if elapsed is not None else timedelta(0)
        self._response_type = response_type

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def headers(self) -> CaseInsensitiveDict:
        return self._headers

    @property
    def content_type(self) -> Optional[ContentType]:
        return self._content_type

    @property
    def error_text(self) -> Optional[str]:
        return self._error_text

    @property
    def elapsed(self) -> timedelta:
        return self._elapsed

    @property
    def response_type(self) -> Optional[TypeReference[T]]:
        return self._response_type

    @property
    def is_success(self) -> bool:
        return is_success_status(self._status_code)

    @property
    def has_content(self) -> bool:
        return self._content is not None

    @property
    def content(self) -> Optional[T]:
        return self._content

    def get_first_header(self, name: str) -> Optional[Header]:
        value = self._headers.get(name)
        return Header(name, value) if value is not None else None

    def get(self) -> T:
        """Return the deserialized body.

        Raises :class:`UnexpectedStatusCodeException` for a non-2xx response
        and :class:`MissingResponseBodyException` when a successful response
        carried no body.
        """
        if not self.is_success:
            raise UnexpectedStatusCodeException(self._status_code, self._error_text, self._uri)
        if self._content is None:
            raise MissingResponseBodyException(
                f"Response body is missing. Status code: {self._status_code}, URI: {self._uri}"
            )
        return self._content

    def or_else(self, default: T) -> T:
        return self._content if self._content is not None else default

    def or_else_throw(self, exc_factory: Optional[Callable[["ResponseHandler[T]"], Exception]] = None) -> T:
        if self._content is not None:
            return self._content
        if exc_factory is None:
            return self.get()
        raise exc_factory(self)

    def if_has_content(self, consumer: Callable[[T], Any]) -> None:
        if self._content is not None:
            consumer(self._content)

    def __repr__(self) -> str:
        return f"<ResponseHandler [{self._status_code}] {self._uri}>"


class RawResponseHandler(ResponseHandler[None]):
    """Result of a request whose body is deliberately ignored.

    Status and headers are available; every content accessor raises
    :class:`UnsupportedContentOperationException`.
    """

    def _unsupported(self) -> HttpRequestError:
        return UnsupportedContentOperationException(
            "Content is not available. The request was sent with raw_request"
        )

    @property
    def has_content(self) -> bool:
        raise self._unsupported()

    @property
    def content(self) -> None:
        raise self._unsupported()

    def get(self) -> None:
        raise self._unsupported()

    def or_else(self, default: Any) -> Any:
        raise self._unsupported()

    def or_else_throw(self, exc_factory: Any = None) -> None:
        raise self._unsupported()

    def if_has_content(self, consumer: Callable[[Any], Any]) -> None:
        raise self._unsupported()


__all__ = ["Response", "ResponseHandler", "RawResponseHandler", "is_success_status"]
