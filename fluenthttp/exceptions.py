"""Exceptions raised while building, dispatching and reading HTTP requests.

Argument errors are plain :class:`ValueError` instances raised at the call
site. Everything raised after that derives from :class:`HttpRequestError`.
"""

from __future__ import annotations

from typing import Optional


class HttpRequestError(Exception):
    """Base class for all fluenthttp failures."""


class ResponseException(HttpRequestError):
    """The transport failed to produce or deliver a response.

    Covers connection failures, timeouts, aborted reads and bodies that cannot
    be decoded with their declared charset.
    """


class ContentTooLargeException(ResponseException):
    """The declared content length does not fit a 32-bit signed size."""

    def __init__(self, content_length: int) -> None:
        super().__init__(
            "Content length is large. Content length greater than 2147483647. "
            f"ContentLength value: {content_length}"
        )
        self.content_length = content_length


class RequestException(HttpRequestError):
    """The exchange completed but violated the caller's expectations."""


class UnexpectedStatusCodeException(RequestException):
    """A typed body was requested but the server answered with a non-2xx code."""

    def __init__(self, status_code: int, error_text: Optional[str] = None, uri: Optional[str] = None) -> None:
        message = f"Unexpected status code {status_code}"
        if uri:
            message += f" for {uri}"
        if error_text:
            message += f": {error_text}"
        super().__init__(message)
        self.status_code = status_code
        self.error_text = error_text
        self.uri = uri


class MissingResponseBodyException(RequestException):
    """The server answered successfully without a body to deserialize."""


class ResponseDeserializationException(RequestException):
    """The body could not be converted into the requested type."""

    def __init__(self, message: str, content: Optional[str] = None) -> None:
        super().__init__(message)
        self.content = content


class UnsupportedContentOperationException(HttpRequestError):
    """Content was requested from a result that deliberately carries none."""


class ContentConsumedException(UnsupportedContentOperationException):
    """The single-use response stream has already been read."""


__all__ = [
    "HttpRequestError",
    "ResponseException",
    "ContentTooLargeException",
    "RequestException",
    "UnexpectedStatusCodeException",
    "MissingResponseBodyException",
    "ResponseDeserializationException",
    "UnsupportedContentOperationException",
    "ContentConsumedException",
]
