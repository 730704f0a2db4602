"""
fluenthttp - fluent HTTP requests on top of :mod:`requests`.

Bind a URI with :meth:`HttpRequest.target`, shape the request with the
:class:`WebTarget` mutators and dispatch it with one of the verb methods.
"""

from .client import (
    BasicWebTarget,
    HttpRequest,
    RawResponseHandler,
    Response,
    ResponseContext,
    ResponseHandler,
    TypeReference,
    WebTarget,
)
from .exceptions import (
    ContentConsumedException,
    ContentTooLargeException,
    HttpRequestError,
    MissingResponseBodyException,
    RequestException,
    ResponseDeserializationException,
    ResponseException,
    UnexpectedStatusCodeException,
    UnsupportedContentOperationException,
)
from .models import ContentType, Header, HttpMethod, NameValuePair, RequestConfig, StringEntity

__version__ = "0.1.0"

__all__ = [
    "HttpRequest",
    "WebTarget",
    "BasicWebTarget",
    "Response",
    "ResponseHandler",
    "RawResponseHandler",
    "ResponseContext",
    "TypeReference",
    "HttpMethod",
    "Header",
    "NameValuePair",
    "ContentType",
    "RequestConfig",
    "StringEntity",
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
