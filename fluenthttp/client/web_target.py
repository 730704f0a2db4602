"""Fluent request builder bound to a single target URI.

A :class:`WebTarget` collects path segments, headers, query parameters and an
optional :class:`RequestConfig`, then dispatches through
:meth:`WebTarget.request` or one of the per-verb shortcuts::

    handler = (
        http.target("https://api.example.com")
        .path("users")
        .add_header("Accept", "application/json")
        .add_parameters("page", "1", "size", "20")
        .get(response_type=TypeReference(list[User]))
    )

Targets are cheap, single-use and not thread-safe.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Tuple, Union
from urllib.parse import parse_qsl, quote, quote_plus, urlsplit, urlunsplit

from fluenthttp.adapters import RequestsTransport
from fluenthttp.models import (
    ByteArrayEntity,
    ContentType,
    Header,
    HttpEntity,
    HttpMethod,
    NameValuePair,
    RequestConfig,
    ResponseEntity,
    StringEntity,
)
from fluenthttp.utils import check, not_blank, not_null

from .deserializer import DefaultResponseDeserializer, ResponseDeserializer, TypeReference
from .response import RawResponseHandler, Response, ResponseHandler, is_success_status
from .response_context import DEFAULT_BUFFER_SIZE, ResponseContext

logger = logging.getLogger(__name__)

Entity = Union[HttpEntity, str, bytes, None]
MethodLike = Union[HttpMethod, str]

# characters left untouched when a path segment is appended
_PATH_SAFE = "/%:@!$&'()*+,;=~"


def _to_method(method: MethodLike) -> HttpMethod:
    not_null(method, "method")
    if isinstance(method, HttpMethod):
        return method
    try:
        return HttpMethod(str(method).upper())
    except ValueError:
        raise ValueError(f"Unsupported HTTP method: {method}") from None


def _looks_like_type(value: Any) -> bool:
    return isinstance(value, (type, TypeReference)) or hasattr(value, "__origin__")


def _to_pair(parameter: Any) -> NameValuePair:
    if isinstance(parameter, NameValuePair):
        return parameter
    if isinstance(parameter, tuple) and len(parameter) == 2:
        name, value = parameter
        not_null(name, "name")
        return NameValuePair(str(name), None if value is None else str(value))
    raise ValueError(f"Unsupported parameter: {parameter!r}")


class WebTarget(ABC):
    """Builder for one logical request.

    Subclasses provide the primitive mutators and dispatch; everything else
    here (string overloads, bulk helpers, per-verb methods) delegates to them.
    """

    @abstractmethod
    def path(self, segment: str) -> "WebTarget":
        """Append ``segment`` to the target path."""

    @abstractmethod
    def request(self, method: MethodLike, entity: Entity = None, response_type: Any = None):
        """Dispatch the request.

        Returns a :class:`Response` when ``response_type`` is omitted and a
        :class:`ResponseHandler` otherwise. A ``str`` entity is sent as UTF-8
        ``text/plain`` and ``bytes`` as ``application/octet-stream``. Any
        other non-entity payload raises :class:`ValueError` before anything
        is sent, as does a ``response_type`` that cannot be deserialized.
        Passing a type as ``entity`` is read as ``response_type``, so
        ``target.get(User)`` works.
        """

    @abstractmethod
    def raw_request(self, method: MethodLike) -> RawResponseHandler:
        """Dispatch and keep status and headers only; the body is discarded."""

    @abstractmethod
    def remove_header(self, header: Header) -> "WebTarget":
        ...

    @abstractmethod
    def remove_headers(self, name: str) -> "WebTarget":
        ...

    @abstractmethod
    def set_request_config(self, request_config: RequestConfig) -> "WebTarget":
        ...

    @abstractmethod
    def _add_header(self, header: Header) -> None:
        ...

    @abstractmethod
    def _update_header(self, header: Header) -> None:
        ...

    @abstractmethod
    def _add_parameter(self, parameter: NameValuePair) -> None:
        ...

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------
    def add_header(self, name: Union[Header, str], value: Optional[str] = None) -> "WebTarget":
        """Append a header. Duplicates are kept in insertion order."""
        self._add_header(self._to_header(name, value))
        return self

    def add_headers(self, headers: Iterable[Union[Header, Tuple[str, str]]]) -> "WebTarget":
        not_null(headers, "headers")
        converted = [h if isinstance(h, Header) else self._to_header(*h) for h in headers]
        for header in converted:
            self._add_header(header)
        return self

    def update_header(self, name: Union[Header, str], value: Optional[str] = None) -> "WebTarget":
        """Replace the first header with the same name, or append it."""
        self._update_header(self._to_header(name, value))
        return self

    def add_content_type(self, content_type: Union[ContentType, str]) -> "WebTarget":
        not_null(content_type, "content_type")
        return self.add_header("Content-Type", str(content_type))

    @staticmethod
    def _to_header(name: Union[Header, str], value: Optional[str] = None) -> Header:
        if isinstance(name, Header):
            return name
        not_blank(name, "name")
        return Header(name, value)

    # ------------------------------------------------------------------
    # Query parameters
    # ------------------------------------------------------------------
    def add_parameter(self, name: Union[NameValuePair, str], value: Any = None) -> "WebTarget":
        if isinstance(name, NameValuePair):
            self._add_parameter(name)
        else:
            self._add_parameter(_to_pair((name, value)))
        return self

    def add_parameters(self, *parameters: Any, charset: str = "utf-8") -> "WebTarget":
        """Append several query parameters.

        Accepted forms:

        * ``add_parameters("a=1&b=2")`` - a raw query string decoded with ``charset``
        * ``add_parameters("a", "1", "b", "2")`` - alternating names and values
        * ``add_parameters({"a": "1"})`` - a mapping
        * ``add_parameters([("a", "1"), NameValuePair("b", "2")])`` - an iterable
        * ``add_parameters(NameValuePair("a", "1"), ...)`` - pairs as varargs

        Nothing is added unless every parameter is valid.
        """
        check(len(parameters) != 0, "Length of parameter can't be ZERO")
        if len(parameters) == 1:
            single = not_null(parameters[0], "parameters")
            if isinstance(single, str):
                pairs = self._parse_query(single, charset)
            elif isinstance(single, NameValuePair):
                pairs = [single]
            elif isinstance(single, Mapping):
                pairs = [_to_pair((k, v)) for k, v in single.items()]
            else:
                pairs = [_to_pair(p) for p in single]
        elif all(p is None or isinstance(p, str) for p in parameters):
            check(len(parameters) % 2 == 0, "Length of nameValues can't be odd")
            pairs = [_to_pair((parameters[i], parameters[i + 1])) for i in range(0, len(parameters), 2)]
        else:
            pairs = [_to_pair(p) for p in parameters]

        for pair in pairs:
            self._add_parameter(pair)
        return self

    @staticmethod
    def _parse_query(query: str, charset: str) -> List[NameValuePair]:
        not_null(charset, "charset")
        return [
            NameValuePair(name, value)
            for name, value in parse_qsl(query.lstrip("?"), keep_blank_values=True, encoding=charset)
        ]

    # ------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------
    def get(self, entity: Entity = None, response_type: Any = None):
        return self.request(HttpMethod.GET, entity, response_type)

    def raw_get(self) -> RawResponseHandler:
        return self.raw_request(HttpMethod.GET)

    def put(self, entity: Entity = None, response_type: Any = None):
        return self.request(HttpMethod.PUT, entity, response_type)

    def raw_put(self) -> RawResponseHandler:
        return self.raw_request(HttpMethod.PUT)

    def post(self, entity: Entity = None, response_type: Any = None):
        return self.request(HttpMethod.POST, entity, response_type)

    def raw_post(self) -> RawResponseHandler:
        return self.raw_request(HttpMethod.POST)

    def delete(self, entity: Entity = None, response_type: Any = None):
        return self.request(HttpMethod.DELETE, entity, response_type)

    def raw_delete(self) -> RawResponseHandler:
        return self.raw_request(HttpMethod.DELETE)

    def head(self, entity: Entity = None, response_type: Any = None):
        return self.request(HttpMethod.HEAD, entity, response_type)

    def raw_head(self) -> RawResponseHandler:
        return self.raw_request(HttpMethod.HEAD)

    def options(self, entity: Entity = None, response_type: Any = None):
        return self.request(HttpMethod.OPTIONS, entity, response_type)

    def raw_options(self) -> RawResponseHandler:
        return self.raw_request(HttpMethod.OPTIONS)

    def patch(self, entity: Entity = None, response_type: Any = None):
        return self.request(HttpMethod.PATCH, entity, response_type)

    def raw_patch(self) -> RawResponseHandler:
        return self.raw_request(HttpMethod.PATCH)

    def trace(self, entity: Entity = None, response_type: Any = None):
        return self.request(HttpMethod.TRACE, entity, response_type)

    def raw_trace(self) -> RawResponseHandler:
        return self.raw_request(HttpMethod.TRACE)


class BasicWebTarget(WebTarget):
    """Default :class:`WebTarget` dispatching through a :class:`RequestsTransport`."""

    def __init__(
        self,
        uri: str,
        transport: RequestsTransport,
        *,
        headers: Iterable[Header] = (),
        request_config: Optional[RequestConfig] = None,
        deserializer: Optional[ResponseDeserializer] = None,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        parts = urlsplit(not_null(uri, "uri"))
        if not parts.scheme or not parts.netloc:
            raise ValueError(f"URI must be absolute with a scheme and host: {uri!r}")
        self._scheme = parts.scheme
        self._netloc = parts.netloc
        self._path = parts.path
        self._fragment = parts.fragment
        self._parameters: List[NameValuePair] = self._parse_query(parts.query, "utf-8")
        self._headers: List[Header] = list(headers)
        self._request_config = request_config
        self._transport = not_null(transport, "transport")
        self._deserializer = deserializer or DefaultResponseDeserializer()
        self._buffer_size = buffer_size

    @property
    def headers(self) -> List[Header]:
        return list(self._headers)

    @property
    def parameters(self) -> List[NameValuePair]:
        return list(self._parameters)

    @property
    def request_config(self) -> Optional[RequestConfig]:
        return self._request_config

    @property
    def uri(self) -> str:
        """The target URI with the accumulated path and query string."""
        query = "&".join(
            quote_plus(p.name) if p.value is None else f"{quote_plus(p.name)}={quote_plus(p.value)}"
            for p in self._parameters
        )
        return urlunsplit((self._scheme, self._netloc, self._path, query, self._fragment))

    def path(self, segment: str) -> "BasicWebTarget":
        not_null(segment, "path")
        if segment:
            encoded = quote(segment, safe=_PATH_SAFE)
            self._path = f"{self._path.rstrip('/')}/{encoded.lstrip('/')}"
        return self

    def _add_header(self, header: Header) -> None:
        logger.debug("Adding header %s", header.name)
        self._headers.append(header)

    def _update_header(self, header: Header) -> None:
        for index, existing in enumerate(self._headers):
            if existing.matches(header.name):
                logger.debug("Replacing header %s", header.name)
                self._headers[index] = header
                return
        self._headers.append(header)

    def remove_header(self, header: Header) -> "BasicWebTarget":
        not_null(header, "header")
        if header in self._headers:
            self._headers.remove(header)
        return self

    def remove_headers(self, name: str) -> "BasicWebTarget":
        not_null(name, "name")
        self._headers = [h for h in self._headers if not h.matches(name)]
        return self

    def set_request_config(self, request_config: RequestConfig) -> "BasicWebTarget":
        self._request_config = not_null(request_config, "request_config")
        return self

    def _add_parameter(self, parameter: NameValuePair) -> None:
        self._parameters.append(not_null(parameter, "parameter"))

    def request(self, method: MethodLike, entity: Entity = None, response_type: Any = None):
        method = _to_method(method)
        if response_type is None and _looks_like_type(entity):
            entity, response_type = None, entity
        if isinstance(entity, str):
            entity = StringEntity(entity)
        elif isinstance(entity, (bytes, bytearray)):
            entity = ByteArrayEntity(entity)
        elif entity is not None and not isinstance(entity, HttpEntity):
            raise ValueError(f"Unsupported entity: {type(entity).__name__}")
        type_ref = TypeReference.of(response_type) if response_type is not None else None

        response = self._transport.send(
            method.value, self.uri, self._headers, entity, self._request_config
        )
        if type_ref is None:
            return Response(response, self._deserializer, self._buffer_size)
        try:
            return self._to_handler(method, response, type_ref)
        finally:
            response.close()

    def raw_request(self, method: MethodLike) -> RawResponseHandler:
        method = _to_method(method)
        response = self._transport.send(method.value, self.uri, self._headers, None, self._request_config)
        try:
            return RawResponseHandler(
                status_code=response.status_code,
                uri=response.url,
                headers=response.headers,
                elapsed=response.elapsed,
            )
        finally:
            response.close()

    def _to_handler(self, method: HttpMethod, response, type_ref: TypeReference) -> ResponseHandler:
        context = ResponseContext(ResponseEntity(response), self._buffer_size)
        status_code = response.status_code
        content = None
        error_text = None
        if is_success_status(status_code):
            if self._has_body(method, status_code, context):
                content = self._deserializer.deserialize(context, type_ref)
        else:
            error_text = context.get_content_as_string()
            logger.debug("Unexpected status %s from %s: %s", status_code, response.url, error_text)

        return ResponseHandler(
            status_code=status_code,
            uri=response.url,
            headers=response.headers,
            content=content,
            content_type=context.get_content_type(),
            error_text=error_text,
            elapsed=response.elapsed,
            response_type=type_ref,
        )

    @staticmethod
    def _has_body(method: HttpMethod, status_code: int, context: ResponseContext) -> bool:
        if method is HttpMethod.HEAD or status_code in (204, 205):
            return False
        return context.get_content_length() != 0

    def __repr__(self) -> str:
        return f"<BasicWebTarget {self.uri}>"


__all__ = ["WebTarget", "BasicWebTarget"]
