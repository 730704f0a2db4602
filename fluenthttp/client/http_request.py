"""Entry point for building client requests."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple, Union
from urllib.parse import ParseResult, SplitResult

from fluenthttp.adapters import RequestsTransport
from fluenthttp.configs import Config, load_config
from fluenthttp.models import Header, RequestConfig
from fluenthttp.utils import not_null

from .deserializer import ResponseDeserializer
from .response_context import DEFAULT_BUFFER_SIZE
from .web_target import BasicWebTarget

logger = logging.getLogger(__name__)

UriLike = Union[str, SplitResult, ParseResult]


class HttpRequest:
    """Factory of :class:`~fluenthttp.client.web_target.WebTarget` instances.

    An ``HttpRequest`` holds nothing but defaults, so one instance can be
    shared between threads; every :meth:`target` call returns a fresh builder.
    """

    def __init__(
        self,
        transport: Optional[RequestsTransport] = None,
        *,
        default_headers: Iterable[Header] = (),
        request_config: Optional[RequestConfig] = None,
        deserializer: Optional[ResponseDeserializer] = None,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        self._transport = transport or RequestsTransport()
        self._default_headers: Tuple[Header, ...] = tuple(default_headers)
        self._request_config = request_config
        self._deserializer = deserializer
        self._buffer_size = buffer_size

    @classmethod
    def from_config(cls, config: Union[Config, str, None] = None, **kwargs) -> "HttpRequest":
        """Build an instance from a :class:`Config` or a YAML config path."""
        if not isinstance(config, Config):
            config = load_config(config)
        request_config = RequestConfig(
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
            allow_redirects=config.allow_redirects,
            verify=config.verify_ssl,
        )
        logger.debug("Creating HttpRequest from config %s", config)
        kwargs.setdefault("default_headers", [Header("User-Agent", config.user_agent)])
        kwargs.setdefault("request_config", request_config)
        kwargs.setdefault("buffer_size", config.buffer_size)
        return cls(**kwargs)

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------
    def __enter__(self) -> "HttpRequest":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._transport.close()

    @property
    def transport(self) -> RequestsTransport:
        return self._transport

    @property
    def default_headers(self) -> Tuple[Header, ...]:
        return self._default_headers

    def target(self, uri: UriLike) -> BasicWebTarget:
        """Build a new web resource target bound to ``uri``.

        Raises :class:`ValueError` when ``uri`` is ``None`` or not an
        absolute URI.
        """
        not_null(uri, "uri")
        if isinstance(uri, (SplitResult, ParseResult)):
            uri = uri.geturl()
        return BasicWebTarget(
            uri,
            self._transport,
            headers=self._default_headers,
            request_config=self._request_config,
            deserializer=self._deserializer,
            buffer_size=self._buffer_size,
        )


__all__ = ["HttpRequest"]
