"""Transport adapter dispatching requests through :mod:`requests`."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

import requests

from fluenthttp.exceptions import RequestException, ResponseException
from fluenthttp.models import ByteArrayEntity, Header, HttpEntity, RequestConfig

logger = logging.getLogger(__name__)

# Errors where the server was never asked or the exchange broke HTTP rules.
_PROTOCOL_ERRORS = (
    requests.exceptions.InvalidURL,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidHeader,
    requests.exceptions.TooManyRedirects,
)


def fold_headers(headers: Sequence[Header]) -> Dict[str, str]:
    """Collapse an ordered header list into what :mod:`requests` accepts.

    Repeated names are joined with ``", "`` in insertion order; the casing of
    the first occurrence is kept.
    """
    folded: Dict[str, str] = {}
    names: Dict[str, str] = {}
    for header in headers:
        key = header.name.lower()
        value = header.value if header.value is not None else ""
        if key in names:
            name = names[key]
            folded[name] = f"{folded[name]}, {value}"
        else:
            names[key] = header.name
            folded[header.name] = value
    return folded


class RequestsTransport:
    """Thin wrapper around :class:`requests.Session`.

    Connection pooling, TLS and redirects are left entirely to the session.
    """

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self.session = session or requests.Session()
        logger.debug("RequestsTransport initialized with %s", type(self.session).__name__)

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------
    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying :class:`requests.Session`."""
        self.session.close()

    def send(
        self,
        method: str,
        url: str,
        headers: Sequence[Header] = (),
        entity: Optional[HttpEntity] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> requests.Response:
        """Send a request and return the streamed :class:`requests.Response`.

        The body is not read; callers own the response and must close it.
        """
        request_headers = fold_headers(headers)
        kwargs: Dict[str, Any] = {"headers": request_headers, "stream": True}
        if entity is not None:
            if entity.content_type and not any(h.lower() == "content-type" for h in request_headers):
                request_headers["Content-Type"] = entity.content_type
            # in-memory bodies go out as bytes so requests can size them
            kwargs["data"] = entity.data if isinstance(entity, ByteArrayEntity) else entity.get_content()
        if request_config is not None:
            kwargs["timeout"] = request_config.timeout()
            kwargs["allow_redirects"] = request_config.allow_redirects
            kwargs["verify"] = request_config.verify
            if request_config.proxies:
                kwargs["proxies"] = dict(request_config.proxies)

        logger.debug("Performing %s request to %s with headers %s", method, url, list(request_headers))
        try:
            response = self.session.request(method, url, **kwargs)
        except _PROTOCOL_ERRORS as exc:
            raise RequestException(f"{method} {url} failed: {exc}") from exc
        except requests.exceptions.RequestException as exc:
            raise ResponseException(f"{method} {url} failed: {exc}") from exc
        logger.info("%s %s -> %s", method, url, response.status_code)
        return response


__all__ = ["RequestsTransport", "fold_headers"]
