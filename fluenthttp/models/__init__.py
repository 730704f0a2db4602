"""
Models module for fluenthttp.

Value types describing requests (methods, headers, parameters, configuration)
and the entities carried by requests and responses.
"""

from .entity import ByteArrayEntity, HttpEntity, InputStreamEntity, ResponseEntity, StringEntity
from .http_models import (
    APPLICATION_JSON,
    APPLICATION_OCTET_STREAM,
    TEXT_PLAIN,
    ContentType,
    Header,
    HttpMethod,
    NameValuePair,
    RequestConfig,
)

__all__ = [
    "HttpMethod",
    "Header",
    "NameValuePair",
    "ContentType",
    "RequestConfig",
    "APPLICATION_JSON",
    "APPLICATION_OCTET_STREAM",
    "TEXT_PLAIN",
    "HttpEntity",
    "ByteArrayEntity",
    "StringEntity",
    "InputStreamEntity",
    "ResponseEntity",
]
