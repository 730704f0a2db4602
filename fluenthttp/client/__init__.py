"""Request builders and response wrappers."""

from .deserializer import DefaultResponseDeserializer, ResponseDeserializer, TypeReference
from .http_request import HttpRequest
from .response import RawResponseHandler, Response, ResponseHandler
from .response_context import ResponseContext
from .web_target import BasicWebTarget, WebTarget

__all__ = [
    "HttpRequest",
    "WebTarget",
    "BasicWebTarget",
    "Response",
    "ResponseHandler",
    "RawResponseHandler",
    "ResponseContext",
    "TypeReference",
    "ResponseDeserializer",
    "DefaultResponseDeserializer",
]
