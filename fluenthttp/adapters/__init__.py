"""Transport adapters for fluenthttp."""

from .requests_transport import RequestsTransport, fold_headers

__all__ = ["RequestsTransport", "fold_headers"]
