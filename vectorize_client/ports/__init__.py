"""Public port exports for concrete transport implementations."""

from .http import AsyncHttpxTransport, InMemoryTransport, RecordedRequest, RequestsTransport

__all__ = [
    "AsyncHttpxTransport",
    "InMemoryTransport",
    "RecordedRequest",
    "RequestsTransport",
]
