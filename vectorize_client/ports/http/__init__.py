"""HTTP transport adapter exports."""

from .httpx_transport import AsyncHttpxTransport
from .in_memory import InMemoryTransport, RecordedRequest
from .requests_transport import RequestsTransport

__all__ = [
    "AsyncHttpxTransport",
    "InMemoryTransport",
    "RecordedRequest",
    "RequestsTransport",
]
