"""Transport port contracts used by the request executors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Protocol

from .types import HttpMethod


@dataclass(frozen=True)
class TransportResponse:
    """Status and undecoded body of one HTTP exchange."""

    status_code: int
    text: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class HttpTransportPort(Protocol):
    """Blocking HTTP behavior required by `RequestExecutor`.

    Implementations raise `TransportError` when no response was received
    (DNS failure, refused connection, timeout). Non-2xx responses are
    returned, not raised.
    """

    def send(
        self,
        method: HttpMethod,
        url: str,
        *,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse: ...


class AsyncHttpTransportPort(Protocol):
    """Async HTTP behavior required by `AsyncRequestExecutor`."""

    async def send(
        self,
        method: HttpMethod,
        url: str,
        *,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse: ...
