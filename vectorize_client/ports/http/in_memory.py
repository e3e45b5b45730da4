"""In-memory transport for testing and local development."""

from __future__ import annotations

import json
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional
from urllib.parse import parse_qs, urlparse

from ...core.contracts import TransportResponse
from ...core.errors import TransportError
from ...core.types import HttpMethod

_API_PREFIX = "/vectorize/v2/"


@dataclass(frozen=True)
class RecordedRequest:
    """One request captured by `InMemoryTransport`."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None

    @property
    def json(self) -> Any:
        if self.body is None:
            return None
        return json.loads(self.body.decode("utf-8"))

    @property
    def path(self) -> str:
        """Endpoint path below the ``/vectorize/v2/`` prefix, without query."""

        parsed = urlparse(self.url)
        _, _, tail = parsed.path.partition(_API_PREFIX)
        return tail

    @property
    def query(self) -> dict[str, list[str]]:
        return parse_qs(urlparse(self.url).query)


class InMemoryTransport:
    """Scripted transport that replays queued responses in order.

    Queue `TransportResponse` objects (or exceptions to raise) with the
    `enqueue*` helpers; every request is recorded in `requests`.
    """

    def __init__(self, responses: Iterable[TransportResponse | BaseException] = ()) -> None:
        self._queue: deque[TransportResponse | BaseException] = deque(responses)
        self.requests: list[RecordedRequest] = []

    def enqueue(self, response: TransportResponse | BaseException) -> None:
        self._queue.append(response)

    def enqueue_json(self, payload: Any, *, status_code: int = 200) -> None:
        self.enqueue(TransportResponse(status_code=status_code, text=json.dumps(payload)))

    def enqueue_result(self, result: Any, *, status_code: int = 200) -> None:
        self.enqueue_json(
            {"success": True, "result": result, "errors": [], "messages": []},
            status_code=status_code,
        )

    def enqueue_errors(
        self,
        *errors: Mapping[str, Any],
        status_code: int = 200,
    ) -> None:
        self.enqueue_json(
            {"success": False, "result": None, "errors": list(errors), "messages": []},
            status_code=status_code,
        )

    @property
    def pending(self) -> int:
        return len(self._queue)

    @property
    def last_request(self) -> RecordedRequest:
        if not self.requests:
            raise LookupError("No request has been sent")
        return self.requests[-1]

    def send(
        self,
        method: HttpMethod,
        url: str,
        *,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        self.requests.append(
            RecordedRequest(method=method, url=url, headers=dict(headers), body=body)
        )
        if not self._queue:
            raise TransportError(f"No scripted response left for {method} request")

        item = self._queue.popleft()
        if isinstance(item, BaseException):
            raise item
        return item
