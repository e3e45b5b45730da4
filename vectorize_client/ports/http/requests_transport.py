"""Blocking HTTP transport backed by `requests`."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests

from ...core.contracts import TransportResponse
from ...core.errors import TransportError
from ...core.types import HttpMethod

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class RequestsTransport:
    """HTTP transport using a pooled `requests.Session`.

    Timeouts belong to the transport; the client itself never retries or
    waits. Wrap calls yourself for backoff under rate limiting.
    """

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        timeout: float | None = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str | None = None,
    ) -> None:
        self.session = session or requests.Session()
        self.timeout = timeout
        self.user_agent = user_agent

    def send(
        self,
        method: HttpMethod,
        url: str,
        *,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        request_headers = dict(headers)
        if self.user_agent and "User-Agent" not in request_headers:
            request_headers["User-Agent"] = self.user_agent

        try:
            response = self.session.request(
                method,
                url,
                headers=request_headers,
                data=body,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            logger.debug("HTTP %s failed: %s", method, type(exc).__name__)
            raise TransportError(f"Request failed: {exc}", cause=exc) from exc

        return TransportResponse(
            status_code=response.status_code,
            text=response.text,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
