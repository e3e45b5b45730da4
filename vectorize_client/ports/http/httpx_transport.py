"""Async HTTP transport backed by `httpx`.

This adapter is optional and requires the `httpx` package installed.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ...core.contracts import TransportResponse
from ...core.errors import TransportError
from ...core.types import HttpMethod

DEFAULT_TIMEOUT_SECONDS = 30.0


class AsyncHttpxTransport:
    """Async transport using a shared `httpx.AsyncClient`."""

    def __init__(
        self,
        *,
        client: Any = None,
        timeout: float | None = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        try:
            import httpx  # type: ignore[import-not-found]
        except ImportError as exc:  # pragma: no cover - env dependent
            raise ImportError(
                "httpx is required for AsyncHttpxTransport. "
                "Install with `pip install vectorize-client[async]`."
            ) from exc

        self._httpx = httpx
        self._client = client
        self._owns_client = client is None
        self.timeout = timeout

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = self._httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def send(
        self,
        method: HttpMethod,
        url: str,
        *,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        try:
            response = await self._get_client().request(
                method,
                url,
                headers=dict(headers),
                content=body,
            )
        except self._httpx.HTTPError as exc:
            raise TransportError(
                f"Request failed: {type(exc).__name__}: {exc}", cause=exc
            ) from exc

        return TransportResponse(
            status_code=response.status_code,
            text=response.text,
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AsyncHttpxTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
