"""Async request executor sharing request shaping with the sync executor."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Mapping, Optional

from .config import ConnectionConfig
from .contracts import AsyncHttpTransportPort, HttpTransportPort
from .errors import ErrorContext, TransportError
from .executor import build_headers, build_url, check_method, encode_body, map_response
from .types import ResponsePayload

logger = logging.getLogger(__name__)


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class AsyncRequestExecutor:
    """Async twin of `RequestExecutor`.

    Works with async transports and with plain blocking ones; a blocking
    transport runs inline on the event loop.
    """

    def __init__(self, transport: AsyncHttpTransportPort | HttpTransportPort) -> None:
        self.transport = transport

    async def execute(
        self,
        config: ConnectionConfig,
        endpoint: str,
        method: str = "GET",
        body: Optional[Mapping[str, Any]] = None,
        *,
        context: ErrorContext | None = None,
    ) -> ResponsePayload:
        http_method = check_method(method)
        url = build_url(config, endpoint)
        logger.debug("Vectorize request %s %s", http_method, endpoint)
        try:
            response = await _maybe_await(
                self.transport.send(
                    http_method,
                    url,
                    headers=build_headers(config),
                    body=encode_body(body),
                )
            )
        except TransportError as exc:
            if exc.context is None:
                exc.context = context
            raise
        except OSError as exc:
            raise TransportError(
                f"Request failed: {exc}", cause=exc, context=context
            ) from exc
        return map_response(response, context=context)
