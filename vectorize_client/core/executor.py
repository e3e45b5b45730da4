"""Request executor: the only component that talks to the network."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

from .config import ConnectionConfig
from .contracts import HttpTransportPort, TransportResponse
from .envelope import (
    ApiEnvelope,
    RawBody,
    decode_body,
    decode_payload,
    extract_errors,
    join_error_messages,
    parse_body,
)
from .errors import ErrorContext, InvalidArgument, RemoteApiError, TransportError, VectorizeError
from .types import HttpMethod, ResponsePayload

logger = logging.getLogger(__name__)

_ALLOWED_METHODS = frozenset({"GET", "POST", "DELETE"})


def build_url(config: ConnectionConfig, endpoint: str) -> str:
    return f"{config.base_url}/{endpoint.lstrip('/')}"


def build_headers(config: ConnectionConfig) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {config.api_token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


def encode_body(body: Optional[Mapping[str, Any]]) -> Optional[bytes]:
    if body is None:
        return None
    return json.dumps(body, separators=(",", ":")).encode("utf-8")


def check_method(method: str) -> HttpMethod:
    normalized = method.upper()
    if normalized not in _ALLOWED_METHODS:
        raise InvalidArgument(f"Unsupported HTTP method: {method}")
    return normalized  # type: ignore[return-value]


def map_response(
    response: TransportResponse,
    *,
    context: ErrorContext | None = None,
) -> ResponsePayload:
    """Turn a transport response into a result or a normalized error."""

    if not response.ok:
        raise _http_error(response, context)

    decoded = decode_body(response.text)
    if isinstance(decoded, RawBody):
        return decoded.payload
    return _unwrap_envelope(decoded, response.status_code, context)


def _unwrap_envelope(
    envelope: ApiEnvelope,
    status_code: int,
    context: ErrorContext | None,
) -> ResponsePayload:
    if not envelope.success:
        summary = envelope.error_summary or "; ".join(envelope.messages) or "unknown error"
        logger.debug("Vectorize API reported failure (%s): %s", _describe(context), summary)
        raise RemoteApiError(
            f"Vectorize API error: {summary}",
            errors=envelope.errors,
            messages=envelope.messages,
            status_code=status_code,
            context=context,
        )
    if envelope.has_result:
        return envelope.result
    return dict(envelope.payload)


def _http_error(response: TransportResponse, context: ErrorContext | None) -> VectorizeError:
    status = response.status_code
    parsed, payload = parse_body(response.text)
    errors, message = extract_errors(payload) if parsed else ((), None)
    logger.debug("Vectorize HTTP %s error (%s), body parsed=%s", status, _describe(context), parsed)

    summary = join_error_messages(errors)
    if summary:
        return RemoteApiError(
            f"HTTP {status} API error: {summary}",
            errors=errors,
            status_code=status,
            context=context,
        )
    if message:
        return RemoteApiError(
            f"HTTP {status} API error: {message}",
            status_code=status,
            context=context,
        )
    decoded = decode_payload(payload) if parsed else None
    if isinstance(decoded, ApiEnvelope) and decoded.messages:
        return RemoteApiError(
            f"HTTP {status} API error: {'; '.join(decoded.messages)}",
            messages=decoded.messages,
            status_code=status,
            context=context,
        )
    return TransportError(f"HTTP {status} error", status_code=status, context=context)


def _describe(context: ErrorContext | None) -> str:
    return context.describe() if context is not None else "no context"


class RequestExecutor:
    """Builds, authenticates, and sends one request per call.

    The executor keeps no per-call state; the connection config is passed to
    every `execute()` call and never stored.
    """

    def __init__(self, transport: HttpTransportPort) -> None:
        self.transport = transport

    def execute(
        self,
        config: ConnectionConfig,
        endpoint: str,
        method: str = "GET",
        body: Optional[Mapping[str, Any]] = None,
        *,
        context: ErrorContext | None = None,
    ) -> ResponsePayload:
        """Send one request and map the reply.

        Args:
            config: Account, token, and API endpoint.
            endpoint: Path below ``/accounts/{account}/vectorize/v2/``.
            method: ``GET``, ``POST`` or ``DELETE``.
            body: Optional JSON body.
            context: Operation details attached to any raised error.

        Raises:
            RemoteApiError: the service reported a structured failure.
            TransportError: no usable response was received.
        """

        http_method = check_method(method)
        url = build_url(config, endpoint)
        logger.debug("Vectorize request %s %s", http_method, endpoint)
        try:
            response = self.transport.send(
                http_method,
                url,
                headers=build_headers(config),
                body=encode_body(body),
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
