"""Decoding of service response bodies.

Responses usually arrive wrapped in ``{success, result, errors, messages}``,
but some endpoints answer with a bare payload or an empty body. Decoding is
an explicit two-way step: a body is either an `ApiEnvelope` or a `RawBody`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .types import ResponsePayload


@dataclass(frozen=True)
class ApiError:
    """One structured error entry reported by the service."""

    code: int
    message: str
    details: Mapping[str, Any] | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "ApiError":
        if not isinstance(payload, Mapping):
            return cls(code=0, message=str(payload))
        try:
            code = int(payload.get("code") or 0)
        except (TypeError, ValueError):
            code = 0
        details = payload.get("details")
        return cls(
            code=code,
            message=str(payload.get("message") or ""),
            details=dict(details) if isinstance(details, Mapping) else None,
        )


@dataclass(frozen=True)
class ApiEnvelope:
    """Standard response wrapper."""

    success: bool
    result: Any
    has_result: bool
    errors: tuple[ApiError, ...]
    messages: tuple[str, ...]
    payload: Mapping[str, Any]

    @property
    def error_summary(self) -> str:
        return join_error_messages(self.errors)


@dataclass(frozen=True)
class RawBody:
    """Body that is not an envelope: bare JSON, plain text, or nothing."""

    payload: ResponsePayload


DecodedBody = Union[ApiEnvelope, RawBody]


def parse_body(text: str) -> tuple[bool, Any]:
    """Parse response text as JSON, returning ``(parsed, value)``."""

    if not text or not text.strip():
        return False, None
    try:
        return True, json.loads(text)
    except ValueError:
        return False, text


def decode_body(text: str) -> DecodedBody:
    parsed, value = parse_body(text)
    if not parsed:
        return RawBody(payload=value)
    return decode_payload(value)


def decode_payload(payload: Any) -> DecodedBody:
    """Classify an already-parsed JSON value as envelope or raw body."""

    if not isinstance(payload, Mapping) or not isinstance(payload.get("success"), bool):
        return RawBody(payload=payload)

    raw_errors = payload.get("errors") or []
    raw_messages = payload.get("messages") or []
    return ApiEnvelope(
        success=payload["success"],
        result=payload.get("result"),
        has_result=payload.get("result") is not None,
        errors=tuple(ApiError.from_payload(item) for item in _as_list(raw_errors)),
        messages=tuple(_message_text(item) for item in _as_list(raw_messages)),
        payload=payload,
    )


def extract_errors(payload: Any) -> tuple[tuple[ApiError, ...], Optional[str]]:
    """Pull structured errors or a bare ``message`` out of an error body."""

    if not isinstance(payload, Mapping):
        return (), None
    errors = tuple(ApiError.from_payload(item) for item in _as_list(payload.get("errors") or []))
    message = payload.get("message")
    return errors, str(message) if message else None


def join_error_messages(errors: tuple[ApiError, ...]) -> str:
    return ", ".join(error.message for error in errors if error.message)


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    return [value]


def _message_text(item: Any) -> str:
    if isinstance(item, Mapping) and "message" in item:
        return str(item["message"])
    return str(item)
