"""Error taxonomy shared by validators, executors, and transports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence

if TYPE_CHECKING:
    from .envelope import ApiError


class Resource(str, Enum):
    """Resource group an operation belongs to."""

    INDEX = "index"
    VECTOR = "vector"
    METADATA = "metadata"
    UTILITY = "utility"


class Operation(str, Enum):
    """Named client operations."""

    CREATE_INDEX = "create_index"
    LIST_INDEXES = "list_indexes"
    DELETE_INDEX = "delete_index"
    GET_INDEX = "get_index"
    GET_INDEX_INFO = "get_index_info"
    INSERT_VECTORS = "insert_vectors"
    UPSERT_VECTORS = "upsert_vectors"
    QUERY_VECTORS = "query_vectors"
    QUERY_VECTOR_BY_ID = "query_vector_by_id"
    GET_VECTORS_BY_IDS = "get_vectors_by_ids"
    DELETE_VECTORS_BY_IDS = "delete_vectors_by_ids"
    CREATE_METADATA_INDEX = "create_metadata_index"
    DELETE_METADATA_INDEX = "delete_metadata_index"
    LIST_METADATA_INDEXES = "list_metadata_indexes"
    LIST_VECTORS = "list_vectors"


@dataclass(frozen=True)
class ErrorContext:
    """Identifies which operation and entity a failure belongs to."""

    operation: Operation
    resource: Resource
    index_name: str | None = None
    vector_id: str | None = None
    property_name: str | None = None
    details: Mapping[str, Any] = field(default_factory=dict)

    def describe(self) -> str:
        parts = [f"operation={self.operation.value}"]
        if self.index_name is not None:
            parts.append(f"index={self.index_name!r}")
        if self.vector_id is not None:
            parts.append(f"vector={self.vector_id!r}")
        if self.property_name is not None:
            parts.append(f"property={self.property_name!r}")
        return ", ".join(parts)


class VectorizeError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str, *, context: ErrorContext | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context is None:
            return self.message
        return f"{self.message} ({self.context.describe()})"


class InvalidArgument(VectorizeError, ValueError):
    """Raised when caller input fails local validation."""


class DimensionMismatch(VectorizeError, ValueError):
    """Raised when a vector length disagrees with the index dimensionality."""

    def __init__(
        self,
        vector_id: str,
        *,
        expected: int,
        actual: int,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            f"Vector {vector_id!r} has {actual} dimensions, expected {expected}",
            context=context,
        )
        self.vector_id = vector_id
        self.expected = expected
        self.actual = actual


class RemoteApiError(VectorizeError):
    """Raised when the service reports a failure in a structured body."""

    def __init__(
        self,
        message: str,
        *,
        errors: Sequence["ApiError"] = (),
        messages: Sequence[str] = (),
        status_code: Optional[int] = None,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, context=context)
        self.errors = tuple(errors)
        self.messages = tuple(messages)
        self.status_code = status_code

    @property
    def codes(self) -> tuple[int, ...]:
        return tuple(error.code for error in self.errors)


class TransportError(VectorizeError):
    """Raised when no usable response came back from the service."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        cause: BaseException | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, context=context)
        self.status_code = status_code
        self.cause = cause
