"""Input checks applied before any request leaves the process.

Every validator is pure: it either returns normally (optionally with a
normalized value) or raises `InvalidArgument` / `DimensionMismatch`. None of
them performs I/O.
"""

from __future__ import annotations

import math
import re
from numbers import Real
from typing import Any, Mapping, Optional, Sequence

from .errors import DimensionMismatch, InvalidArgument
from .vectors.vector_types import Vector

MAX_INDEX_NAME_LENGTH = 63
MAX_TOP_K = 100
MAX_LIST_LIMIT = 1000

_INDEX_NAME_PATTERN = re.compile(r"[a-z0-9]([a-z0-9-]*[a-z0-9])?")


def validate_index_name(name: Any) -> str:
    """Check an index name against the service naming rules."""

    if not name or not isinstance(name, str):
        raise InvalidArgument("Index name is required and must be a string")
    if len(name) > MAX_INDEX_NAME_LENGTH:
        raise InvalidArgument(
            f"Index name {name!r} must be {MAX_INDEX_NAME_LENGTH} characters or less"
        )
    if len(name) == 1:
        valid = name.isascii() and name.isalnum()
    else:
        valid = _INDEX_NAME_PATTERN.fullmatch(name) is not None
    if not valid:
        raise InvalidArgument(
            f"Index name {name!r} must contain only lowercase letters, numbers, "
            "and hyphens, and cannot start or end with a hyphen"
        )
    return name


def coerce_numeric_values(values: Any) -> tuple[float, ...] | None:
    """Return `values` as a float tuple, or None when it is not a numeric sequence.

    Lists, tuples and other non-string sequences are accepted, as are
    array-likes exposing ``tolist()``. Items must be finite real numbers;
    booleans are rejected. An empty sequence is not a vector.
    """

    if values is None or isinstance(values, (str, bytes, bytearray, Mapping)):
        return None
    if not isinstance(values, Sequence):
        tolist = getattr(values, "tolist", None)
        if not callable(tolist):
            return None
        values = tolist()
        if not isinstance(values, list):
            return None

    if len(values) == 0:
        return None

    coerced: list[float] = []
    for item in values:
        if isinstance(item, bool) or not isinstance(item, Real):
            return None
        try:
            number = float(item)
        except OverflowError:
            return None
        if not math.isfinite(number):
            return None
        coerced.append(number)
    return tuple(coerced)


def validate_dimensions(value: Any, *, label: str = "dimensions") -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidArgument(f"{label} must be a positive integer, got {value!r}")
    return value


def validate_vectors(
    vectors: Sequence[Vector | Mapping[str, Any]],
    expected_dimensions: Optional[int] = None,
) -> None:
    """Check vector shapes, and dimensionality when it is known.

    Raises:
        InvalidArgument: an element has no numeric ``values`` or no string ``id``.
        DimensionMismatch: ``expected_dimensions`` is given and a vector differs.
    """

    if expected_dimensions is not None:
        validate_dimensions(expected_dimensions, label="expected_dimensions")
    if isinstance(vectors, (str, bytes)) or not isinstance(vectors, Sequence):
        raise InvalidArgument("vectors must be a sequence of vectors")

    for position, vector in enumerate(vectors):
        if isinstance(vector, Vector):
            vector_id, raw_values = vector.id, vector.values
        elif isinstance(vector, Mapping):
            vector_id, raw_values = vector.get("id"), vector.get("values")
        else:
            raise InvalidArgument(
                f"Vector at index {position} must be a mapping or Vector, "
                f"got {type(vector).__name__}"
            )

        values = coerce_numeric_values(raw_values)
        if values is None:
            raise InvalidArgument(
                f"Vector {vector_id!r} must have a non-empty numeric 'values' sequence"
            )
        if expected_dimensions is not None and len(values) != expected_dimensions:
            raise DimensionMismatch(
                str(vector_id),
                expected=expected_dimensions,
                actual=len(values),
            )
        if not vector_id or not isinstance(vector_id, str):
            raise InvalidArgument(
                f"Vector at index {position} must have a valid string id, got {vector_id!r}"
            )


def validate_query_vector(
    vector: Any,
    expected_dimensions: Optional[int] = None,
) -> tuple[float, ...]:
    values = coerce_numeric_values(vector)
    if values is None:
        raise InvalidArgument("Query vector is required and must be a numeric sequence")
    if expected_dimensions is not None:
        validate_dimensions(expected_dimensions, label="expected_dimensions")
        if len(values) != expected_dimensions:
            raise DimensionMismatch(
                "<query>",
                expected=expected_dimensions,
                actual=len(values),
            )
    return values


def validate_vector_id(vector_id: Any) -> str:
    if not vector_id or not isinstance(vector_id, str):
        raise InvalidArgument(
            f"Vector ID is required and must be a non-empty string, got {vector_id!r}"
        )
    return vector_id


def validate_ids(ids: Any) -> list[str]:
    """Check a non-empty id list; a bare string is not accepted as a list."""

    if isinstance(ids, (str, bytes)) or not isinstance(ids, Sequence) or len(ids) == 0:
        raise InvalidArgument("Vector IDs are required and must be a non-empty sequence")
    for position, item in enumerate(ids):
        if not item or not isinstance(item, str):
            raise InvalidArgument(
                f"Vector id at position {position} must be a non-empty string, got {item!r}"
            )
    return list(ids)


def validate_property_name(property_name: Any) -> str:
    if not property_name or not isinstance(property_name, str):
        raise InvalidArgument(
            f"Property name is required and must be a string, got {property_name!r}"
        )
    return property_name


def validate_top_k(top_k: Any) -> int:
    if isinstance(top_k, bool) or not isinstance(top_k, int) or not 1 <= top_k <= MAX_TOP_K:
        raise InvalidArgument(f"topK must be an integer between 1 and {MAX_TOP_K}, got {top_k!r}")
    return top_k


def validate_list_limit(limit: Any) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= MAX_LIST_LIMIT:
        raise InvalidArgument(
            f"limit must be an integer between 1 and {MAX_LIST_LIMIT}, got {limit!r}"
        )
    return limit


def validate_filter(filter: Any) -> Mapping[str, Any] | None:
    if filter is None:
        return None
    if not isinstance(filter, Mapping):
        raise InvalidArgument(f"filter must be a mapping, got {type(filter).__name__}")
    return filter


def validate_namespace(namespace: Any) -> str | None:
    if namespace is None:
        return None
    if not isinstance(namespace, str):
        raise InvalidArgument(f"namespace must be a string, got {type(namespace).__name__}")
    return namespace
