"""Normalize loosely-typed vector payloads and split them for transport."""

from __future__ import annotations

import math
from typing import Any, Iterable, List, Mapping, Sequence, TypeVar, overload

from .errors import InvalidArgument
from .validation import coerce_numeric_values
from .vectors.vector_types import Vector

T = TypeVar("T")

DEFAULT_BATCH_SIZE = 1000


def format_vectors(raw_vectors: Iterable[Mapping[str, Any] | Vector]) -> list[Vector]:
    """Turn raw vector objects (for example parsed JSON) into `Vector` values.

    ``metadata`` and ``namespace`` are copied only when present, so the
    request body never carries nulls the caller did not send.
    """

    if isinstance(raw_vectors, (str, bytes, Mapping)):
        raise InvalidArgument("vectors must be a sequence of vector objects")
    return [_format_vector(raw, position) for position, raw in enumerate(raw_vectors)]


def _format_vector(raw: Any, position: int) -> Vector:
    if isinstance(raw, Vector):
        raw = {
            "id": raw.id,
            "values": raw.values,
            "metadata": raw.metadata,
            "namespace": raw.namespace,
        }
    if not isinstance(raw, Mapping):
        raise InvalidArgument(f"Vector at index {position} must be an object")

    raw_id = raw.get("id")
    if not raw_id:
        raise InvalidArgument(f"Vector at index {position} must have an 'id' field")

    values = coerce_numeric_values(raw.get("values"))
    if values is None:
        raise InvalidArgument(
            f"Vector at index {position} must have a non-empty numeric 'values' array"
        )

    metadata = raw.get("metadata")
    if metadata is not None and not isinstance(metadata, Mapping):
        raise InvalidArgument(
            f"Vector at index {position} has non-object 'metadata' "
            f"({type(metadata).__name__})"
        )

    namespace = raw.get("namespace")
    return Vector(
        id=str(raw_id),
        values=values,
        metadata=dict(metadata) if metadata is not None else None,
        namespace=str(namespace) if namespace else None,
    )


class VectorBatches(Sequence[List[T]]):
    """Lazy view of contiguous chunks over an ordered sequence.

    Chunks are sliced on access, so iterating twice yields the same chunks
    and nothing is copied until a chunk is requested.
    """

    def __init__(self, items: Sequence[T], batch_size: int) -> None:
        self._items = items
        self._batch_size = batch_size

    @property
    def batch_size(self) -> int:
        return self._batch_size

    def __len__(self) -> int:
        return math.ceil(len(self._items) / self._batch_size)

    @overload
    def __getitem__(self, index: int) -> list[T]: ...

    @overload
    def __getitem__(self, index: slice) -> list[list[T]]: ...

    def __getitem__(self, index: int | slice) -> list[T] | list[list[T]]:
        if isinstance(index, slice):
            return [self[position] for position in range(*index.indices(len(self)))]
        count = len(self)
        if index < 0:
            index += count
        if not 0 <= index < count:
            raise IndexError("batch index out of range")
        start = index * self._batch_size
        return list(self._items[start : start + self._batch_size])

    def __repr__(self) -> str:
        return (
            f"VectorBatches(items={len(self._items)}, "
            f"batch_size={self._batch_size}, batches={len(self)})"
        )


def batch_vectors(vectors: Sequence[T], batch_size: int = DEFAULT_BATCH_SIZE) -> VectorBatches[T]:
    """Partition `vectors` into chunks of at most `batch_size` items.

    The default matches the service's per-request vector limit. Callers
    decide whether to send the chunks sequentially or concurrently.
    """

    if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size < 1:
        raise InvalidArgument(f"batch_size must be a positive integer, got {batch_size!r}")
    if isinstance(vectors, (str, bytes)) or not isinstance(vectors, Sequence):
        raise InvalidArgument("vectors must be an ordered sequence")
    return VectorBatches(vectors, batch_size)
