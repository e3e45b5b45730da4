"""Typed request contracts and per-operation request plans.

A plan is everything an executor needs to perform one named operation:
method, endpoint path, JSON body, error context, and how to unwrap the
result. Building a plan runs all local validation, so an invalid call fails
before any transport is touched. The sync and async clients share these
builders.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Optional, Sequence
from urllib.parse import quote, urlencode

from .errors import ErrorContext, InvalidArgument, Operation, Resource, VectorizeError
from .formatting import format_vectors
from .types import HttpMethod, JsonBody
from .validation import (
    validate_dimensions,
    validate_filter,
    validate_ids,
    validate_index_name,
    validate_list_limit,
    validate_namespace,
    validate_property_name,
    validate_query_vector,
    validate_top_k,
    validate_vector_id,
    validate_vectors,
)
from .vectors.vector_metrics import DistanceMetric, DistanceMetricInput, normalize_distance_metric
from .vectors.vector_policies import (
    MetadataType,
    ReturnMetadata,
    normalize_metadata_type,
    normalize_return_metadata,
)
from .vectors.vector_types import Vector

DEFAULT_TOP_K = 5


@dataclass(frozen=True)
class IndexConfig:
    dimensions: int
    metric: DistanceMetric = DistanceMetric.COSINE

    def to_payload(self) -> JsonBody:
        return {"dimensions": self.dimensions, "metric": self.metric.value}


@dataclass(frozen=True)
class CreateIndexRequest:
    name: str
    config: IndexConfig
    description: str | None = None

    def to_payload(self) -> JsonBody:
        payload: JsonBody = {"name": self.name, "config": self.config.to_payload()}
        if self.description:
            payload["description"] = self.description
        return payload


@dataclass(frozen=True)
class QueryRequest:
    """Similarity query against a literal vector or a stored vector id."""

    vector: tuple[float, ...] | None = None
    vector_id: str | None = None
    top_k: int = DEFAULT_TOP_K
    return_values: bool = False
    return_metadata: ReturnMetadata = ReturnMetadata.NONE
    filter: Mapping[str, Any] | None = None
    namespace: str | None = None

    def to_payload(self) -> JsonBody:
        payload: JsonBody = {}
        if self.vector_id is not None:
            # The query endpoint takes the stored id in place of the vector.
            payload["id"] = self.vector_id
            payload["vector"] = self.vector_id
        else:
            payload["vector"] = list(self.vector or ())
        payload["topK"] = self.top_k
        payload["returnValues"] = self.return_values
        payload["returnMetadata"] = self.return_metadata.value
        if self.filter:
            payload["filter"] = dict(self.filter)
        if self.namespace:
            payload["namespace"] = self.namespace
        return payload


@dataclass(frozen=True)
class MetadataIndexSpec:
    property_name: str
    type: MetadataType

    def to_payload(self) -> JsonBody:
        return {"propertyName": self.property_name, "type": self.type.value}


@dataclass(frozen=True)
class ListVectorsRequest:
    cursor: str | None = None
    limit: int | None = None

    def to_query_string(self) -> str:
        params: list[tuple[str, str]] = []
        if self.cursor:
            params.append(("cursor", self.cursor))
        if self.limit:
            params.append(("limit", str(self.limit)))
        return urlencode(params)


@dataclass(frozen=True)
class OperationPlan:
    """Validated, ready-to-send description of one operation."""

    operation: Operation
    method: HttpMethod
    endpoint: str
    context: ErrorContext
    body: Optional[JsonBody] = None
    unwrap: Optional[str] = None
    returns_none: bool = False

    def finish(self, result: Any) -> Any:
        """Shape the executor's result into the operation's return value."""

        if self.returns_none:
            return None
        if self.unwrap and isinstance(result, Mapping) and result.get(self.unwrap) is not None:
            return result[self.unwrap]
        return result


@contextmanager
def _attach_context(context: ErrorContext) -> Iterator[None]:
    try:
        yield
    except VectorizeError as exc:
        if exc.context is None:
            exc.context = context
        raise


def _context(
    operation: Operation,
    resource: Resource,
    index_name: Any = None,
    **kwargs: Any,
) -> ErrorContext:
    return ErrorContext(
        operation=operation,
        resource=resource,
        index_name=index_name if isinstance(index_name, str) else None,
        **kwargs,
    )


def _index_path(index_name: str, suffix: str = "") -> str:
    path = f"indexes/{quote(index_name, safe='')}"
    return f"{path}/{suffix}" if suffix else path


def plan_create_index(
    name: str,
    *,
    dimensions: int,
    metric: DistanceMetricInput = DistanceMetric.COSINE,
    description: str | None = None,
) -> OperationPlan:
    context = _context(Operation.CREATE_INDEX, Resource.INDEX, name)
    with _attach_context(context):
        validate_index_name(name)
        validate_dimensions(dimensions)
        if description is not None and not isinstance(description, str):
            raise InvalidArgument("description must be a string")
        request = CreateIndexRequest(
            name=name,
            config=IndexConfig(
                dimensions=dimensions,
                metric=normalize_distance_metric(metric),
            ),
            description=description,
        )
    return OperationPlan(
        operation=Operation.CREATE_INDEX,
        method="POST",
        endpoint="indexes",
        context=context,
        body=request.to_payload(),
    )


def plan_list_indexes() -> OperationPlan:
    return OperationPlan(
        operation=Operation.LIST_INDEXES,
        method="GET",
        endpoint="indexes",
        context=_context(Operation.LIST_INDEXES, Resource.INDEX),
        unwrap="indexes",
    )


def _plan_index_read(
    operation: Operation,
    name: str,
    *,
    method: HttpMethod = "GET",
    suffix: str = "",
    resource: Resource = Resource.INDEX,
    unwrap: str | None = None,
    returns_none: bool = False,
) -> OperationPlan:
    context = _context(operation, resource, name)
    with _attach_context(context):
        validate_index_name(name)
    return OperationPlan(
        operation=operation,
        method=method,
        endpoint=_index_path(name, suffix),
        context=context,
        unwrap=unwrap,
        returns_none=returns_none,
    )


def plan_get_index(name: str) -> OperationPlan:
    return _plan_index_read(Operation.GET_INDEX, name)


def plan_delete_index(name: str) -> OperationPlan:
    return _plan_index_read(Operation.DELETE_INDEX, name, method="DELETE", returns_none=True)


def plan_get_index_info(name: str) -> OperationPlan:
    return _plan_index_read(Operation.GET_INDEX_INFO, name, suffix="info")


def _plan_write_vectors(
    operation: Operation,
    suffix: str,
    name: str,
    vectors: Sequence[Vector | Mapping[str, Any]],
    expected_dimensions: Optional[int],
) -> OperationPlan:
    context = _context(operation, Resource.VECTOR, name)
    with _attach_context(context):
        validate_index_name(name)
        if isinstance(vectors, (str, bytes, Mapping)) or not isinstance(vectors, Sequence):
            raise InvalidArgument("vectors must be a sequence of vectors")
        if not vectors:
            raise InvalidArgument("At least one vector is required")
        formatted = format_vectors(vectors)
        validate_vectors(formatted, expected_dimensions)
    return OperationPlan(
        operation=operation,
        method="POST",
        endpoint=_index_path(name, suffix),
        context=context,
        body={"vectors": [vector.to_payload() for vector in formatted]},
    )


def plan_insert_vectors(
    name: str,
    vectors: Sequence[Vector | Mapping[str, Any]],
    *,
    expected_dimensions: Optional[int] = None,
) -> OperationPlan:
    return _plan_write_vectors(
        Operation.INSERT_VECTORS, "insert", name, vectors, expected_dimensions
    )


def plan_upsert_vectors(
    name: str,
    vectors: Sequence[Vector | Mapping[str, Any]],
    *,
    expected_dimensions: Optional[int] = None,
) -> OperationPlan:
    return _plan_write_vectors(
        Operation.UPSERT_VECTORS, "upsert", name, vectors, expected_dimensions
    )


def _build_query(
    *,
    vector: tuple[float, ...] | None = None,
    vector_id: str | None = None,
    top_k: int,
    return_values: bool,
    return_metadata: str | ReturnMetadata,
    filter: Mapping[str, Any] | None,
    namespace: str | None,
) -> QueryRequest:
    if not isinstance(return_values, bool):
        raise InvalidArgument(f"returnValues must be a boolean, got {return_values!r}")
    return QueryRequest(
        vector=vector,
        vector_id=vector_id,
        top_k=validate_top_k(top_k),
        return_values=return_values,
        return_metadata=normalize_return_metadata(return_metadata),
        filter=validate_filter(filter),
        namespace=validate_namespace(namespace),
    )


def plan_query_vectors(
    name: str,
    vector: Sequence[float],
    *,
    top_k: int = DEFAULT_TOP_K,
    return_values: bool = False,
    return_metadata: str | ReturnMetadata = ReturnMetadata.NONE,
    filter: Mapping[str, Any] | None = None,
    namespace: str | None = None,
    expected_dimensions: Optional[int] = None,
) -> OperationPlan:
    context = _context(Operation.QUERY_VECTORS, Resource.VECTOR, name)
    with _attach_context(context):
        validate_index_name(name)
        request = _build_query(
            vector=validate_query_vector(vector, expected_dimensions),
            top_k=top_k,
            return_values=return_values,
            return_metadata=return_metadata,
            filter=filter,
            namespace=namespace,
        )
    return OperationPlan(
        operation=Operation.QUERY_VECTORS,
        method="POST",
        endpoint=_index_path(name, "query"),
        context=context,
        body=request.to_payload(),
    )


def plan_query_vector_by_id(
    name: str,
    vector_id: str,
    *,
    top_k: int = DEFAULT_TOP_K,
    return_values: bool = False,
    return_metadata: str | ReturnMetadata = ReturnMetadata.NONE,
    filter: Mapping[str, Any] | None = None,
    namespace: str | None = None,
) -> OperationPlan:
    context = _context(
        Operation.QUERY_VECTOR_BY_ID,
        Resource.VECTOR,
        name,
        vector_id=vector_id if isinstance(vector_id, str) else None,
    )
    with _attach_context(context):
        validate_index_name(name)
        request = _build_query(
            vector_id=validate_vector_id(vector_id),
            top_k=top_k,
            return_values=return_values,
            return_metadata=return_metadata,
            filter=filter,
            namespace=namespace,
        )
    return OperationPlan(
        operation=Operation.QUERY_VECTOR_BY_ID,
        method="POST",
        endpoint=_index_path(name, "query"),
        context=context,
        body=request.to_payload(),
    )


def _plan_ids(
    operation: Operation,
    suffix: str,
    name: str,
    ids: Sequence[str],
    *,
    unwrap: str | None = None,
) -> OperationPlan:
    context = _context(operation, Resource.VECTOR, name)
    with _attach_context(context):
        validate_index_name(name)
        checked = validate_ids(ids)
    return OperationPlan(
        operation=operation,
        method="POST",
        endpoint=_index_path(name, suffix),
        context=context,
        body={"ids": checked},
        unwrap=unwrap,
    )


def plan_get_vectors_by_ids(name: str, ids: Sequence[str]) -> OperationPlan:
    return _plan_ids(Operation.GET_VECTORS_BY_IDS, "get_by_ids", name, ids, unwrap="vectors")


def plan_delete_vectors_by_ids(name: str, ids: Sequence[str]) -> OperationPlan:
    return _plan_ids(Operation.DELETE_VECTORS_BY_IDS, "delete_by_ids", name, ids)


def plan_create_metadata_index(
    name: str,
    property_name: str,
    index_type: str | MetadataType,
) -> OperationPlan:
    context = _context(
        Operation.CREATE_METADATA_INDEX,
        Resource.METADATA,
        name,
        property_name=property_name if isinstance(property_name, str) else None,
    )
    with _attach_context(context):
        validate_index_name(name)
        validate_property_name(property_name)
        index_spec = MetadataIndexSpec(
            property_name=property_name,
            type=normalize_metadata_type(index_type, property_name=property_name),
        )
    return OperationPlan(
        operation=Operation.CREATE_METADATA_INDEX,
        method="POST",
        endpoint=_index_path(name, "metadata_index/create"),
        context=context,
        body=index_spec.to_payload(),
    )


def plan_delete_metadata_index(name: str, property_name: str) -> OperationPlan:
    context = _context(
        Operation.DELETE_METADATA_INDEX,
        Resource.METADATA,
        name,
        property_name=property_name if isinstance(property_name, str) else None,
    )
    with _attach_context(context):
        validate_index_name(name)
        validate_property_name(property_name)
    return OperationPlan(
        operation=Operation.DELETE_METADATA_INDEX,
        method="POST",
        endpoint=_index_path(name, "metadata_index/delete"),
        context=context,
        body={"propertyName": property_name},
    )


def plan_list_metadata_indexes(name: str) -> OperationPlan:
    return _plan_index_read(
        Operation.LIST_METADATA_INDEXES,
        name,
        suffix="metadata_index/list",
        resource=Resource.METADATA,
        unwrap="metadataIndexes",
    )


def plan_list_vectors(
    name: str,
    *,
    cursor: str | None = None,
    limit: int | None = None,
) -> OperationPlan:
    context = _context(Operation.LIST_VECTORS, Resource.UTILITY, name)
    with _attach_context(context):
        validate_index_name(name)
        if cursor is not None and not isinstance(cursor, str):
            raise InvalidArgument(f"cursor must be a string, got {type(cursor).__name__}")
        if limit is not None:
            validate_list_limit(limit)
        query = ListVectorsRequest(cursor=cursor, limit=limit).to_query_string()
    endpoint = _index_path(name, "list")
    return OperationPlan(
        operation=Operation.LIST_VECTORS,
        method="GET",
        endpoint=f"{endpoint}?{query}" if query else endpoint,
        context=context,
    )
