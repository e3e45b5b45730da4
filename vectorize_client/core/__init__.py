"""Public core API for validation, request shaping, and execution."""

from .errors import (
    DimensionMismatch,
    ErrorContext,
    InvalidArgument,
    Operation,
    RemoteApiError,
    Resource,
    TransportError,
    VectorizeError,
)
from .config import DEFAULT_API_ENDPOINT, ConnectionConfig
from .contracts import AsyncHttpTransportPort, HttpTransportPort, TransportResponse
from .envelope import ApiEnvelope, ApiError, RawBody, decode_body, decode_payload
from .vectors import (
    DistanceMetric,
    DistanceMetricInput,
    MetadataType,
    ReturnMetadata,
    Vector,
    normalize_distance_metric,
)
from .validation import (
    validate_ids,
    validate_index_name,
    validate_vectors,
)
from .formatting import DEFAULT_BATCH_SIZE, VectorBatches, batch_vectors, format_vectors
from .operations import (
    CreateIndexRequest,
    IndexConfig,
    ListVectorsRequest,
    MetadataIndexSpec,
    OperationPlan,
    QueryRequest,
)
from .executor import RequestExecutor
from .executor_async import AsyncRequestExecutor
from .client import VectorizeClient
from .client_async import AsyncVectorizeClient
from .types import (
    IndexDescription,
    IndexInfo,
    ListVectorsResult,
    MetadataIndexDescription,
    MutationResult,
    QueryMatch,
    QueryResult,
)

__all__ = [
    "VectorizeError",
    "InvalidArgument",
    "DimensionMismatch",
    "RemoteApiError",
    "TransportError",
    "ErrorContext",
    "Operation",
    "Resource",
    "ConnectionConfig",
    "DEFAULT_API_ENDPOINT",
    "HttpTransportPort",
    "AsyncHttpTransportPort",
    "TransportResponse",
    "ApiEnvelope",
    "ApiError",
    "RawBody",
    "decode_body",
    "decode_payload",
    "DistanceMetric",
    "DistanceMetricInput",
    "MetadataType",
    "ReturnMetadata",
    "Vector",
    "normalize_distance_metric",
    "validate_ids",
    "validate_index_name",
    "validate_vectors",
    "DEFAULT_BATCH_SIZE",
    "VectorBatches",
    "batch_vectors",
    "format_vectors",
    "CreateIndexRequest",
    "IndexConfig",
    "ListVectorsRequest",
    "MetadataIndexSpec",
    "OperationPlan",
    "QueryRequest",
    "RequestExecutor",
    "AsyncRequestExecutor",
    "VectorizeClient",
    "AsyncVectorizeClient",
    "IndexDescription",
    "IndexInfo",
    "ListVectorsResult",
    "MetadataIndexDescription",
    "MutationResult",
    "QueryMatch",
    "QueryResult",
]
