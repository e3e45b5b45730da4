"""Synchronous client exposing one method per Vectorize operation."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, cast

from . import operations as ops
from .config import ConnectionConfig
from .contracts import HttpTransportPort
from .executor import RequestExecutor
from .operations import DEFAULT_TOP_K, OperationPlan
from .types import (
    IndexDescription,
    IndexInfo,
    ListVectorsResult,
    MetadataIndexDescription,
    MutationResult,
    QueryResult,
)
from .vectors.vector_metrics import DistanceMetric, DistanceMetricInput
from .vectors.vector_policies import MetadataType, ReturnMetadata
from .vectors.vector_types import Vector


class VectorizeClient:
    """Index, vector, and metadata-index operations over HTTP.

    The client holds only a transport. Credentials travel with each call as a
    `ConnectionConfig`, so one client can serve several accounts and be used
    from several threads if its transport allows it.
    """

    def __init__(self, transport: HttpTransportPort | None = None) -> None:
        """Create a client.

        Args:
            transport: HTTP transport port. Defaults to a `RequestsTransport`.
        """

        if transport is None:
            from ..ports.http.requests_transport import RequestsTransport

            transport = RequestsTransport()
        self.executor = RequestExecutor(transport)

    def _run(self, config: ConnectionConfig, plan: OperationPlan) -> Any:
        result = self.executor.execute(
            config,
            plan.endpoint,
            plan.method,
            plan.body,
            context=plan.context,
        )
        return plan.finish(result)

    # Index operations

    def create_index(
        self,
        config: ConnectionConfig,
        name: str,
        *,
        dimensions: int,
        metric: DistanceMetricInput = DistanceMetric.COSINE,
        description: str | None = None,
    ) -> IndexDescription:
        """Create an index and return the service's index record."""

        plan = ops.plan_create_index(
            name, dimensions=dimensions, metric=metric, description=description
        )
        return cast(IndexDescription, self._run(config, plan))

    def list_indexes(self, config: ConnectionConfig) -> List[IndexDescription]:
        return cast(List[IndexDescription], self._run(config, ops.plan_list_indexes()))

    def get_index(self, config: ConnectionConfig, name: str) -> IndexDescription:
        return cast(IndexDescription, self._run(config, ops.plan_get_index(name)))

    # The service has no separate describe capability.
    describe_index = get_index

    def delete_index(self, config: ConnectionConfig, name: str) -> None:
        self._run(config, ops.plan_delete_index(name))

    def get_index_info(self, config: ConnectionConfig, name: str) -> IndexInfo:
        return cast(IndexInfo, self._run(config, ops.plan_get_index_info(name)))

    # Vector operations

    def insert_vectors(
        self,
        config: ConnectionConfig,
        name: str,
        vectors: Sequence[Vector | Mapping[str, Any]],
        *,
        expected_dimensions: Optional[int] = None,
    ) -> MutationResult:
        """Insert vectors; existing ids are left untouched by the service.

        `vectors` may mix `Vector` objects and raw mappings. All of them are
        sent in one request; use `batch_vectors()` to split large sets.
        """

        plan = ops.plan_insert_vectors(name, vectors, expected_dimensions=expected_dimensions)
        return cast(MutationResult, self._run(config, plan))

    def upsert_vectors(
        self,
        config: ConnectionConfig,
        name: str,
        vectors: Sequence[Vector | Mapping[str, Any]],
        *,
        expected_dimensions: Optional[int] = None,
    ) -> MutationResult:
        """Insert vectors, overwriting existing ids."""

        plan = ops.plan_upsert_vectors(name, vectors, expected_dimensions=expected_dimensions)
        return cast(MutationResult, self._run(config, plan))

    def query_vectors(
        self,
        config: ConnectionConfig,
        name: str,
        vector: Sequence[float],
        *,
        top_k: int = DEFAULT_TOP_K,
        return_values: bool = False,
        return_metadata: str | ReturnMetadata = ReturnMetadata.NONE,
        filter: Mapping[str, Any] | None = None,
        namespace: str | None = None,
        expected_dimensions: Optional[int] = None,
    ) -> QueryResult:
        """Find the `top_k` nearest neighbours of a literal vector."""

        plan = ops.plan_query_vectors(
            name,
            vector,
            top_k=top_k,
            return_values=return_values,
            return_metadata=return_metadata,
            filter=filter,
            namespace=namespace,
            expected_dimensions=expected_dimensions,
        )
        return cast(QueryResult, self._run(config, plan))

    def query_vector_by_id(
        self,
        config: ConnectionConfig,
        name: str,
        vector_id: str,
        *,
        top_k: int = DEFAULT_TOP_K,
        return_values: bool = False,
        return_metadata: str | ReturnMetadata = ReturnMetadata.NONE,
        filter: Mapping[str, Any] | None = None,
        namespace: str | None = None,
    ) -> QueryResult:
        """Find the nearest neighbours of a vector already stored in the index."""

        plan = ops.plan_query_vector_by_id(
            name,
            vector_id,
            top_k=top_k,
            return_values=return_values,
            return_metadata=return_metadata,
            filter=filter,
            namespace=namespace,
        )
        return cast(QueryResult, self._run(config, plan))

    def get_vectors_by_ids(
        self,
        config: ConnectionConfig,
        name: str,
        ids: Sequence[str],
    ) -> List[Mapping[str, Any]]:
        return cast(
            List[Mapping[str, Any]],
            self._run(config, ops.plan_get_vectors_by_ids(name, ids)),
        )

    def delete_vectors_by_ids(
        self,
        config: ConnectionConfig,
        name: str,
        ids: Sequence[str],
    ) -> MutationResult:
        return cast(MutationResult, self._run(config, ops.plan_delete_vectors_by_ids(name, ids)))

    # Metadata index operations

    def create_metadata_index(
        self,
        config: ConnectionConfig,
        name: str,
        property_name: str,
        index_type: str | MetadataType,
    ) -> MutationResult:
        plan = ops.plan_create_metadata_index(name, property_name, index_type)
        return cast(MutationResult, self._run(config, plan))

    def delete_metadata_index(
        self,
        config: ConnectionConfig,
        name: str,
        property_name: str,
    ) -> MutationResult:
        plan = ops.plan_delete_metadata_index(name, property_name)
        return cast(MutationResult, self._run(config, plan))

    def list_metadata_indexes(
        self,
        config: ConnectionConfig,
        name: str,
    ) -> List[MetadataIndexDescription]:
        return cast(
            List[MetadataIndexDescription],
            self._run(config, ops.plan_list_metadata_indexes(name)),
        )

    # Utility operations

    def list_vectors(
        self,
        config: ConnectionConfig,
        name: str,
        *,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> ListVectorsResult:
        """List vector ids page by page; pass the returned cursor to continue."""

        plan = ops.plan_list_vectors(name, cursor=cursor, limit=limit)
        return cast(ListVectorsResult, self._run(config, plan))
