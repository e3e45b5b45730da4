"""Async client exposing one coroutine per Vectorize operation."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, cast

from . import operations as ops
from .config import ConnectionConfig
from .contracts import AsyncHttpTransportPort, HttpTransportPort
from .executor_async import AsyncRequestExecutor
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


class AsyncVectorizeClient:
    """Async counterpart of `VectorizeClient` with the same method names."""

    def __init__(self, transport: AsyncHttpTransportPort | HttpTransportPort | None = None) -> None:
        """Create an async client.

        Args:
            transport: Async or sync transport port. Defaults to an
                `AsyncHttpxTransport`, which needs the ``httpx`` package.
        """

        if transport is None:
            from ..ports.http.httpx_transport import AsyncHttpxTransport

            transport = AsyncHttpxTransport()
        self.executor = AsyncRequestExecutor(transport)

    async def _run(self, config: ConnectionConfig, plan: OperationPlan) -> Any:
        result = await self.executor.execute(
            config,
            plan.endpoint,
            plan.method,
            plan.body,
            context=plan.context,
        )
        return plan.finish(result)

    async def create_index(
        self,
        config: ConnectionConfig,
        name: str,
        *,
        dimensions: int,
        metric: DistanceMetricInput = DistanceMetric.COSINE,
        description: str | None = None,
    ) -> IndexDescription:
        plan = ops.plan_create_index(
            name, dimensions=dimensions, metric=metric, description=description
        )
        return cast(IndexDescription, await self._run(config, plan))

    async def list_indexes(self, config: ConnectionConfig) -> List[IndexDescription]:
        return cast(List[IndexDescription], await self._run(config, ops.plan_list_indexes()))

    async def get_index(self, config: ConnectionConfig, name: str) -> IndexDescription:
        return cast(IndexDescription, await self._run(config, ops.plan_get_index(name)))

    describe_index = get_index

    async def delete_index(self, config: ConnectionConfig, name: str) -> None:
        await self._run(config, ops.plan_delete_index(name))

    async def get_index_info(self, config: ConnectionConfig, name: str) -> IndexInfo:
        return cast(IndexInfo, await self._run(config, ops.plan_get_index_info(name)))

    async def insert_vectors(
        self,
        config: ConnectionConfig,
        name: str,
        vectors: Sequence[Vector | Mapping[str, Any]],
        *,
        expected_dimensions: Optional[int] = None,
    ) -> MutationResult:
        plan = ops.plan_insert_vectors(name, vectors, expected_dimensions=expected_dimensions)
        return cast(MutationResult, await self._run(config, plan))

    async def upsert_vectors(
        self,
        config: ConnectionConfig,
        name: str,
        vectors: Sequence[Vector | Mapping[str, Any]],
        *,
        expected_dimensions: Optional[int] = None,
    ) -> MutationResult:
        plan = ops.plan_upsert_vectors(name, vectors, expected_dimensions=expected_dimensions)
        return cast(MutationResult, await self._run(config, plan))

    async def query_vectors(
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
        return cast(QueryResult, await self._run(config, plan))

    async def query_vector_by_id(
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
        plan = ops.plan_query_vector_by_id(
            name,
            vector_id,
            top_k=top_k,
            return_values=return_values,
            return_metadata=return_metadata,
            filter=filter,
            namespace=namespace,
        )
        return cast(QueryResult, await self._run(config, plan))

    async def get_vectors_by_ids(
        self,
        config: ConnectionConfig,
        name: str,
        ids: Sequence[str],
    ) -> List[Mapping[str, Any]]:
        return cast(
            List[Mapping[str, Any]],
            await self._run(config, ops.plan_get_vectors_by_ids(name, ids)),
        )

    async def delete_vectors_by_ids(
        self,
        config: ConnectionConfig,
        name: str,
        ids: Sequence[str],
    ) -> MutationResult:
        plan = ops.plan_delete_vectors_by_ids(name, ids)
        return cast(MutationResult, await self._run(config, plan))

    async def create_metadata_index(
        self,
        config: ConnectionConfig,
        name: str,
        property_name: str,
        index_type: str | MetadataType,
    ) -> MutationResult:
        plan = ops.plan_create_metadata_index(name, property_name, index_type)
        return cast(MutationResult, await self._run(config, plan))

    async def delete_metadata_index(
        self,
        config: ConnectionConfig,
        name: str,
        property_name: str,
    ) -> MutationResult:
        plan = ops.plan_delete_metadata_index(name, property_name)
        return cast(MutationResult, await self._run(config, plan))

    async def list_metadata_indexes(
        self,
        config: ConnectionConfig,
        name: str,
    ) -> List[MetadataIndexDescription]:
        return cast(
            List[MetadataIndexDescription],
            await self._run(config, ops.plan_list_metadata_indexes(name)),
        )

    async def list_vectors(
        self,
        config: ConnectionConfig,
        name: str,
        *,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> ListVectorsResult:
        plan = ops.plan_list_vectors(name, cursor=cursor, limit=limit)
        return cast(ListVectorsResult, await self._run(config, plan))
