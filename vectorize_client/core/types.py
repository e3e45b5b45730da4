"""Shared type aliases and result shapes returned by the service."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, TypedDict, Union

HttpMethod = Literal["GET", "POST", "DELETE"]

JsonBody = Dict[str, Any]
ResponsePayload = Union[JsonBody, List[Any], str, None]


class IndexConfigPayload(TypedDict):
    dimensions: int
    metric: str


class _IndexDescriptionBase(TypedDict):
    name: str
    config: IndexConfigPayload
    created_on: str
    modified_on: str


class IndexDescription(_IndexDescriptionBase, total=False):
    """Index record as returned by create/get/list index calls."""

    description: str


class IndexInfo(TypedDict, total=False):
    dimensions: int
    vectorCount: int
    processedUpToMutation: str
    processedUpToDatetime: str


class MutationResult(TypedDict):
    """Handle for an asynchronous service-side mutation."""

    mutationId: str


class QueryMatch(TypedDict, total=False):
    id: str
    score: float
    values: List[float]
    metadata: Dict[str, Any]
    namespace: str


class QueryResult(TypedDict):
    count: int
    matches: List[QueryMatch]


class ListVectorsResult(TypedDict, total=False):
    count: int
    vectors: List[Any]
    cursor: Optional[str]
    isTruncated: bool
    totalCount: int
    cursorExpirationTimestamp: str


class MetadataIndexDescription(TypedDict):
    propertyName: str
    indexType: str
