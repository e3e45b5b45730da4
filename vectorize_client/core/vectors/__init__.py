"""Vector value objects, metrics, and query policies."""

from .vector_metrics import (
    DistanceMetric,
    DistanceMetricInput,
    normalize_distance_metric,
)
from .vector_policies import (
    MetadataType,
    ReturnMetadata,
    normalize_metadata_type,
    normalize_return_metadata,
)
from .vector_types import Vector

__all__ = [
    "DistanceMetric",
    "DistanceMetricInput",
    "MetadataType",
    "ReturnMetadata",
    "Vector",
    "normalize_distance_metric",
    "normalize_metadata_type",
    "normalize_return_metadata",
]
