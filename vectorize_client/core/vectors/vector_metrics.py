"""Distance metric definitions and normalization helpers."""

from __future__ import annotations

from enum import Enum
from typing import Mapping

from ..errors import InvalidArgument


class DistanceMetric(str, Enum):
    """Distance metrics accepted by the service when creating an index."""

    COSINE = "cosine"
    EUCLIDEAN = "euclidean"
    DOT_PRODUCT = "dot-product"


DistanceMetricInput = str | DistanceMetric

DEFAULT_METRIC_ALIASES: Mapping[str, DistanceMetric] = {
    "dot": DistanceMetric.DOT_PRODUCT,
    "dotproduct": DistanceMetric.DOT_PRODUCT,
    "dot_product": DistanceMetric.DOT_PRODUCT,
    "l2": DistanceMetric.EUCLIDEAN,
    "euclid": DistanceMetric.EUCLIDEAN,
}


def normalize_distance_metric(metric: DistanceMetricInput) -> DistanceMetric:
    """Normalize user metric input into a `DistanceMetric` value."""

    if isinstance(metric, DistanceMetric):
        return metric
    if not isinstance(metric, str):
        raise InvalidArgument(f"Unsupported metric type: {type(metric).__name__}")

    key = metric.strip().lower()
    if key in DistanceMetric._value2member_map_:
        return DistanceMetric(key)
    if key in DEFAULT_METRIC_ALIASES:
        return DEFAULT_METRIC_ALIASES[key]
    allowed = sorted(DistanceMetric._value2member_map_.keys())
    raise InvalidArgument(f"Unsupported metric: {metric!r}. Supported: {allowed}")
