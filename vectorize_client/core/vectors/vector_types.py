"""Vector value object sent to insert and upsert calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence


@dataclass(frozen=True)
class Vector:
    """One vector document addressed by id inside an index."""

    id: str
    values: Sequence[float]
    metadata: Mapping[str, Any] | None = None
    namespace: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "values": [float(value) for value in self.values],
        }
        if self.metadata is not None:
            payload["metadata"] = dict(self.metadata)
        if self.namespace is not None:
            payload["namespace"] = self.namespace
        return payload
