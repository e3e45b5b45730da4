"""Query return policies and metadata index types."""

from __future__ import annotations

from enum import Enum

from ..errors import InvalidArgument


class ReturnMetadata(str, Enum):
    """How much metadata the service attaches to query matches."""

    NONE = "none"
    INDEXED = "indexed"
    ALL = "all"


class MetadataType(str, Enum):
    """Value type of a metadata property index."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


def normalize_return_metadata(value: str | ReturnMetadata) -> ReturnMetadata:
    if isinstance(value, ReturnMetadata):
        return value
    if isinstance(value, str) and value.strip().lower() in ReturnMetadata._value2member_map_:
        return ReturnMetadata(value.strip().lower())
    allowed = [item.value for item in ReturnMetadata]
    raise InvalidArgument(f"returnMetadata must be one of {allowed}, got {value!r}")


def normalize_metadata_type(value: str | MetadataType, *, property_name: str) -> MetadataType:
    if isinstance(value, MetadataType):
        return value
    if isinstance(value, str) and value.strip().lower() in MetadataType._value2member_map_:
        return MetadataType(value.strip().lower())
    allowed = [item.value for item in MetadataType]
    raise InvalidArgument(
        f"Metadata index type for property {property_name!r} must be one of "
        f"{allowed}, got {value!r}"
    )
