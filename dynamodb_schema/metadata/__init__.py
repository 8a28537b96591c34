from .attribute_metadata import (
    AttributeMetadata,
    AttributeOptions,
    resolve_default,
)
from .entity_metadata import (
    EntityMetadata,
    EntityOptions,
    EntityRegistry,
    build_entity_metadata,
)
from .unique import (
    auto_generated_unique_pattern,
    build_unique_key_schema,
)

__all__ = [
    # Attribute metadata
    "AttributeMetadata",
    "AttributeOptions",
    "resolve_default",

    # Entity metadata and registration
    "EntityMetadata",
    "EntityOptions",
    "EntityRegistry",
    "build_entity_metadata",

    # Unique attribute shadow keys
    "auto_generated_unique_pattern",
    "build_unique_key_schema",
]
