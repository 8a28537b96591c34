"""
Entity Metadata and Registration

Entities are declared with an explicit configuration object instead of class
decorators:

    registry = EntityRegistry(DynamoDBConfig())
    user = registry.register(EntityOptions(
        name="User",
        table=Table(name="app", partition_key="PK", sort_key="SK"),
        primary_key=ExplicitKeySpec(partition_key="USER#{{id}}", sort_key="USER#{{id}}"),
        attributes=[
            AttributeOptions(name="id", type=AttributeType.STRING),
            AttributeOptions(name="email", type=AttributeType.STRING, unique=True),
            AttributeOptions(name="active", type=AttributeType.BOOLEAN, default=True),
        ],
    ))

    user.build_primary_key({"id": "42"})
    user.build_unique_keys({"id": "42", "email": "a@b.com"})

Registration builds every AttributeMetadata, so an invalid declaration fails
here, before anything is persisted.
"""

import logging
import threading
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import DynamoDBConfig
from ..exceptions import EntityNotRegisteredError, ValidationError
from ..models import ExplicitKeySpec, KeySchema, Table, build_primary_key_schema
from .attribute_metadata import AttributeMetadata, AttributeOptions

logger = logging.getLogger(__name__)


class EntityOptions(BaseModel):
    """Declaration of an entity: its table, primary key and attributes."""

    name: str = Field(..., min_length=1, description="Entity name")
    table: Table = Field(..., description="Table the entity is stored in")
    primary_key: ExplicitKeySpec = Field(..., description="Primary key patterns")
    attributes: List[AttributeOptions] = Field(default_factory=list, description="Declared attributes")

    model_config = ConfigDict(frozen=True)


class EntityMetadata:
    """Resolved metadata for a registered entity."""

    def __init__(self, name: str, table: Table, primary_key: KeySchema, attributes: List[AttributeMetadata]):
        self.name = name
        self.table = table
        self.primary_key = primary_key
        self._attributes: Dict[str, AttributeMetadata] = {attr.name: attr for attr in attributes}

    @property
    def attributes(self) -> List[AttributeMetadata]:
        return list(self._attributes.values())

    @property
    def unique_attributes(self) -> List[AttributeMetadata]:
        return [attr for attr in self._attributes.values() if attr.is_unique]

    def get_attribute(self, name: str) -> Optional[AttributeMetadata]:
        return self._attributes.get(name)

    def apply_defaults(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Return a copy of values with defaults filled in for missing attributes."""
        result = dict(values)
        for attr in self._attributes.values():
            if result.get(attr.name) is None and attr.default is not None:
                result[attr.name] = attr.default
        return result

    def build_primary_key(self, values: Mapping[str, Any]) -> Dict[str, str]:
        """Resolve the entity's primary key from attribute values."""
        return self.primary_key.resolve(self.apply_defaults(values))

    def build_unique_keys(self, values: Mapping[str, Any]) -> Dict[str, Dict[str, str]]:
        """Resolve shadow-record keys for every unique attribute that has a value.

        Returns:
            Mapping of attribute name to the shadow record's DynamoDB key
        """
        values = self.apply_defaults(values)
        keys = {}
        for attr in self.unique_attributes:
            if not attr.unique_key_schema.can_resolve(values):
                continue
            keys[attr.name] = attr.unique_key_schema.resolve(values)
        return keys

    def __repr__(self) -> str:
        return f"EntityMetadata(name={self.name!r}, table={self.table.name!r}, attributes={list(self._attributes)})"


def build_entity_metadata(options: EntityOptions, config: Optional[DynamoDBConfig] = None) -> EntityMetadata:
    """Build metadata for an entity declaration.

    Args:
        options: Entity declaration
        config: Configuration supplying the shadow key prefix (defaults to env)

    Returns:
        EntityMetadata with every attribute resolved

    Raises:
        ValidationError: If an attribute is declared twice
        KeyTopologyMismatchError: If a key spec disagrees with the table
        MissingAttributeValueError: If a key pattern references an undeclared attribute
        UnsupportedDefaultValueError: If a default is not a scalar of its type
    """
    config = config or DynamoDBConfig()

    seen = set()
    duplicates = []
    for attr in options.attributes:
        if attr.name in seen:
            duplicates.append(attr.name)
        seen.add(attr.name)
    if duplicates:
        raise ValidationError(
            f"Entity '{options.name}' declares duplicate attributes",
            {'duplicates': duplicates},
        )

    attributes = [
        AttributeMetadata(attr, options.table, options.name, config.attribute_prefix)
        for attr in options.attributes
    ]
    primary_key = build_primary_key_schema(
        table=options.table,
        key_spec=options.primary_key,
        attributes={attr.name: attr.type for attr in attributes},
    )

    logger.debug(
        f"Built metadata for entity '{options.name}' with {len(attributes)} attributes "
        f"({sum(1 for attr in attributes if attr.is_unique)} unique)"
    )
    return EntityMetadata(options.name, options.table, primary_key, attributes)


class EntityRegistry:
    """Thread-safe registry of entity metadata keyed by entity name."""

    def __init__(self, config: Optional[DynamoDBConfig] = None):
        self.config = config or DynamoDBConfig()
        self._entities: Dict[str, EntityMetadata] = {}
        self._lock = threading.Lock()

    def register(self, options: EntityOptions) -> EntityMetadata:
        """Build and store metadata for an entity.

        Raises:
            ValidationError: If an entity with the same name is already registered
        """
        metadata = build_entity_metadata(options, self.config)
        with self._lock:
            if options.name in self._entities:
                raise ValidationError(f"Entity '{options.name}' is already registered")
            self._entities[options.name] = metadata
        logger.info(f"Registered entity '{options.name}' on table '{options.table.name}'")
        return metadata

    def get(self, name: str) -> EntityMetadata:
        with self._lock:
            metadata = self._entities.get(name)
        if metadata is None:
            raise EntityNotRegisteredError(name)
        return metadata

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._entities

    def names(self) -> List[str]:
        with self._lock:
            return list(self._entities)
