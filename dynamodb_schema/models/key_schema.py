"""
Primary Key Schema Builder

Turns a declarative key specification into a KeySchema bound to a table's
topology. A KeySchema keeps the patterns and the types of every attribute
they reference; it is built once at registration time and resolved into a
concrete DynamoDB key on every write or read:

    schema = build_primary_key_schema(
        table=Table(name="app", partition_key="PK", sort_key="SK"),
        key_spec=ExplicitKeySpec(partition_key="USER#{{id}}", sort_key="USER#{{id}}"),
        attributes={"id": AttributeType.STRING},
    )
    schema.resolve({"id": "42"})  # {'PK': 'USER#42', 'SK': 'USER#42'}
"""

import logging
from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import (
    InvalidKeySpecificationError,
    KeyTopologyMismatchError,
    KeyValueTypeError,
    MissingAttributeValueError,
)
from ..templating import get_placeholders, interpolate
from .attribute_types import AttributeType
from .table import Table

logger = logging.getLogger(__name__)


# =============================================================================
# Key Specifications
# =============================================================================

class ExplicitKeySpec(BaseModel):
    """Key given as explicit partition/sort key patterns."""
    kind: Literal["explicit"] = "explicit"
    partition_key: str = Field(..., min_length=1, description="Partition key pattern")
    sort_key: Optional[str] = Field(None, min_length=1, description="Sort key pattern")

    model_config = ConfigDict(frozen=True)


class AutoGenerateKeySpec(BaseModel):
    """Request for a key generated from the entity and attribute names."""
    kind: Literal["auto"] = "auto"

    model_config = ConfigDict(frozen=True)


KeySpecification = Annotated[
    Union[ExplicitKeySpec, AutoGenerateKeySpec],
    Field(discriminator="kind"),
]


# =============================================================================
# Key Schema
# =============================================================================

class KeyPart(BaseModel):
    """One half of a primary key: the key attribute name and its pattern."""
    name: str
    pattern: str
    placeholders: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)


class KeySchema(BaseModel):
    """Resolvable primary key bound to a table's topology."""

    table: Table
    partition_key: KeyPart
    sort_key: Optional[KeyPart] = None
    attributes: Dict[str, AttributeType] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def key_parts(self) -> List[KeyPart]:
        parts = [self.partition_key]
        if self.sort_key is not None:
            parts.append(self.sort_key)
        return parts

    @property
    def placeholders(self) -> List[str]:
        """Attribute names referenced by any key part, in first-use order."""
        names: List[str] = []
        for part in self.key_parts():
            for name in part.placeholders:
                if name not in names:
                    names.append(name)
        return names

    def can_resolve(self, values: Mapping[str, Any]) -> bool:
        """Return True if values cover every referenced attribute."""
        return all(values.get(name) is not None for name in self.placeholders)

    def resolve(self, values: Mapping[str, Any]) -> Dict[str, str]:
        """Build the concrete DynamoDB key for the given attribute values.

        Args:
            values: Attribute values keyed by attribute name

        Returns:
            Key dictionary, e.g. {'PK': 'USER#42'} or {'PK': ..., 'SK': ...}

        Raises:
            MissingAttributeValueError: If a referenced attribute has no value
            KeyValueTypeError: If a value does not match the attribute type
        """
        for name in self.placeholders:
            value = values.get(name)
            if value is None:
                raise MissingAttributeValueError(name)
            attr_type = self.attributes[name]
            if not attr_type.matches(value):
                raise KeyValueTypeError(name, attr_type.name, value)

        return {part.name: interpolate(part.pattern, values) for part in self.key_parts()}


# =============================================================================
# Builder
# =============================================================================

def _build_key_part(name: str, pattern: str, attributes: Mapping[str, AttributeType]) -> KeyPart:
    placeholders = get_placeholders(pattern)
    for placeholder in placeholders:
        if placeholder not in attributes:
            raise MissingAttributeValueError(placeholder, pattern)
    return KeyPart(name=name, pattern=pattern, placeholders=tuple(placeholders))


def build_primary_key_schema(
    table: Table,
    key_spec: ExplicitKeySpec,
    attributes: Mapping[str, AttributeType],
) -> KeySchema:
    """Build a key schema for a table from explicit key patterns.

    Args:
        table: Target table; its topology decides whether a sort key is required
        key_spec: Explicit partition/sort key patterns
        attributes: Types of the attributes patterns may reference

    Returns:
        KeySchema with a sort key iff the table uses a composite key

    Raises:
        InvalidKeySpecificationError: If key_spec is not an explicit specification
        KeyTopologyMismatchError: If the sort key pattern disagrees with the table
        MissingAttributeValueError: If a pattern references an undeclared attribute
    """
    if getattr(key_spec, "kind", None) != "explicit":
        raise InvalidKeySpecificationError(
            "Primary key schema requires explicit key patterns",
            getattr(key_spec, "kind", None),
        )

    if table.uses_composite_key():
        if key_spec.sort_key is None:
            raise KeyTopologyMismatchError(
                table.name,
                f"Table '{table.name}' uses a composite key, a sort key pattern is required",
            )
    elif key_spec.sort_key is not None:
        raise KeyTopologyMismatchError(
            table.name,
            f"Table '{table.name}' uses a simple key, a sort key pattern is not allowed",
        )

    partition_key = _build_key_part(table.partition_key, key_spec.partition_key, attributes)
    sort_key = None
    if table.uses_composite_key():
        sort_key = _build_key_part(table.sort_key, key_spec.sort_key, attributes)

    referenced = {}
    for part in (partition_key, sort_key):
        if part is None:
            continue
        for name in part.placeholders:
            referenced[name] = attributes[name]

    logger.debug(
        f"Built key schema for table '{table.name}': "
        f"{partition_key.name}={partition_key.pattern!r}"
        + (f", {sort_key.name}={sort_key.pattern!r}" if sort_key else "")
    )

    return KeySchema(
        table=table,
        partition_key=partition_key,
        sort_key=sort_key,
        attributes=referenced,
    )
