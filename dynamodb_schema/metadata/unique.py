"""
Unique Attribute Key Derivation

DynamoDB can only enforce uniqueness of an item's own primary key. A unique
attribute is therefore backed by a shadow record whose primary key is derived
from the attribute's value; a conditional "create if absent" put of that
record fails when another entity already claimed the value.

The shadow key is either given explicitly or generated as

    <prefix>_<ENTITY>.<ATTRIBUTE>#{{attribute}}

On composite-key tables the same pattern is used for the sort key. Shadow
records are only ever read by their exact key, never range-queried.
"""

import logging
from typing import Union

from ..config import DEFAULT_ATTRIBUTE_PREFIX, validate_attribute_prefix
from ..exceptions import InvalidKeySpecificationError
from ..models import (
    AttributeType,
    AutoGenerateKeySpec,
    ExplicitKeySpec,
    KeySchema,
    Table,
    build_primary_key_schema,
)
from ..templating import get_placeholders

logger = logging.getLogger(__name__)

UniqueSpecification = Union[bool, ExplicitKeySpec, AutoGenerateKeySpec]


def auto_generated_unique_pattern(
    entity_name: str,
    attribute_name: str,
    prefix: str = DEFAULT_ATTRIBUTE_PREFIX,
) -> str:
    """Build the generated shadow key pattern for a unique attribute.

    Raises:
        InvalidKeySpecificationError: If the prefix contains template characters

    Examples:
        >>> auto_generated_unique_pattern("User", "email")
        'DYNAMO_ATTRIBUTE_PREFIX_USER.EMAIL#{{email}}'
    """
    try:
        validate_attribute_prefix(prefix)
    except ValueError as e:
        raise InvalidKeySpecificationError(str(e), kind="auto") from e
    return f"{prefix}_{entity_name.upper()}.{attribute_name.upper()}#{{{{{attribute_name}}}}}"


def normalize_unique_spec(unique: UniqueSpecification) -> Union[ExplicitKeySpec, AutoGenerateKeySpec]:
    """Turn the ``unique=True`` shorthand into an AutoGenerateKeySpec."""
    if unique is True:
        return AutoGenerateKeySpec()
    if isinstance(unique, (ExplicitKeySpec, AutoGenerateKeySpec)):
        return unique
    raise InvalidKeySpecificationError(f"Unsupported unique specification: {unique!r}")


def build_unique_key_schema(
    table: Table,
    entity_name: str,
    attribute_name: str,
    attribute_type: AttributeType,
    unique: UniqueSpecification,
    prefix: str = DEFAULT_ATTRIBUTE_PREFIX,
) -> KeySchema:
    """Build the shadow-record key schema for a unique attribute.

    Args:
        table: Table the shadow record is written to
        entity_name: Name of the entity declaring the attribute
        attribute_name: Name of the unique attribute
        attribute_type: Declared type of the unique attribute
        unique: True, an AutoGenerateKeySpec or an ExplicitKeySpec
        prefix: Namespace prefix of generated keys

    Returns:
        KeySchema resolvable from ``{attribute_name: value}``

    Raises:
        InvalidKeySpecificationError: If unique is not a supported specification,
            or a key cannot be generated for the attribute name or prefix
        KeyTopologyMismatchError: If an explicit spec disagrees with the table
        MissingAttributeValueError: If an explicit pattern references another attribute
    """
    spec = normalize_unique_spec(unique)
    attributes = {attribute_name: attribute_type}

    if spec.kind == "explicit":
        key_spec = spec
    else:
        pattern = auto_generated_unique_pattern(entity_name, attribute_name, prefix)
        if get_placeholders(pattern) != [attribute_name]:
            raise InvalidKeySpecificationError(
                f"Cannot generate a unique key for {entity_name}.{attribute_name}: '{attribute_name}' "
                f"is not usable as a key placeholder",
                kind="auto",
            )
        if table.uses_composite_key():
            key_spec = ExplicitKeySpec(partition_key=pattern, sort_key=pattern)
        else:
            key_spec = ExplicitKeySpec(partition_key=pattern)

    logger.debug(f"Deriving {spec.kind} unique key for {entity_name}.{attribute_name} on '{table.name}'")
    return build_primary_key_schema(table=table, key_spec=key_spec, attributes=attributes)
