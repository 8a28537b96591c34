"""
Unique Record Writer

Claims and releases shadow records for unique attributes. A claim is a single
conditional put that only succeeds if no item with the shadow key exists yet,
so it has the same atomicity as any DynamoDB single-item conditional write.
A failed condition means the value is taken: it surfaces as
UniqueConstraintViolationError and is never retried.
"""

import logging
from typing import Any, Dict, Mapping

from boto3.dynamodb.conditions import Attr

from ..exceptions import ConflictError, UniqueConstraintViolationError, ValidationError
from ..metadata import AttributeMetadata, EntityMetadata
from .table_gateway import TableGateway

logger = logging.getLogger(__name__)


class UniqueRecordWriter:
    """Writes shadow records for an entity's unique attributes through a gateway."""

    def __init__(self, gateway: TableGateway):
        self.gateway = gateway

    def _unique_attribute(self, entity: EntityMetadata, attribute_name: str) -> AttributeMetadata:
        attr = entity.get_attribute(attribute_name)
        if attr is None or not attr.is_unique:
            raise ValidationError(
                f"Attribute '{attribute_name}' of entity '{entity.name}' is not declared unique"
            )
        return attr

    def build_key(self, entity: EntityMetadata, attribute_name: str, values: Mapping[str, Any]) -> Dict[str, str]:
        """Resolve the shadow-record key for one unique attribute."""
        attr = self._unique_attribute(entity, attribute_name)
        return attr.unique_key_schema.resolve(entity.apply_defaults(values))

    def claim(self, entity: EntityMetadata, attribute_name: str, values: Mapping[str, Any]) -> Dict[str, str]:
        """Create the shadow record for a unique attribute value.

        Args:
            entity: Registered entity metadata
            attribute_name: Name of the unique attribute
            values: Attribute values of the entity being written

        Returns:
            The claimed shadow-record key

        Raises:
            UniqueConstraintViolationError: If the value is already claimed
        """
        key = self.build_key(entity, attribute_name, values)
        condition = Attr(entity.table.partition_key).not_exists()
        try:
            self.gateway.put_item(
                item=dict(key),
                condition_expression=condition,
                resource_id=f"{entity.name}.{attribute_name}",
            )
        except ConflictError as e:
            value = entity.apply_defaults(values).get(attribute_name)
            logger.info(f"Unique value for {entity.name}.{attribute_name} already claimed: {key}")
            raise UniqueConstraintViolationError(entity.name, attribute_name, value, e) from e
        return key

    def release(self, entity: EntityMetadata, attribute_name: str, values: Mapping[str, Any]) -> None:
        """Delete the shadow record so the value can be claimed again."""
        key = self.build_key(entity, attribute_name, values)
        self.gateway.delete_item(key)

    def exists(self, entity: EntityMetadata, attribute_name: str, values: Mapping[str, Any]) -> bool:
        """Return True if the value is currently claimed."""
        key = self.build_key(entity, attribute_name, values)
        return self.gateway.get_item(key) is not None
