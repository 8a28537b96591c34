"""
DynamoDB Schema

Metadata layer for mapping entities onto DynamoDB tables: key templates,
table topology, primary key schemas and unique attribute shadow records.
"""

from .config import DynamoDBConfig
from .exceptions import (
    ConflictError,
    ConnectionError,
    DynamoDBSchemaError,
    EntityNotRegisteredError,
    InvalidKeySpecificationError,
    KeyTopologyMismatchError,
    KeyValueTypeError,
    MissingAttributeValueError,
    RetryableError,
    UniqueConstraintViolationError,
    UnsupportedDefaultValueError,
    ValidationError,
)
from .templating import get_placeholders, interpolate
from .models import (
    AttributeType,
    AutoGenerateKeySpec,
    ExplicitKeySpec,
    KeySchema,
    KeySpecification,
    Table,
    build_primary_key_schema,
)
from .metadata import (
    AttributeMetadata,
    AttributeOptions,
    EntityMetadata,
    EntityOptions,
    EntityRegistry,
    build_entity_metadata,
    build_unique_key_schema,
)
from .core import (
    TableGateway,
    UniqueRecordWriter,
    create_table_gateway,
)

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "DynamoDBConfig",

    # Exceptions
    "ConflictError",
    "ConnectionError",
    "DynamoDBSchemaError",
    "EntityNotRegisteredError",
    "InvalidKeySpecificationError",
    "KeyTopologyMismatchError",
    "KeyValueTypeError",
    "MissingAttributeValueError",
    "RetryableError",
    "UniqueConstraintViolationError",
    "UnsupportedDefaultValueError",
    "ValidationError",

    # Key templates
    "get_placeholders",
    "interpolate",

    # Table topology and key schemas
    "AttributeType",
    "AutoGenerateKeySpec",
    "ExplicitKeySpec",
    "KeySchema",
    "KeySpecification",
    "Table",
    "build_primary_key_schema",

    # Attribute and entity metadata
    "AttributeMetadata",
    "AttributeOptions",
    "EntityMetadata",
    "EntityOptions",
    "EntityRegistry",
    "build_entity_metadata",
    "build_unique_key_schema",

    # Persistence building blocks
    "TableGateway",
    "UniqueRecordWriter",
    "create_table_gateway",
]
