# Base exception class
from .base import DynamoDBSchemaError

from .domain_exceptions import (
    ConflictError,
    ConnectionError,
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

__all__ = [
    # Base exception
    "DynamoDBSchemaError",

    # Domain exceptions (alphabetically ordered)
    "ConflictError",
    "ConnectionError",
    "EntityNotRegisteredError",
    "InvalidKeySpecificationError",
    "KeyTopologyMismatchError",
    "KeyValueTypeError",
    "MissingAttributeValueError",
    "RetryableError",
    "UniqueConstraintViolationError",
    "UnsupportedDefaultValueError",
    "ValidationError",
]
