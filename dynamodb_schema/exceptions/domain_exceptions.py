"""
Domain-Specific Exceptions for DynamoDB Schema

All exceptions extend DynamoDBSchemaError. They are raised synchronously and
never retried inside the library.

Organized by category:
1. Key Template and Key Schema Errors
2. Attribute Metadata Errors
3. Registration and Validation Errors
4. Conflict and Uniqueness Errors
5. Infrastructure and Retry Errors
"""

from typing import Any, Dict, Optional

from .base import DynamoDBSchemaError


# =============================================================================
# Key Template and Key Schema Errors
# =============================================================================

class MissingAttributeValueError(DynamoDBSchemaError):
    """Raised when a key template placeholder has no matching value.

    Used for:
    - Interpolating a pattern against a value map that lacks a placeholder
    - Building a key schema whose pattern references an undeclared attribute
    """

    def __init__(self, attribute_name: str, pattern: Optional[str] = None):
        """Initialize missing attribute value error.

        Args:
            attribute_name: Name of the placeholder without a value
            pattern: The pattern being interpolated, if known
        """
        self.attribute_name = attribute_name
        self.pattern = pattern
        message = f"No value found for attribute '{attribute_name}'"
        context = {'attribute_name': attribute_name}
        if pattern is not None:
            context['pattern'] = pattern
        super().__init__(message, None, context)


class KeyTopologyMismatchError(DynamoDBSchemaError):
    """Raised when a key specification disagrees with the table's key topology.

    Used for:
    - A sort key pattern given for a simple-key table
    - A missing sort key pattern for a composite-key table
    """

    def __init__(self, table_name: str, message: str):
        """Initialize key topology mismatch error.

        Args:
            table_name: Name of the table whose topology was violated
            message: Human-readable error message
        """
        self.table_name = table_name
        super().__init__(message, None, {'table_name': table_name})


class InvalidKeySpecificationError(DynamoDBSchemaError):
    """Raised when a key specification variant cannot be used where it was given."""

    def __init__(self, message: str, kind: Optional[str] = None):
        self.kind = kind
        context = {}
        if kind:
            context['kind'] = kind
        super().__init__(message, None, context)


class KeyValueTypeError(DynamoDBSchemaError):
    """Raised when a value substituted into a key does not match the attribute type."""

    def __init__(self, attribute_name: str, expected_type: str, value: Any):
        """Initialize key value type error.

        Args:
            attribute_name: Name of the attribute being substituted
            expected_type: Declared attribute type
            value: The offending value
        """
        self.attribute_name = attribute_name
        self.expected_type = expected_type
        self.value = value
        message = (
            f"Value {value!r} for attribute '{attribute_name}' is not of type '{expected_type}'"
        )
        context = {
            'attribute_name': attribute_name,
            'expected_type': expected_type,
        }
        super().__init__(message, None, context)


# =============================================================================
# Attribute Metadata Errors
# =============================================================================

class UnsupportedDefaultValueError(DynamoDBSchemaError):
    """Raised when a resolved default is not a scalar of the declared type.

    Used for:
    - Literal defaults of a non-scalar kind (dict, list, object)
    - Default factories returning a non-scalar
    - Scalar defaults that disagree with the attribute type
    """

    def __init__(self, attribute_name: str, value: Any):
        """Initialize unsupported default value error.

        Args:
            attribute_name: Name of the attribute declaring the default
            value: The raw default (literal or factory) that was rejected
        """
        self.attribute_name = attribute_name
        self.value = value
        message = (
            f"Unsupported default value {value!r} for attribute '{attribute_name}'. "
            "Only scalar values matching the attribute type are allowed"
        )
        super().__init__(message, None, {'attribute_name': attribute_name})


# =============================================================================
# Registration and Validation Errors
# =============================================================================

class ValidationError(DynamoDBSchemaError):
    """Raised when data or declarations fail validation.

    Used for:
    - Duplicate entity or attribute declarations
    - Invalid DynamoDB requests reported by the service
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)


class EntityNotRegisteredError(DynamoDBSchemaError):
    """Raised when metadata is requested for an entity that was never registered."""

    def __init__(self, entity_name: str):
        self.entity_name = entity_name
        message = f"Entity '{entity_name}' is not registered"
        super().__init__(message, None, {'entity_name': entity_name})


# =============================================================================
# Conflict and Uniqueness Errors
# =============================================================================

class ConflictError(DynamoDBSchemaError):
    """Raised when a conditional operation fails due to existing data.

    Used for:
    - ConditionalCheckFailedException from DynamoDB
    - Transaction conflicts
    """

    def __init__(self, message: str, resource_id: Optional[str] = None, original_error: Optional[Exception] = None):
        """Initialize conflict error.

        Args:
            message: Human-readable error message
            resource_id: ID of the conflicting resource
            original_error: The original exception that caused this error
        """
        self.resource_id = resource_id
        context = {}
        if resource_id:
            context['resource_id'] = resource_id
        super().__init__(message, original_error, context)


class UniqueConstraintViolationError(ConflictError):
    """Raised when a shadow record for a unique attribute value already exists.

    This is a permanent failure: the value is taken by another entity and the
    write must not be retried.
    """

    def __init__(self, entity_name: str, attribute_name: str, value: Any, original_error: Optional[Exception] = None):
        """Initialize unique constraint violation error.

        Args:
            entity_name: Entity declaring the unique attribute
            attribute_name: Name of the unique attribute
            value: The value that is already claimed
            original_error: The underlying conflict
        """
        self.entity_name = entity_name
        self.attribute_name = attribute_name
        self.value = value
        message = f"Value {value!r} for unique attribute '{entity_name}.{attribute_name}' already exists"
        super().__init__(message, f"{entity_name}.{attribute_name}", original_error)


# =============================================================================
# Infrastructure and Retry Errors
# =============================================================================

class ConnectionError(DynamoDBSchemaError):
    """Raised when connection to DynamoDB fails.

    Used for:
    - Network connectivity issues
    - Authentication/authorization failures
    - Invalid endpoint configurations
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


class RetryableError(DynamoDBSchemaError):
    """Raised when an operation fails due to throttling or temporary service issues."""

    def __init__(self, message: str, retry_after_seconds: Optional[int] = None, original_error: Optional[Exception] = None):
        """Initialize retryable error.

        Args:
            message: Human-readable error message
            retry_after_seconds: Suggested retry delay in seconds
            original_error: The original exception that caused this error
        """
        self.retry_after_seconds = retry_after_seconds
        context = {}
        if retry_after_seconds:
            context['retry_after_seconds'] = retry_after_seconds
        super().__init__(message, original_error, context)
