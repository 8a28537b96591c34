"""
Root of the DynamoDB Schema exception hierarchy.

Every error raised by this package is a DynamoDBSchemaError, so callers can
catch the whole family in one place. Errors carry a ``context`` dict (entity,
attribute, pattern, table...) that is rendered into ``str(error)`` for logs.
"""

from typing import Any, Dict, Optional


class DynamoDBSchemaError(Exception):
    """Base exception for key derivation, registration and shadow-record errors.

    Attributes:
        message: Human-readable error message
        original_error: Lower-level exception this one wraps, if any
        context: Structured details, e.g. {'attribute_name': 'email'}
    """

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.context = dict(context) if context else {}

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} (Context: {details})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, context={self.context!r})"
