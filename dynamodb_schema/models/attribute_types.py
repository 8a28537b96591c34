"""
Attribute Types

The closed set of scalar kinds an attribute may declare. Key patterns and
default values are checked against these.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Union

ScalarValue = Union[str, int, float, Decimal, bool]


class AttributeType(str, Enum):
    """Scalar attribute kinds, named after their DynamoDB type descriptors."""
    STRING = "S"
    NUMBER = "N"
    BOOLEAN = "BOOL"

    def matches(self, value: Any) -> bool:
        """Check whether a value is a scalar of this kind.

        bool is a subclass of int in Python, so it is excluded from NUMBER.
        """
        if self is AttributeType.STRING:
            return isinstance(value, str)
        if self is AttributeType.BOOLEAN:
            return isinstance(value, bool)
        return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)

