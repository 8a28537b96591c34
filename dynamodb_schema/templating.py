"""
Key Template Engine

Key attributes are declared as patterns such as ``USER#{{id}}`` and resolved
against a map of attribute values when an item is written or read. A
placeholder is ``{{identifier}}`` where identifier is a Python-style name.
Anything else that looks like braces (``{id}``, ``{{ id }}``, ``{{a-b}}``) is
not a placeholder and is kept verbatim, so plain literals are valid patterns.

All functions here are pure.
"""

import re
from decimal import Decimal
from typing import Any, List, Mapping

from .exceptions import MissingAttributeValueError

IDENTIFIER = r"[A-Za-z_][A-Za-z0-9_]*"
IDENTIFIER_PATTERN = re.compile(IDENTIFIER)
PLACEHOLDER_PATTERN = re.compile(r"\{\{(" + IDENTIFIER + r")\}\}")


def get_placeholders(pattern: str) -> List[str]:
    """Get placeholder names referenced by a pattern.

    Names are returned once each, in order of first occurrence.

    Examples:
        >>> get_placeholders("ORG#{{org_id}}#USER#{{id}}#{{org_id}}")
        ['org_id', 'id']
    """
    names: List[str] = []
    for match in PLACEHOLDER_PATTERN.finditer(pattern):
        name = match.group(1)
        if name not in names:
            names.append(name)
    return names


def is_identifier(name: str) -> bool:
    """Return True if name can be used inside a ``{{name}}`` placeholder."""
    return IDENTIFIER_PATTERN.fullmatch(name) is not None


def to_key_string(value: Any) -> str:
    """Render a scalar value the way it appears inside a key.

    Booleans become ``true``/``false``. Numbers are written in one canonical
    plain-decimal form whatever their Python type or precision, so ``100``,
    ``100.0``, ``Decimal("1E+2")`` and ``Decimal("100.00")`` all render as
    ``100`` and ``Decimal("3.10")`` renders as ``3.1``.

    Examples:
        >>> to_key_string(Decimal("1.5E-7"))
        '0.00000015'
    """
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float, Decimal)):
        return _canonical_number(value)
    return str(value)


def _canonical_number(value) -> str:
    # repr() is the shortest string that round-trips a float
    number = Decimal(repr(value)) if isinstance(value, float) else Decimal(value)
    if not number.is_finite():
        return str(number)
    if number == number.to_integral_value():
        return str(int(number))
    return format(number, "f").rstrip("0")


def interpolate(pattern: str, values: Mapping[str, Any]) -> str:
    """Replace every ``{{name}}`` placeholder in a pattern with its value.

    Args:
        pattern: Key pattern, possibly without any placeholders
        values: Attribute values keyed by attribute name

    Returns:
        The literal key string

    Raises:
        MissingAttributeValueError: If a placeholder has no value (or None)

    Examples:
        >>> interpolate("USER#{{id}}", {"id": 42})
        'USER#42'
        >>> interpolate("{not a placeholder}", {})
        '{not a placeholder}'
    """
    def substitute(match: "re.Match[str]") -> str:
        name = match.group(1)
        value = values.get(name)
        if value is None:
            raise MissingAttributeValueError(name, pattern)
        return to_key_string(value)

    return PLACEHOLDER_PATTERN.sub(substitute, pattern)


__all__ = [
    "IDENTIFIER_PATTERN",
    "PLACEHOLDER_PATTERN",
    "get_placeholders",
    "interpolate",
    "is_identifier",
    "to_key_string",
]
