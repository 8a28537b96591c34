# Scalar attribute kinds
from .attribute_types import AttributeType, ScalarValue

# Table topology
from .table import Table

# Key specifications and schemas
from .key_schema import (
    AutoGenerateKeySpec,
    ExplicitKeySpec,
    KeyPart,
    KeySchema,
    KeySpecification,
    build_primary_key_schema,
)

__all__ = [
    "AttributeType",
    "ScalarValue",

    "Table",

    "AutoGenerateKeySpec",
    "ExplicitKeySpec",
    "KeyPart",
    "KeySchema",
    "KeySpecification",
    "build_primary_key_schema",
]
