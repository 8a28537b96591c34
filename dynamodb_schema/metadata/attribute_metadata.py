"""
Attribute Metadata

One AttributeMetadata is built per declared entity attribute at registration
time. Construction resolves the default value and, for unique attributes, the
shadow-record key schema. Both are computed exactly once and cached; the
persistence layer only reads them afterwards.
"""

import logging
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import DEFAULT_ATTRIBUTE_PREFIX
from ..exceptions import UnsupportedDefaultValueError
from ..models import (
    AttributeType,
    AutoGenerateKeySpec,
    ExplicitKeySpec,
    KeySchema,
    ScalarValue,
    Table,
)
from ..templating import is_identifier
from .unique import build_unique_key_schema

logger = logging.getLogger(__name__)

DefaultSpecification = Union[ScalarValue, Callable[[], Any], None]


class AttributeOptions(BaseModel):
    """Declaration of a single entity attribute.

    ``unique`` accepts ``True`` (generated shadow key), an AutoGenerateKeySpec
    or an ExplicitKeySpec. ``default`` accepts a scalar or a zero-argument
    factory.
    """

    name: str = Field(..., min_length=1, description="Attribute name")
    type: AttributeType = Field(default=AttributeType.STRING, description="Scalar attribute type")
    default: Any = Field(default=None, description="Scalar default or zero-argument factory")
    unique: Optional[Union[bool, ExplicitKeySpec, AutoGenerateKeySpec]] = Field(
        default=None, description="Uniqueness specification"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        # names are substituted through {{name}} placeholders
        if not is_identifier(v):
            raise ValueError(f"Attribute name must be an identifier ([A-Za-z_][A-Za-z0-9_]*), got {v!r}")
        return v

    @property
    def is_unique(self) -> bool:
        return self.unique is not None and self.unique is not False


def resolve_default(name: str, attr_type: AttributeType, default: DefaultSpecification) -> Optional[ScalarValue]:
    """Resolve a declared default into a scalar value.

    Args:
        name: Attribute name, used in error reporting
        attr_type: Declared attribute type the value must match
        default: None, a scalar literal or a zero-argument factory

    Returns:
        The scalar default, or None when no default was declared

    Raises:
        UnsupportedDefaultValueError: If the resolved value is not a scalar of attr_type
    """
    if default is None:
        return None

    # if a factory function was provided get returned value
    if callable(default):
        value = default()
    else:
        value = default

    if attr_type.matches(value):
        return value

    raise UnsupportedDefaultValueError(name, default)


class AttributeMetadata:
    """Resolved, immutable metadata for one entity attribute.

    Attributes:
        name: Attribute name
        type: Declared scalar type
        table: Table the owning entity lives in
        entity_name: Name of the owning entity
        default: Resolved scalar default, or None
        unique_key_schema: Shadow-record key schema, present iff declared unique
    """

    __slots__ = ("_name", "_type", "_table", "_entity_name", "_default", "_unique_key_schema")

    def __init__(
        self,
        options: AttributeOptions,
        table: Table,
        entity_name: str,
        attribute_prefix: str = DEFAULT_ATTRIBUTE_PREFIX,
    ):
        self._name = options.name
        self._type = options.type
        self._table = table
        self._entity_name = entity_name
        self._default = resolve_default(options.name, options.type, options.default)
        self._unique_key_schema: Optional[KeySchema] = None

        if options.is_unique:
            self._unique_key_schema = build_unique_key_schema(
                table=table,
                entity_name=entity_name,
                attribute_name=options.name,
                attribute_type=options.type,
                unique=options.unique,
                prefix=attribute_prefix,
            )
            logger.debug(f"Registered unique attribute {entity_name}.{options.name}")

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> AttributeType:
        return self._type

    @property
    def table(self) -> Table:
        return self._table

    @property
    def entity_name(self) -> str:
        return self._entity_name

    @property
    def default(self) -> Optional[ScalarValue]:
        return self._default

    @property
    def unique_key_schema(self) -> Optional[KeySchema]:
        return self._unique_key_schema

    @property
    def is_unique(self) -> bool:
        return self._unique_key_schema is not None

    def __repr__(self) -> str:
        return (
            f"AttributeMetadata(name={self._name!r}, type={self._type.name}, "
            f"entity_name={self._entity_name!r}, unique={self.is_unique})"
        )
