"""
Table Topology

A Table describes the physical DynamoDB table an entity lives in and, most
importantly, whether its primary key is simple (partition key only) or
composite (partition key + sort key). Key schemas built for a table must
follow its topology.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Table(BaseModel):
    """
    Physical table definition.

    Immutable once constructed. The sort key attribute name decides the
    topology: set means composite, unset means simple.
    """

    name: str = Field(..., description="Table name")
    partition_key: str = Field(default="PK", description="Partition key attribute name")
    sort_key: Optional[str] = Field(default=None, description="Sort key attribute name")

    model_config = ConfigDict(frozen=True)

    @field_validator('name', 'partition_key')
    @classmethod
    def validate_not_empty(cls, v):
        if not v:
            raise ValueError("Table name and partition key must not be empty")
        return v

    @field_validator('sort_key')
    @classmethod
    def validate_sort_key(cls, v):
        if v is not None and not v:
            raise ValueError("Sort key must be a non-empty name or None")
        return v

    def uses_composite_key(self) -> bool:
        """Return True if the table's primary key is partition key + sort key."""
        return self.sort_key is not None
