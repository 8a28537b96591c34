"""
Schema Configuration

Settings are read from the process environment (and a ``.env`` file when one
exists) once, when a DynamoDBConfig is constructed:

    AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY   credentials, optional
    AWS_REGION                                  region, default us-east-1
    DYNAMODB_ENDPOINT_URL                       e.g. a local DynamoDB
    DYNAMODB_TABLE_PREFIX / ENVIRONMENT         physical table naming
    DYNAMODB_ATTRIBUTE_PREFIX                   namespace of unique shadow keys
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

load_dotenv()

DEFAULT_ATTRIBUTE_PREFIX = "DYNAMO_ATTRIBUTE_PREFIX"
ENVIRONMENTS = ("dev", "staging", "prod", "test")

# Characters with a meaning inside a key template
_TEMPLATE_CHARACTERS = ("{", "}", "#")


def validate_attribute_prefix(prefix: str) -> str:
    """Check that a shadow key prefix is a non-empty template literal.

    Raises:
        ValueError: If the prefix is empty or contains '{', '}' or '#'
    """
    if not prefix:
        raise ValueError("Attribute prefix is required")
    for char in _TEMPLATE_CHARACTERS:
        if char in prefix:
            raise ValueError(f"Attribute prefix must not contain '{char}': {prefix!r}")
    return prefix


def _env(name: str, default: Optional[str] = None):
    return lambda: os.getenv(name, default)


class DynamoDBConfig(BaseModel):
    """Connection settings for the shadow-record table gateway plus the
    naming rules used when deriving table names and unique keys."""

    # Connection
    aws_access_key_id: Optional[str] = Field(default_factory=_env("AWS_ACCESS_KEY_ID"))
    aws_secret_access_key: Optional[str] = Field(default_factory=_env("AWS_SECRET_ACCESS_KEY"))
    region_name: str = Field(default_factory=_env("AWS_REGION", "us-east-1"))
    endpoint_url: Optional[str] = Field(
        default_factory=_env("DYNAMODB_ENDPOINT_URL"),
        description="Override endpoint, e.g. http://localhost:8000",
    )
    max_pool_connections: int = Field(default=50, ge=1)
    retries: int = Field(default=3, ge=0, description="botocore retries max_attempts")
    timeout_seconds: float = Field(default=30.0, gt=0, description="Connect and read timeout")

    # Naming
    table_prefix: str = Field(default_factory=_env("DYNAMODB_TABLE_PREFIX", ""))
    environment: str = Field(default_factory=_env("ENVIRONMENT", "dev"))
    attribute_prefix: str = Field(
        default_factory=_env("DYNAMODB_ATTRIBUTE_PREFIX", DEFAULT_ATTRIBUTE_PREFIX),
        description="Prefix of auto-generated unique attribute keys",
    )

    model_config = ConfigDict(validate_assignment=True)

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        if v not in ENVIRONMENTS:
            raise ValueError(f"Environment must be one of: {list(ENVIRONMENTS)}")
        return v

    @field_validator('attribute_prefix')
    @classmethod
    def check_attribute_prefix(cls, v):
        return validate_attribute_prefix(v)

    def get_table_name(self, base_name: str) -> str:
        """Physical name of a table: ``[prefix_][environment_]base_name``.

        Production tables carry no environment part.
        """
        parts = [self.table_prefix] if self.table_prefix else []
        if self.environment != "prod":
            parts.append(self.environment)
        parts.append(base_name)
        return "_".join(parts)
