from .config import DEFAULT_ATTRIBUTE_PREFIX, DynamoDBConfig, validate_attribute_prefix

__all__ = [
    "DEFAULT_ATTRIBUTE_PREFIX",
    "DynamoDBConfig",
    "validate_attribute_prefix",
]
