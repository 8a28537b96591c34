"""
Persistence building blocks that act on computed keys.

- TableGateway: Thin wrapper over boto3 single-item operations
- UniqueRecordWriter: Claims and releases unique attribute shadow records
"""

from .table_gateway import TableGateway, create_table_gateway, map_dynamodb_error
from .unique_records import UniqueRecordWriter

__all__ = [
    "TableGateway",
    "UniqueRecordWriter",
    "create_table_gateway",
    "map_dynamodb_error",
]
