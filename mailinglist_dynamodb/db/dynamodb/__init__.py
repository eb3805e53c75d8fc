from .client import dynamodb_resource
from .errors import (
    DatabaseError,
    InvalidDSNError,
    NoRecordError,
    RecordExistsError,
    is_exists,
    is_not_exist,
)
from .session import Connection, new_connection_with_dsn, parse_dsn
from .table import DynamoTable, Page

__all__ = [
    "Connection",
    "DatabaseError",
    "DynamoTable",
    "InvalidDSNError",
    "NoRecordError",
    "Page",
    "RecordExistsError",
    "dynamodb_resource",
    "is_exists",
    "is_not_exist",
    "new_connection_with_dsn",
    "parse_dsn",
]
