"""Schema validation module."""

from pcdb.validation.validator import (
    DEFAULT_SCHEMA_DIR,
    JSONValue,
    SchemaValidator,
    resolve_index_name,
)

__all__ = [
    "DEFAULT_SCHEMA_DIR",
    "JSONValue",
    "SchemaValidator",
    "resolve_index_name",
]
