"""Schema-validated client for a hosted vector database REST API."""

import logging

from pcdb.config import ClientConfig, load_client_config
from pcdb.exceptions import (
    ConfigurationError,
    ErrorCode,
    InvalidArgumentError,
    InvalidServerResponseError,
    InvalidSpecificationError,
    PCDBError,
    SchemaInvalidError,
    SchemaNotFoundError,
    TransportError,
    ValidationFailedError,
)
from pcdb.index import Index
from pcdb.models import (
    IndexConfig,
    IndexModel,
    IndexStats,
    VectorMetadata,
    VectorModel,
    VectorQuery,
)
from pcdb.vector import Vector

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ClientConfig",
    "ConfigurationError",
    "ErrorCode",
    "Index",
    "IndexConfig",
    "IndexModel",
    "IndexStats",
    "InvalidArgumentError",
    "InvalidServerResponseError",
    "InvalidSpecificationError",
    "PCDBError",
    "SchemaInvalidError",
    "SchemaNotFoundError",
    "TransportError",
    "ValidationFailedError",
    "Vector",
    "VectorMetadata",
    "VectorModel",
    "VectorQuery",
    "__version__",
    "load_client_config",
]
