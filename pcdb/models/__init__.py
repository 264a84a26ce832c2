"""Data models for indexes and vectors."""

from pcdb.models.index import IndexConfig, IndexModel, IndexStats
from pcdb.models.vector import VectorMetadata, VectorModel, VectorQuery

__all__ = [
    "IndexConfig",
    "IndexModel",
    "IndexStats",
    "VectorMetadata",
    "VectorModel",
    "VectorQuery",
]
