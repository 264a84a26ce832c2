"""API service module."""

from pcdb.services.base import APIService
from pcdb.services.index_service import IndexService
from pcdb.services.vector_service import VectorService, format_vector

__all__ = [
    "APIService",
    "IndexService",
    "VectorService",
    "format_vector",
]
