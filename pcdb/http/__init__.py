"""HTTP transport module."""

from pcdb.http.transport import API_VERSION_HEADER, Transport

__all__ = [
    "API_VERSION_HEADER",
    "Transport",
]
