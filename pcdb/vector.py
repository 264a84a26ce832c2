"""Simplified interface for vector operations."""

import logging
from collections.abc import Sequence
from types import TracebackType
from typing import Any

import httpx

from pcdb.config import ClientConfig, load_client_config
from pcdb.http.transport import Transport
from pcdb.logging_config import get_logger
from pcdb.models.vector import VectorModel, VectorQuery
from pcdb.services.vector_service import DEFAULT_LIST_LIMIT, VectorService
from pcdb.validation.validator import SchemaValidator


class Vector:
    """Vector operations against the data-plane host of an index."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        custom_endpoint: str | None = None,
        logger: logging.Logger | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the vector client.

        Args:
            config: Connection parameters. Loaded from the environment if not provided.
            custom_endpoint: Index host. Defaults to ``config.custom_endpoint``.
            logger: Logger for transport failures.
            client: HTTP client (for testing).
        """
        config = config or load_client_config()
        self._transport = Transport(
            config,
            logger=logger or get_logger("pcdb.http"),
            custom_endpoint=custom_endpoint or config.custom_endpoint,
            client=client,
        )
        self._service = VectorService(self._transport, SchemaValidator())

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._transport.close()

    def __enter__(self) -> "Vector":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def upsert_vectors(
        self,
        index_name: str,
        vectors: Sequence[VectorModel],
        namespace: str | None = None,
    ) -> dict[str, Any]:
        """Upsert vectors into an index."""
        return self._service.upsert(index_name, vectors, namespace)

    def fetch_vectors(
        self,
        index_name: str,
        vector_ids: Sequence[str],
        namespace: str | None = None,
    ) -> dict[str, Any]:
        """Fetch vectors by ID."""
        return self._service.fetch(index_name, vector_ids, namespace)

    def query_vectors(self, index_name: str, query: VectorQuery) -> dict[str, Any]:
        """Query the nearest vectors."""
        return self._service.query(index_name, query)

    def update_vector(
        self,
        index_name: str,
        vector_id: str,
        values: Sequence[float],
        metadata: dict[str, Any],
        namespace: str | None = None,
    ) -> dict[str, Any]:
        """Update one vector. ``metadata`` replaces the stored metadata."""
        return self._service.update(index_name, vector_id, values, metadata, namespace)

    def list_vector_ids(
        self,
        index_name: str,
        namespace: str | None = None,
        prefix: str | None = None,
        limit: int | None = DEFAULT_LIST_LIMIT,
        pagination_token: str | None = None,
    ) -> dict[str, Any]:
        """List one page of vector IDs."""
        return self._service.list_vector_ids(
            index_name, namespace, prefix, limit, pagination_token
        )

    def delete_vectors(
        self,
        index_name: str,
        vector_ids: Sequence[str],
        namespace: str | None = None,
    ) -> dict[str, Any]:
        """Delete vectors by ID."""
        return self._service.delete_vectors(index_name, vector_ids, namespace)

    def delete_namespace(self, index_name: str, namespace: str) -> dict[str, Any]:
        """Delete the first page of vectors in a namespace."""
        return self._service.delete_namespace(index_name, namespace)
