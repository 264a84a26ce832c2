"""Simplified interface for index operations."""

import logging
from types import TracebackType
from typing import Any

import httpx

from pcdb.config import ClientConfig, load_client_config
from pcdb.http.transport import Transport
from pcdb.logging_config import get_logger
from pcdb.models.index import IndexConfig
from pcdb.services.index_service import IndexService
from pcdb.validation.validator import SchemaValidator


class Index:
    """Index operations against the control-plane endpoint."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        custom_endpoint: str | None = None,
        logger: logging.Logger | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the index client.

        Args:
            config: Connection parameters. Loaded from the environment if not provided.
            custom_endpoint: Base URL overriding ``config.base_url``.
            logger: Logger for transport failures.
            client: HTTP client (for testing).
        """
        config = config or load_client_config()
        self._transport = Transport(
            config,
            logger=logger or get_logger("pcdb.http"),
            custom_endpoint=custom_endpoint,
            client=client,
        )
        self._service = IndexService(self._transport, SchemaValidator())

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._transport.close()

    def __enter__(self) -> "Index":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def create_index(
        self,
        index_name: str,
        metric: str,
        dimension: int,
        spec: dict[str, Any],
        metadata_config: dict[str, Any] | None = None,
        deletion_protection: str | None = None,
    ) -> dict[str, Any]:
        """Create a new index.

        Args:
            index_name: Name of the index.
            metric: Similarity metric.
            dimension: Vector dimension.
            spec: ``{"pod": {...}}`` or ``{"serverless": {...}}``, optionally
                with ``replicas`` and ``shards``.
            metadata_config: Metadata indexing configuration.
            deletion_protection: ``enabled`` or ``disabled``.
        """
        config = IndexConfig.from_spec(
            index_name,
            metric,
            dimension,
            spec,
            metadata_config,
            deletion_protection,
        )
        return self._service.create_index(config)

    def delete_index(self, index_name: str) -> dict[str, Any]:
        """Delete an index by name."""
        return self._service.delete_index(index_name)

    def list_indexes(self) -> dict[str, Any]:
        """List all indexes."""
        return self._service.list_indexes()

    def describe_index(self, index_name: str) -> dict[str, Any]:
        """Describe an index by name."""
        return self._service.describe_index(index_name)

    def update_index_config(
        self,
        index_name: str,
        index_config: dict[str, Any],
    ) -> dict[str, Any]:
        """Update the configuration of an index.

        Args:
            index_name: Index to update.
            index_config: Mapping with ``spec`` and optionally
                ``metadata_config`` and ``deletion_protection``.
        """
        spec = index_config.get("spec")
        metadata_config = index_config.get("metadata_config")
        deletion_protection = index_config.get("deletion_protection")

        config = IndexConfig.from_spec(
            index_name,
            "",  # metric is fixed at creation
            0,  # so is dimension
            spec if isinstance(spec, dict) else {},
            metadata_config if isinstance(metadata_config, dict) else None,
            deletion_protection if isinstance(deletion_protection, str) else None,
        )
        return self._service.update_index_config(index_name, config)

    def describe_index_stats(self, index_name: str) -> dict[str, Any]:
        """Get statistics of an index."""
        return self._service.describe_index_stats(index_name)

    def create_backup(self, index_name: str, backup_name: str) -> dict[str, Any]:
        """Back up an index."""
        return self._service.create_backup(index_name, backup_name)

    def restore_from_backup(
        self,
        index_name: str,
        dimension: int,
        metric: str,
        backup_name: str,
    ) -> dict[str, Any]:
        """Create an index from a backup."""
        return self._service.restore_from_backup(
            index_name, dimension, metric, backup_name
        )

    def list_backups(self) -> dict[str, Any]:
        """List all backups."""
        return self._service.list_backups()

    def describe_backup(self, backup_name: str) -> dict[str, Any]:
        """Describe a backup."""
        return self._service.describe_backup(backup_name)

    def delete_backup(self, backup_name: str) -> dict[str, Any]:
        """Delete a backup."""
        return self._service.delete_backup(backup_name)
