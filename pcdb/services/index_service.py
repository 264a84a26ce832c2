"""Index lifecycle operations."""

from typing import Any

from pcdb.exceptions import InvalidSpecificationError
from pcdb.logging_config import get_logger
from pcdb.models.index import IndexConfig
from pcdb.services.base import APIService

logger = get_logger(__name__)

DEFAULT_DELETION_PROTECTION = "disabled"


class IndexService(APIService):
    """Translates index operations into validated API calls."""

    def create_index(self, config: IndexConfig) -> dict[str, Any]:
        """Create a new index.

        Args:
            config: Index configuration. Exactly one of the pod or
                serverless branches must be resolvable.

        Returns:
            Description of the created index.

        Raises:
            InvalidArgumentError: If the index name is empty.
            InvalidSpecificationError: If the spec is neither or both of
                pod and serverless.
        """
        self._validator.check_index_name(config)
        payload = self.build_create_payload(config)
        logger.info(f"Creating index {config.index_name}")
        return self._call(
            "POST",
            "/indexes",
            "index_response",
            payload,
            "create_index_request",
        )

    def delete_index(self, index_name: str) -> dict[str, Any]:
        """Delete an index."""
        self._validator.check_index_name(index_name)
        logger.info(f"Deleting index {index_name}")
        return self._call(
            "DELETE",
            f"/indexes/{self._segment(index_name)}",
            "empty_response",
        )

    def list_indexes(self) -> dict[str, Any]:
        """List all indexes."""
        return self._call("GET", "/indexes", "list_indexes_response")

    def describe_index(self, index_name: str) -> dict[str, Any]:
        """Describe an index."""
        self._validator.check_index_name(index_name)
        return self._call(
            "GET",
            f"/indexes/{self._segment(index_name)}",
            "index_response",
        )

    def update_index_config(
        self,
        index_name: str,
        config: IndexConfig,
    ) -> dict[str, Any]:
        """Update the configuration of an index.

        Pod indexes can change pod type, pod count and replicas; shards are
        fixed at creation. Serverless indexes can only change deletion
        protection.

        Args:
            index_name: Index to update.
            config: New configuration.

        Returns:
            Description of the updated index.

        Raises:
            InvalidArgumentError: If the index name is empty.
            InvalidSpecificationError: If the spec is neither or both of
                pod and serverless.
        """
        self._validator.check_index_name(index_name)
        payload = self.build_update_payload(config)
        logger.info(f"Configuring index {index_name}")
        return self._call(
            "PATCH",
            f"/indexes/{self._segment(index_name)}",
            "index_response",
            payload,
            "update_index_request",
        )

    def describe_index_stats(self, index_name: str) -> dict[str, Any]:
        """Get vector counts and fullness of an index."""
        self._validator.check_index_name(index_name)
        return self._call(
            "POST",
            "/describe_index_stats",
            "index_stats_response",
            {"index_name": index_name},
            "describe_index_stats_request",
        )

    def create_backup(self, index_name: str, backup_name: str) -> dict[str, Any]:
        """Create a backup (collection) of an index.

        Args:
            index_name: Index to back up.
            backup_name: Name of the backup.

        Returns:
            Description of the backup.
        """
        self._validator.check_index_name(index_name)
        self._validator.check_backup_name(backup_name)
        logger.info(f"Backing up index {index_name} to {backup_name}")
        return self._call(
            "POST",
            "/collections",
            "backup_response",
            {"name": backup_name, "source": index_name},
            "create_backup_request",
        )

    def restore_from_backup(
        self,
        index_name: str,
        dimension: int,
        metric: str,
        backup_name: str,
    ) -> dict[str, Any]:
        """Create a new index from a backup.

        Args:
            index_name: Name of the index to create.
            dimension: Vector dimension.
            metric: Similarity metric.
            backup_name: Backup to restore from.

        Returns:
            Description of the new index.
        """
        self._validator.check_index_name(index_name)
        self._validator.check_backup_name(backup_name)
        logger.info(f"Restoring index {index_name} from {backup_name}")
        return self._call(
            "POST",
            "/indexes",
            "index_response",
            {
                "name": index_name,
                "dimension": dimension,
                "metric": metric,
                "source_collection": backup_name,
            },
            "restore_backup_request",
        )

    def list_backups(self) -> dict[str, Any]:
        """List all backups."""
        return self._call("GET", "/collections", "list_backups_response")

    def describe_backup(self, backup_name: str) -> dict[str, Any]:
        """Describe a backup."""
        self._validator.check_backup_name(backup_name)
        return self._call(
            "GET",
            f"/collections/{self._segment(backup_name)}",
            "backup_response",
        )

    def delete_backup(self, backup_name: str) -> dict[str, Any]:
        """Delete a backup."""
        self._validator.check_backup_name(backup_name)
        logger.info(f"Deleting backup {backup_name}")
        return self._call(
            "DELETE",
            f"/collections/{self._segment(backup_name)}",
            "empty_response",
        )

    # Payload builders

    def build_create_payload(self, config: IndexConfig) -> dict[str, Any]:
        """Build the create-index payload.

        Raises:
            InvalidSpecificationError: If the spec branch cannot be resolved.
        """
        branch, block = _resolve_spec(config, "creation")
        if branch == "pod" and config.metadata_config:
            block["metadata_config"] = config.metadata_config

        spec: dict[str, Any] = {
            branch: block,
            "replicas": config.replicas,
            "shards": config.shards,
        }
        return {
            "name": config.index_name,
            "dimension": config.dimension,
            "metric": config.metric,
            "spec": spec,
            "deletion_protection": (
                config.deletion_protection or DEFAULT_DELETION_PROTECTION
            ),
        }

    def build_update_payload(self, config: IndexConfig) -> dict[str, Any]:
        """Build the configure-index payload.

        Raises:
            InvalidSpecificationError: If the spec branch cannot be resolved.
        """
        branch, block = _resolve_spec(config, "update")

        payload: dict[str, Any] = {}
        if branch == "pod":
            payload["spec"] = {"pod": block, "replicas": config.replicas}

        if config.deletion_protection:
            payload["deletion_protection"] = config.deletion_protection

        return payload


def _resolve_spec(
    config: IndexConfig,
    operation: str,
) -> tuple[str, dict[str, Any]]:
    """Pick the pod or serverless branch of a config.

    Returns:
        Branch name and its block.

    Raises:
        InvalidSpecificationError: If neither or both branches resolve.
    """
    pod = config.pod_spec()
    serverless = config.serverless_spec()

    if pod is not None and serverless is not None:
        raise InvalidSpecificationError(
            f"Invalid specification for index {operation}: "
            "both pod and serverless fields are set",
            details={"index_name": config.index_name},
        )
    if pod is not None:
        return "pod", pod
    if serverless is not None:
        return "serverless", serverless

    raise InvalidSpecificationError(
        f"Invalid specification for index {operation}: "
        "expected environment, pod_type and pods, or cloud and region",
        details={"index_name": config.index_name},
    )
