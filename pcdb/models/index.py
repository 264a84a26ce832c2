"""Index data models."""

from typing import Any

from pydantic import BaseModel, Field


def _typed(source: Any, key: str, kind: type) -> Any:
    """Return ``source[key]`` if it is an instance of ``kind``, else None."""
    if not isinstance(source, dict):
        return None
    value = source.get(key)
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) and kind is not bool:
        return None
    return value if isinstance(value, kind) else None


class IndexConfig(BaseModel):
    """Desired topology of an index.

    Exactly one of the pod fields (environment, pod_type, pods) or the
    serverless fields (cloud, region) must be complete for the config to
    be usable by create and update.

    Attributes:
        index_name: Name of the index.
        metric: Similarity metric.
        dimension: Vector dimension.
        environment: Pod environment.
        pod_type: Pod type, e.g. ``p1.x1``.
        pods: Number of pods.
        cloud: Serverless cloud provider.
        region: Serverless region.
        replicas: Replica count.
        shards: Shard count. Immutable after creation.
        metadata_config: Metadata fields to index (pod indexes).
        deletion_protection: ``enabled`` or ``disabled``.
    """

    index_name: str = Field(description="Index name")
    metric: str = Field(default="", description="Similarity metric")
    dimension: int = Field(default=0, description="Vector dimension")
    environment: str | None = Field(default=None, description="Pod environment")
    pod_type: str | None = Field(default=None, description="Pod type")
    pods: int | None = Field(default=None, description="Number of pods")
    cloud: str | None = Field(default=None, description="Serverless cloud")
    region: str | None = Field(default=None, description="Serverless region")
    replicas: int = Field(default=1, description="Replica count")
    shards: int = Field(default=1, description="Shard count")
    metadata_config: dict[str, Any] | None = Field(
        default=None,
        description="Metadata indexing configuration",
    )
    deletion_protection: str | None = Field(
        default=None,
        description="Deletion protection setting",
    )

    @classmethod
    def from_spec(
        cls,
        index_name: str,
        metric: str,
        dimension: int,
        spec: dict[str, Any],
        metadata_config: dict[str, Any] | None = None,
        deletion_protection: str | None = None,
    ) -> "IndexConfig":
        """Build a config from a nested ``{"pod": ...}`` or ``{"serverless": ...}`` spec.

        Values of the wrong type are ignored, leaving the field unset.
        """
        pod = spec.get("pod")
        serverless = spec.get("serverless")
        replicas = _typed(spec, "replicas", int)
        shards = _typed(spec, "shards", int)

        return cls(
            index_name=index_name,
            metric=metric,
            dimension=dimension,
            environment=_typed(pod, "environment", str),
            pod_type=_typed(pod, "pod_type", str),
            pods=_typed(pod, "pods", int),
            cloud=_typed(serverless, "cloud", str),
            region=_typed(serverless, "region", str),
            replicas=replicas if replicas is not None else 1,
            shards=shards if shards is not None else 1,
            metadata_config=metadata_config,
            deletion_protection=deletion_protection,
        )

    def pod_spec(self) -> dict[str, Any] | None:
        """Pod block if every pod field is set, else None."""
        if self.environment and self.pod_type and self.pods is not None:
            return {
                "environment": self.environment,
                "pod_type": self.pod_type,
                "pods": self.pods,
            }
        return None

    def serverless_spec(self) -> dict[str, Any] | None:
        """Serverless block if cloud and region are set, else None."""
        if self.cloud and self.region:
            return {"cloud": self.cloud, "region": self.region}
        return None


class IndexModel(BaseModel):
    """An index as described by the service.

    Attributes:
        name: Index name.
        metric: Similarity metric.
        dimension: Vector dimension.
        host: Data-plane host of the index.
        replicas: Replica count.
        shards: Shard count.
    """

    name: str = Field(description="Index name")
    metric: str = Field(default="", description="Similarity metric")
    dimension: int = Field(default=0, description="Vector dimension")
    host: str | None = Field(default=None, description="Data-plane host")
    replicas: int = Field(default=1, description="Replica count")
    shards: int = Field(default=1, description="Shard count")

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "IndexModel":
        """Build from a validated describe/create response."""
        spec = data.get("spec") or {}
        pod = spec.get("pod") or {}
        return cls(
            name=data["name"],
            metric=data.get("metric", ""),
            dimension=data.get("dimension", 0),
            host=data.get("host"),
            replicas=pod.get("replicas", 1),
            shards=pod.get("shards", 1),
        )


class IndexStats(BaseModel):
    """Statistics of an index.

    Attributes:
        total_vectors: Number of vectors across all namespaces.
        dimension: Vector dimension.
        index_fullness: Fraction of capacity used (pod indexes).
        namespaces: Vector count per namespace.
    """

    total_vectors: int = Field(default=0, ge=0, description="Total vectors")
    dimension: int | None = Field(default=None, description="Vector dimension")
    index_fullness: float = Field(default=0.0, description="Capacity used")
    namespaces: dict[str, int] = Field(
        default_factory=dict,
        description="Vector count per namespace",
    )

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "IndexStats":
        """Build from a validated describe-stats response."""
        namespaces = {
            name: summary.get("vectorCount", 0)
            for name, summary in (data.get("namespaces") or {}).items()
        }
        return cls(
            total_vectors=data.get("totalVectorCount", 0),
            dimension=data.get("dimension"),
            index_fullness=data.get("indexFullness", 0.0),
            namespaces=namespaces,
        )
