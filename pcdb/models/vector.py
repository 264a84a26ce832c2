"""Vector data models."""

from typing import Any

from pydantic import BaseModel, Field


class VectorMetadata(BaseModel):
    """A single metadata entry.

    Attributes:
        key: Metadata key.
        value: Metadata value (string, number, boolean or list of strings).
    """

    key: str = Field(min_length=1, description="Metadata key")
    value: Any = Field(description="Metadata value")

    @staticmethod
    def to_mapping(entries: list["VectorMetadata"]) -> dict[str, Any]:
        """Collapse entries into a metadata mapping; later keys win."""
        return {entry.key: entry.value for entry in entries}


class VectorModel(BaseModel):
    """A vector to store in an index.

    Attributes:
        id: Vector identifier.
        values: Dense values. Length should match the index dimension.
        sparse_values: Sparse representation as index -> value.
        metadata: Metadata stored with the vector.
    """

    id: str = Field(min_length=1, description="Vector identifier")
    values: list[float] = Field(default_factory=list, description="Dense values")
    sparse_values: dict[int, float] | None = Field(
        default=None,
        description="Sparse values keyed by dimension index",
    )
    metadata: dict[str, Any] | None = Field(
        default=None,
        description="Vector metadata",
    )


class VectorQuery(BaseModel):
    """A similarity search request.

    Attributes:
        vector: Query vector.
        top_k: Number of matches to return.
        namespace: Namespace to search.
        filter: Metadata filter expression.
        include_values: Return vector values with matches.
        include_metadata: Return metadata with matches.
    """

    vector: list[float] = Field(description="Query vector")
    top_k: int = Field(default=10, gt=0, description="Number of matches")
    namespace: str | None = Field(default=None, description="Namespace")
    filter: dict[str, Any] | None = Field(default=None, description="Metadata filter")
    include_values: bool = Field(default=False, description="Include values")
    include_metadata: bool = Field(default=False, description="Include metadata")
