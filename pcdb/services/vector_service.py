"""Vector lifecycle operations."""

from collections.abc import Sequence
from typing import Any
from urllib.parse import urlencode

from pcdb.exceptions import InvalidServerResponseError
from pcdb.logging_config import get_logger
from pcdb.models.vector import VectorModel, VectorQuery
from pcdb.services.base import APIService

logger = get_logger(__name__)

DEFAULT_LIST_LIMIT = 100
EMPTY_NAMESPACE_RESULT = "No vectors found in the namespace"


class VectorService(APIService):
    """Translates vector operations into validated API calls.

    ``index_name`` arguments identify the target index for precondition
    checks; requests go to the transport's data-plane host.
    """

    def upsert(
        self,
        index_name: str,
        vectors: Sequence[VectorModel],
        namespace: str | None = None,
    ) -> dict[str, Any]:
        """Insert or overwrite vectors.

        Args:
            index_name: Target index.
            vectors: Vectors to upsert.
            namespace: Namespace to write to.

        Returns:
            Response with ``upsertedCount``.
        """
        self._validator.check_index_name(index_name)

        payload: dict[str, Any] = {
            "vectors": [format_vector(vector) for vector in vectors],
        }
        if namespace:
            payload["namespace"] = namespace

        logger.debug(f"Upserting {len(vectors)} vectors into {index_name}")
        return self._call(
            "POST",
            "/vectors/upsert",
            "upsert_response",
            payload,
            "upsert_request",
        )

    def fetch(
        self,
        index_name: str,
        vector_ids: Sequence[str],
        namespace: str | None = None,
    ) -> dict[str, Any]:
        """Fetch vectors by ID.

        Args:
            index_name: Target index.
            vector_ids: IDs to fetch.
            namespace: Namespace to read from.

        Returns:
            Response with a ``vectors`` mapping keyed by ID.
        """
        self._validator.check_index_name(index_name)

        params: list[tuple[str, str]] = [("ids", vector_id) for vector_id in vector_ids]
        payload: dict[str, Any] = {"ids": list(vector_ids)}
        if namespace:
            params.append(("namespace", namespace))
            payload["namespace"] = namespace

        return self._call(
            "GET",
            f"/vectors/fetch?{urlencode(params)}",
            "fetch_response",
            payload,
            "fetch_request",
            send_body=False,
        )

    def query(self, index_name: str, query: VectorQuery) -> dict[str, Any]:
        """Search for the nearest vectors.

        Args:
            index_name: Target index.
            query: Query parameters.

        Returns:
            Response with ``matches``.
        """
        self._validator.check_index_name(index_name)

        payload: dict[str, Any] = {
            "vector": query.vector,
            "topK": query.top_k,
            "includeValues": query.include_values,
            "includeMetadata": query.include_metadata,
        }
        if query.filter:
            payload["filter"] = query.filter
        if query.namespace:
            payload["namespace"] = query.namespace

        return self._call(
            "POST",
            "/query",
            "query_response",
            payload,
            "query_request",
        )

    def update(
        self,
        index_name: str,
        vector_id: str,
        values: Sequence[float],
        metadata: dict[str, Any],
        namespace: str | None = None,
    ) -> dict[str, Any]:
        """Update the values and metadata of one vector.

        ``metadata`` replaces the stored metadata of the vector as a whole;
        it is not merged with existing keys.

        Args:
            index_name: Target index.
            vector_id: Vector to update.
            values: New dense values.
            metadata: New metadata.
            namespace: Namespace of the vector.
        """
        self._validator.check_index_name(index_name)
        self._validator.check_vector_id(vector_id)

        payload: dict[str, Any] = {
            "id": vector_id,
            "values": list(values),
            "setMetadata": metadata,
        }
        if namespace:
            payload["namespace"] = namespace

        return self._call(
            "POST",
            "/vectors/update",
            "empty_response",
            payload,
            "update_vector_request",
        )

    def list_vector_ids(
        self,
        index_name: str,
        namespace: str | None = None,
        prefix: str | None = None,
        limit: int | None = DEFAULT_LIST_LIMIT,
        pagination_token: str | None = None,
    ) -> dict[str, Any]:
        """List one page of vector IDs.

        Args:
            index_name: Target index.
            namespace: Namespace to list.
            prefix: Only IDs starting with this prefix.
            limit: Page size.
            pagination_token: Token from a previous page.
        """
        self._validator.check_index_name(index_name)

        candidates: dict[str, Any] = {
            "namespace": namespace,
            "prefix": prefix,
            "limit": limit,
            "paginationToken": pagination_token,
        }
        payload = {key: value for key, value in candidates.items() if value}

        path = "/vectors/list"
        if payload:
            path = f"{path}?{urlencode(payload)}"

        return self._call(
            "GET",
            path,
            "list_vector_ids_response",
            payload,
            "list_vector_ids_request",
            send_body=False,
        )

    def delete_vectors(
        self,
        index_name: str,
        vector_ids: Sequence[str],
        namespace: str | None = None,
    ) -> dict[str, Any]:
        """Delete vectors by ID."""
        self._validator.check_index_name(index_name)

        payload: dict[str, Any] = {"ids": list(vector_ids)}
        if namespace:
            payload["namespace"] = namespace

        return self._call(
            "POST",
            "/vectors/delete",
            "empty_response",
            payload,
            "delete_vectors_request",
        )

    def delete_namespace(self, index_name: str, namespace: str) -> dict[str, Any]:
        """Delete the vectors of a namespace.

        Lists the namespace, then deletes the listed IDs. Only the first
        page of the listing is deleted, so namespaces larger than one page
        need repeated calls. Vectors written between the two requests may
        survive.

        Args:
            index_name: Target index.
            namespace: Namespace to clear.

        Returns:
            The delete response, or ``{"message": ...}`` when the namespace
            listing is empty.

        Raises:
            InvalidServerResponseError: If the listed IDs are not a list of
                strings, or the listing has entries but no ``ids`` array.
        """
        self._validator.check_index_name(index_name)
        self._validator.check_namespace(namespace)

        listing = self.list_vector_ids(index_name, namespace)
        vector_ids = listing.get("ids")
        if vector_ids is None:
            if listing.get("vectors"):
                # Listed entries without a flat ID array cannot be acted on
                raise InvalidServerResponseError(
                    "Invalid response from list vector IDs: expected array of strings",
                    details={"namespace": namespace, "fields": sorted(listing)},
                )
            vector_ids = []

        if not isinstance(vector_ids, list):
            raise InvalidServerResponseError(
                "Invalid response from list vector IDs: expected array of strings",
                details={"namespace": namespace, "type": type(vector_ids).__name__},
            )
        for vector_id in vector_ids:
            if not isinstance(vector_id, str):
                raise InvalidServerResponseError(
                    "Invalid vector ID: expected string",
                    details={"namespace": namespace, "id": repr(vector_id)},
                )

        if not vector_ids:
            return {"message": EMPTY_NAMESPACE_RESULT}

        logger.info(f"Deleting {len(vector_ids)} vectors from namespace {namespace}")
        return self.delete_vectors(index_name, vector_ids, namespace)


def format_vector(vector: VectorModel) -> dict[str, Any]:
    """Convert a vector to its wire form.

    Sparse values become parallel ``indices``/``values`` lists in mapping
    order. Empty sparse values and metadata are omitted.
    """
    formatted: dict[str, Any] = {
        "id": vector.id,
        "values": list(vector.values),
    }
    if vector.sparse_values:
        formatted["sparseValues"] = {
            "indices": list(vector.sparse_values.keys()),
            "values": list(vector.sparse_values.values()),
        }
    if vector.metadata:
        formatted["metadata"] = vector.metadata
    return formatted
