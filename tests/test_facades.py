"""End-to-end tests of the Index and Vector clients over a mock HTTP layer."""

import os
from unittest.mock import patch

import httpx
import pytest

from pcdb import Index, Vector
from pcdb.exceptions import ConfigurationError, TransportError
from pcdb.models.vector import VectorModel
from pcdb.services.vector_service import EMPTY_NAMESPACE_RESULT


class TestIndexClient:
    """Tests for the index client."""

    def test_create_index(self, client_config, make_handler, make_http_client) -> None:
        """Nested specs are flattened and sent to the control plane."""
        handler = make_handler(
            {("POST", "/indexes"): httpx.Response(201, json={"name": "t1"})}
        )

        with Index(client_config, client=make_http_client(handler)) as index:
            result = index.create_index(
                "t1",
                "cosine",
                128,
                {"serverless": {"cloud": "aws", "region": "us-east-1"}},
            )

        assert result == {"name": "t1"}
        request = handler.requests[0]
        assert str(request.url) == "https://api.test/indexes"
        assert request.headers["Api-Key"] == "test-key"
        assert handler.body() == {
            "name": "t1",
            "dimension": 128,
            "metric": "cosine",
            "spec": {
                "serverless": {"cloud": "aws", "region": "us-east-1"},
                "replicas": 1,
                "shards": 1,
            },
            "deletion_protection": "disabled",
        }

    def test_update_index_config(
        self, client_config, make_handler, make_http_client
    ) -> None:
        """Pod updates are sent as PATCH without shards."""
        handler = make_handler(
            {("PATCH", "/indexes/t1"): httpx.Response(200, json={"name": "t1"})}
        )
        index = Index(client_config, client=make_http_client(handler))

        index.update_index_config(
            "t1",
            {
                "spec": {
                    "pod": {"environment": "us-west1-gcp", "pod_type": "p1.x2", "pods": 2},
                    "replicas": 2,
                },
            },
        )

        assert handler.body() == {
            "spec": {
                "pod": {"environment": "us-west1-gcp", "pod_type": "p1.x2", "pods": 2},
                "replicas": 2,
            },
        }

    def test_delete_index_accepts_empty_body(
        self, client_config, make_handler, make_http_client
    ) -> None:
        """Deletes acknowledged with no content return an empty object."""
        handler = make_handler({("DELETE", "/indexes/t1"): httpx.Response(202)})
        index = Index(client_config, client=make_http_client(handler))

        assert index.delete_index("t1") == {}

    def test_delete_missing_index_raises(
        self, client_config, make_handler, make_http_client
    ) -> None:
        """A 404 without a body is a failure, not an empty acknowledgement."""
        handler = make_handler({("DELETE", "/indexes/missing"): httpx.Response(404)})
        index = Index(client_config, client=make_http_client(handler))

        with pytest.raises(TransportError) as exc_info:
            index.delete_index("missing")

        assert exc_info.value.details["status_code"] == 404

    def test_connection_failure(self, client_config, make_http_client) -> None:
        """Network errors surface as TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        index = Index(client_config, client=make_http_client(handler))

        with pytest.raises(TransportError):
            index.list_indexes()

    def test_missing_environment(self) -> None:
        """Clients without config require the environment."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConfigurationError):
                Index()


class TestVectorClient:
    """Tests for the vector client."""

    def test_targets_index_host(
        self, client_config, make_handler, make_http_client
    ) -> None:
        """Vector requests go to the configured index host."""
        handler = make_handler(
            {("POST", "/vectors/upsert"): httpx.Response(200, json={"upsertedCount": 1})}
        )
        vector = Vector(client_config, client=make_http_client(handler))

        result = vector.upsert_vectors("t1", [VectorModel(id="v1", values=[0.1, 0.2])])

        assert result == {"upsertedCount": 1}
        assert str(handler.requests[0].url) == "https://idx-test.svc.test/vectors/upsert"

    def test_custom_endpoint_override(
        self, client_config, make_handler, make_http_client
    ) -> None:
        """An explicit endpoint replaces the configured host."""
        handler = make_handler(
            {("GET", "/vectors/list"): httpx.Response(200, json={"vectors": []})}
        )
        vector = Vector(
            client_config,
            custom_endpoint="https://other.test",
            client=make_http_client(handler),
        )

        vector.list_vector_ids("t1")

        assert handler.requests[0].url.host == "other.test"

    def test_delete_namespace(
        self, client_config, make_handler, make_http_client
    ) -> None:
        """Listed IDs are deleted from the namespace."""
        handler = make_handler(
            {
                ("GET", "/vectors/list"): httpx.Response(200, json={"ids": ["a", "b"]}),
                ("POST", "/vectors/delete"): httpx.Response(200, json={}),
            }
        )
        vector = Vector(client_config, client=make_http_client(handler))

        assert vector.delete_namespace("t1", "ns1") == {}

        assert [r.method for r in handler.requests] == ["GET", "POST"]
        assert handler.requests[0].url.params["namespace"] == "ns1"
        assert handler.body() == {"ids": ["a", "b"], "namespace": "ns1"}

    def test_failed_delete_raises(
        self, client_config, make_handler, make_http_client
    ) -> None:
        """Server errors on delete reach the caller."""
        handler = make_handler({("POST", "/vectors/delete"): httpx.Response(500)})
        vector = Vector(client_config, client=make_http_client(handler))

        with pytest.raises(TransportError, match="Service returned 500"):
            vector.delete_vectors("t1", ["v1"])

    def test_delete_empty_namespace(
        self, client_config, make_handler, make_http_client
    ) -> None:
        """Empty namespaces produce a message and a single request."""
        handler = make_handler(
            {("GET", "/vectors/list"): httpx.Response(200, json={"ids": []})}
        )
        vector = Vector(client_config, client=make_http_client(handler))

        assert vector.delete_namespace("t1", "ns1") == {"message": EMPTY_NAMESPACE_RESULT}
        assert len(handler.requests) == 1
