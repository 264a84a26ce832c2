"""HTTP transport for the vector database REST API."""

import contextlib
import json
import logging
import time
from types import TracebackType
from typing import Any

import httpx

from pcdb.config import ClientConfig
from pcdb.exceptions import TransportError
from pcdb.observability.metrics import track_request

API_VERSION_HEADER = "X-Pinecone-API-Version"


class Transport:
    """Performs exactly one HTTP request per call.

    Headers are fixed at construction: content type, API key and API
    version. There is no per-call header override.
    """

    def __init__(
        self,
        config: ClientConfig,
        logger: logging.Logger | None = None,
        custom_endpoint: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            config: Connection parameters.
            logger: Receives an ERROR record for every failure, if given.
            custom_endpoint: Base URL overriding ``config.base_url``.
            client: HTTP client (for testing). Not closed by ``close()``.
        """
        self._base_url = (custom_endpoint or config.base_url).rstrip("/")
        self._timeout = config.timeout
        self._headers = {
            "Content-Type": "application/json",
            "Api-Key": config.api_key.get_secret_value(),
            API_VERSION_HEADER: config.api_version,
        }
        self._logger = logger
        self._client = client
        self._owns_client = client is None

    @property
    def base_url(self) -> str:
        """Base URL relative paths are resolved against."""
        return self._base_url

    @property
    def headers(self) -> dict[str, str]:
        """Copy of the headers sent with every request."""
        return dict(self._headers)

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
        return self._client

    def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "Transport":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def build_url(self, path: str) -> str:
        """Resolve a path against the base URL; absolute URLs pass through."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self._base_url}/{path.lstrip('/')}"

    def send(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request and decode the JSON response.

        Args:
            method: HTTP method.
            path: Path relative to the base URL, or an absolute URL.
            body: JSON body. Omitted from the request when None.

        Returns:
            Decoded response object. An empty 2xx body yields ``{}``.

        Raises:
            TransportError: On connection failure, on a non-2xx status, or
                when a 2xx body is not a JSON object.
        """
        client = self._get_client()
        url = self.build_url(path)
        start = time.perf_counter()

        try:
            response = client.request(
                method,
                url,
                json=body,
                headers=self._headers,
            )
        except httpx.RequestError as e:
            track_request(method, path, time.perf_counter() - start, None, success=False)
            message = f"Request to {url} failed: {e}"
            self._log_failure(message, method, url, None)
            raise TransportError(
                message,
                details={"method": method, "url": url},
            ) from e

        duration = time.perf_counter() - start
        status = response.status_code

        try:
            if not response.is_success:
                raise self._status_error(response)
            data = self._decode(response)
        except TransportError as e:
            track_request(method, path, duration, status, success=False)
            self._log_failure(e.message, method, url, status)
            raise

        track_request(method, path, duration, status)
        return data

    def _decode(self, response: httpx.Response) -> dict[str, Any]:
        """Decode a 2xx response body into a JSON object."""
        status = response.status_code
        if not response.content.strip():
            return {}

        try:
            data = json.loads(response.content)
        except ValueError as e:
            raise TransportError(
                "Invalid JSON response",
                details={"status_code": status, "error": str(e)},
            ) from e

        if not isinstance(data, dict):
            raise TransportError(
                "Invalid JSON response: expected an object",
                details={"status_code": status},
            )
        return data

    @staticmethod
    def _status_error(response: httpx.Response) -> TransportError:
        """Build the error for a non-2xx response.

        The body is decoded when possible so the service's own message is
        carried in the error.
        """
        status = response.status_code
        if not response.content.strip():
            return TransportError(
                f"Service returned {status}",
                details={"status_code": status, "body": None},
            )

        try:
            payload = json.loads(response.content)
        except ValueError:
            return TransportError(
                f"Service returned {status} with invalid JSON response",
                details={"status_code": status, "body": response.text},
            )

        message = f"Service returned {status}"
        if isinstance(payload, dict):
            reason = payload.get("message") or payload.get("error")
            if isinstance(reason, str) and reason:
                message = f"{message}: {reason}"
        return TransportError(
            message,
            details={"status_code": status, "body": payload},
        )

    def _log_failure(
        self,
        message: str,
        method: str,
        url: str,
        status: int | None,
    ) -> None:
        """Log a failure; errors raised by the logger are discarded."""
        if self._logger is None:
            return
        with contextlib.suppress(Exception):
            self._logger.error(
                message,
                extra={"method": method, "url": url, "status": status},
            )
