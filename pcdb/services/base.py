"""Request pipeline shared by the API services."""

from typing import Any
from urllib.parse import quote

from pcdb.http.transport import Transport
from pcdb.logging_config import get_logger
from pcdb.validation.validator import SchemaValidator

logger = get_logger(__name__)


class APIService:
    """Runs the validate -> send -> validate pipeline for one operation.

    Errors from the validator and transport propagate unchanged.
    """

    def __init__(
        self,
        transport: Transport,
        validator: SchemaValidator | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            transport: Transport used for every request.
            validator: Schema validator. Uses the packaged schemas if not provided.
        """
        self._transport = transport
        self._validator = validator or SchemaValidator()

    @property
    def validator(self) -> SchemaValidator:
        """Validator used for payloads and preconditions."""
        return self._validator

    def _call(
        self,
        method: str,
        path: str,
        response_schema: str,
        payload: dict[str, Any] | None = None,
        request_schema: str | None = None,
        send_body: bool = True,
    ) -> dict[str, Any]:
        """Validate the payload, send the request and validate the response.

        Args:
            method: HTTP method.
            path: Request path.
            response_schema: Schema the response must satisfy.
            payload: Request payload, validated when request_schema is set.
            request_schema: Schema the payload must satisfy.
            send_body: Send the payload as the JSON body. Reads carry their
                parameters in the query string and only validate the payload.

        Returns:
            Validated response.
        """
        if request_schema is not None:
            self._validator.validate(payload, request_schema)

        logger.debug(f"{method} {path}")
        response = self._transport.send(
            method,
            path,
            payload if send_body else None,
        )

        self._validator.validate(response, response_schema)
        return response

    @staticmethod
    def _segment(value: str) -> str:
        """Percent-encode a path segment."""
        return quote(value, safe="")
