"""JSON-Schema validation of request and response payloads.

Schemas live in a file-addressable store, one document per request or
response shape. The packaged store is used unless a directory is given.
Schema files are read and checked once per path for the life of the
process.
"""

import copy
import json
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any, TypeAlias

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError
from jsonschema.exceptions import ValidationError as JSONSchemaError
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for

from pcdb.exceptions import (
    InvalidArgumentError,
    SchemaInvalidError,
    SchemaNotFoundError,
    ValidationFailedError,
)
from pcdb.logging_config import get_logger

logger = get_logger(__name__)

JSONValue: TypeAlias = (
    None | bool | int | float | str | list["JSONValue"] | dict[str, "JSONValue"]
)

DEFAULT_SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"


@lru_cache(maxsize=None)
def _read_schema(path: Path) -> dict[str, Any]:
    """Read a schema file. Failures are not cached.

    Raises:
        SchemaNotFoundError: If the file does not exist.
        SchemaInvalidError: If the file is not a JSON object.
    """
    if not path.is_file():
        raise SchemaNotFoundError(
            f"Schema file not found: {path}",
            details={"path": str(path)},
        )

    try:
        with path.open("r", encoding="utf-8") as f:
            schema_data = json.load(f)
    except (OSError, ValueError) as e:
        raise SchemaInvalidError(
            f"Invalid JSON in schema file: {path}",
            details={"path": str(path), "error": str(e)},
        ) from e

    if not isinstance(schema_data, dict):
        raise SchemaInvalidError(
            f"Schema should be a valid JSON object: {path}",
            details={"path": str(path)},
        )

    logger.debug(f"Loaded schema {path}")
    return schema_data


@lru_cache(maxsize=None)
def _compile_schema(path: Path) -> Validator:
    """Check a schema against its metaschema and build its validator.

    Raises:
        SchemaInvalidError: If the schema is not a valid JSON Schema.
    """
    schema_data = _read_schema(path)
    validator_cls = validator_for(schema_data, default=Draft202012Validator)
    try:
        validator_cls.check_schema(schema_data)
    except SchemaError as e:
        raise SchemaInvalidError(
            f"Schema is not a valid JSON Schema: {path}: {e.message}",
            details={"path": str(path)},
        ) from e
    return validator_cls(schema_data)


class SchemaValidator:
    """Validates JSON documents against named schemas.

    Also provides the identifier preconditions shared by the services.
    """

    def __init__(self, schema_dir: str | Path | None = None) -> None:
        """Initialize the validator.

        Args:
            schema_dir: Schema store directory. Defaults to the packaged store.
        """
        self._schema_dir = Path(schema_dir) if schema_dir else DEFAULT_SCHEMA_DIR

    @property
    def schema_dir(self) -> Path:
        """Directory schema names are resolved against."""
        return self._schema_dir

    def validate(
        self,
        document: Any,
        schema: str,
        schema_dir: str | Path | None = None,
    ) -> bool:
        """Validate a document against a named schema.

        Args:
            document: JSON-like value (mappings, sequences, scalars).
            schema: Schema name, with or without the ``.json`` suffix.
            schema_dir: Directory overriding the validator's store.

        Returns:
            True when the document satisfies the schema.

        Raises:
            SchemaNotFoundError: If the schema file does not exist.
            SchemaInvalidError: If the schema is not a valid schema object.
            ValidationFailedError: If the document violates the schema.
        """
        validator = _compile_schema(self.schema_path(schema, schema_dir))
        instance = self.normalize(document)

        violations = [
            (self._error_path(error), error.message)
            for error in validator.iter_errors(instance)
        ]
        if violations:
            errors = ", ".join(f"[{path}] {message}" for path, message in violations)
            logger.debug(f"Document failed {schema}: {errors}")
            raise ValidationFailedError(
                f"JSON does not validate. Errors: {errors}",
                details={
                    "schema": schema,
                    "violations": [
                        {"path": path, "message": message}
                        for path, message in violations
                    ],
                },
            )

        return True

    def load_schema(
        self,
        schema: str,
        schema_dir: str | Path | None = None,
    ) -> dict[str, Any]:
        """Load a copy of a schema document from the store.

        Raises:
            SchemaNotFoundError: If the schema file does not exist.
            SchemaInvalidError: If the file is not a JSON object.
        """
        return copy.deepcopy(_read_schema(self.schema_path(schema, schema_dir)))

    def schema_path(self, schema: str, schema_dir: str | Path | None = None) -> Path:
        """Resolve a schema name to a file path."""
        directory = Path(schema_dir) if schema_dir else self._schema_dir
        filename = schema if schema.endswith(".json") else f"{schema}.json"
        return directory / filename

    @staticmethod
    def normalize(document: Any) -> JSONValue:
        """Round-trip a document through JSON.

        Tuples become lists and non-string keys become strings, matching
        what the schema engine sees on the wire.

        Raises:
            ValidationFailedError: If the document cannot be encoded.
        """
        try:
            return json.loads(json.dumps(document))
        except (TypeError, ValueError) as e:
            raise ValidationFailedError(
                f"Failed to encode data to JSON: {e}",
                details={"error": str(e)},
            ) from e

    @staticmethod
    def _error_path(error: JSONSchemaError) -> str:
        """Render the location of a violation.

        For ``required`` violations the missing property is appended, so the
        path names the field rather than its parent.
        """
        parts = list(error.absolute_path)
        if error.validator == "required" and isinstance(error.instance, Mapping):
            for name in error.validator_value:
                if name not in error.instance and error.message == (
                    f"{name!r} is a required property"
                ):
                    parts.append(name)
                    break

        path = ""
        for part in parts:
            if isinstance(part, int):
                path += f"[{part}]"
            else:
                path += f".{part}" if path else str(part)
        return path

    # Identifier preconditions

    def check_non_empty_value(self, value: str | None, field_name: str) -> None:
        """Raise if a required identifier is empty.

        Raises:
            InvalidArgumentError: If the value is None or an empty string.
        """
        if not value:
            raise InvalidArgumentError(
                f"{field_name} cannot be empty",
                details={"field": field_name},
            )

    def check_index_name(self, config: Any) -> None:
        """Check the index name of a bare string or a config object.

        Accepts a string, anything with an ``index_name`` attribute, or a
        mapping with an ``"index_name"`` key.
        """
        self.check_non_empty_value(resolve_index_name(config), "Index name")

    def check_backup_name(self, backup_name: str | None) -> None:
        """Check a backup name is non-empty."""
        self.check_non_empty_value(backup_name, "Backup name")

    def check_namespace(self, namespace: str | None) -> None:
        """Check a namespace name is non-empty."""
        self.check_non_empty_value(namespace, "Namespace name")

    def check_vector_id(self, vector_id: str | None) -> None:
        """Check a vector ID is non-empty."""
        self.check_non_empty_value(vector_id, "Vector ID")


def resolve_index_name(config: Any) -> str | None:
    """Extract an index name from a string, object or mapping."""
    if config is None or isinstance(config, str):
        return config
    if isinstance(config, Mapping):
        name = config.get("index_name")
    else:
        name = getattr(config, "index_name", None)
    return name if isinstance(name, str) else None
