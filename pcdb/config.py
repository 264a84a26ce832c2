"""Client configuration using Pydantic Settings.

Connection parameters are loaded from ``PCDB_*`` environment variables
(or a ``.env`` file) or passed explicitly. No secrets are hardcoded.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pcdb.exceptions import ConfigurationError


class Environment(str, Enum):
    """Runtime environment, used to pick the log format."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class ClientConfig(BaseSettings):
    """Connection parameters for the vector database API.

    Immutable once constructed. Every string field must be non-empty.
    """

    model_config = SettingsConfigDict(
        env_prefix="PCDB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    api_key: SecretStr = Field(description="API key sent in the Api-Key header")
    base_url: str = Field(description="Control-plane base endpoint")
    api_version: str = Field(description="Value of the API version header")
    custom_endpoint: str = Field(
        description="Data-plane host of a specific index",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Request timeout in seconds",
    )

    @field_validator("base_url", "api_version", "custom_endpoint")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must be a non-empty string")
        return value

    @field_validator("api_key")
    @classmethod
    def _key_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("must be a non-empty string")
        return value


class Settings(BaseSettings):
    """Runtime settings that are not part of the connection."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Runtime environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached runtime settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def load_client_config() -> ClientConfig:
    """Load connection parameters from the environment.

    Returns:
        ClientConfig built from ``PCDB_*`` variables.

    Raises:
        ConfigurationError: If a parameter is missing or empty.
    """
    try:
        return ClientConfig()  # type: ignore[call-arg]
    except ValidationError as e:
        fields = [".".join(str(loc) for loc in err["loc"]) for err in e.errors()]
        raise ConfigurationError(
            f"Invalid client configuration: {', '.join(fields)}",
            details={"fields": fields},
        ) from e
