"""Configuration for the Helpdesk service.

Settings are read from environment variables (or a `.env` file) into a frozen
`HelpdeskSettings` object. The entry point builds it once and hands it to
`HelpdeskService`; nothing else reads the environment.

Examples:
    ```bash
    export JWT_SECRET=change-me
    export MONGO_URI=mongodb://localhost:27017
    export PORT=3000
    ```

    ```python
    settings = load_settings()
    service = HelpdeskService(settings)
    ```
"""

from typing import List, Optional

from pydantic import SecretStr, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class HelpdeskSettings(BaseSettings):
    """Helpdesk service configuration settings."""

    # Auth / JWT
    JWT_SECRET: SecretStr
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_IN: int = 24 * 60 * 60  # seconds
    BCRYPT_ROUNDS: int = 10

    # MongoDB
    MONGO_URI: str
    MONGO_DB: str = "helpdesk"

    # HTTP
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    LOG_DIR: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @field_validator("JWT_SECRET", "MONGO_URI", mode="before")
    @classmethod
    def _reject_blank(cls, value):
        # an empty secret would sign tokens anyone can forge
        raw = value.get_secret_value() if isinstance(value, SecretStr) else value
        if isinstance(raw, str) and not raw.strip():
            raise PydanticCustomError("missing", "Field required")
        return value

    @property
    def url(self) -> str:
        return f"http://{self.HOST}:{self.PORT}"


def load_settings(**overrides) -> HelpdeskSettings:
    """Build settings from the environment, failing fast on missing values.

    Keyword overrides take precedence over environment variables.

    Raises:
        ConfigurationError: If a required variable is absent or a value cannot be parsed.
    """
    try:
        return HelpdeskSettings(**overrides)
    except PydanticValidationError as e:
        missing = sorted(str(err["loc"][0]) for err in e.errors() if err["type"] == "missing")
        if missing:
            raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}") from e
        raise ConfigurationError(f"Invalid configuration: {e}") from e
