"""Library settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from ..urls import DEFAULT_BASE_URL


class Settings(BaseSettings):
    """Settings for building an Entity from the environment."""

    api_key: str = Field(
        default="",
        description="Trello developer API key",
    )

    token: str | None = Field(
        default=None,
        description="Trello user token (optional for reading public boards)",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Trello REST API base URL",
    )

    timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP request timeout in seconds",
    )

    pedantic_assert: bool = Field(
        default=False,
        description="Raise instead of warning when the API key is missing",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "TRELLO_",
    }
