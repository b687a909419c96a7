"""Configuration for the client scripts, loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings. Every field can be overridden with ``BALLOTBOX_<NAME>``.

    List values are read from the environment as JSON, e.g.
    ``BALLOTBOX_CANDIDATES='["Alice", "Bob"]'``.
    """

    model_config = SettingsConfigDict(
        env_prefix="BALLOTBOX_",
        env_file=".env",
        extra="ignore",
    )

    # Ballot used when a script creates a registry
    CANDIDATES: list[str] = Field(default_factory=lambda: ["Alice", "Bob", "Charlie"])

    # Simulation
    VOTERS: int = Field(default=4, ge=0)
    SEED: int = 20260201

    LOG_LEVEL: str = "INFO"


def get_settings() -> Settings:
    return Settings()
