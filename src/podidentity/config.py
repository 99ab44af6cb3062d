"""podidentity configuration settings."""

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from podidentity.infrastructure.config.settings_utils import (
    env_bool,
    env_path,
    env_str,
)
from podidentity.infrastructure.logging_setup import configure_logging
from podidentity.infrastructure.storage.path_guard import normalize_path


DEFAULT_HOST_VOLUME_ROOT = Path("/var/athenz/volumes")


class Settings(BaseSettings):
    """Process-wide settings with env var support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Directory under which every identity volume root is created
    host_volume_root: Path = Field(
        default_factory=lambda: env_path(
            "PODIDENTITY_HOST_VOLUME_ROOT", DEFAULT_HOST_VOLUME_ROOT
        )
    )

    # Observability
    log_level: str = Field(default_factory=lambda: env_str("PODIDENTITY_LOG_LEVEL", "INFO"))
    log_json: bool = Field(default_factory=lambda: env_bool("PODIDENTITY_LOG_JSON", False))

    @model_validator(mode="after")
    def _normalize_paths_validator(self) -> "Settings":
        self.host_volume_root = normalize_path(self.host_volume_root)
        return self

    def setup_logging(self) -> None:
        configure_logging(level=self.log_level, json_logs=self.log_json)


# Global settings instance
settings = Settings()
