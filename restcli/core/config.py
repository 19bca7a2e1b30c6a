"""Settings for the API connection and login."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from restcli.core.errors import ConfigurationError

DEFAULT_CONFIG_FILE = "appsettings.json"


class ApiSettings(BaseModel):
    """Where the API lives and who logs in."""

    model_config = ConfigDict(frozen=True)

    base_address: str = ""
    login: str = ""
    password: str = ""
    timeout_seconds: int = Field(default=30, gt=0)


class AuthenticationSettings(BaseModel):
    """How the login call is made and how its token is sent back."""

    model_config = ConfigDict(frozen=True)

    login_endpoint: str = "auth/login"
    token_header_name: str = "Authorization"
    token_prefix: str = "Bearer"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RESTCLI_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        json_file=DEFAULT_CONFIG_FILE,
        json_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    api: ApiSettings = Field(default_factory=ApiSettings)
    authentication: AuthenticationSettings = Field(default_factory=AuthenticationSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment beats the JSON file so a single value can be overridden
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def load_settings(config_file: str | Path | None = None) -> Settings:
    """Load settings once at startup.

    Without ``config_file`` the optional ``appsettings.json`` in the working
    directory is read. An explicit path must exist.
    """
    try:
        if config_file is None:
            return Settings()

        path = Path(config_file)
        if not path.is_file():
            raise ConfigurationError(f"Configuration file not found: {path}")

        class FileSettings(Settings):
            model_config = SettingsConfigDict(json_file=path)

        return FileSettings()
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
