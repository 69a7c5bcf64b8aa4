"""Configuration management using Pydantic Settings.

The configuration is organized into logical groups:
- DatabaseConfig: Database connection settings
- LoggingConfig: Logging levels and log file location
- SecurityConfig: Token signing key, token lifetime and password hashing cost
"""

from datetime import timedelta
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, SecretStr, model_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class DatabaseConfig(BaseModel):
    """Database connection configuration."""

    url: str = "sqlite+aiosqlite:///data/db/podcaster.db"
    echo: bool = False
    pool_timeout: int = 30
    pool_recycle: int = 1800


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("podcaster.log")
    real_time_debug: bool = True


class SecurityConfig(BaseModel):
    """Token signing and password hashing settings."""

    # Process-wide signing secret; TokenService refuses to start without it
    private_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    token_expire_minutes: int | None = None
    bcrypt_rounds: int = 12

    @property
    def token_lifetime(self) -> timedelta | None:
        """Token lifetime as a timedelta, or None when tokens never expire."""
        if self.token_expire_minutes is None:
            return None
        return timedelta(minutes=self.token_expire_minutes)


# Flat variable name -> (section, field) in the nested settings models
FLAT_ENV_ALIASES: dict[str, tuple[str, str]] = {
    "database_url": ("database", "url"),
    "database_echo": ("database", "echo"),
    "console_log_level": ("logging", "console_level"),
    "file_log_level": ("logging", "file_level"),
    "log_file": ("logging", "log_file"),
    "log_real_time_debug": ("logging", "real_time_debug"),
    "private_key": ("security", "private_key"),
    "jwt_algorithm": ("security", "algorithm"),
    "token_expire_minutes": ("security", "token_expire_minutes"),
    "bcrypt_rounds": ("security", "bcrypt_rounds"),
}


def nest_flat_aliases(values: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Pop flat alias keys out of ``values`` and group them by section."""
    nested: dict[str, dict[str, Any]] = {}
    for alias, (section, field_name) in FLAT_ENV_ALIASES.items():
        if alias in values:
            nested.setdefault(section, {})[field_name] = values.pop(alias)
    return nested


class FlatEnvSettingsSource(PydanticBaseSettingsSource):
    """Reads flat process environment variables such as PRIVATE_KEY.

    The stock environment source only matches field names and ``__``
    nested names, so flat names are mapped onto their sections here.
    """

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        environ = {key.lower(): value for key, value in os.environ.items()}
        return nest_flat_aliases(environ)


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Environment variables can be set using flat naming or nested naming:
    - Flat: DATABASE_URL, CONSOLE_LOG_LEVEL, PRIVATE_KEY
    - Nested: DATABASE__URL, LOGGING__CONSOLE_LEVEL, SECURITY__PRIVATE_KEY

    The .env file is automatically loaded for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    security: SecurityConfig = SecurityConfig()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            FlatEnvSettingsSource(settings_cls),
            dotenv_settings,
            file_secret_settings,
        )

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Transform flat keyword arguments and .env entries to nested structure.

        Handles flat names (DATABASE_URL) and maps them to the nested
        structure expected by the models (database.url).
        """
        if not isinstance(data, dict):
            return data

        transformed = nest_flat_aliases(data)

        # Nested values given explicitly win over flat aliases
        for section, values in transformed.items():
            nested = data.get(section)
            if isinstance(nested, dict):
                data[section] = {**values, **nested}
            elif nested is None:
                data[section] = values

        return data


# Singleton instance for application use
settings = Settings()
