from __future__ import annotations

from pathlib import Path
from typing import Annotated

import yaml
from pydantic import Field, PositiveInt, SecretStr, ValidationError
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    SettingsError,
    TomlConfigSettingsSource,
    YamlConfigSettingsSource,
)

ENV_PREFIX = "TLE_RETRIEVER_"

CONFIG_SOURCES: dict[str, type[PydanticBaseSettingsSource]] = {
    ".toml": TomlConfigSettingsSource,
    ".json": JsonConfigSettingsSource,
    ".yaml": YamlConfigSettingsSource,
    ".yml": YamlConfigSettingsSource,
}


class ConfigurationError(Exception):
    pass


class Settings(BaseSettings):
    username: str
    password: SecretStr
    norad_ids: Annotated[list[PositiveInt], Field(min_length=1)]
    connection_timeout: PositiveInt
    connection_read_timeout: PositiveInt
    connection_retries: Annotated[int, Field(ge=0, le=255)]
    output_filename: str
    output_directory: str
    spacetrack_base_url: str = "https://www.space-track.org"

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore", frozen=True)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment wins over values read from the config file.
        return env_settings, init_settings

    @property
    def output_path(self) -> Path:
        return Path(self.output_directory) / self.output_filename


def resolve_config_file(config_file: str | Path) -> Path:
    """Locate the config file, trying each supported suffix for a bare name."""
    path = Path(config_file)
    if path.suffix:
        if path.suffix.lower() not in CONFIG_SOURCES:
            supported = ", ".join(CONFIG_SOURCES)
            raise ConfigurationError(f"Unsupported config format '{path.suffix}' (expected one of {supported})")
        if not path.is_file():
            raise ConfigurationError(f"Config file not found: {path}")
        return path

    for suffix in CONFIG_SOURCES:
        candidate = path.with_suffix(suffix)
        if candidate.is_file():
            return candidate
    raise ConfigurationError(f"Config file not found: {path} (tried {', '.join(CONFIG_SOURCES)})")


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "settings"
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)


def load_settings(config_file: str | Path) -> Settings:
    """Read and validate settings from a TOML, JSON or YAML file.

    Variables named ``TLE_RETRIEVER_<FIELD>`` override the file, which keeps
    credentials out of it when needed.
    """
    path = resolve_config_file(config_file)
    source_cls = CONFIG_SOURCES[path.suffix.lower()]
    try:
        if source_cls is TomlConfigSettingsSource:
            values = source_cls(Settings, toml_file=path)()
        elif source_cls is JsonConfigSettingsSource:
            values = source_cls(Settings, json_file=path)()
        else:
            values = source_cls(Settings, yaml_file=path)()
    except (OSError, TypeError, ValueError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Could not read config file {path}: {exc}") from exc

    try:
        return Settings(**values)
    except SettingsError as exc:
        raise ConfigurationError(f"Invalid configuration override: {exc}") from exc
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {path}: {_format_validation_error(exc)}") from exc
