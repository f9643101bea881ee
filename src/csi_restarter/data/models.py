"""CSI Restarter config."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

from pydantic import BeforeValidator, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
    YamlConfigSettingsSource,
)

from csi_restarter.exceptions import ConfigurationError
from csi_restarter.utils import comma_list, split_bind_address

DEFAULT_BIND_ADDRESS = "0.0.0.0:3000"  # noqa: S104
ENV_PREFIX = "RESTARTER_"
CONFIG_FILE_NAMES = ("config.toml", "config.yaml", "config.yml", "config.json")

ERROR_CONFIG_MISSING = "Config file {path} does not exist"
ERROR_CONFIG_FORMAT = "Unsupported config file format {suffix!r} for {path}"
ERROR_INVALID_SETTINGS = "Invalid settings: {errors}"

StorageClassList = Annotated[
    list[str], NoDecode, BeforeValidator(comma_list), Field(min_length=1)
]


def find_config_file(config_file: Path | None = None) -> Path | None:
    """Find config file. Explicit path must exist, default names are optional."""

    if config_file is not None:
        if not config_file.is_file():
            raise ConfigurationError(ERROR_CONFIG_MISSING.format(path=config_file))
        return config_file

    for name in CONFIG_FILE_NAMES:
        path = Path(name)
        if path.is_file():
            return path

    return None


def _config_file_source(
    settings_cls: type[BaseSettings], path: Path
) -> PydanticBaseSettingsSource:
    match path.suffix.lower():
        case ".toml":
            return TomlConfigSettingsSource(settings_cls, toml_file=path)
        case ".yaml" | ".yml":
            return YamlConfigSettingsSource(settings_cls, yaml_file=path)
        case ".json":
            return JsonConfigSettingsSource(settings_cls, json_file=path)

    raise ConfigurationError(ERROR_CONFIG_FORMAT.format(suffix=path.suffix, path=path))


class Settings(BaseSettings):
    """
    CSI Restarter settings.

    Loaded once on startup. Precedence, highest first: init values, environment
    variables (`RESTARTER_*`), config file.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        frozen=True,
    )

    bearer_token: SecretStr
    storage_class: StorageClassList
    bind_address: str = DEFAULT_BIND_ADDRESS
    delete_uncontrolled: bool = False
    dry_run: bool = False
    config_file: Path | None = Field(default=None, exclude=True)

    @field_validator("bind_address")
    @classmethod
    def _validate_bind_address(cls, value: str) -> str:
        split_bind_address(value)
        return value.strip()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Add optional config file as the lowest priority source."""

        init_kwargs: dict[str, Any] = getattr(init_settings, "init_kwargs", {})
        sources = (init_settings, env_settings, dotenv_settings, file_secret_settings)
        path = find_config_file(init_kwargs.get("config_file"))
        if path is None:
            return sources

        return (*sources, _config_file_source(settings_cls, path))

    @property
    def host(self) -> str:
        """Host to bind HTTP server to."""

        return split_bind_address(self.bind_address)[0]

    @property
    def port(self) -> int:
        """Port to bind HTTP server to."""

        return split_bind_address(self.bind_address)[1]


def load_settings(config_file: Path | None = None, **overrides: Any) -> Settings:  # noqa: ANN401
    """Load settings, raising `ConfigurationError` on any invalid value."""

    try:
        return Settings(config_file=config_file, **overrides)
    except ValidationError as ex:
        errors = ", ".join(
            f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
            for e in ex.errors()
        )
        raise ConfigurationError(ERROR_INVALID_SETTINGS.format(errors=errors)) from ex
