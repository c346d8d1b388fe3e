"""Settings resolution with pydantic-settings.

Sources, first wins:
1. Keyword overrides (the CLI passes the options it was given)
2. Environment variables (AFFECTED__SECTION__KEY)
3. ``.affected.yaml`` at the repository root
4. Model defaults
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from affected.config.models import AffectedConfig, GitHubConfig, LayoutConfig, LoggingConfig
from affected.core.errors import ConfigError

REPO_CONFIG_NAME = ".affected.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    """Parse a YAML mapping; a missing file is an empty mapping."""
    if not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


class _RepoYamlSource(PydanticBaseSettingsSource):
    """Lowest-priority source: the repository's YAML file, read once."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path) -> None:
        super().__init__(settings_cls)
        self._data = _load_yaml(path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:  # noqa: ARG002
        value = self._data.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return {name: value for name, value in self._data.items() if value is not None}


def _settings_for(yaml_path: Path) -> type[BaseSettings]:
    class AffectedSettings(BaseSettings):
        """Env vars: AFFECTED__LAYOUT__WORKSPACE_CONFIG, AFFECTED__GITHUB__TOKEN, ..."""

        model_config = SettingsConfigDict(
            env_prefix="AFFECTED__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        github: GitHubConfig = GitHubConfig()
        layout: LayoutConfig = LayoutConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (init_settings, env_settings, _RepoYamlSource(settings_cls, yaml_path))

    return AffectedSettings


def load_config(repo_root: Path | None = None, **overrides: Any) -> AffectedConfig:
    """Resolve the run configuration.

    Args:
        repo_root: Directory holding ``.affected.yaml`` (default: cwd).
        **overrides: Per-section values, e.g. ``layout={"source": "local"}``.
            Sections merge field by field with the lower-priority sources.

    Raises:
        ConfigError: Unparsable YAML, or a value that fails validation.
    """
    yaml_path = (repo_root or Path.cwd()) / REPO_CONFIG_NAME
    try:
        settings = _settings_for(yaml_path)(**overrides)
        return AffectedConfig.model_validate(settings.model_dump())
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ConfigError.invalid_value(field, first.get("input"), first["msg"]) from e
