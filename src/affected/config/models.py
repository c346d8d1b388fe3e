"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config() (CLI options)
2. Environment variables (AFFECTED__SECTION__KEY)
3. Repo YAML (.affected.yaml)
4. Built-in defaults (this file)

Environment Variable Format:
    AFFECTED__<SECTION>__<KEY>=<VALUE>

Examples:
    AFFECTED__LOGGING__LEVEL=DEBUG
    AFFECTED__GITHUB__API_URL=https://github.example.com/api/v3
    AFFECTED__LAYOUT__BASE_DIRECTORIES="apps/* libs/* tools/*"
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
ChangeSourceKind = Literal["github", "local"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        AFFECTED__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG also logs every changed file.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class GitHubConfig(BaseModel):
    """Commit comparison API configuration.

    Env vars:
        AFFECTED__GITHUB__API_URL: REST API root (GitHub Enterprise uses /api/v3)
        AFFECTED__GITHUB__TOKEN: Token sent as a bearer credential
        AFFECTED__GITHUB__TIMEOUT_SEC: Request timeout
    """

    api_url: str = Field(
        default="https://api.github.com",
        description="REST API root used for the compare call.",
    )
    token: str | None = Field(
        default=None,
        description="API token. Falls back to GITHUB_TOKEN in the CLI.",
    )
    timeout_sec: float = Field(
        default=30.0,
        description="Timeout for the compare request.",
    )

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v


class LayoutConfig(BaseModel):
    """Where projects live in the monorepo.

    Env vars:
        AFFECTED__LAYOUT__BASE_DIRECTORIES: Space-separated directory globs
        AFFECTED__LAYOUT__WORKSPACE_CONFIG: Path to nx.json (overrides globs)
        AFFECTED__LAYOUT__SOURCE: Where the changed-file list comes from
    """

    base_directories: str = Field(
        default="apps/* libs/*",
        description="Space-separated globs expanded to project directories. "
        "Ignored when workspace_config is set.",
    )
    workspace_config: str | None = Field(
        default=None,
        description="Workspace layout file (nx.json shape). Relative to the repo root.",
    )
    apps_dir: str = Field(
        default="apps",
        description="Apps root used to attribute directories found via base_directories.",
    )
    libs_dir: str = Field(
        default="libs",
        description="Libs root used to attribute directories found via base_directories.",
    )
    source: ChangeSourceKind = Field(
        default="github",
        description="'github' calls the compare API; 'local' diffs the checked-out repository.",
    )

    @field_validator("apps_dir", "libs_dir")
    @classmethod
    def normalize_root(cls, v: str) -> str:
        v = v.strip().strip("/")
        if not v:
            raise ValueError("Root directory must not be empty")
        return v


class AffectedConfig(BaseModel):
    """Root configuration for affected.

    All settings can be configured via:
    1. Environment variables: AFFECTED__SECTION__KEY
    2. Repo YAML (.affected.yaml)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
