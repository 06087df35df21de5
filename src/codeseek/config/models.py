"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (CODESEEK__SECTION__KEY)
3. Repo YAML (.codeseek/config.yaml)
4. Global YAML (~/.config/codeseek/config.yaml)
5. Built-in defaults (this file)

Examples:
    CODESEEK__LOGGING__LEVEL=DEBUG
    CODESEEK__LIMITS__SEARCH_DEFAULT=5
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from codeseek.config.constants import SEARCH_MAX_LIMIT, SEMANTIC_TOP_K_DEFAULT

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


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
        CODESEEK__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every extraction fallback.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class IndexConfig(BaseModel):
    """Workspace scanning configuration for the local file provider.

    Env vars:
        CODESEEK__INDEX__INCLUDE_HIDDEN: Include dotfiles/dotdirs in the file tree
    """

    excluded_dirs: list[str] = Field(
        default_factory=lambda: ["node_modules", "dist", "build", "coverage"],
        description="Directory names never descended into when building a file tree.",
    )
    include_hidden: bool = Field(
        default=False,
        description="Include entries whose name starts with a dot.",
    )


class LimitsConfig(BaseModel):
    """Search limit defaults.

    See constants.py for the hard maximum that cannot be exceeded.

    Env vars:
        CODESEEK__LIMITS__SEARCH_DEFAULT: Default number of search results
        CODESEEK__LIMITS__SEMANTIC_CANDIDATES: Semantic candidates kept before merging
    """

    search_default: int = Field(
        default=SEARCH_MAX_LIMIT,
        description="Default number of results returned by search.",
    )
    semantic_candidates: int = Field(
        default=SEMANTIC_TOP_K_DEFAULT,
        description="Top-K semantic candidates merged with keyword/context signals.",
    )

    @field_validator("search_default")
    @classmethod
    def validate_search_default(cls, v: int) -> int:
        if not (1 <= v <= SEARCH_MAX_LIMIT):
            raise ValueError(f"search_default must be 1-{SEARCH_MAX_LIMIT}, got {v}")
        return v

    @field_validator("semantic_candidates")
    @classmethod
    def validate_semantic_candidates(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"semantic_candidates must be positive, got {v}")
        return v


class CodeSeekConfig(BaseModel):
    """Root configuration for codeseek."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
