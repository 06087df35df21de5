"""Core module exports."""

from codeseek.core.errors import (
    CodeSeekError,
    ConfigError,
    ErrorCode,
    FetchError,
    IndexingError,
)
from codeseek.core.logging import (
    clear_run_id,
    configure_logging,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "CodeSeekError",
    "ConfigError",
    "ErrorCode",
    "FetchError",
    "IndexingError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_run_id",
    "set_run_id",
]
