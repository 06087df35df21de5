"""Config module exports."""

from codeseek.config.loader import load_config
from codeseek.config.models import (
    CodeSeekConfig,
    IndexConfig,
    LimitsConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "load_config",
    "CodeSeekConfig",
    "IndexConfig",
    "LimitsConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
