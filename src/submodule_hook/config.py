"""Hook configuration read once from the process environment."""

import os
from pathlib import Path
from typing import Mapping, Optional

from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

HASH_LENGTH_VAR = "SUBMODULE_HOOK_HASH_LENGTH"
MAX_COMMITS_VAR = "SUBMODULE_HOOK_MAX_COMMIT_SHOWN"
LOG_LEVEL_VAR = "SUBMODULE_HOOK_LOG_LEVEL"
LOG_FILE_VAR = "SUBMODULE_HOOK_LOG_FILE"

DEFAULT_HASH_LENGTH = 8

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class HookConfig(BaseModel):
    """Settings that shape the generated submodule block."""

    hash_length: int = Field(default=DEFAULT_HASH_LENGTH, ge=0)
    max_commits_shown: Optional[int] = Field(default=None, ge=1)  # None = unbounded
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    model_config = {"frozen": True}

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HookConfig":
        """Build a config from environment variables.

        Each variable is validated on its own; a missing, empty or invalid
        value keeps that field's default instead of failing the commit.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            Populated HookConfig
        """
        if environ is None:
            environ = os.environ

        fields = {
            "hash_length": HASH_LENGTH_VAR,
            "max_commits_shown": MAX_COMMITS_VAR,
            "log_level": LOG_LEVEL_VAR,
            "log_file": LOG_FILE_VAR,
        }

        values = {}
        for field_name, var in fields.items():
            raw = environ.get(var, "").strip()
            if not raw:
                continue
            try:
                cls(**{field_name: raw})
            except ValidationError:
                logger.warning(f"Ignoring invalid {var}={raw!r}, using default")
                continue
            values[field_name] = raw

        return cls(**values)
