"""Runtime settings for repo-sync."""
import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from repo_sync.core.errors import ConfigError

# Environment variables that override values from the config file
ENV_OVERRIDES = {
    "git_executable": "REPO_SYNC_GIT",
    "remote": "REPO_SYNC_REMOTE",
    "log_level": "REPO_SYNC_LOG_LEVEL",
}


class SyncConfig(BaseModel):
    """Settings shared by every repository handle."""

    git_executable: str = Field(default="git", description="git executable name or path")
    remote: str = Field(default="origin", description="Remote to clone from and sync against")
    log_level: str = Field(default="INFO", description="Logging level name")

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "git_executable": "/usr/bin/git",
                "remote": "origin",
                "log_level": "DEBUG",
            }
        },
    )

    @field_validator("git_executable", "remote")
    @classmethod
    def validate_nonblank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        if v != v.strip():
            raise ValueError(f"must not have surrounding whitespace; got '{v}'")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize to an upper-case level name known to logging."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level '{v}'")
        return level

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "SyncConfig":
        """Load settings from an optional JSON file plus environment overrides.

        Raises:
            ConfigError: If the file is missing, not JSON, or holds invalid values
        """
        data = {}
        if path is not None:
            path = Path(path)
            if not path.exists():
                raise ConfigError(f"config file not found: {path}")
            try:
                data = json.loads(path.read_text())
            except json.JSONDecodeError as e:
                raise ConfigError(f"invalid config file {path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"invalid config file {path}: expected a JSON object")

        for field, env_var in ENV_OVERRIDES.items():
            if env_var in os.environ:
                data[field] = os.environ[env_var]

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"invalid configuration: {e}") from e
