"""
Centralized configuration for bundlepack.

Uses Pydantic BaseSettings for environment variable integration
and validation. All configurable values should be defined here.

Configuration sources (in order of precedence):
1. Explicit constructor arguments (command-line options)
2. YAML config file (``--config`` or BUNDLEPACK_CONFIG_FILE)
3. Environment variables (BUNDLEPACK_*)
4. .env file
5. Default values

Example:
    from bundlepack.config import get_config

    config = get_config()
    print(config.local_repository)  # From BUNDLEPACK_LOCAL_REPOSITORY or default

    # Override at runtime
    config = get_config(interactive_mode=False)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


CONFIG_FILE_ENV = "BUNDLEPACK_CONFIG_FILE"


class BundlePackConfig(BaseSettings):
    """
    Central configuration for bundlepack.

    All settings can be overridden via environment variables
    prefixed with BUNDLEPACK_.

    Example:
        export BUNDLEPACK_LOCAL_REPOSITORY=/srv/m2/repository
        export BUNDLEPACK_INTERACTIVE_MODE=false
    """

    model_config = SettingsConfigDict(
        env_prefix="BUNDLEPACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Artifact lookup
    local_repository: str = Field(
        default="~/.m2/repository",
        description="Root of the local artifact repository (Maven 2 layout)",
    )

    # Output
    basedir: str = Field(
        default=".",
        description="Directory where the upload bundle is created",
    )
    archive_format: Literal["jar", "zip"] = Field(
        default="jar",
        description="Bundle archive format; also the bundle file extension",
    )

    # Interaction
    interactive_mode: bool = Field(
        default=True,
        description="Prompt for missing values; false means batch mode",
    )

    # Descriptor rewrite
    atomic_rewrite: bool = Field(
        default=True,
        description="Rewrite the descriptor via temp file + rename",
    )
    backup_descriptor: bool = Field(
        default=False,
        description="Keep a .bak copy of the descriptor before rewriting it",
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="info",
        description="Logging level for bundlepack",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log output format (json for log shipping, text for console)",
    )

    @field_validator("local_repository", "basedir")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ and environment variables in paths."""
        return os.path.expanduser(os.path.expandvars(v))

    @property
    def batch_mode(self) -> bool:
        return not self.interactive_mode

    def get_repository_path(self) -> Path:
        return Path(self.local_repository)

    def get_output_dir(self) -> Path:
        return Path(self.basedir)


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load configuration values from a YAML file.

    Keys use the field names of BundlePackConfig (``local_repository``,
    ``interactive_mode``...); dashes are accepted in place of underscores.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the document is not a mapping
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

    return {str(key).replace("-", "_"): value for key, value in data.items()}


# Global singleton
_config: Optional[BundlePackConfig] = None


def get_config(config_file: Optional[Union[str, Path]] = None, **overrides) -> BundlePackConfig:
    """
    Get the global configuration instance.

    Creates a singleton on first call. Subsequent calls return
    the same instance unless a config file or overrides are provided.

    Args:
        config_file: Optional YAML file; falls back to BUNDLEPACK_CONFIG_FILE
        **overrides: Override any config values (``None`` values are ignored)

    Returns:
        BundlePackConfig instance
    """
    global _config

    overrides = {key: value for key, value in overrides.items() if value is not None}
    config_file = config_file or os.environ.get(CONFIG_FILE_ENV)

    if config_file or overrides or _config is None:
        values: Dict[str, Any] = {}
        if config_file:
            values.update(load_config_file(config_file))
        values.update(overrides)
        _config = BundlePackConfig(**values)

    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
