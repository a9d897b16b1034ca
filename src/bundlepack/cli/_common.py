"""Helpers shared by the CLI commands."""

from typing import Any, Optional

import click
from pydantic import ValidationError

from bundlepack.config import BundlePackConfig, get_config
from bundlepack.logger import configure_logging


def load_config(config_file: Optional[str], **overrides: Any) -> BundlePackConfig:
    """Build the run configuration and set up logging from it."""
    try:
        config = get_config(config_file=config_file, **overrides)
    except (OSError, ValueError, ValidationError) as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")

    configure_logging(level=config.log_level, fmt=config.log_format)
    return config


def config_file_option(func):
    return click.option(
        "--config",
        "config_file",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="YAML file with configuration values.",
    )(func)


def repository_option(func):
    return click.option(
        "--local-repository",
        type=click.Path(file_okay=False),
        default=None,
        help="Local repository root (default: ~/.m2/repository).",
    )(func)
