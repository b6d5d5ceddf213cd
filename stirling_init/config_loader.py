# stirling_init/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the container init.

Settings are resolved with the following order of precedence:
1. Pydantic Model Defaults
2. Environment Variables (via Pydantic's BaseSettings)
3. YAML Configuration File (``--config`` or ``INIT_CONFIG_FILE``)
4. Command-Line Arguments
"""

import argparse
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError
from pydantic_settings import SettingsError

from .config_models import AppSettings
from .errors import ConfigurationError

module_logger = logging.getLogger(__name__)

CONFIG_FILE_ENV_VAR = "INIT_CONFIG_FILE"

# argparse destination -> AppSettings field
CLI_FIELD_MAP: Dict[str, str] = {
    "log_level": "log_level",
}


def load_yaml_config(
    config_file_path: Path,
    current_logger: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    """
    Reads a YAML mapping of settings field names to values.

    An empty file yields an empty mapping.

    Raises:
        ConfigurationError: The file is missing, unreadable, not valid YAML
        or not a mapping at the top level.
    """
    logger_to_use = current_logger if current_logger else module_logger

    if not config_file_path.is_file():
        raise ConfigurationError(
            f"Configuration file '{config_file_path}' not found."
        )
    try:
        with open(config_file_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Could not parse YAML config file '{config_file_path}': {e}"
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Could not read config file '{config_file_path}': {e}"
        ) from e

    if yaml_data is None:
        return {}
    if not isinstance(yaml_data, dict):
        raise ConfigurationError(
            f"Config file '{config_file_path}' does not contain a YAML dictionary."
        )

    logger_to_use.debug(f"Loaded configuration from {config_file_path}")
    return yaml_data


def load_app_settings(
    cli_args: Optional[argparse.Namespace] = None,
    config_file_path: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Builds the frozen settings object.

    Args:
        cli_args: Parsed command-line arguments. A ``config`` attribute names
            the YAML file; attributes listed in ``CLI_FIELD_MAP`` override
            settings when not None.
        config_file_path: YAML file used when ``cli_args`` names none. Falls
            back to the ``INIT_CONFIG_FILE`` environment variable.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        AppSettings: the resolved configuration.

    Raises:
        ConfigurationError: The YAML file or a resolved value is invalid.
    """
    logger_to_use = current_logger if current_logger else module_logger
    overrides: Dict[str, Any] = {}

    yaml_path = getattr(cli_args, "config", None) if cli_args else None
    yaml_path = yaml_path or config_file_path or os.environ.get(
        CONFIG_FILE_ENV_VAR
    )
    if yaml_path:
        overrides.update(load_yaml_config(Path(yaml_path), logger_to_use))

    if cli_args:
        for cli_key, field_name in CLI_FIELD_MAP.items():
            cli_value = getattr(cli_args, cli_key, None)
            if cli_value is not None:
                overrides[field_name] = cli_value

    try:
        # Init kwargs take precedence over environment variables.
        return AppSettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed: {e}"
        ) from e
    except SettingsError as e:
        raise ConfigurationError(
            f"Could not read settings from the environment: {e}"
        ) from e
