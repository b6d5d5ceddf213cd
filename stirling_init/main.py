# stirling_init/main.py
# -*- coding: utf-8 -*-
"""
Command-line entry point: prepare the container, then exec the application.
"""

import argparse
import logging
import sys
from typing import List, Optional

from common.core_utils import setup_logging
from common.orchestrator import Orchestrator
from stirling_init.config_loader import load_app_settings
from stirling_init.config_models import AppSettings
from stirling_init.errors import (
    EXIT_CONFIGURATION,
    ConfigurationError,
    HandoffError,
)
from stirling_init.handoff import exec_command
from stirling_init.language_packs import install_language_packs
from stirling_init.ocr_staging import stage_ocr_resources
from stirling_init.security_jar import fetch_security_jar

logger = logging.getLogger("stirling_init")


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="stirling-init",
        description=(
            "Prepare the Stirling-PDF container (Tesseract data, language "
            "packs, security JAR) and exec COMMAND."
        ),
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML file with settings overrides (also INIT_CONFIG_FILE).",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Overrides LOG_LEVEL.",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command (and its arguments) to run once the container is ready.",
    )
    parsed = parser.parse_args(args)
    if parsed.command and parsed.command[0] == "--":
        parsed.command = parsed.command[1:]
    return parsed


def configure_logging(app_settings: AppSettings) -> None:
    setup_logging(
        log_level=app_settings.log_level,
        log_file=app_settings.log_file,
        log_prefix=app_settings.log_prefix,
        json_output=True if app_settings.log_format == "json" else None,
        symbols=app_settings.symbols,
    )


def build_orchestrator(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> Orchestrator:
    """The preparation steps, in the order they must run."""
    orchestrator = Orchestrator(app_settings, current_logger or logger)
    orchestrator.add_task("Stage Tesseract OCR data", stage_ocr_resources)
    orchestrator.add_task("Install Tesseract language packs", install_language_packs)
    orchestrator.add_task("Fetch security JAR", fetch_security_jar)
    return orchestrator


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        app_settings = load_app_settings(cli_args=args)
    except ConfigurationError as e:
        setup_logging()
        logger.error(e.detail)
        return EXIT_CONFIGURATION

    configure_logging(app_settings)
    build_orchestrator(app_settings, logger).run()

    if not args.command:
        logger.info("No command supplied; nothing to start.")
        return 0

    try:
        exec_command(args.command, app_settings, logger)
    except HandoffError as e:
        logger.error(e.detail)
        return e.exit_code
    return 0


if __name__ == "__main__":
    sys.exit(main())
