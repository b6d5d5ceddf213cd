# common/debian/apt_manager.py
# -*- coding: utf-8 -*-
import logging
from pathlib import Path
from typing import Optional

from common.command_utils import command_exists, run_elevated_command
from common.file_utils import clear_directory_contents
from stirling_init.config_models import AppSettings


class AptManager:
    """
    A thin manager for Debian apt packages using the command-line tools.

    ``update`` and ``install`` raise ``subprocess.CalledProcessError`` on
    failure; callers decide whether that is fatal.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initializes the AptManager.
        Args:
            logger: An optional logging object.
        """
        self.logger = logger or logging.getLogger(__name__)
        if not command_exists("apt-get"):
            self.logger.critical(
                "'apt-get' command not found. This manager cannot function."
            )
            raise FileNotFoundError(
                "'apt-get' not found. Is this a Debian-based system?"
            )

    def update(self, app_settings: AppSettings, quiet: bool = True) -> None:
        """
        Refreshes the package index with 'apt-get update'.

        Args:
            app_settings: The application settings.
            quiet: Run with ``-qq`` and keep the output out of the log.
        """
        self.logger.info("Updating package list...")
        cmd = ["apt-get", "update"]
        if quiet:
            cmd.append("-qq")
        run_elevated_command(
            cmd,
            app_settings,
            capture_output=quiet,
            current_logger=self.logger,
        )

    def install(
        self,
        package: str,
        app_settings: AppSettings,
        no_install_recommends: bool = True,
    ) -> None:
        """
        Installs a single package with 'apt-get install -y'.

        Args:
            package: The package name.
            app_settings: The application settings.
            no_install_recommends: Pass ``--no-install-recommends``.
        """
        cmd = ["apt-get", "install", "-y"]
        if no_install_recommends:
            cmd.append("--no-install-recommends")
        cmd.append(package)
        run_elevated_command(cmd, app_settings, current_logger=self.logger)

    def clean(self, app_settings: AppSettings) -> None:
        """Clears the local repository of retrieved package files."""
        self.logger.info("Cleaning up APT cache...")
        run_elevated_command(
            ["apt-get", "clean"], app_settings, current_logger=self.logger
        )

    def clear_lists(self, lists_dir: Path, app_settings: AppSettings) -> int:
        """
        Removes the downloaded package lists under ``lists_dir``.

        Returns:
            The number of top-level entries removed.
        """
        return clear_directory_contents(
            lists_dir, app_settings, current_logger=self.logger
        )
