# stirling_init/language_packs.py
# -*- coding: utf-8 -*-
"""
Installs the Tesseract language packs listed in TESSERACT_LANGS.

Packages are installed one at a time, in the order given. The first failure
aborts the container start with an error naming the bad code.
"""

import logging
import subprocess
from typing import List, Optional

from common.command_utils import get_symbols, log_message
from common.debian.apt_manager import AptManager
from stirling_init.config_models import AppSettings
from stirling_init.errors import LanguagePackError

module_logger = logging.getLogger(__name__)


def install_language_packs(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    apt_manager: Optional[AptManager] = None,
) -> List[str]:
    """
    Installs ``tesseract-ocr-<code>`` for every configured language code.

    Args:
        app_settings: Settings holding the raw language list.
        current_logger: Logger to use instead of the module logger.
        apt_manager: Manager to use; one is created when needed.

    Returns:
        The packages installed, in order. Empty when no languages were
        requested.

    Raises:
        LanguagePackError: The index refresh or any install failed, or apt
        is unavailable.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    if not app_settings.tesseract_langs:
        log_message(
            "No Tesseract languages specified (TESSERACT_LANGS is empty or unset). Skipping language installation.",
            "info",
            logger_to_use,
            app_settings,
        )
        return []

    log_message(
        f"Tesseract languages requested: {app_settings.tesseract_langs}",
        "info",
        logger_to_use,
        app_settings,
    )

    if apt_manager is None:
        try:
            apt_manager = AptManager(logger=logger_to_use)
        except FileNotFoundError as e:
            raise LanguagePackError(str(e)) from e

    try:
        apt_manager.update(app_settings)
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        raise LanguagePackError(f"Failed to update package list: {e}") from e

    installed: List[str] = []
    for raw_entry in app_settings.tesseract_langs.split(","):
        code = raw_entry.strip()
        if not code:
            log_message(
                "Skipping empty language entry.",
                "info",
                logger_to_use,
                app_settings,
            )
            continue

        package = app_settings.package_name(code)
        log_message(
            f"{symbols.get('package', '📦')} Installing Tesseract language: {code}",
            "info",
            logger_to_use,
            app_settings,
        )
        try:
            apt_manager.install(package, app_settings)
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            raise LanguagePackError(
                f"Failed to install {package}. Check language code '{code}'.",
                language_code=code,
            ) from e
        log_message(
            f"{symbols.get('success', '✅')} Successfully installed {package}",
            "info",
            logger_to_use,
            app_settings,
        )
        installed.append(package)

    apt_manager.clean(app_settings)
    apt_manager.clear_lists(app_settings.apt_lists_dir, app_settings)
    return installed
