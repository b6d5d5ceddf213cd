# stirling_init/security_jar.py
# -*- coding: utf-8 -*-
"""
Fetches the security-enabled Stirling-PDF JAR and points app.jar at it.
"""

import logging
from typing import List, Optional

from common.command_utils import get_symbols, log_message
from common.file_utils import replace_with_symlink
from common.network_utils import download_file
from stirling_init.config_models import ALPHA_VERSION_TAG, AppSettings
from stirling_init.errors import ArtifactDownloadError

module_logger = logging.getLogger(__name__)


def alternate_version_tag(version_tag: str) -> str:
    """
    The same release tag with its leading 'v' toggled.

    Release assets are published under either 'v1.2.3' or '1.2.3' depending
    on the release, so the fallback tries the other spelling.
    """
    if version_tag.startswith("v") and len(version_tag) > 1:
        return version_tag[1:]
    return f"v{version_tag}"


def build_download_urls(app_settings: AppSettings) -> List[str]:
    """Primary and fallback download URLs for the configured version tag."""
    template = app_settings.security_jar_url_template
    tag = app_settings.version_tag
    return [
        template.format(version_tag=tag),
        template.format(version_tag=alternate_version_tag(tag)),
    ]


def fetch_security_jar(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Downloads the security JAR when DOCKER_ENABLE_SECURITY is 'true' and a
    version tag is set, then replaces the application entry point with a
    symlink to it.

    Nothing is downloaded for the alpha channel, and an existing JAR is
    reused as-is (the entry point is not touched in that case).

    Returns:
        True if a JAR was downloaded and the entry point swapped.

    Raises:
        ArtifactDownloadError: Neither the primary nor the fallback URL
        produced the file.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    if not app_settings.security_enabled:
        log_message(
            "Security not enabled (DOCKER_ENABLE_SECURITY != 'true'). Skipping security JAR.",
            "info",
            logger_to_use,
            app_settings,
        )
        return False
    if not app_settings.version_tag:
        log_message(
            "Security enabled but VERSION_TAG is missing. Skipping download.",
            "info",
            logger_to_use,
            app_settings,
        )
        return False
    if app_settings.version_tag == ALPHA_VERSION_TAG:
        log_message(
            f"Skipping security JAR download: VERSION_TAG is '{ALPHA_VERSION_TAG}'.",
            "info",
            logger_to_use,
            app_settings,
        )
        return False

    security_jar = app_settings.security_jar
    if security_jar.is_file():
        log_message(
            f"Security JAR already exists: {security_jar}. Skipping download.",
            "info",
            logger_to_use,
            app_settings,
        )
        return False

    primary_url, fallback_url = build_download_urls(app_settings)
    log_message(
        f"Downloading security-enabled JAR from: {primary_url}",
        "info",
        logger_to_use,
        app_settings,
    )
    if download_file(
        primary_url,
        security_jar,
        timeout=app_settings.download_timeout,
        current_logger=logger_to_use,
    ):
        log_message(
            f"{symbols.get('success', '✅')} Download successful: {security_jar}",
            "info",
            logger_to_use,
            app_settings,
        )
    else:
        log_message(
            f"First download failed. Trying fallback URL: {fallback_url}",
            "warning",
            logger_to_use,
            app_settings,
        )
        if not download_file(
            fallback_url,
            security_jar,
            timeout=app_settings.download_timeout,
            current_logger=logger_to_use,
        ):
            raise ArtifactDownloadError(
                "Failed to download security JAR from both primary and fallback URLs.",
                urls=[primary_url, fallback_url],
            )
        log_message(
            f"{symbols.get('success', '✅')} Download successful from fallback URL: {fallback_url}",
            "info",
            logger_to_use,
            app_settings,
        )

    if not security_jar.is_file():
        raise ArtifactDownloadError(
            f"Download reported success but {security_jar} is missing.",
            urls=[primary_url, fallback_url],
        )

    log_message(
        f"Replacing {app_settings.app_jar} with symlink to {security_jar}",
        "info",
        logger_to_use,
        app_settings,
    )
    replace_with_symlink(
        app_settings.app_jar,
        security_jar,
        app_settings,
        current_logger=logger_to_use,
    )
    return True
