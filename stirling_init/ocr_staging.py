# stirling_init/ocr_staging.py
# -*- coding: utf-8 -*-
"""
Copies the image's original Tesseract data into the runtime data directory.

The runtime directory is usually a mounted volume: files the user already
placed there always win over the defaults shipped in the image.
"""

import logging
from typing import Optional

from common.command_utils import get_symbols, log_message
from common.file_utils import (
    CopyResult,
    copy_tree_no_clobber,
    directory_has_entries,
)
from stirling_init.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def stage_ocr_resources(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> CopyResult:
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    source_dir = app_settings.tesseract_source_dir
    target_dir = app_settings.tesseract_target_dir

    log_message(
        "Copying original Tesseract OCR files (non-destructive copy)",
        "info",
        logger_to_use,
        app_settings,
    )
    target_dir.mkdir(parents=True, exist_ok=True)

    if not directory_has_entries(source_dir):
        log_message(
            f"No original Tesseract OCR files found in {source_dir} or directory empty. Skipping copy.",
            "info",
            logger_to_use,
            app_settings,
        )
        return CopyResult(copied=0, skipped=0)

    result = copy_tree_no_clobber(
        source_dir, target_dir, app_settings, current_logger=logger_to_use
    )
    log_message(
        f"{symbols.get('success', '✅')} Tesseract OCR original files copied successfully "
        f"({result.copied} copied, {result.skipped} already present).",
        "info",
        logger_to_use,
        app_settings,
    )
    return result
