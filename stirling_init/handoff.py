# stirling_init/handoff.py
# -*- coding: utf-8 -*-
"""
Replaces the init process with the container's main command.

``os.execvp`` keeps the PID, so the application becomes the process that
receives the container's signals; nothing runs after a successful exec.
"""

import logging
import os
import subprocess
from typing import NoReturn, Optional, Sequence

from common.command_utils import get_symbols, log_message
from common.core_utils import flush_logging
from stirling_init.config_models import AppSettings
from stirling_init.errors import (
    EXIT_COMMAND_NOT_FOUND,
    EXIT_FATAL,
    EXIT_NOT_EXECUTABLE,
    HandoffError,
)

module_logger = logging.getLogger(__name__)


def exec_command(
    command: Sequence[str],
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> NoReturn:
    """
    Execs ``command`` in place of the current process.

    Raises:
        HandoffError: The command is empty, missing or cannot be executed.
        The error's ``exit_code`` follows the shell convention: 127 for a
        missing command, 126 for one that is not executable, 1 otherwise.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    argv = list(command)
    if not argv:
        raise HandoffError("No command supplied.", exit_code=EXIT_FATAL)

    log_message(
        f"{symbols.get('rocket', '🚀')} Starting main application: {subprocess.list2cmdline(argv)}",
        "info",
        logger_to_use,
        app_settings,
    )
    flush_logging()

    try:
        os.execvp(argv[0], argv)
    except FileNotFoundError as e:
        raise HandoffError(
            f"Command not found: {argv[0]} ({e.strerror})",
            exit_code=EXIT_COMMAND_NOT_FOUND,
        ) from e
    except PermissionError as e:
        raise HandoffError(
            f"Command not executable: {argv[0]} ({e.strerror})",
            exit_code=EXIT_NOT_EXECUTABLE,
        ) from e
    except OSError as e:
        raise HandoffError(
            f"Failed to execute {argv[0]}: {e}", exit_code=EXIT_FATAL
        ) from e
