# common/orchestrator.py
# -*- coding: utf-8 -*-
"""
Centralized orchestrator for running an ordered sequence of init steps.
"""

import logging
import sys
from typing import Any, Callable, Dict, List, Optional

from stirling_init.errors import EXIT_FATAL, BootstrapError


class Orchestrator:
    """Runs named tasks in order and stops the process on a fatal failure."""

    def __init__(
        self,
        app_settings: Any,
        orchestrator_logger: Optional[logging.Logger] = None,
    ):
        """
        Initializes the Orchestrator.

        Args:
            app_settings: The settings object handed to every task.
            orchestrator_logger: An optional logger instance.
        """
        self.app_settings = app_settings
        self.logger = orchestrator_logger or logging.getLogger(__name__)
        self.tasks: List[Dict[str, Any]] = []

    def add_task(
        self,
        name: str,
        func: Callable[[Any, Optional[logging.Logger]], Any],
        fatal: bool = True,
    ) -> None:
        """
        Adds a task to the execution list.

        Args:
            name: A human-readable name for the task.
            func: Called as ``func(app_settings, current_logger)``.
            fatal: If True, a failure in this task ends the process.
        """
        self.tasks.append({"name": name, "func": func, "fatal": fatal})
        self.logger.debug(f"Task '{name}' added to the queue.")

    def run(self) -> bool:
        """
        Executes all added tasks in sequence.

        A fatal task failure exits the process with status 1. A non-fatal one
        is logged and the run carries on.

        Returns:
            True if every task succeeded, False if a non-fatal task failed.
        """
        all_succeeded = True
        for i, task in enumerate(self.tasks):
            task_name = task["name"]
            self.logger.debug(f"--- Stage {i + 1}: {task_name} ---")

            try:
                task["func"](self.app_settings, self.logger)
            except BootstrapError as e:
                self._handle_failure(task, f"{e.detail}", exc_info=False)
                all_succeeded = False
            except Exception as e:
                self._handle_failure(
                    task, f"Unexpected error: {e}", exc_info=True
                )
                all_succeeded = False

        return all_succeeded

    def _handle_failure(
        self, task: Dict[str, Any], message: str, exc_info: bool
    ) -> None:
        if task.get("fatal", True):
            self.logger.error(message, exc_info=exc_info)
            sys.exit(EXIT_FATAL)
        self.logger.warning(
            f"Task '{task['name']}' failed and is non-fatal, continuing: {message}",
            exc_info=exc_info,
        )
