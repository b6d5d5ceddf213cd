# stirling_init/errors.py
# -*- coding: utf-8 -*-
"""
Errors that stop the container from starting.

Every fatal condition raised by a step is a ``BootstrapError``; the
orchestrator turns it into a single error line on stderr and exit status 1.
"""

EXIT_FATAL: int = 1
EXIT_CONFIGURATION: int = 2
EXIT_NOT_EXECUTABLE: int = 126
EXIT_COMMAND_NOT_FOUND: int = 127


class BootstrapError(Exception):
    """Raised when a preparation step cannot complete."""

    def __init__(self, step: str, detail: str):
        self.step = step
        self.detail = detail
        super().__init__(f"{step}: {detail}")


class ConfigurationError(BootstrapError):
    """The settings could not be loaded or validated."""

    def __init__(self, detail: str):
        super().__init__("configuration", detail)


class LanguagePackError(BootstrapError):
    """Refreshing the package index or installing a language pack failed."""

    def __init__(self, detail: str, language_code: str = ""):
        self.language_code = language_code
        super().__init__("language packs", detail)


class ArtifactDownloadError(BootstrapError):
    """The security JAR could not be fetched from any URL."""

    def __init__(self, detail: str, urls=()):
        self.urls = list(urls)
        super().__init__("security jar", detail)


class HandoffError(BootstrapError):
    """The final command could not be executed."""

    def __init__(self, detail: str, exit_code: int = EXIT_FATAL):
        self.exit_code = exit_code
        super().__init__("handoff", detail)
