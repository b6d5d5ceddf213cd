# stirling_init/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for the container init configuration.

The settings are read once at process start (model defaults, then
environment variables) and frozen; every step receives the same instance.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Default Static Values (can be overridden by env/config file/cli) ---
TESSERACT_SOURCE_DIR_DEFAULT: str = "/usr/share/tesseract-ocr-original"
TESSERACT_TARGET_DIR_DEFAULT: str = "/usr/share/tesseract-ocr"
TESSERACT_PACKAGE_PREFIX_DEFAULT: str = "tesseract-ocr-"
APT_LISTS_DIR_DEFAULT: str = "/var/lib/apt/lists"

SECURITY_JAR_DEFAULT: str = "app-security.jar"
APP_JAR_DEFAULT: str = "app.jar"
SECURITY_JAR_URL_TEMPLATE_DEFAULT: str = (
    "https://github.com/Frooodle/Stirling-PDF/releases/download/"
    "{version_tag}/Stirling-PDF-with-login.jar"
)
# Reserved release channel for which the security JAR is never downloaded.
ALPHA_VERSION_TAG: str = "alpha"

LOG_LEVEL_DEFAULT: str = "INFO"
LOG_FORMAT_DEFAULT: str = "text"

SYMBOLS_DEFAULT: Dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "rocket": "🚀",
    "sparkles": "✨",
    "critical": "🔥",
    "debug": "🐛",
}


class AppSettings(BaseSettings):
    """Container init settings."""

    model_config = SettingsConfigDict(
        extra="ignore", frozen=True, env_ignore_empty=True
    )

    tesseract_langs: str = Field(
        default="",
        description="Comma-separated Tesseract language codes to install (e.g. 'fra,deu').",
    )
    docker_enable_security: str = Field(
        default="",
        description="Set to 'true' to fetch and use the security-enabled JAR.",
    )
    version_tag: str = Field(
        default="",
        description="Release tag used to build the security JAR download URL.",
    )

    tesseract_source_dir: Path = Field(
        default=Path(TESSERACT_SOURCE_DIR_DEFAULT),
        description="Read-only directory holding the image's original Tesseract data.",
    )
    tesseract_target_dir: Path = Field(
        default=Path(TESSERACT_TARGET_DIR_DEFAULT),
        description="Tesseract data directory used at runtime (usually a volume).",
    )
    tesseract_package_prefix: str = Field(
        default=TESSERACT_PACKAGE_PREFIX_DEFAULT,
        description="Debian package name prefix for a language pack.",
    )
    apt_lists_dir: Path = Field(
        default=Path(APT_LISTS_DIR_DEFAULT),
        description="Directory whose contents are removed after installing language packs.",
    )

    security_jar: Path = Field(
        default=Path(SECURITY_JAR_DEFAULT),
        description="Where the downloaded security-enabled JAR is stored.",
    )
    app_jar: Path = Field(
        default=Path(APP_JAR_DEFAULT),
        description="Application entry point replaced by a symlink to the security JAR.",
    )
    security_jar_url_template: str = Field(
        default=SECURITY_JAR_URL_TEMPLATE_DEFAULT,
        description="Download URL template; '{version_tag}' is substituted.",
    )
    download_timeout: Optional[float] = Field(
        default=None,
        description="Seconds to wait on the download server. None waits indefinitely.",
    )

    log_level: str = Field(default=LOG_LEVEL_DEFAULT, description="Logging level name.")
    log_format: str = Field(
        default=LOG_FORMAT_DEFAULT, description="'text' or 'json' console output."
    )
    log_file: Optional[str] = Field(
        default=None, description="Optional file receiving a copy of the log."
    )
    log_prefix: str = Field(
        default="", description="Prefix for every console log line."
    )

    symbols: Dict[str, str] = Field(
        default_factory=lambda: dict(SYMBOLS_DEFAULT)
    )

    @field_validator(
        "tesseract_langs", "docker_enable_security", "version_tag", mode="before"
    )
    @classmethod
    def scalar_to_str(cls, value: Any) -> Any:
        # Unquoted YAML scalars arrive as bool, int or float.
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ("text", "json"):
            raise ValueError("log_format must be 'text' or 'json'")
        return value

    @field_validator("security_jar_url_template")
    @classmethod
    def check_url_template(cls, value: str) -> str:
        if "{version_tag}" not in value:
            raise ValueError(
                "security_jar_url_template must contain '{version_tag}'"
            )
        return value

    @property
    def language_codes(self) -> List[str]:
        """Language codes from ``tesseract_langs``, trimmed, empties dropped."""
        return [
            code.strip()
            for code in self.tesseract_langs.split(",")
            if code.strip()
        ]

    @property
    def security_enabled(self) -> bool:
        return self.docker_enable_security == "true"

    def package_name(self, language_code: str) -> str:
        return f"{self.tesseract_package_prefix}{language_code}"
