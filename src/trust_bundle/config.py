"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings so the certificate path list can come from the
environment of the embedding application:

    TRUST_BUNDLE_CERTIFICATES='["/etc/ssl/certs", "/opt/corp/ca.pem"]'
    TRUST_BUNDLE_LOG_LEVEL=DEBUG
    TRUST_BUNDLE_REPORT_TRUST_STORE_ERRORS=true

Settings are read again on every aggregation call: the configured paths may
change while the process runs.

`certificates` is deliberately Optional. None means "not configured" and
triggers the platform default (see resolve_certificate_paths); an explicit
empty list means "scan no paths".
"""

from __future__ import annotations

from typing import TypeAlias

import logging
from collections.abc import Callable
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from trust_bundle.domain.models import OsFamily

# Resolve the .env file relative to the project root (two levels above this file),
# so settings load correctly regardless of the working directory at runtime.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


class TrustBundleSettings(BaseSettings):
    """
    Root settings for certificate collection.

    Load order (highest priority first):
      1. Environment variables (TRUST_BUNDLE_ prefix)
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="TRUST_BUNDLE_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    certificates: list[str] | None = Field(
        default=None,
        description="Certificate files or directories (absolute paths); None uses the platform default",
    )
    log_level: str = Field(default="INFO")
    report_trust_store_errors: bool = Field(
        default=False,
        description="Log trust-store read failures as warnings instead of debug lines",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Reject names the logging module does not know."""
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level


SettingsProvider: TypeAlias = Callable[[], TrustBundleSettings]


def load_settings() -> TrustBundleSettings:
    return TrustBundleSettings()


def resolve_certificate_paths(
    configured: list[str] | None,
    os_family: OsFamily,
) -> list[str]:
    """Configured paths, or the platform default when nothing is configured."""
    if configured is None:
        return os_family.default_certificate_paths()
    return list(configured)
