# src/config/settings.py — v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for upload options and connection parameters.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from debugid_uploader.upload.models import CliOptions


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


def _split_csv(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [v.strip() for v in value.split(",") if v.strip()]


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Source maps ===
    # None = fall back to build artifacts; "" = explicit opt-out.
    sourcemaps_assets: str | None = None
    sourcemaps_ignore: str = ""
    sourcemaps_delete_after_upload: str = ""

    # === Release ===
    release_name: str = ""
    dist: str = ""

    # === Upload client ===
    sentry_url: str = "https://sentry.io/"
    sentry_auth_token: str = ""
    sentry_org: str = ""
    sentry_project: str = ""
    sentry_vcs_remote: str = "origin"
    sentry_silent: bool = False
    sentry_headers: str = ""
    sentry_cli_path: str = "sentry-cli"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("sentry_headers")
    @classmethod
    def validate_headers(cls, v: str) -> str:  # noqa: N805
        """Every header entry must look like `Name:Value`."""
        for item in _split_csv(v) or []:
            name, sep, _ = item.partition(":")
            if not sep or not name.strip():
                raise ValueError(f"Invalid header {item!r}, expected 'Name:Value'")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.sentry_auth_token and not (self.sentry_org and self.sentry_project):
            errors.append("SENTRY_AUTH_TOKEN requires SENTRY_ORG and SENTRY_PROJECT")

        if self.log_retention < 0:
            errors.append("LOG_RETENTION must be >= 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def sourcemaps_assets_list(self) -> list[str] | None:
        """Parse comma-separated asset globs (None = use build artifacts)."""
        return _split_csv(self.sourcemaps_assets)

    @property
    def sourcemaps_ignore_list(self) -> list[str]:
        """Parse comma-separated ignore globs."""
        return _split_csv(self.sourcemaps_ignore) or []

    @property
    def sourcemaps_delete_after_upload_list(self) -> list[str]:
        """Parse comma-separated post-upload deletion globs."""
        return _split_csv(self.sourcemaps_delete_after_upload) or []

    @property
    def sentry_headers_dict(self) -> dict[str, str]:
        """Parse `Name:Value` header pairs."""
        headers: dict[str, str] = {}
        for item in _split_csv(self.sentry_headers) or []:
            name, _, value = item.partition(":")
            headers[name.strip()] = value.strip()
        return headers

    def cli_options(self) -> CliOptions:
        """Connection parameters for the upload client."""
        return CliOptions(
            url=self.sentry_url,
            auth_token=self.sentry_auth_token,
            org=self.sentry_org,
            project=self.sentry_project,
            vcs_remote=self.sentry_vcs_remote,
            silent=self.sentry_silent,
            headers=self.sentry_headers_dict,
        )


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
