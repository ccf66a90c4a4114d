# src/upload/models.py — v1
"""Upload client models: CliOptions, UploadInclude."""

from __future__ import annotations

from pydantic import BaseModel, Field

# Release placeholder used when no release name is configured. Debug IDs
# are the real matching key; the release only affects legacy grouping.
UNDEFINED_RELEASE = "undefined"


class CliOptions(BaseModel):
    """Connection parameters for the external upload client."""

    url: str = "https://sentry.io/"
    auth_token: str = ""
    org: str = ""
    project: str = ""
    vcs_remote: str = "origin"
    silent: bool = False
    headers: dict[str, str] = Field(default_factory=dict)


class UploadInclude(BaseModel):
    """One include entry handed to the uploader."""

    paths: list[str]
    rewrite: bool = False
    dist: str | None = None
