# src/upload/cli_uploader.py — v1
"""Uploader backed by the external `sentry-cli` executable.

Runs `sentry-cli sourcemaps upload` once per include entry in a subprocess.
"""

from __future__ import annotations

import asyncio
import logging
import os

from debugid_uploader.core.errors import UploadError
from debugid_uploader.upload.base_uploader import BaseArtifactUploader
from debugid_uploader.upload.models import CliOptions, UploadInclude

logger = logging.getLogger(__name__)


class SentryCliUploader(BaseArtifactUploader):
    """Upload artifact bundles through `sentry-cli`."""

    def __init__(self, options: CliOptions, executable: str = "sentry-cli") -> None:
        self._options = options
        self._executable = executable

    def build_command(
        self,
        release: str,
        include: UploadInclude,
    ) -> list[str]:
        """Build the argv for one include entry.

        Debug-ID uploads always go out as artifact bundles, which is the
        default for `sourcemaps upload`.
        """
        opts = self._options
        cmd = [self._executable]
        if opts.url:
            cmd += ["--url", opts.url]
        if opts.auth_token:
            cmd += ["--auth-token", opts.auth_token]
        for name, value in opts.headers.items():
            cmd += ["--header", f"{name}:{value}"]

        cmd += ["sourcemaps", "upload"]
        if opts.org:
            cmd += ["--org", opts.org]
        if opts.project:
            cmd += ["--project", opts.project]
        cmd += ["--release", release]
        if include.dist:
            cmd += ["--dist", include.dist]
        if not include.rewrite:
            cmd.append("--no-rewrite")
        cmd += include.paths
        return cmd

    def _build_env(self) -> dict[str, str]:
        env = dict(os.environ)
        if self._options.vcs_remote:
            env["SENTRY_VCS_REMOTE"] = self._options.vcs_remote
        return env

    async def upload_source_maps(
        self,
        release: str,
        include: list[UploadInclude],
        use_artifact_bundle: bool = True,
    ) -> None:
        if not use_artifact_bundle:
            logger.warning("Legacy release uploads are not supported, using artifact bundles")
        for entry in include:
            cmd = self.build_command(release, entry)
            logger.debug("Uploading %s for release %s", ", ".join(entry.paths), release)
            try:
                proc = await asyncio.create_subprocess_exec(
                    *cmd,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                    env=self._build_env(),
                )
            except OSError as exc:
                raise UploadError(f"Could not start {self._executable}: {exc}") from exc

            stdout, stderr = await proc.communicate()
            output = stdout.decode("utf-8", errors="replace").strip()
            if output:
                if self._options.silent:
                    logger.debug("%s", output)
                else:
                    logger.info("%s", output)

            if proc.returncode != 0:
                detail = stderr.decode("utf-8", errors="replace").strip()
                raise UploadError(
                    f"{self._executable} exited with code {proc.returncode}: {detail}"
                )
