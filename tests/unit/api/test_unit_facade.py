# tests/unit/api/test_unit_facade.py — v2
"""Tests for api/facade.py — settings wiring and default policies."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from debugid_uploader.api.facade import build_uploader, log_recoverable_error, upload_debug_ids
from debugid_uploader.batch.orchestrator import DebugIdUploader
from debugid_uploader.config.settings import Settings
from debugid_uploader.upload.cli_uploader import SentryCliUploader


class TestBuildUploader:
    def test_wires_settings(self, mock_uploader):
        settings = Settings(
            _env_file=None,
            sourcemaps_assets="dist/*.js",
            release_name="1.2.3",
            dist="web",
        )
        orchestrator = build_uploader(settings, uploader=mock_uploader)
        assert isinstance(orchestrator, DebugIdUploader)
        assert orchestrator.release == "1.2.3"

    def test_defaults_to_cli_uploader(self):
        orchestrator = build_uploader(Settings(_env_file=None))
        assert isinstance(orchestrator._uploader, SentryCliUploader)

    def test_missing_release_uses_placeholder(self, mock_uploader):
        orchestrator = build_uploader(Settings(_env_file=None), uploader=mock_uploader)
        assert orchestrator.release == "undefined"


class TestLogRecoverableError:
    def test_logs_error(self, caplog):
        with caplog.at_level(logging.ERROR, logger="debugid_uploader"):
            log_recoverable_error(RuntimeError("boom"))
        assert any("boom" in r.getMessage() for r in caplog.records)


class TestUploadDebugIds:
    @pytest.mark.asyncio
    async def test_end_to_end_with_mock_uploader(
        self, mock_uploader, write_bundle, make_source_map, debug_id, in_tmp_cwd,
    ):
        write_bundle(map_doc=make_source_map([str(in_tmp_cwd / "src" / "app.ts")]))
        staged: dict[str, dict] = {}

        async def _capture(release, include, use_artifact_bundle=True):
            stage = Path(include[0].paths[0])
            staged["map"] = json.loads((stage / f"{debug_id}-0.js.map").read_text())

        mock_uploader.upload_source_maps.side_effect = _capture
        settings = Settings(_env_file=None, sourcemaps_assets="dist/**/*.js")

        result = await upload_debug_ids(settings=settings, uploader=mock_uploader)

        assert result.uploaded is True
        assert staged["map"]["sources"] == ["src/app.ts"]

    @pytest.mark.asyncio
    async def test_failure_goes_to_handler(self, mock_uploader, mock_telemetry, write_bundle, in_tmp_cwd):
        write_bundle()
        mock_uploader.upload_source_maps.side_effect = RuntimeError("403")
        handler = MagicMock()

        result = await upload_debug_ids(
            settings=Settings(_env_file=None, sourcemaps_assets="dist/*.js"),
            uploader=mock_uploader,
            telemetry=mock_telemetry,
            handle_recoverable_error=handler,
        )

        assert result.failed is True
        handler.assert_called_once()
        assert str(handler.call_args.args[0]) == "403"
