# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides sample debug IDs, bundle/source-map writers on tmp_path, and mocked
upload and telemetry collaborators. No network and no external executables.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from debugid_uploader.logging.context import clear_context
from debugid_uploader.logging.logger import ROOT_LOGGER_NAME
from debugid_uploader.upload.base_uploader import BaseArtifactUploader
from debugid_uploader.upload.telemetry import TelemetrySink

DEBUG_ID = "b9c1a2d3-4e5f-4a6b-8c7d-0e1f2a3b4c5d"
OTHER_DEBUG_ID = "0F1E2D3C-4B5A-4968-8776-A5B4C3D2E1F0"


# === FIXTURES: Sample data ===


@pytest.fixture
def debug_id() -> str:
    return DEBUG_ID


@pytest.fixture
def other_debug_id() -> str:
    return OTHER_DEBUG_ID


def bundle_code(debug_id: str | None = DEBUG_ID, source_mapping_url: str | None = None) -> str:
    """Minimal bundle text with an optional marker and sourceMappingURL."""
    lines = ['(function(){var e=new Error().stack;console.log("hello");']
    if debug_id is not None:
        lines.append(f'e._sentryDebugIdIdentifier="sentry-dbid-{debug_id}";')
    lines.append("})();")
    if source_mapping_url is not None:
        lines.append(f"//# sourceMappingURL={source_mapping_url}")
    return "\n".join(lines)


def source_map(sources: list[Any] | None = None, **extra: Any) -> dict[str, Any]:
    """Minimal source map document."""
    doc: dict[str, Any] = {
        "version": 3,
        "file": "app.js",
        "mappings": "AAAA",
        "names": [],
    }
    if sources is not None:
        doc["sources"] = sources
    doc.update(extra)
    return doc


@pytest.fixture
def make_bundle_code() -> Callable[..., str]:
    return bundle_code


@pytest.fixture
def make_source_map() -> Callable[..., dict[str, Any]]:
    return source_map


@pytest.fixture
def write_bundle(tmp_path: Path) -> Callable[..., Path]:
    """Write a bundle (and optionally its `.map` sibling) under tmp_path/dist."""

    def _write(
        name: str = "app.js",
        debug_id: str | None = DEBUG_ID,
        source_mapping_url: str | None = None,
        map_doc: dict[str, Any] | str | None = None,
    ) -> Path:
        path = tmp_path / "dist" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(bundle_code(debug_id, source_mapping_url), encoding="utf-8")
        if map_doc is not None:
            content = map_doc if isinstance(map_doc, str) else json.dumps(map_doc)
            path.with_name(path.name + ".map").write_text(content, encoding="utf-8")
        return path

    return _write


# === FIXTURES: Mock collaborators ===


@pytest.fixture
def mock_uploader() -> AsyncMock:
    """Uploader that records calls and succeeds."""
    uploader = AsyncMock(spec=BaseArtifactUploader)
    uploader.upload_source_maps = AsyncMock(return_value=None)
    return uploader


@pytest.fixture
def mock_telemetry() -> MagicMock:
    telemetry = MagicMock(spec=TelemetrySink)
    telemetry.flush = AsyncMock(return_value=None)
    return telemetry


# === FIXTURES: Temp dirs ===


@pytest.fixture
def staging_dir(tmp_path: Path) -> Path:
    """Pre-created staging directory."""
    out = tmp_path / "staging"
    out.mkdir()
    return out


@pytest.fixture
def in_tmp_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with tmp_path as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo setup_logging() calls made by the CLI and logging tests."""
    yield
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
