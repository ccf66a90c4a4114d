# tests/unit/sourcemap/test_unit_locator.py — v1
"""Tests for sourcemap/locator.py — source map path heuristics."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from debugid_uploader.sourcemap.locator import (
    determine_source_map_path,
    find_source_mapping_url,
)


class TestFindSourceMappingUrl:
    def test_trailing_comment(self):
        assert find_source_mapping_url("a();\n//# sourceMappingURL=app.js.map") == "app.js.map"

    def test_single_line(self):
        assert find_source_mapping_url("//# sourceMappingURL=x.map") == "x.map"

    def test_strips_trailing_whitespace(self):
        assert find_source_mapping_url("a();\n//# sourceMappingURL=x.map  \r\n") == "x.map"

    def test_last_comment_wins(self):
        code = "//# sourceMappingURL=old.map\nb();\n//# sourceMappingURL=new.map"
        assert find_source_mapping_url(code) == "new.map"

    def test_must_start_line(self):
        assert find_source_mapping_url('var s="//# sourceMappingURL=x.map";') is None

    def test_absent(self):
        assert find_source_mapping_url("a();") is None


class TestDetermineSourceMapPath:
    @pytest.mark.asyncio
    async def test_relative_url_resolved_against_bundle_dir(self, tmp_path: Path):
        bundle = tmp_path / "dist" / "app.js"
        code = "a();\n//# sourceMappingURL=maps/app.js.map"
        result = await determine_source_map_path(bundle, code)
        assert result == tmp_path / "dist" / "maps" / "app.js.map"

    @pytest.mark.asyncio
    async def test_parent_relative_url_is_normalized(self, tmp_path: Path):
        bundle = tmp_path / "dist" / "js" / "app.js"
        code = "//# sourceMappingURL=../maps/app.js.map"
        result = await determine_source_map_path(bundle, code)
        assert result == tmp_path / "dist" / "maps" / "app.js.map"

    @pytest.mark.asyncio
    async def test_absolute_url_used_as_is(self, tmp_path: Path):
        bundle = tmp_path / "dist" / "app.js"
        target = tmp_path / "elsewhere" / "app.js.map"
        code = f"//# sourceMappingURL={target}"
        assert await determine_source_map_path(bundle, code) == target

    @pytest.mark.asyncio
    async def test_url_does_not_need_to_exist(self, tmp_path: Path):
        bundle = tmp_path / "app.js"
        result = await determine_source_map_path(bundle, "//# sourceMappingURL=missing.map")
        assert result == tmp_path / "missing.map"

    @pytest.mark.asyncio
    async def test_absolute_url_preferred_over_adjacent_file(self, tmp_path: Path):
        bundle = tmp_path / "dist" / "app.js"
        bundle.parent.mkdir()
        bundle.with_name("app.js.map").write_text("{}")
        target = tmp_path / "maps" / "app.js.map"
        code = f"a();\n//# sourceMappingURL={target}"
        assert await determine_source_map_path(bundle, code) == target

    @pytest.mark.asyncio
    async def test_adjacent_map_file(self, tmp_path: Path):
        bundle = tmp_path / "app.js"
        adjacent = tmp_path / "app.js.map"
        adjacent.write_text("{}")
        assert await determine_source_map_path(bundle, "a();") == adjacent

    @pytest.mark.asyncio
    async def test_none_found_logs_debug(self, tmp_path: Path, caplog):
        bundle = tmp_path / "app.js"
        with caplog.at_level(logging.DEBUG, logger="debugid_uploader"):
            assert await determine_source_map_path(bundle, "a();") is None
        records = [r for r in caplog.records if "Could not determine source map" in r.message]
        assert records
        assert all(r.levelno == logging.DEBUG for r in records)
