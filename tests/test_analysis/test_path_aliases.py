"""Tests for tsconfig path-alias loading and remapping."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from autowire.analysis.path_aliases import PathAlias, PathAliasTable


def _write_tsconfig(directory: Path, content: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "tsconfig.json"
    path.write_text(content, encoding="utf-8")
    return path


class TestLoad:
    def test_reads_paths_with_wildcards_stripped(self, tmp_path: Path) -> None:
        path = _write_tsconfig(
            tmp_path,
            '{"compilerOptions": {"paths": {"@app/*": ["src/*"], '
            '"@lib/*": ["lib/*", "vendor/*"]}}}',
        )
        table = PathAliasTable.load(path)
        assert table.entries == (
            PathAlias(prefix="@app/", replacement="src/"),
            PathAlias(prefix="@lib/", replacement="lib/"),
        )
        assert table.base_dir == tmp_path

    def test_comments_and_trailing_commas(self, tmp_path: Path) -> None:
        path = _write_tsconfig(
            tmp_path,
            "{\n  // aliases\n  \"compilerOptions\": {\n"
            "    \"paths\": { \"@app/*\": [\"src/*\"], },\n  },\n}\n",
        )
        assert len(PathAliasTable.load(path)) == 1

    def test_missing_file_gives_empty_table(self, tmp_path: Path) -> None:
        table = PathAliasTable.load(tmp_path / "nope.json")
        assert len(table) == 0
        assert table.base_dir is None

    @pytest.mark.parametrize(
        "content",
        [
            "{ not json",
            '{"compilerOptions": {}}',
            '{"compilerOptions": {"paths": []}}',
            '{"compilerOptions": {"paths": {"@app/*": []}}}',
        ],
    )
    def test_unusable_config_gives_empty_table(
        self, tmp_path: Path, content: str
    ) -> None:
        table = PathAliasTable.load(_write_tsconfig(tmp_path, content))
        assert len(table) == 0

    def test_unusable_config_logged_at_debug(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = _write_tsconfig(tmp_path, "{ not json")
        with caplog.at_level(
            logging.DEBUG, logger="autowire.analysis.path_aliases"
        ):
            PathAliasTable.load(path)
        assert "No usable path aliases" in caplog.text


class TestRemap:
    def test_first_matching_entry_wins(self) -> None:
        table = PathAliasTable(
            entries=(
                PathAlias(prefix="@app/", replacement="src/"),
                PathAlias(prefix="@app/", replacement="other/"),
            ),
            base_dir=Path("/proj"),
        )
        assert table.remap("@app/Foo") == "src/Foo"

    def test_no_match(self) -> None:
        table = PathAlias(prefix="@app/", replacement="src/")
        assert PathAliasTable(entries=(table,)).remap("./Foo") is None

    def test_empty_prefix_never_matches(self) -> None:
        table = PathAliasTable(
            entries=(PathAlias(prefix="", replacement="node_modules/"),)
        )
        assert table.remap("./Foo") is None
