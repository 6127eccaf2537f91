"""Tests for glob matching and file-system source access."""

import os

from codeshape.scanning.source import SourceReader, glob_to_regex, matches_any


class TestGlobToRegex:
    def test_double_star_matches_any_depth(self):
        pattern = glob_to_regex("**/*.ts")
        assert pattern.search("a.ts")
        assert pattern.search("src/deep/a.ts")
        assert not pattern.search("a.tsx")

    def test_single_star_stays_in_segment(self):
        pattern = glob_to_regex("src/*.ts")
        assert pattern.search("src/a.ts")
        assert not pattern.search("src/lib/a.ts")

    def test_question_mark_matches_one_char(self):
        pattern = glob_to_regex("?.js")
        assert pattern.search("a.js")
        assert not pattern.search("ab.js")

    def test_literal_characters_are_escaped(self):
        pattern = glob_to_regex("a+b.ts")
        assert pattern.search("a+b.ts")
        assert not pattern.search("aab.ts")

    def test_directory_exclusion(self):
        assert matches_any("node_modules/", ["**/node_modules/**"])
        assert matches_any("packages/web/node_modules/", ["**/node_modules/**"])
        assert not matches_any("src/", ["**/node_modules/**"])


class TestMatchesAnywhere:
    def test_pattern_matches_nested_path(self):
        assert matches_any("src/a.test.ts", ["*.test.ts"])
        assert matches_any("src/deep/a.test.ts", ["*.test.ts"])
        assert not matches_any("src/a.ts", ["*.test.ts"])

    def test_relative_directory_pattern_matches_below_root(self):
        assert matches_any("packages/web/src/a.ts", ["src/*.ts"])

    def test_match_starts_at_segment_boundary(self):
        assert not matches_any("my_node_modules/", ["node_modules/**"])
        assert matches_any("lib/node_modules/", ["node_modules/**"])

    def test_match_runs_to_end_of_path(self):
        assert not matches_any("data.json", ["**/*.js"])
        assert not matches_any("src/a.ts.bak", ["*.ts"])


class TestSourceReader:
    def test_read_returns_text(self, tmp_path):
        target = tmp_path / "a.ts"
        target.write_text("export const a = 1;\n")
        assert SourceReader().read(str(target)) == "export const a = 1;\n"

    def test_read_missing_file_returns_none(self, tmp_path):
        assert SourceReader().read(str(tmp_path / "missing.ts")) is None

    def test_scan_filters_and_prunes(self, tmp_path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "a.ts").write_text("")
        (tmp_path / "src" / "b.tsx").write_text("")
        (tmp_path / "src" / "notes.md").write_text("")
        (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
        (tmp_path / "node_modules" / "pkg" / "index.js").write_text("")

        found = SourceReader().scan(str(tmp_path))

        assert found == [
            os.path.join(str(tmp_path), "src", "a.ts"),
            os.path.join(str(tmp_path), "src", "b.tsx"),
        ]

    def test_scan_respects_max_depth(self, tmp_path):
        deep = tmp_path / "one" / "two"
        deep.mkdir(parents=True)
        (tmp_path / "one" / "shallow.ts").write_text("")
        (deep / "deep.ts").write_text("")

        found = SourceReader().scan(str(tmp_path), max_depth=1)

        assert [os.path.basename(p) for p in found] == ["shallow.ts"]

    def test_scan_custom_patterns(self, tmp_path):
        (tmp_path / "a.ts").write_text("")
        (tmp_path / "a.test.ts").write_text("")

        found = SourceReader().scan(
            str(tmp_path), include=["**/*.ts"], exclude=["**/*.test.ts"]
        )

        assert [os.path.basename(p) for p in found] == ["a.ts"]

    def test_scan_excludes_bare_file_pattern_in_subdirectories(self, tmp_path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "a.ts").write_text("")
        (tmp_path / "src" / "a.test.ts").write_text("")

        found = SourceReader().scan(str(tmp_path), exclude=["*.test.ts"])

        assert [os.path.basename(p) for p in found] == ["a.ts"]
