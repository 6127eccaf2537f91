"""Tests for the project report aggregator and public API."""

import json

import pytest

from codeshape import analyze, analyze_file
from codeshape.exceptions import FileAccessError, InvalidPathError
from codeshape.models import Issue, Recommendation
from codeshape.report import ReportAggregator, merge_findings

A = "/proj/src/a.ts"


class TestMergeFindings:
    def test_sorted_by_severity_and_priority(self):
        issues, recommendations = merge_findings(
            (
                [Issue("size", "low", "l", "x"), Issue("size", "high", "h", "x")],
                [Recommendation("split", 4, "four", "low")],
            ),
            (
                [Issue("dependency", "medium", "m", "x")],
                [Recommendation("remove", 9, "nine", "low")],
            ),
        )
        assert [i.severity for i in issues] == ["high", "medium", "low"]
        assert [r.priority for r in recommendations] == [9, 4]


class TestReportAggregator:
    def test_build_project_report(self, make_session, sample_project):
        session, _ = make_session(sample_project)
        report = ReportAggregator(session).build()

        totals = report.totals
        assert totals.file_count == 5
        assert totals.total_imports == 3
        assert totals.total_cycles == 1
        assert totals.oversized_files == 1
        assert totals.skipped_files == 0
        assert len(report.files) == 5
        assert report.dot.startswith("digraph Dependencies {")

    def test_file_report_merges_all_analyzers(self, make_session, sample_project):
        session, _ = make_session(sample_project)
        report = ReportAggregator(session).build()

        by_path = {f.file_path: f for f in report.files}
        a = by_path[A]
        assert a.issues[0].type == "circular-dependency"
        assert a.recommendations[0].priority == 8

        big = by_path["/proj/src/big.ts"]
        assert big.size.exceeds_threshold
        assert [i.type for i in big.issues] == ["size"]

    def test_explicit_file_list(self, make_session, sample_project):
        session, _ = make_session(sample_project)
        report = ReportAggregator(session).build(files=[A, "/proj/src/missing.ts"])
        assert report.totals.file_count == 1
        assert report.totals.skipped_files == 1
        missing = next(f for f in report.files if f.file_path.endswith("missing.ts"))
        assert missing.dependency is None
        assert missing.size.line_count == 0

    def test_to_dict_is_json_serializable(self, make_session, sample_project):
        session, _ = make_session(sample_project)
        payload = ReportAggregator(session).build().to_dict()
        decoded = json.loads(json.dumps(payload))
        assert decoded["totals"]["total_cycles"] == 1
        assert decoded["cycles"][0]["severity"] == "high"

    def test_cache_delegation(self, make_session, sample_project):
        session, _ = make_session(sample_project)
        aggregator = ReportAggregator(session)
        aggregator.build()
        assert A in aggregator.get_cached_results()
        assert A in aggregator.get_dependency_graph()
        aggregator.clear_cache()
        assert aggregator.get_cached_results() == {}


class TestPublicApi:
    def test_analyze_directory(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        (src / "a.ts").write_text("import { b } from './b';\nexport const a = b;\n")
        (src / "b.ts").write_text("import { a } from './a';\nexport const b = a;\n")

        report = analyze(str(tmp_path), size={"threshold": 100})

        assert report.totals.file_count == 2
        assert report.totals.total_cycles == 1
        assert report.sizes.summary.threshold == 100

    def test_analyze_rejects_files(self, tmp_path):
        target = tmp_path / "a.ts"
        target.write_text("")
        with pytest.raises(InvalidPathError):
            analyze(str(target))

    def test_analyze_file(self, tmp_path):
        target = tmp_path / "a.ts"
        target.write_text("import { unused } from 'x';\n")
        result = analyze_file(str(target))
        assert result.analysis.unused_imports == ["unused from 'x'"]

    def test_analyze_file_missing(self, tmp_path):
        with pytest.raises(FileAccessError):
            analyze_file(str(tmp_path / "missing.ts"))
