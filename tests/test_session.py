"""Tests for AnalysisSession caching and project analysis."""

import pytest

from codeshape.config import AnalysisConfig
from codeshape.exceptions import FileAccessError, InvalidPathError, ParsingError
from codeshape.session import AnalysisSession

A = "/proj/src/a.ts"
B = "/proj/src/b.ts"
HELPER = "/proj/src/utils/helper.ts"


class RejectingParser:
    """Parser stand-in whose grammar accepts nothing."""

    def parse_source(self, path, text):
        raise ParsingError(path, "typescript", "grammar rejected input")


class TestFileAccess:
    def test_discover_files_uses_config_patterns(self, make_session, sample_project):
        session, _ = make_session(sample_project)
        files = session.discover_files()
        assert A in files
        assert "/proj/node_modules/pkg/index.js" not in files

    def test_discover_without_root(self):
        with pytest.raises(InvalidPathError):
            AnalysisSession().discover_files()

    def test_file_is_read_once(self, make_session, sample_project):
        session, reader = make_session(sample_project)
        session.analyze_file(A)
        session.classify_file(A)
        session.measure_file(A)
        assert reader.reads[A] == 1

    def test_failed_reads_are_not_cached(self, make_session):
        session, reader = make_session({})
        assert session.read_text("/proj/missing.ts") is None
        assert session.read_text("/proj/missing.ts") is None
        assert reader.reads["/proj/missing.ts"] == 2


class TestDependencyAnalysis:
    def test_analyze_file_is_cached(self, make_session, sample_project):
        session, _ = make_session(sample_project)
        first = session.analyze_file(A)
        assert session.analyze_file(A) is first
        assert session.get_cached_results() == {A: first}

    def test_analyze_missing_file_raises(self, make_session):
        session, _ = make_session({})
        with pytest.raises(FileAccessError) as excinfo:
            session.analyze_file("/proj/missing.ts")
        assert "failed to analyze dependencies" in excinfo.value.reason

    def test_project_analysis(self, make_session, sample_project):
        session, _ = make_session(sample_project)
        report = session.analyze_project()

        assert report.total_files == 5
        assert report.total_imports == 3
        assert report.total_exports == 3
        assert report.unused_imports == 0
        assert [c.cycle for c in report.circular_dependencies] == [[A, B]]
        assert report.circular_dependencies[0].severity == "high"
        assert report.summary.most_imported[0].count == 1
        assert "/proj/src/orphan.ts" in report.summary.orphaned_files

    def test_cycle_annotations_do_not_pile_up(self, make_session, sample_project):
        session, _ = make_session(sample_project)
        session.analyze_project()
        session.analyze_project()

        result = session.analyze_file(A)
        assert len(result.analysis.circular_dependencies) == 1
        assert len([i for i in result.issues if i.type == "circular-dependency"]) == 1

    def test_unreadable_files_are_skipped(self, make_session, sample_project):
        session, _ = make_session(sample_project)
        report = session.analyze_project(files=[A, "/proj/src/gone.ts"])
        assert report.total_files == 1

    def test_graph_covers_session(self, make_session, sample_project):
        session, _ = make_session(sample_project)
        session.analyze_project(files=[A])
        session.analyze_project(files=[B])
        assert set(session.get_dependency_graph()) == {A, B}
        assert len(session.get_cycles()) == 1

    def test_graph_exports(self, make_session, sample_project):
        session, _ = make_session(sample_project)
        session.analyze_project()
        assert f'  "{A}" -> "{B}";' in session.export_dot()
        edges = session.visualization_data()["edges"]
        assert {"from": A, "to": HELPER, "weight": 1} in edges

    def test_clear_cache(self, make_session, sample_project):
        session, reader = make_session(sample_project)
        session.analyze_project()
        session.clear_cache()

        assert session.get_cached_results() == {}
        assert session.get_dependency_graph() == {}
        assert session.get_cycles() == []
        assert all(count == 0 for count in session.cache_info().values())

        session.analyze_file(A)
        assert reader.reads[A] == 2


class TestClassifyAndMeasure:
    def test_unreadable_file_classifies_empty(self, make_session):
        session, _ = make_session({})
        result = session.classify_file("/proj/missing.ts")
        assert result.analysis.responsibilities == []
        assert result.issues[0].description == "Failed to read file"

    def test_classify_files_report(self, make_session, user_list_tsx, validation_ts):
        session, _ = make_session(
            {
                "/proj/src/components/UserList.tsx": user_list_tsx,
                "/proj/src/validate.ts": validation_ts,
            }
        )
        report = session.classify_files(session.discover_files())
        assert report.total_files == 2
        assert report.files_with_multiple_responsibilities == 1

    def test_measure_files(self, make_session, sample_project):
        config = AnalysisConfig().with_size(threshold=400)
        session, _ = make_session(sample_project, config=config)
        report = session.measure_files(session.discover_files())
        oversized = [r.file_path for r in report.results if r.report.exceeds_threshold]
        assert oversized == ["/proj/src/big.ts"]

    def test_measure_missing_file(self, make_session):
        session, _ = make_session({})
        assert session.measure_file("/proj/missing.ts").report.line_count == 0

    def test_late_file_is_classified_after_failed_read(self, make_session, validation_ts):
        session, reader = make_session({})
        late = "/proj/src/validate.ts"
        assert session.classify_file(late).issues[0].description == "Failed to read file"

        reader.files[late] = validation_ts
        result = session.classify_file(late)

        assert result.issues == []
        assert result.analysis.responsibilities == ["Input Validation"]
        assert session.classify_file(late) is result

    def test_late_file_is_measured_after_failed_read(self, make_session, long_module_text):
        session, reader = make_session({})
        late = "/proj/src/late.ts"
        assert session.measure_file(late).report.line_count == 0

        reader.files[late] = long_module_text(12)
        result = session.measure_file(late)

        assert result.report.line_count == 12
        assert session.measure_file(late) is result

    def test_all_analyzers_agree_on_late_file(self, make_session, validation_ts):
        session, reader = make_session({})
        late = "/proj/src/validate.ts"
        session.classify_file(late)
        session.measure_file(late)
        assert session.cache_info()["responsibility_results"] == 0
        assert session.cache_info()["size_results"] == 0

        reader.files[late] = validation_ts
        assert session.analyze_file(late).file_path == late
        assert session.classify_file(late).analysis.responsibilities == ["Input Validation"]
        assert session.measure_file(late).report.line_count > 0

    def test_parse_failure_classifies_empty(self, make_session):
        session, _ = make_session({"/proj/src/broken.ts": "export const a = 1;\n"})
        session.parser = RejectingParser()

        result = session.classify_file("/proj/src/broken.ts")

        assert result.analysis.responsibilities == []
        assert result.confidence == 0.0
        assert result.issues[0].description == "AST parsing failed: grammar rejected input"
        assert session.classify_file("/proj/src/broken.ts") is result
