"""Tests for responsibility classification."""

import pytest

from codeshape.config import ResponsibilityConfig
from codeshape.responsibility import (
    CATEGORIES,
    ResponsibilityClassifier,
    ResponsibilityIndicator,
    build_report,
    compile_dispatch,
    empty_result,
    overall_confidence,
)
from codeshape.scanning import NodeKind


def categories_of(parsed, config=None):
    classifier = ResponsibilityClassifier(config)
    return {i.category for i in classifier.collect_indicators(parsed)}


class TestPredicates:
    def test_jsx_renders_ui(self, parse):
        parsed = parse("const el = <div />;\n", path="/p/a.tsx")
        assert "ui-rendering" in categories_of(parsed)

    def test_jsx_return_type_renders_ui(self, parse):
        parsed = parse("function View(): JSX.Element { return null; }\n", path="/p/a.tsx")
        assert "ui-rendering" in categories_of(parsed)

    def test_event_handler_property(self, parse):
        parsed = parse("const props = { onClick: () => {} };\n")
        assert "ui-interaction" in categories_of(parsed)

    def test_branchy_function_is_business_logic(self, parse):
        parsed = parse(
            "function price(o) {\n"
            "  if (o.vip) { return 1; }\n"
            "  for (const i of o.items) { total(i); }\n"
            "  return 0;\n"
            "}\n"
        )
        assert "business-logic" in categories_of(parsed)

    def test_single_branch_is_not_business_logic(self, parse):
        parsed = parse("function f(o) {\n  if (o) { return 1; }\n  return 0;\n}\n")
        assert "business-logic" not in categories_of(parsed)

    def test_database_calls(self, parse):
        parsed = parse("db.users.findMany();\n")
        assert "data-access" in categories_of(parsed)

    def test_data_module_import(self, parse):
        parsed = parse("import { PrismaClient } from '@prisma/client';\n")
        assert "data-access" in categories_of(parsed)

    def test_schema_validation(self, parse):
        parsed = parse("schema.safeParse(input);\n")
        assert "validation" in categories_of(parsed)

    def test_state_hooks_are_exact_names(self, parse):
        assert "state-management" in categories_of(parse("useState(0);\n"))
        assert "state-management" not in categories_of(parse("useStateLike(0);\n"))

    def test_http_verbs(self, parse):
        assert "api-communication" in categories_of(parse("client.post('/x', body);\n"))
        assert "api-communication" in categories_of(parse("axios.request(opts);\n"))

    def test_utility_and_configuration_names(self, parse):
        found = categories_of(parse("function formatDate(d) { return d; }\nconst API_URL = 'x';\n"))
        assert {"utility", "configuration"} <= found

    def test_heuristics_can_be_disabled(self, parse):
        parsed = parse("function formatDate(d) { return d; }\nconst MAX_ITEMS = 3;\n")
        config = ResponsibilityConfig(enable_heuristics=False)
        assert categories_of(parsed, config) == set()


class TestDispatch:
    def test_heuristic_categories_absent_when_disabled(self):
        table = compile_dispatch(False)
        tags = {tag for entries in table.values() for tag, _ in entries}
        assert "utility" not in tags
        assert "configuration" not in tags
        assert "ui-interaction" not in tags
        assert "data-access" in tags

    def test_call_predicates_run_in_category_order(self):
        tags = [tag for tag, _ in compile_dispatch(True)[NodeKind.CALL]]
        assert tags == ["data-access", "validation", "state-management", "api-communication"]

    def test_reserved_category_has_no_predicate(self):
        assert "testing" in CATEGORIES
        table = compile_dispatch(True)
        assert all(tag != "testing" for entries in table.values() for tag, _ in entries)


class TestClassify:
    def test_single_responsibility(self, parse, validation_ts):
        result = ResponsibilityClassifier().classify(parse(validation_ts))

        assert result.analysis.responsibilities == ["Input Validation"]
        assert not result.analysis.has_multiple_responsibilities
        assert result.issues == []
        assert result.recommendations == []
        assert result.confidence == pytest.approx(0.9)
        assert result.analysis.separation_suggestions[0].type == "feature"

    def test_mixed_component(self, parse, user_list_tsx):
        parsed = parse(user_list_tsx, path="/p/src/components/UserList.tsx")
        result = ResponsibilityClassifier().classify(parsed)

        assert set(result.analysis.responsibilities) == {
            "UI Rendering",
            "Data Access",
            "State Management",
        }
        assert result.analysis.has_multiple_responsibilities
        severities = {i.description: i.severity for i in result.issues}
        assert (
            severities["UI components should not directly handle data access operations"]
            == "high"
        )
        assert any(d.startswith("File has 3 different responsibilities") for d in severities)
        assert sorted(r.priority for r in result.recommendations) == [8, 9]

    def test_max_responsibilities_raises_the_bar(self, parse, user_list_tsx):
        parsed = parse(user_list_tsx, path="/p/src/components/UserList.tsx")
        result = ResponsibilityClassifier(ResponsibilityConfig(max_responsibilities=3)).classify(
            parsed
        )
        assert not result.analysis.has_multiple_responsibilities
        assert result.recommendations == []
        # Combination issues do not depend on the count
        assert any("data access" in i.description for i in result.issues)

    def test_strict_mode(self, parse):
        parsed = parse("useState(0);\ndb.save(x);\n")
        loose = ResponsibilityClassifier().classify(parsed)
        strict = ResponsibilityClassifier(ResponsibilityConfig(strict_mode=True)).classify(parsed)
        assert not loose.analysis.has_multiple_responsibilities
        assert strict.analysis.has_multiple_responsibilities

    def test_empty_file(self, parse):
        result = ResponsibilityClassifier().classify(parse(""))
        assert result.analysis.responsibilities == []
        assert result.confidence == 0.0


class TestAggregation:
    def test_low_confidence_single_indicator_is_dropped(self):
        weak = ResponsibilityIndicator("utility", "Utility function", 1, 1, 0.25)
        analysis = ResponsibilityClassifier().aggregate([weak])
        assert analysis.responsibilities == []

    def test_effort_grows_with_indicator_count(self):
        many = [ResponsibilityIndicator("data-access", "x", i, 1, 0.9) for i in range(4)]
        analysis = ResponsibilityClassifier().aggregate(many)
        assert analysis.separation_suggestions[0].estimated_effort == "high"
        assert analysis.separation_suggestions[0].target_files == ["data-access-extracted.ts"]

    def test_indicator_confidence_is_clamped(self):
        assert ResponsibilityIndicator("utility", "x", 1, 1, 1.7).confidence == 1.0

    def test_overall_confidence_bonus_is_capped(self):
        indicators = [ResponsibilityIndicator("utility", "x", i, 1, 0.9) for i in range(30)]
        assert overall_confidence(indicators) == 1.0
        assert overall_confidence([]) == 0.0


class TestReport:
    def test_empty_result_for_unreadable_file(self):
        result = empty_result("/p/x.ts", "Failed to read file")
        assert result.issues[0].severity == "low"
        assert result.confidence == 0.0

    def test_build_report(self, parse, user_list_tsx, validation_ts):
        classifier = ResponsibilityClassifier()
        results = [
            classifier.classify(parse(user_list_tsx, path="/p/UserList.tsx")),
            classifier.classify(parse(validation_ts, path="/p/validate.ts")),
        ]
        report = build_report(results)

        assert report.total_files == 2
        assert report.files_with_multiple_responsibilities == 1
        assert report.average_responsibilities == pytest.approx(2.0)
        assert len(report.most_common_issues) <= 5
        assert "Extract data access logic into separate service/repository" in (
            report.recommended_actions
        )

    def test_build_report_empty(self):
        report = build_report([])
        assert report.total_files == 0
        assert report.average_responsibilities == 0.0
