"""Tests for the feature catalog, finding collector and rule traversal."""

import pytest

from detector.catalog import (
    DETECTION_RULES,
    FEATURE_CATALOG,
    DetectionRule,
    FeatureType,
)
from detector.collector import (
    DEFAULT_RESULT_LIMIT,
    DEFAULT_SNIPPET_MAX_LENGTH,
    DetectionOptions,
    Finding,
    FindingCollector,
    UNKNOWN_OFFSET,
)
from detector.traversal import run_rules
from ecmascript.ir import SyntaxNode


def make_tree() -> SyntaxNode:
    """Program
         VariableDeclaration(const) [0:12]
           ArrowFunctionExpression [10:11]   (nested, visited after its parent)
         VariableDeclaration(var)   [13:25]
         FunctionDeclaration(async) (no offsets)
    """
    return SyntaxNode(
        "Program",
        0,
        40,
        children=[
            SyntaxNode(
                "VariableDeclaration",
                0,
                12,
                {"kind": "const"},
                [SyntaxNode("ArrowFunctionExpression", 10, 11)],
            ),
            SyntaxNode("VariableDeclaration", 13, 25, {"kind": "var"}),
            SyntaxNode("FunctionDeclaration", attrs={"async": True}),
        ],
    )


SOURCE = "const a = b;" + " " * 28


class TestCatalog:
    def test_catalog_covers_every_feature(self):
        assert set(FEATURE_CATALOG) == set(FeatureType)
        assert len(FEATURE_CATALOG) == 10

    def test_every_feature_has_exactly_one_rule(self):
        features = [rule.feature for rule in DETECTION_RULES.values()]
        assert sorted(f.value for f in features) == sorted(f.value for f in FeatureType)

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            FEATURE_CATALOG[FeatureType.ARROW_FUNCTION] = "changed"
        with pytest.raises(TypeError):
            DETECTION_RULES["Identifier"] = DetectionRule(FeatureType.ARROW_FUNCTION)

    def test_rules_are_frozen(self):
        rule = DETECTION_RULES["ArrowFunctionExpression"]
        with pytest.raises(AttributeError):
            rule.feature = FeatureType.CLASS_DECLARATION

    def test_variable_declaration_guard(self):
        rule = DETECTION_RULES["VariableDeclaration"]
        for kind in ("const", "let"):
            node = SyntaxNode("VariableDeclaration", attrs={"kind": kind})
            assert rule.guard(node)
            assert rule.qualifier(node) == kind
        assert not rule.guard(SyntaxNode("VariableDeclaration", attrs={"kind": "var"}))

    def test_async_guard(self):
        rule = DETECTION_RULES["FunctionDeclaration"]
        assert rule.feature == FeatureType.ASYNC_FUNCTION
        assert rule.guard(SyntaxNode("FunctionDeclaration", attrs={"async": True}))
        assert not rule.guard(SyntaxNode("FunctionDeclaration", attrs={"async": False}))
        assert not rule.guard(SyntaxNode("FunctionDeclaration"))

    def test_unconditional_rules_have_no_qualifier(self):
        rule = DETECTION_RULES["SpreadElement"]
        node = SyntaxNode("SpreadElement", 0, 3)
        assert rule.guard(node)
        assert rule.qualifier(node) is None
        assert rule.display_name == "spread operator"


class TestDetectionOptions:
    def test_defaults(self):
        opts = DetectionOptions.normalize(None)
        assert opts.result_limit == DEFAULT_RESULT_LIMIT == 2
        assert opts.snippet_max_length == DEFAULT_SNIPPET_MAX_LENGTH == 100

    def test_mapping_with_none_values(self):
        opts = DetectionOptions.normalize({"result_limit": None, "snippet_max_length": 7})
        assert opts == DetectionOptions(result_limit=2, snippet_max_length=7)

    def test_instance_passthrough(self):
        opts = DetectionOptions(result_limit=5, snippet_max_length=10)
        assert DetectionOptions.normalize(opts) == opts

    def test_negative_snippet_length_clamped(self):
        assert DetectionOptions.normalize({"snippet_max_length": -4}).snippet_max_length == 0

    def test_non_positive_limit_kept(self):
        assert DetectionOptions.normalize({"result_limit": -1}).result_limit == -1

    def test_unknown_option_rejected(self):
        with pytest.raises(TypeError, match="limit"):
            DetectionOptions.normalize({"limit": 3})

    @pytest.mark.parametrize("value", ["3", 2.5, True])
    def test_non_int_rejected(self, value):
        with pytest.raises(TypeError):
            DetectionOptions.normalize({"result_limit": value})


class TestFindingCollector:
    def test_report_builds_finding(self):
        collector = FindingCollector(SOURCE, DetectionOptions(result_limit=5))
        node = SyntaxNode("VariableDeclaration", 0, 12, {"kind": "const"})
        collector.report(FeatureType.VARIABLE_DECLARATION, node, "const")

        assert collector.findings == [
            Finding(
                type=FeatureType.VARIABLE_DECLARATION,
                display_name="const/let declaration",
                qualifier="const",
                snippet="const a = b;",
                source_offset=0,
            )
        ]

    def test_unknown_offsets(self):
        collector = FindingCollector(SOURCE)
        collector.report(FeatureType.ASYNC_FUNCTION, SyntaxNode("FunctionDeclaration"))

        assert collector.findings[0].snippet == ""
        assert collector.findings[0].source_offset == UNKNOWN_OFFSET

    def test_start_without_end(self):
        collector = FindingCollector(SOURCE)
        collector.report(FeatureType.ARROW_FUNCTION, SyntaxNode("ArrowFunctionExpression", start=6))

        assert collector.findings[0].snippet == ""
        assert collector.findings[0].source_offset == 6

    def test_cap_is_noop_once_full(self):
        collector = FindingCollector(SOURCE, DetectionOptions(result_limit=2))
        for start in range(4):
            collector.report(FeatureType.SPREAD_ELEMENT, SyntaxNode("SpreadElement", start, start + 1))

        assert collector.is_full
        assert [f.source_offset for f in collector.findings] == [0, 1]

    def test_zero_limit_collects_nothing(self):
        collector = FindingCollector(SOURCE, DetectionOptions(result_limit=0))
        collector.report(FeatureType.SPREAD_ELEMENT, SyntaxNode("SpreadElement", 0, 1))
        assert collector.findings == []

    def test_snippet_window(self):
        collector = FindingCollector(SOURCE, DetectionOptions(snippet_max_length=5))
        assert collector.extract_snippet(SyntaxNode("X", 0, 12)) == "const"
        assert collector.extract_snippet(SyntaxNode("X", 6, 7)) == "a"
        assert collector.extract_snippet(SyntaxNode("X", 0, 5)) == "const"

    def test_to_dict(self):
        finding = Finding(FeatureType.FOR_OF_STATEMENT, "for...of loop", None, "for (x of y) {}", 3)
        assert finding.to_dict() == {
            "type": "ForOfStatement",
            "name": "for...of loop",
            "qualifier": None,
            "snippet": "for (x of y) {}",
            "offset": 3,
        }


class TestTraversal:
    def test_preorder_order(self):
        tree = make_tree()
        assert [n.type for n in tree.iter_preorder()] == [
            "Program",
            "VariableDeclaration",
            "ArrowFunctionExpression",
            "VariableDeclaration",
            "FunctionDeclaration",
        ]

    def test_matches_in_visit_order(self):
        collector = FindingCollector(SOURCE, DetectionOptions(result_limit=10))
        run_rules(make_tree(), collector)

        assert [f.type for f in collector.findings] == [
            FeatureType.VARIABLE_DECLARATION,
            FeatureType.ARROW_FUNCTION,
            FeatureType.ASYNC_FUNCTION,
        ]
        assert [f.qualifier for f in collector.findings] == ["const", None, None]

    def test_full_walk_even_when_capped(self):
        tree = make_tree()
        total = len(list(tree.iter_preorder()))

        for limit in (0, 1, 10):
            collector = FindingCollector(SOURCE, DetectionOptions(result_limit=limit))
            assert run_rules(tree, collector) == total

    def test_every_accepted_match_is_offered(self):
        """The collector sees one report per accepted match, even past the cap."""
        calls = []

        class RecordingCollector(FindingCollector):
            def report(self, feature, node, qualifier=None):
                calls.append((feature, node.type, qualifier))
                super().report(feature, node, qualifier)

        collector = RecordingCollector(SOURCE, DetectionOptions(result_limit=1))
        run_rules(make_tree(), collector)

        assert len(calls) == 3
        assert len(collector.findings) == 1

    def test_custom_rule_table(self):
        rules = {"VariableDeclaration": DetectionRule(FeatureType.VARIABLE_DECLARATION)}
        collector = FindingCollector(SOURCE, DetectionOptions(result_limit=10))
        run_rules(make_tree(), collector, rules)

        assert [f.type for f in collector.findings] == [FeatureType.VARIABLE_DECLARATION] * 2

    def test_deep_tree_does_not_recurse(self):
        root = SyntaxNode("Program", 0, 0)
        node = root
        for _ in range(5000):
            child = SyntaxNode("SpreadElement", 0, 0)
            node.children.append(child)
            node = child

        collector = FindingCollector("", DetectionOptions(result_limit=3))
        assert run_rules(root, collector) == 5001
        assert len(collector.findings) == 3
