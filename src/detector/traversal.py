"""
Single-pass rule evaluation over a SyntaxNode tree.

The walk always covers the whole tree; the collector's cap only decides what
is kept, never how much is visited.
"""

from typing import Mapping

from ecmascript.ir import SyntaxNode
from detector.catalog import DETECTION_RULES, DetectionRule
from detector.collector import FindingCollector


def run_rules(
    root: SyntaxNode,
    collector: FindingCollector,
    rules: Mapping[str, DetectionRule] = DETECTION_RULES,
) -> int:
    """
    Visit every node once (pre-order) and report each rule match to the collector.

    Returns the number of nodes visited.
    """
    visited = 0
    for node in root.iter_preorder():
        visited += 1
        rule = rules.get(node.type)
        if rule is not None and rule.guard(node):
            collector.report(rule.feature, node, rule.qualifier(node))
    return visited
