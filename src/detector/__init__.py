"""
ES6+ syntax feature detection.

    findings = detect_es_features("const f = (a, ...rest) => a;")
    # [Finding(type=VARIABLE_DECLARATION, qualifier='const', ...),
    #  Finding(type=ARROW_FUNCTION, ...)]

The result is a bounded sample (default: the first 2 matches in document
order), not a full inventory.
"""

from typing import Any, List, Mapping, Union

from core.utils import debug
from ecmascript.parse import JSParseError, parse_js
from detector.catalog import FEATURE_CATALOG, DETECTION_RULES, DetectionRule, FeatureType
from detector.collector import (
    DEFAULT_RESULT_LIMIT,
    DEFAULT_SNIPPET_MAX_LENGTH,
    DetectionOptions,
    Finding,
    FindingCollector,
)
from detector.traversal import run_rules


def detect_es_features(
    source_code: str,
    options: Union[DetectionOptions, Mapping[str, Any], None] = None,
) -> List[Finding]:
    """
    Detect ES6+ grammar constructs in JavaScript source.

    Args:
        source_code: JavaScript source text
        options: DetectionOptions or a mapping with result_limit / snippet_max_length

    Returns:
        Up to result_limit findings, in the order their nodes were visited

    Raises:
        JSParseError: the source is not valid JavaScript
    """
    opts = DetectionOptions.normalize(options)
    program = parse_js(source_code)

    collector = FindingCollector(source_code, opts)
    visited = run_rules(program, collector)
    debug(
        f"detect_es_features: visited {visited} nodes, kept {len(collector.findings)} "
        f"finding(s) (limit={opts.result_limit}, snippet={opts.snippet_max_length})"
    )
    return list(collector.findings)


__all__ = [
    "detect_es_features",
    "DetectionOptions",
    "Finding",
    "FindingCollector",
    "FeatureType",
    "FEATURE_CATALOG",
    "DETECTION_RULES",
    "DetectionRule",
    "JSParseError",
    "DEFAULT_RESULT_LIMIT",
    "DEFAULT_SNIPPET_MAX_LENGTH",
    "run_rules",
]
