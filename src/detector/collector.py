"""
Finding collection: turns rule matches into Findings and enforces the result cap.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from ecmascript.ir import SyntaxNode
from detector.catalog import FeatureType, display_name

DEFAULT_RESULT_LIMIT = 2
DEFAULT_SNIPPET_MAX_LENGTH = 100

# Offset reported when a matched node has no known position
UNKNOWN_OFFSET = -1


@dataclass(frozen=True)
class Finding:
    """One detected occurrence of a construct."""

    type: FeatureType
    display_name: str
    qualifier: Optional[str]
    snippet: str
    source_offset: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "name": self.display_name,
            "qualifier": self.qualifier,
            "snippet": self.snippet,
            "offset": self.source_offset,
        }


def _check_int(name: str, value: Any) -> int:
    # bool is an int subclass but never a meaningful limit
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class DetectionOptions:
    """
    Per-call options.

    result_limit: maximum number of findings kept; <= 0 keeps nothing
    snippet_max_length: maximum snippet length in characters
    """

    result_limit: int = DEFAULT_RESULT_LIMIT
    snippet_max_length: int = DEFAULT_SNIPPET_MAX_LENGTH

    @classmethod
    def normalize(cls, options: Union["DetectionOptions", Mapping[str, Any], None] = None) -> "DetectionOptions":
        """Apply defaults for unset values and validate types.

        Accepts a DetectionOptions, a mapping with the same keys (None values
        take the default), or None. Negative snippet lengths are clamped to 0.
        """
        if options is None:
            return cls()
        if isinstance(options, DetectionOptions):
            limit = options.result_limit
            size = options.snippet_max_length
        else:
            unknown = set(options) - {"result_limit", "snippet_max_length"}
            if unknown:
                raise TypeError(f"Unknown detection option(s): {', '.join(sorted(unknown))}")
            limit = options.get("result_limit")
            size = options.get("snippet_max_length")

        limit = DEFAULT_RESULT_LIMIT if limit is None else _check_int("result_limit", limit)
        size = DEFAULT_SNIPPET_MAX_LENGTH if size is None else _check_int("snippet_max_length", size)
        return cls(result_limit=limit, snippet_max_length=max(size, 0))


@dataclass
class FindingCollector:
    """
    Capped, append-only collection of findings for a single detection call.

    Usage:
        collector = FindingCollector(source_code, options)
        collector.report(FeatureType.ARROW_FUNCTION, node)
        collector.findings
    """

    source_code: str
    options: DetectionOptions = field(default_factory=DetectionOptions)
    findings: List[Finding] = field(default_factory=list)

    @property
    def is_full(self) -> bool:
        return len(self.findings) >= self.options.result_limit

    def report(self, feature: FeatureType, node: SyntaxNode, qualifier: Optional[str] = None) -> None:
        """Record a match unless the cap is already reached."""
        if self.is_full:
            return
        self.findings.append(
            Finding(
                type=feature,
                display_name=display_name(feature),
                qualifier=qualifier,
                snippet=self.extract_snippet(node),
                source_offset=node.start if node.start is not None else UNKNOWN_OFFSET,
            )
        )

    def extract_snippet(self, node: SyntaxNode) -> str:
        """Node source text, cut to the first snippet_max_length characters."""
        if not node.has_span:
            return ""
        start, end = node.start, node.end
        max_len = self.options.snippet_max_length
        if end - start <= max_len:
            return self.source_code[start:end]
        return self.source_code[start : start + max_len]
