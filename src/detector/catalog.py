"""
Feature catalog: the closed set of ES6+ grammar constructs the detector
recognizes, their display labels, and the per-node-kind detection rules.

Only grammar is covered. New runtime APIs (Set, Map, Promise, Object.assign,
Array.from, ...) are not detected.

Async detection only fires on named function declarations (including
`async function*`). Async arrow functions, async methods and async function
expressions are not reported as AsyncFunction; arrows still surface as
ArrowFunctionExpression without a qualifier.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from ecmascript.ir import SyntaxNode


class FeatureType(Enum):
    """Recognized construct kinds. Values are the ESTree-style tags used in output."""

    ARROW_FUNCTION = "ArrowFunctionExpression"
    VARIABLE_DECLARATION = "VariableDeclaration"
    AWAIT_EXPRESSION = "AwaitExpression"
    YIELD_EXPRESSION = "YieldExpression"
    CLASS_DECLARATION = "ClassDeclaration"
    ASYNC_FUNCTION = "AsyncFunction"
    TEMPLATE_ELEMENT = "TemplateElement"
    SPREAD_ELEMENT = "SpreadElement"
    REST_ELEMENT = "RestElement"
    FOR_OF_STATEMENT = "ForOfStatement"


FEATURE_CATALOG: Mapping[FeatureType, str] = MappingProxyType(
    {
        FeatureType.ARROW_FUNCTION: "arrow function",
        FeatureType.VARIABLE_DECLARATION: "const/let declaration",
        FeatureType.AWAIT_EXPRESSION: "await expression",
        FeatureType.YIELD_EXPRESSION: "yield expression",
        FeatureType.CLASS_DECLARATION: "class declaration",
        FeatureType.ASYNC_FUNCTION: "async function",
        FeatureType.TEMPLATE_ELEMENT: "template literal",
        FeatureType.SPREAD_ELEMENT: "spread operator",
        FeatureType.REST_ELEMENT: "rest element",
        FeatureType.FOR_OF_STATEMENT: "for...of loop",
    }
)

BLOCK_SCOPED_KINDS = frozenset({"const", "let"})


def _always(node: SyntaxNode) -> bool:
    return True


def _no_qualifier(node: SyntaxNode) -> Optional[str]:
    return None


def _is_block_scoped(node: SyntaxNode) -> bool:
    return node.get("kind") in BLOCK_SCOPED_KINDS


def _declaration_kind(node: SyntaxNode) -> Optional[str]:
    return node.get("kind")


def _is_async(node: SyntaxNode) -> bool:
    return bool(node.get("async"))


@dataclass(frozen=True)
class DetectionRule:
    """How one node kind maps to a FeatureType."""

    feature: FeatureType
    guard: Callable[[SyntaxNode], bool] = _always
    qualifier: Callable[[SyntaxNode], Optional[str]] = _no_qualifier

    @property
    def display_name(self) -> str:
        return FEATURE_CATALOG[self.feature]


# Node kind -> rule. Node kinds not listed are visited but never reported.
DETECTION_RULES: Mapping[str, DetectionRule] = MappingProxyType(
    {
        "ArrowFunctionExpression": DetectionRule(FeatureType.ARROW_FUNCTION),
        "VariableDeclaration": DetectionRule(
            FeatureType.VARIABLE_DECLARATION,
            guard=_is_block_scoped,
            qualifier=_declaration_kind,
        ),
        "AwaitExpression": DetectionRule(FeatureType.AWAIT_EXPRESSION),
        "YieldExpression": DetectionRule(FeatureType.YIELD_EXPRESSION),
        "ClassDeclaration": DetectionRule(FeatureType.CLASS_DECLARATION),
        "FunctionDeclaration": DetectionRule(FeatureType.ASYNC_FUNCTION, guard=_is_async),
        "TemplateElement": DetectionRule(FeatureType.TEMPLATE_ELEMENT),
        "SpreadElement": DetectionRule(FeatureType.SPREAD_ELEMENT),
        "RestElement": DetectionRule(FeatureType.REST_ELEMENT),
        "ForOfStatement": DetectionRule(FeatureType.FOR_OF_STATEMENT),
    }
)


def display_name(feature: FeatureType) -> str:
    return FEATURE_CATALOG[feature]
