"""
JavaScript IR - minimal ESTree-shaped syntax tree.

Nodes carry the ESTree type tag (e.g. "ArrowFunctionExpression"), the
character span they cover in the original source, a few scalar attributes
(declaration kind, async/generator flags) and their children in source order.
Fields that the detector does not need (identifiers, literal values,
operator precedence) are not modeled.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional


@dataclass
class SyntaxNode:
    """One node of the converted tree.

    `start` and `end` are character offsets into the source text; either may
    be None when the node has no known position.
    """

    type: str
    start: Optional[int] = None
    end: Optional[int] = None
    attrs: Dict[str, Any] = field(default_factory=dict)
    children: List["SyntaxNode"] = field(default_factory=list)

    def get(self, name: str, default: Any = None) -> Any:
        return self.attrs.get(name, default)

    @property
    def has_span(self) -> bool:
        return self.start is not None and self.end is not None

    def iter_preorder(self) -> Iterator["SyntaxNode"]:
        """Depth-first, parent before children, children in source order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))
