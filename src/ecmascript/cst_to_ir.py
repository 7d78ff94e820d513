"""
CST to IR Transformer - Converts the tree-sitter JavaScript CST to the
ESTree-shaped IR in ecmascript/ir.py.

The tree-sitter grammar and ESTree disagree on a few shapes the detector
cares about; those are rebuilt here:
- `lexical_declaration` / `variable_declaration` become one VariableDeclaration
  with a `kind` attribute
- `for_in_statement` is split into ForOfStatement / ForInStatement, and a
  declaration keyword in the loop head becomes a VariableDeclaration child
- `template_string` becomes a TemplateLiteral with one TemplateElement per
  text segment, including empty segments around substitutions

Declarations the grammar accepts but JavaScript rejects (a `const` or a
destructuring pattern without an initializer) raise JSParseError.

The conversion uses an explicit work stack, so nesting depth is bounded by
memory rather than the interpreter's recursion limit.
"""

from typing import List, Optional, Tuple, Union

from .errors import syntax_error
from .ir import SyntaxNode
from .utils import ByteOffsetMap

# A pending child: either a CST node still to convert or an already built
# SyntaxNode, paired with the list it must be appended to.
_WorkItem = Tuple[Union[SyntaxNode, object], List[SyntaxNode]]

# tree-sitter type -> ESTree type, for nodes that only need renaming.
# Anything not listed falls back to the PascalCase form of its tree-sitter type.
_TYPE_MAP = {
    "program": "Program",
    "statement_block": "BlockStatement",
    "arrow_function": "ArrowFunctionExpression",
    "function_expression": "FunctionExpression",
    "function": "FunctionExpression",
    "generator_function": "FunctionExpression",
    "class_declaration": "ClassDeclaration",
    "class": "ClassExpression",
    "await_expression": "AwaitExpression",
    "yield_expression": "YieldExpression",
    "spread_element": "SpreadElement",
    "rest_pattern": "RestElement",
    "object": "ObjectExpression",
    "array": "ArrayExpression",
    "object_pattern": "ObjectPattern",
    "array_pattern": "ArrayPattern",
    "property_identifier": "Identifier",
    "shorthand_property_identifier": "Identifier",
    "shorthand_property_identifier_pattern": "Identifier",
    "private_property_identifier": "PrivateName",
    "string": "StringLiteral",
    "number": "NumericLiteral",
    "regex": "RegExpLiteral",
    "pair": "ObjectProperty",
    "pair_pattern": "ObjectProperty",
    "class_heritage": "ClassHeritage",
}

# Named nodes that are not part of the program structure.
_SKIPPED_TYPES = {"comment", "html_comment", "hash_bang_line"}


_DESTRUCTURING_PATTERNS = {"object_pattern", "array_pattern"}


def _pascal_case(ts_type: str) -> str:
    return "".join(part.capitalize() for part in ts_type.split("_") if part)


class IRBuilder:
    """
    Transforms tree-sitter CST nodes into SyntaxNode trees.

    Usage:
        builder = IRBuilder(source_code)
        program = builder.build(root_node)
    """

    def __init__(self, source_code: str):
        self.source = source_code
        self.offsets = ByteOffsetMap(source_code)

    def build(self, root) -> SyntaxNode:
        """Convert the whole tree. Children keep source order in every list."""
        top: List[SyntaxNode] = []
        stack: List[_WorkItem] = [(root, top)]
        while stack:
            item, target = stack.pop()
            if isinstance(item, SyntaxNode):
                target.append(item)
                continue
            node, pending = self._expand(item)
            if node is None:
                continue
            target.append(node)
            stack.extend(reversed(pending))
        if not top:
            return SyntaxNode("Program", 0, len(self.source))
        return top[0]

    # =========================================================================
    # Helpers
    # =========================================================================

    def _make(self, ts_node, node_type: str, **attrs) -> SyntaxNode:
        return SyntaxNode(
            type=node_type,
            start=self.offsets.to_char(ts_node.start_byte),
            end=self.offsets.to_char(ts_node.end_byte),
            attrs=attrs,
        )

    @staticmethod
    def _pending_children(ts_node, target: List[SyntaxNode]) -> List[_WorkItem]:
        return [(child, target) for child in ts_node.named_children]

    @staticmethod
    def _has_token(ts_node, token: str) -> bool:
        """Check for an anonymous keyword/punctuation child such as `async` or `*`."""
        return any(not child.is_named and child.type == token for child in ts_node.children)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _expand(self, ts_node) -> Tuple[Optional[SyntaxNode], List[_WorkItem]]:
        """Build the node for one CST node and list its children still to convert."""
        ts_type = ts_node.type
        if not ts_node.is_named or ts_type in _SKIPPED_TYPES:
            return None, []

        if ts_type == "lexical_declaration":
            kind = ts_node.child_by_field_name("kind")
            kind_name = kind.type if kind is not None else "let"
            self._check_initializers(ts_node, kind_name)
            node = self._make(ts_node, "VariableDeclaration", kind=kind_name)
        elif ts_type == "variable_declaration":
            self._check_initializers(ts_node, "var")
            node = self._make(ts_node, "VariableDeclaration", kind="var")
        elif ts_type in ("function_declaration", "generator_function_declaration"):
            node = self._make(
                ts_node,
                "FunctionDeclaration",
                generator=ts_type == "generator_function_declaration",
            )
            node.attrs["async"] = self._has_token(ts_node, "async")
        elif ts_type in ("arrow_function", "function_expression", "function", "generator_function"):
            node = self._make(ts_node, _TYPE_MAP[ts_type])
            node.attrs["async"] = self._has_token(ts_node, "async")
            node.attrs["generator"] = ts_type == "generator_function"
        elif ts_type == "method_definition":
            node = self._make(ts_node, "MethodDefinition")
            node.attrs["async"] = self._has_token(ts_node, "async")
        elif ts_type == "yield_expression":
            node = self._make(ts_node, "YieldExpression", delegate=self._has_token(ts_node, "*"))
        elif ts_type == "for_in_statement":
            return self._expand_for_in(ts_node)
        elif ts_type == "template_string":
            return self._expand_template(ts_node)
        else:
            node = self._make(ts_node, _TYPE_MAP.get(ts_type) or _pascal_case(ts_type))

        return node, self._pending_children(ts_node, node.children)

    def _check_initializers(self, ts_node, kind: str) -> None:
        """`const x;` and `let [a];` parse in the grammar but are early errors."""
        for declarator in ts_node.named_children:
            if declarator.type != "variable_declarator":
                continue
            if declarator.child_by_field_name("value") is not None:
                continue
            name = declarator.child_by_field_name("name")
            if kind == "const":
                message = "missing initializer in const declaration"
            elif name is not None and name.type in _DESTRUCTURING_PATTERNS:
                message = "missing initializer in destructuring declaration"
            else:
                continue
            raise syntax_error(self.source, self.offsets.to_char(declarator.start_byte), message)

    # =========================================================================
    # Reshaped nodes
    # =========================================================================

    def _expand_for_in(self, ts_node) -> Tuple[SyntaxNode, List[_WorkItem]]:
        """`for (x in o)` / `for (const x of xs)` / `for await (const x of xs)`."""
        operator = ts_node.child_by_field_name("operator")
        if operator is not None and operator.type == "of":
            node = self._make(ts_node, "ForOfStatement")
            node.attrs["await"] = self._has_token(ts_node, "await")
        else:
            node = self._make(ts_node, "ForInStatement")

        kind = ts_node.child_by_field_name("kind")
        left = ts_node.child_by_field_name("left")
        initializer = ts_node.child_by_field_name("value")

        pending: List[_WorkItem] = []
        for child in ts_node.named_children:
            if kind is not None and left is not None and child == left:
                declaration, declaration_pending = self._head_declaration(kind, left, initializer)
                pending.append((declaration, node.children))
                pending.extend(declaration_pending)
                continue
            if initializer is not None and child == initializer:
                # Already attached to the head declaration
                continue
            pending.append((child, node.children))
        return node, pending

    def _head_declaration(self, kind, left, initializer) -> Tuple[SyntaxNode, List[_WorkItem]]:
        """Declaration in a for-in/for-of head, spanning `const x` (or `var x = 1`)."""
        last = initializer if initializer is not None else left
        declarator = SyntaxNode(
            type="VariableDeclarator",
            start=self.offsets.to_char(left.start_byte),
            end=self.offsets.to_char(last.end_byte),
        )
        declaration = SyntaxNode(
            type="VariableDeclaration",
            start=self.offsets.to_char(kind.start_byte),
            end=self.offsets.to_char(last.end_byte),
            attrs={"kind": kind.type},
            children=[declarator],
        )
        pending: List[_WorkItem] = [(left, declarator.children)]
        if initializer is not None:
            pending.extend(self._pending_children(initializer, declarator.children))
        return declaration, pending

    def _expand_template(self, ts_node) -> Tuple[SyntaxNode, List[_WorkItem]]:
        """
        Template literal: text segments become TemplateElements (one more than
        the number of substitutions), substitution expressions are attached
        between them in source order.
        """
        node = self._make(ts_node, "TemplateLiteral")
        pending: List[_WorkItem] = []
        # Segment boundaries exclude the backticks and the `${` / `}` delimiters
        segment_start = ts_node.start_byte + 1
        for child in ts_node.named_children:
            if child.type != "template_substitution":
                continue
            pending.append((self._template_element(segment_start, child.start_byte), node.children))
            pending.extend(self._pending_children(child, node.children))
            segment_start = child.end_byte
        pending.append((self._template_element(segment_start, ts_node.end_byte - 1), node.children))
        return node, pending

    def _template_element(self, start_byte: int, end_byte: int) -> SyntaxNode:
        return SyntaxNode(
            type="TemplateElement",
            start=self.offsets.to_char(start_byte),
            end=self.offsets.to_char(end_byte),
            attrs={"raw": self.offsets.text(start_byte, end_byte)},
        )


def build_syntax_tree(source_code: str, root) -> SyntaxNode:
    """Convert a pre-parsed tree-sitter root node into a Program SyntaxNode.

    Raises:
        JSParseError: a declaration the grammar accepts is invalid JavaScript
    """
    return IRBuilder(source_code).build(root)
