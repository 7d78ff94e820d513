"""
JavaScript source code parsing - main entry points.

This is the public API for JavaScript parsing. Internal implementation is split across:
- ecmascript/utils.py: byte/char offset conversion, line/col calculation
- ecmascript/ir.py: the ESTree-shaped SyntaxNode
- ecmascript/cst_to_ir.py: tree-sitter CST -> SyntaxNode conversion
- ecmascript/errors.py: JSParseError
"""

from typing import List, Optional, Tuple

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser

from core.utils import debug
from ecmascript.ir import SyntaxNode
from ecmascript.cst_to_ir import build_syntax_tree
from ecmascript.errors import JSParseError, syntax_error
from ecmascript.utils import ByteOffsetMap

_JS_LANGUAGE: Optional[Language] = None


def _get_js_language() -> Language:
    global _JS_LANGUAGE
    if _JS_LANGUAGE is None:
        _JS_LANGUAGE = Language(tree_sitter_javascript.language())
    return _JS_LANGUAGE


def parse_js_source(source_code: str) -> Node:
    """
    Parse JavaScript source code using tree-sitter and return the root node.

    The returned CST may contain ERROR / MISSING nodes; use parse_js() for a
    validated tree.
    """
    parser = Parser(_get_js_language())
    tree = parser.parse(bytes(source_code, "utf8"))
    return tree.root_node


def find_error_nodes(
    node,
    source_code: str,
    errors: list,
    depth: int = 0,
    max_depth: int = 200,
    offsets: Optional[ByteOffsetMap] = None,
) -> None:
    """Find ERROR and MISSING nodes in the parse tree, in document order."""
    if depth > max_depth:
        return
    if offsets is None:
        offsets = ByteOffsetMap(source_code)
    if node.type == "ERROR" or node.is_missing:
        text = offsets.text(node.start_byte, node.end_byte)
        if len(text) > 100:
            text = text[:100] + "..."
        errors.append((node, depth, text))
    for child in node.children:
        if child.has_error or child.is_missing:
            find_error_nodes(child, source_code, errors, depth + 1, max_depth, offsets)


def _describe_error(node, text: str) -> str:
    if node.is_missing:
        return f"missing {node.type!r}"
    if text:
        return f"unexpected {text!r}"
    return "unexpected end of input"


def _first_error(root, source_code: str) -> Tuple[str, int]:
    errors: List[Tuple[Node, int, str]] = []
    find_error_nodes(root, source_code, errors)
    if not errors:
        # has_error is set but no ERROR/MISSING node was reachable within max_depth
        return "syntax error", ByteOffsetMap(source_code).to_char(root.start_byte)
    err_node, _, err_text = errors[0]
    offset = ByteOffsetMap(source_code).to_char(err_node.start_byte)
    return _describe_error(err_node, err_text), offset


def parse_js(source_code: str) -> SyntaxNode:
    """
    Parse JavaScript source code into a Program SyntaxNode.

    Raises:
        JSParseError: the source contains a syntax error. No partial tree is returned.
    """
    root = parse_js_source(source_code)
    if root.has_error:
        message, offset = _first_error(root, source_code)
        raise syntax_error(source_code, offset, message)

    program = build_syntax_tree(source_code, root)
    debug(f"parse_js: {len(source_code)} chars -> {program.type}")
    return program
