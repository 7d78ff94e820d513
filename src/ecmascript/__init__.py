from ecmascript.ir import SyntaxNode
from ecmascript.parse import JSParseError, parse_js, parse_js_source, find_error_nodes

__all__ = [
    "SyntaxNode",
    "JSParseError",
    "parse_js",
    "parse_js_source",
    "find_error_nodes",
]
