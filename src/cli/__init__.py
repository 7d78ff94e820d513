"""
CLI utilities: file collection, detection runs, debug commands.
"""

from cli.helpers import (
    collect_source_files,
    read_source_file,
    detect_in_files,
    JS_EXTENSIONS,
)
from cli.debug import (
    dump_ast_tree,
    dump_ast_impl,
    check_parser_impl,
    list_features,
)

__all__ = [
    "collect_source_files",
    "read_source_file",
    "detect_in_files",
    "JS_EXTENSIONS",
    "dump_ast_tree",
    "dump_ast_impl",
    "check_parser_impl",
    "list_features",
]
