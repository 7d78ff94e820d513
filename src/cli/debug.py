"""
Debug and development CLI commands: AST dump, parser check, feature catalog.
"""

from typing import List

from core.utils import error, truncate_text
from detector.catalog import DETECTION_RULES, FEATURE_CATALOG
from ecmascript.parse import parse_js_source, find_error_nodes
from ecmascript.utils import ByteOffsetMap


def dump_ast_tree(source_code: str, root, max_depth: int = 10) -> None:
    """Print the tree-sitter AST structure for debugging."""
    offsets = ByteOffsetMap(source_code)

    def print_node(node, depth: int = 0):
        if depth > max_depth:
            return

        indent = "  " * depth
        text = truncate_text(offsets.text(node.start_byte, node.end_byte))
        print(f"{indent}{node.type} [{node.start_byte}:{node.end_byte}] {repr(text)}")

        for child in node.children:
            print_node(child, depth + 1)

    print_node(root)


def check_parser_errors(input_file: str, source_code: str, root) -> bool:
    """Check for parser errors in AST. Returns True if errors found."""
    errors: list = []
    find_error_nodes(root, source_code, errors)
    if errors:
        error(f"PARSER ERRORS FOUND in {input_file}: {len(errors)} error node(s)")
        for err_node, err_depth, err_text in errors:
            indent = "  " * err_depth
            label = f"MISSING {err_node.type}" if err_node.is_missing else "ERROR"
            error(f"{indent}{label} [{err_node.start_byte}:{err_node.end_byte}] {repr(err_text)}")
        return True
    return False


def check_parser_impl(source_files: List[str]) -> int:
    """Validate all files parse correctly (no ERROR nodes)."""
    print("Parser check mode: Validating parse trees...")
    has_errors = False
    for source_file in source_files:
        try:
            with open(source_file, "r", encoding="utf-8") as f:
                source_code = f.read()
        except (OSError, UnicodeDecodeError) as e:
            error(f"Failed to read {source_file}: {e}")
            has_errors = True
            continue
        root = parse_js_source(source_code)
        if check_parser_errors(source_file, source_code, root):
            has_errors = True
    if has_errors:
        error("Parser validation FAILED: ERROR nodes found in AST")
        return 1
    print("✓ Parser validation PASSED: No ERROR nodes found")
    return 0


def dump_ast_impl(source_files: List[str]) -> None:
    """Dump AST for all source files."""
    for source_file in source_files:
        try:
            with open(source_file, "r", encoding="utf-8") as f:
                source_code = f.read()
        except (OSError, UnicodeDecodeError) as e:
            error(f"Failed to read {source_file}: {e}")
            continue
        root = parse_js_source(source_code)
        print(f"\n=== AST for {source_file} ===")
        dump_ast_tree(source_code, root)
        print("=== End AST ===\n")


def list_features() -> None:
    """Print the feature catalog and the node kind each feature is matched on."""
    node_kinds = {rule.feature: kind for kind, rule in DETECTION_RULES.items()}
    print(f"Detected features ({len(FEATURE_CATALOG)}):\n")
    for feature, label in FEATURE_CATALOG.items():
        print(f"  {feature.value:<26} {label}  (on {node_kinds[feature]})")
