"""
Main entry point: scan JavaScript files for ES6+ syntax.
"""

import sys
import os
import argparse
from typing import List, Optional

from core.utils import debug, error, info
from detector import DEFAULT_RESULT_LIMIT, DEFAULT_SNIPPET_MAX_LENGTH, DetectionOptions
from reporter import OutputMode, report_findings
from cli.helpers import collect_source_files, detect_in_files
from cli.debug import dump_ast_impl, check_parser_impl, list_features

# Exit codes
EXIT_CLEAN = 0
EXIT_FINDINGS = 1
EXIT_FAILURE = 2


def main(
    input_path: str,
    limit: int = DEFAULT_RESULT_LIMIT,
    snippet_size: int = DEFAULT_SNIPPET_MAX_LENGTH,
    output_mode: OutputMode = OutputMode.SHORT,
    output_dir: Optional[str] = None,
    dump_ast: bool = False,
    check_parser: bool = False,
) -> int:
    """Main entry point for detection.

    Returns 0 when no file uses ES6+ syntax, 1 when findings were reported,
    2 when a file could not be read or parsed.
    """
    source_files = collect_source_files(input_path)
    if not source_files:
        error(f"No JavaScript source files found at: {input_path}")
        return EXIT_FAILURE

    if check_parser:
        return check_parser_impl(source_files)

    if dump_ast:
        dump_ast_impl(source_files)

    options = DetectionOptions(result_limit=limit, snippet_max_length=snippet_size)
    if len(source_files) > 1:
        info(f"Scanning {len(source_files)} file(s)")
    debug(f"Options: limit={options.result_limit}, snippet_size={options.snippet_max_length}")

    results = detect_in_files(source_files, options)
    failures = [r for r in results if r.error is not None]

    output_file = None
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
        project_name = os.path.basename(os.path.normpath(input_path))
        ext = ".json" if output_mode == OutputMode.JSON else ".txt"
        output_path = os.path.join(output_dir, f"OUT-{project_name}{ext}")
        output_file = open(output_path, "w", encoding="utf-8")
        print(f"Writing results to: {output_path}")

    try:
        num_findings = report_findings(results, output_mode, output_file)
    finally:
        if output_file:
            output_file.close()

    if failures:
        error(f"{len(failures)} file(s) could not be scanned")
        return EXIT_FAILURE
    return EXIT_FINDINGS if num_findings > 0 else EXIT_CLEAN


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Detect ES6+ syntax in JavaScript source")
    parser.add_argument("input_path", nargs="?", help="Input JavaScript file or directory")
    parser.add_argument(
        "-l",
        "--limit",
        type=int,
        default=DEFAULT_RESULT_LIMIT,
        help=f"Maximum findings reported per file (default: {DEFAULT_RESULT_LIMIT})",
    )
    parser.add_argument(
        "-s",
        "--snippet-size",
        type=int,
        default=DEFAULT_SNIPPET_MAX_LENGTH,
        help=f"Maximum snippet length in characters (default: {DEFAULT_SNIPPET_MAX_LENGTH})",
    )
    parser.add_argument(
        "-o", "--output", choices=["short", "full", "json"], default="short", help="Output verbosity"
    )
    parser.add_argument("-O", "--output-dir", metavar="DIR", help="Save results to a file in DIR")
    parser.add_argument("--list-features", action="store_true", help="List all detected features")
    parser.add_argument("-da", "--dump-ast", action="store_true", help="Dump tree-sitter AST")
    parser.add_argument(
        "-cp", "--check-parser", action="store_true", help="Check parser: validate all files parse correctly"
    )
    return parser


def cli(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.list_features:
        list_features()
        return EXIT_CLEAN

    if not args.input_path:
        parser.error("input_path is required (or use --list-features)")

    return main(
        args.input_path,
        limit=args.limit,
        snippet_size=args.snippet_size,
        output_mode=OutputMode(args.output),
        output_dir=args.output_dir,
        dump_ast=args.dump_ast,
        check_parser=args.check_parser,
    )


def run() -> None:
    sys.exit(cli())


if __name__ == "__main__":
    run()
