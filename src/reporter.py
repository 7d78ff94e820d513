import json
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, TextIO

from detector.collector import Finding
from ecmascript.utils import offset_to_line_col
from templates import render


_USE_COLOR = not os.environ.get("ESCHECK_NO_COLORS")


class _C:
    """ANSI color codes."""

    RESET = "\033[0m" if _USE_COLOR else ""
    BOLD = "\033[1m" if _USE_COLOR else ""
    DIM = "\033[2m" if _USE_COLOR else ""
    YELLOW = "\033[33m" if _USE_COLOR else ""


class OutputMode(Enum):
    """Finding output verbosity modes."""

    SHORT = "short"  # Location and construct type
    FULL = "full"  # + display label, qualifier, snippet
    JSON = "json"  # Machine-readable JSON output


@dataclass
class FileResult:
    """Detection outcome for one source file."""

    path: str
    source_code: str = ""
    findings: List[Finding] = field(default_factory=list)
    error: Optional[str] = None


def _location(result: FileResult, finding: Finding) -> str:
    line, col = offset_to_line_col(result.source_code, finding.source_offset)
    return f"{result.path}:{line}:{col}"


def report_findings(
    results: List[FileResult],
    output_mode: OutputMode = OutputMode.SHORT,
    output_file: Optional[TextIO] = None,
) -> int:
    """
    Report findings with configurable verbosity.

    Args:
        results: Per-file detection results
        output_mode: SHORT (default), FULL, or JSON
        output_file: Optional file handle to write output to (in addition to stdout)

    Returns: Number of findings reported
    """
    if output_mode == OutputMode.JSON:
        return report_findings_json(results, output_file)

    def _print(msg: str = ""):
        print(msg)
        if output_file:
            print(msg, file=output_file)

    entries = [
        {"location": _location(result, finding), "finding": finding}
        for result in results
        for finding in result.findings
    ]
    scanned = [r for r in results if r.error is None]

    if not entries:
        _print(f"No ES6+ features found ({len(scanned)} file(s) scanned)")
        return 0

    files_with_findings = sum(1 for r in results if r.findings)
    _print(f"\nFound {len(entries)} ES6+ feature(s) in {files_with_findings} file(s):\n")

    template = "report_full.j2" if output_mode == OutputMode.FULL else "report_short.j2"
    _print(render(template, entries=entries, c=_C).rstrip("\n"))

    return len(entries)


def _result_to_dict(result: FileResult) -> Dict[str, Any]:
    entry: Dict[str, Any] = {"path": result.path}
    if result.error is not None:
        entry["error"] = result.error
        return entry
    findings = []
    for finding in result.findings:
        item = finding.to_dict()
        line, col = offset_to_line_col(result.source_code, finding.source_offset)
        item["line"] = line
        item["column"] = col
        findings.append(item)
    entry["findings"] = findings
    return entry


def report_findings_json(
    results: List[FileResult],
    output_file: Optional[TextIO] = None,
) -> int:
    """Report findings in JSON format."""
    total = sum(len(r.findings) for r in results)
    output = {
        "files": [_result_to_dict(r) for r in results],
        "total": total,
    }

    json_str = json.dumps(output, indent=2, ensure_ascii=False)
    print(json_str)
    if output_file:
        print(json_str, file=output_file)

    return total
