"""
CLI helper functions: source file collection and per-file detection.
"""

from pathlib import Path
from typing import List

from core.utils import debug, error
from detector import DetectionOptions, JSParseError, detect_es_features
from reporter import FileResult

JS_EXTENSIONS = (".js", ".mjs", ".cjs", ".jsx")

# Dependency and build output directories never scanned
SKIP_DIRS = {"node_modules", ".git", "bower_components"}


def _is_skipped(file_path: Path, root: Path) -> bool:
    return any(part in SKIP_DIRS for part in file_path.relative_to(root).parts[:-1])


def collect_source_files(input_path: str) -> List[str]:
    """Collect JavaScript source files from a path (file or directory)."""
    path = Path(input_path)
    if not path.exists():
        return []
    if path.is_file():
        return [str(path)]
    if path.is_dir():
        source_files = []
        for file_path in path.rglob("*"):
            if file_path.suffix not in JS_EXTENSIONS or not file_path.is_file():
                continue
            if _is_skipped(file_path, path):
                continue
            source_files.append(str(file_path))
        return sorted(source_files)
    return []


def read_source_file(source_file: str) -> str:
    with open(source_file, "r", encoding="utf-8") as f:
        return f.read()


def detect_in_files(source_files: List[str], options: DetectionOptions) -> List[FileResult]:
    """Run detection on each file. Read and parse failures are recorded per file."""
    results: List[FileResult] = []
    for source_file in source_files:
        try:
            source_code = read_source_file(source_file)
        except (OSError, UnicodeDecodeError) as e:
            error(f"Failed to read {source_file}: {e}")
            results.append(FileResult(source_file, error=f"read error: {e}"))
            continue
        try:
            findings = detect_es_features(source_code, options)
        except JSParseError as e:
            error(f"Failed to parse {source_file}: {e}")
            results.append(FileResult(source_file, source_code, error=str(e)))
            continue
        debug(f"{source_file}: {len(findings)} finding(s)")
        results.append(FileResult(source_file, source_code, findings))
    return results
