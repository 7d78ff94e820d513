import os
import sys
from pathlib import Path

import pytest

# Plain reporter output (colors are evaluated at import time)
os.environ["ESCHECK_NO_COLORS"] = "1"

# Ensure the project `src` directory is on sys.path so tests can import
# modules like `detector`, `ecmascript`, `reporter`, etc.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture
def js_project(tmp_path):
    """Factory writing {relative_path: source} into a temporary project directory."""

    def _make(files: dict) -> Path:
        for rel_path, source in files.items():
            file_path = tmp_path / rel_path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(source, encoding="utf-8")
        return tmp_path

    return _make
