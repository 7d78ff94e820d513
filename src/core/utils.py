import os
import sys

_DEBUG_ENABLED = bool(os.getenv("ESCHECK_DEBUG"))


def debug(*args, **kwargs):
    if _DEBUG_ENABLED:
        prefix = "\033[1m[DEBUG]\033[0m"
        print(prefix, *args, file=sys.stderr, **kwargs)


def info(*args, **kwargs):
    prefix = "\033[1;34m[INFO]\033[0m"
    print(prefix, *args, file=sys.stderr, **kwargs)


def warn(*args, **kwargs):
    prefix = "\033[1;33m[WARNING]\033[0m"
    print(prefix, *args, file=sys.stderr, **kwargs)


def error(*args, **kwargs):
    prefix = "\033[1;31m[ERROR]\033[0m"
    print(prefix, *args, file=sys.stderr, **kwargs)


def truncate_text(text: str, max_len: int = 60) -> str:
    """Shorten text for single-line display (newlines escaped, '...' appended)."""
    if len(text) > max_len:
        text = text[:max_len] + "..."
    return text.replace("\n", "\\n")
