from core.utils import debug, info, warn, error

__all__ = [
    "debug",
    "info",
    "warn",
    "error",
]
