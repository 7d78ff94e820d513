"""
Parse errors raised by the JavaScript front end.
"""

from ecmascript.utils import offset_to_line_col


class JSParseError(ValueError):
    """Source text is not valid JavaScript. Carries the first error position."""

    def __init__(self, message: str, offset: int = -1, line: int = 0, column: int = 0):
        super().__init__(message)
        self.offset = offset
        self.line = line
        self.column = column


def syntax_error(source_code: str, offset: int, message: str) -> JSParseError:
    """Build a JSParseError located at a character offset."""
    line, column = offset_to_line_col(source_code, offset)
    return JSParseError(f"Syntax error at {line}:{column}: {message}", offset, line, column)
