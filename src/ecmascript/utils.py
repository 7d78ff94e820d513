"""
Shared utilities for JavaScript parsing.
"""

import bisect
from typing import List, Optional, Tuple


class ByteOffsetMap:
    """
    Convert tree-sitter byte offsets into Python string (character) offsets.

    Tree-sitter parses the UTF-8 encoding of the source and reports byte
    offsets. For ASCII-only sources bytes and characters coincide; otherwise
    a byte -> char table is built once per source.
    """

    def __init__(self, source_code: str):
        self.source_code = source_code
        self.source_bytes = source_code.encode("utf-8")
        self._table: Optional[List[int]] = None
        if len(self.source_bytes) != len(source_code):
            self._table = _build_char_offset_table(source_code)

    def to_char(self, byte_pos: int) -> int:
        if self._table is None:
            return byte_pos
        if byte_pos >= len(self._table):
            return len(self.source_code)
        return self._table[byte_pos]

    def text(self, start_byte: int, end_byte: int) -> str:
        return _extract_text(self.source_bytes, start_byte, end_byte)


def _build_char_offset_table(source_code: str) -> List[int]:
    """Map every byte position of the UTF-8 encoding to its character index."""
    table: List[int] = []
    for char_idx, c in enumerate(source_code):
        table.extend([char_idx] * len(c.encode("utf-8")))
    table.append(len(source_code))
    return table


def _extract_text(source_bytes: bytes, start_byte: int, end_byte: int) -> str:
    return source_bytes[start_byte:end_byte].decode("utf-8", errors="replace")


def _build_line_offset_table(source_code: str) -> List[int]:
    """Build table of character offsets where each line starts."""
    offsets = [0]
    for i, c in enumerate(source_code):
        if c == "\n":
            offsets.append(i + 1)
    return offsets


def offset_to_line_col(source_code: str, offset: int) -> Tuple[int, int]:
    """
    Convert a character offset to a (line, column) tuple (1-indexed).
    Negative offsets (unknown position) map to (1, 1).
    """
    if offset < 0:
        return (1, 1)
    offset = min(offset, len(source_code))
    line_offsets = _build_line_offset_table(source_code)
    line = bisect.bisect_right(line_offsets, offset)
    col = offset - line_offsets[line - 1] + 1
    return (line, col)
