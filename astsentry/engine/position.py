"""
Byte-offset to line/column resolution.

Tree-sitter nodes carry byte spans into the UTF-8 encoded source. Lines are
1 + the number of newlines before the offset; columns are the distance from
the last newline before the offset, which makes them 1-indexed on every line.
"""

from bisect import bisect_right
from typing import List, NamedTuple, Optional, Tuple, Union


class Position(NamedTuple):
    line: int
    column: int
    end_line: int
    end_column: int
    snippet: Optional[str]


class PositionResolver:
    """Resolves spans against one source text using a line-start table."""

    def __init__(self, source: Union[str, bytes]):
        if isinstance(source, str):
            source = source.encode("utf-8")
        self._data = source
        starts: List[int] = [0]
        index = source.find(b"\n")
        while index != -1:
            starts.append(index + 1)
            index = source.find(b"\n", index + 1)
        self._line_starts = starts

    def line_col(self, offset: int) -> Tuple[int, int]:
        """Convert a byte offset to a 1-based (line, column) pair."""
        offset = max(0, min(offset, len(self._data)))
        line = bisect_right(self._line_starts, offset)
        return line, offset - self._line_starts[line - 1] + 1

    def snippet(self, start: int, end: int) -> Optional[str]:
        """Source text of [start, end), or None when the span is out of range."""
        if start < 0 or end > len(self._data) or start >= end:
            return None
        return self._data[start:end].decode("utf-8", errors="replace")

    def resolve(self, start: int, end: int) -> Position:
        line, column = self.line_col(start)
        end_line, end_column = self.line_col(end)
        return Position(line, column, end_line, end_column, self.snippet(start, end))
