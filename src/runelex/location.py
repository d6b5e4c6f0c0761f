"""Source location tracking for error messages and debugging.

The lexer works in flat offsets. SourceLocation converts an offset into
1-indexed line and column numbers on demand, so the hot path never pays
for line counting.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages and debugging.

    All positions are 1-indexed (lineno and col_offset start at 1).
    Columns count the input's own units: characters for ``str`` input,
    bytes for ``bytes`` input.

    Attributes:
        lineno: Line number (1-indexed)
        col_offset: Column offset (1-indexed)
        offset: Absolute offset in the input
        source_name: Diagnostic name of the lexer (optional)

    Examples:
            >>> SourceLocation.from_offset("ab\\ncd", 4)
        SourceLocation(lineno=2, col_offset=2, offset=4, source_name=None)

    """

    lineno: int
    col_offset: int
    offset: int = 0
    source_name: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "input:10:5" or "10:5"
        """
        if self.source_name:
            return f"{self.source_name}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def from_offset(
        cls,
        source: str | bytes,
        offset: int,
        source_name: str | None = None,
    ) -> SourceLocation:
        """Compute the location of an offset in source.

        Args:
            source: The scanned input (str, or UTF-8 bytes or bytearray)
            offset: Offset into source (clamped to its bounds)
            source_name: Optional diagnostic name

        Returns:
            SourceLocation for offset
        """
        offset = max(0, min(offset, len(source)))
        newline = b"\n" if isinstance(source, (bytes, bytearray)) else "\n"
        lineno = source.count(newline, 0, offset) + 1
        last_nl = source.rfind(newline, 0, offset)
        return cls(
            lineno=lineno,
            col_offset=offset - last_nl,
            offset=offset,
            source_name=source_name,
        )
