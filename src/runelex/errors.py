"""Exception classes for runelex.

Scan errors signalled by a grammar travel as terminal ErrorToken values,
not exceptions. The classes here cover the places where the library
itself raises: converting an ErrorToken on request, and contract
violations by grammar authors or consumers.
"""

from __future__ import annotations


class RunelexError(Exception):
    """Base exception for all runelex errors.

    Subclass this for specific error categories.
    """

    pass


class ScanError(RunelexError):
    """A scan error reported by a grammar, raised on request.

    Produced by ``tokenize(..., raise_on_error=True)`` from the terminal
    ErrorToken of a run.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_name: str | None = None,
    ) -> None:
        """Initialize scan error with optional location.

        Args:
            message: Diagnostic text carried by the error token
            lineno: Line number where the error was signalled (1-indexed)
            col_offset: Column offset where the error was signalled (1-indexed)
            source_name: Diagnostic name of the lexer (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_name = source_name

        location = ""
        if source_name:
            location = f"{source_name}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class CursorError(RunelexError):
    """Cursor contract violation, raised only in strict mode.

    The only checked violation is a second backtrack without an
    intervening read.
    """

    pass


class ProtocolError(RunelexError):
    """Misuse of the emission or consumption protocol.

    Raised when a scanner is started twice, listened to before it is
    started, read past its terminal token, or when a grammar emits after
    a terminal token.
    """

    pass
