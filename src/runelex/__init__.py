"""
runelex: a state-function lexing engine

Grammars are graphs of scanning actions. Each action reads characters
through the lexer's cursor, emits tokens, and returns the next action
(or None to stop). runelex drives the graph and delivers the tokens,
either inline on demand (pull) or from a worker thread (push).

Quick Start:
    >>> from enum import Enum, auto
    >>> from runelex import EOF, tokenize
    >>>
    >>> class Tok(Enum):
    ...     WORD = auto()
    >>>
    >>> def lex_words(lexer):
    ...     while (char := lexer.read()) != EOF:
    ...         if char == " ":
    ...             lexer.backtrack()
    ...             lexer.emit_if_pending(Tok.WORD)
    ...             lexer.read()
    ...             lexer.ignore()
    ...     lexer.emit_if_pending(Tok.WORD)
    ...     return lexer.emit_eof()
    >>>
    >>> [str(tok) for tok in tokenize("hello world", lex_words)]
    ['hello', 'world', 'EOF']

Background scanning:
    >>> from runelex import PushScanner
    >>> with PushScanner("page", source, lex_words) as scanner:
    ...     for token in scanner:
    ...         handle(token)
"""

from runelex.channel import BoundedChannel, BufferedChannel, TokenChannel
from runelex.charsets import is_alnum, is_alpha, is_space
from runelex.config import (
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)
from runelex.errors import CursorError, ProtocolError, RunelexError, ScanError
from runelex.lexer import EOF, Lexer, ScanAction
from runelex.location import SourceLocation
from runelex.profiling import ScanAccumulator, get_scan_accumulator, profiled_scan
from runelex.scanner import PullScanner, PushScanner, tokenize
from runelex.tokens import AnyToken, EndOfStream, ErrorToken, Token, TokenKind, is_terminal

__version__ = "0.1.0"

__all__ = [
    "AnyToken",
    "BoundedChannel",
    "BufferedChannel",
    "CursorError",
    "EOF",
    "EndOfStream",
    "ErrorToken",
    "Lexer",
    "ProtocolError",
    "PullScanner",
    "PushScanner",
    "RunelexError",
    "ScanAccumulator",
    "ScanAction",
    "ScanConfig",
    "ScanError",
    "SourceLocation",
    "Token",
    "TokenChannel",
    "TokenKind",
    "__version__",
    "get_scan_accumulator",
    "get_scan_config",
    "is_alnum",
    "is_alpha",
    "is_space",
    "is_terminal",
    "profiled_scan",
    "reset_scan_config",
    "scan_config_context",
    "set_scan_config",
    "tokenize",
]
