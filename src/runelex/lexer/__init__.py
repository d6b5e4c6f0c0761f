"""State-function lexer engine for runelex.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, ScanAction, EOF
├── core.py              # Lexer class (mixin composition + runner)
├── cursor.py            # CursorMixin: read, backtrack, peek, accept, ...
└── emit.py              # EmitterMixin: emit, emit_if_pending, emit_eof, errorf

Usage:
    >>> from runelex.lexer import Lexer
    >>> lexer = Lexer("input", "hello", lex_text)
    >>> lexer.run()

"""

from runelex.lexer.core import Lexer, ScanAction
from runelex.lexer.cursor import EOF, REPLACEMENT_CHAR, decode_rune

__all__ = ["EOF", "Lexer", "REPLACEMENT_CHAR", "ScanAction", "decode_rune"]
