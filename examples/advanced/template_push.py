"""Tokenize a template on a worker thread and report scan errors."""

from enum import Enum, auto

from runelex import EOF, PushScanner, ScanError, tokenize


class Tpl(Enum):
    TEXT = auto()
    OPEN = auto()
    CLOSE = auto()


def lex_text(lexer):
    while not lexer.has_prefix("{{"):
        if lexer.read() == EOF:
            lexer.emit_if_pending(Tpl.TEXT)
            return lexer.emit_eof()
    lexer.emit_if_pending(Tpl.TEXT)
    return lex_block


def lex_block(lexer):
    lexer.accept_literal("{{")
    lexer.emit(Tpl.OPEN)
    while not lexer.has_prefix("}}"):
        char = lexer.read()
        if char == EOF or char == "\n":
            return lexer.errorf("unclosed block opened at offset %d", lexer.start - 2)
    lexer.emit_if_pending(Tpl.TEXT)
    lexer.accept_literal("}}")
    lexer.emit(Tpl.CLOSE)
    return lex_text


with PushScanner("page", "<h1>{{title}}</h1>\n<p>{{body}}</p>", lex_text) as scanner:
    while True:
        token, done = scanner.listen()
        print(f"{token.type.name:6} {token!s}")
        if done:
            break

try:
    tokenize("<h1>{{title</h1>\n", lex_text, name="broken.tpl", raise_on_error=True)
except ScanError as err:
    print("error:", err)
