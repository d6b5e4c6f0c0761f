"""Split text into words with a two-state grammar."""

from enum import Enum, auto

from runelex import EOF, tokenize
from runelex.charsets import is_space


class Tok(Enum):
    WORD = auto()


def lex_space(lexer):
    while is_space(lexer.peek()):
        lexer.read()
    lexer.ignore()
    if lexer.peek() == EOF:
        return lexer.emit_eof()
    return lex_word


def lex_word(lexer):
    while (char := lexer.read()) != EOF and not is_space(char):
        pass
    if char != EOF:
        lexer.backtrack()
    lexer.emit(Tok.WORD)
    return lex_space


for token in tokenize("  state functions  all the way down ", lex_space):
    print(repr(token))
