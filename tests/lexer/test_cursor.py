"""Tests for the cursor primitives.

Scanning actions are not needed here: a Lexer is built with a dummy
initial action and the primitives are called directly.
"""

from __future__ import annotations

import pytest

from runelex import EOF, CursorError, Lexer, ScanConfig
from runelex.lexer import REPLACEMENT_CHAR, decode_rune


def _stop(lexer: Lexer) -> None:
    return None


def make(source: str | bytes, **config: object) -> Lexer:
    return Lexer("test", source, _stop, config=ScanConfig(**config))  # type: ignore[arg-type]


class TestRead:
    def test_reads_in_order(self) -> None:
        lexer = make("ab")
        assert lexer.read() == "a"
        assert lexer.read() == "b"
        assert lexer.current == 2

    def test_read_records_width(self) -> None:
        lexer = make("ab")
        lexer.read()
        assert lexer.width == 1

    def test_eof_returns_empty_and_zero_width(self) -> None:
        lexer = make("a")
        lexer.read()
        assert lexer.read() == EOF
        assert lexer.width == 0
        assert lexer.current == 1

    def test_empty_input(self) -> None:
        lexer = make("")
        assert lexer.at_eof
        assert lexer.read() == EOF

    def test_repeated_eof_reads_stay_put(self) -> None:
        lexer = make("")
        for _ in range(3):
            assert lexer.read() == EOF
        assert lexer.current == 0


class TestBacktrack:
    def test_undoes_one_read(self) -> None:
        lexer = make("abc")
        lexer.read()
        before = lexer.current
        lexer.read()
        lexer.backtrack()
        assert lexer.current == before

    def test_backtrack_after_eof_is_noop(self) -> None:
        lexer = make("a")
        lexer.read()
        lexer.read()
        lexer.backtrack()
        assert lexer.current == 1

    def test_second_backtrack_is_ignored(self) -> None:
        lexer = make("abc")
        lexer.read()
        lexer.read()
        lexer.backtrack()
        lexer.backtrack()
        assert lexer.current == 1

    def test_second_backtrack_raises_in_strict_mode(self) -> None:
        lexer = make("abc", strict_backtrack=True)
        lexer.read()
        lexer.backtrack()
        with pytest.raises(CursorError):
            lexer.backtrack()

    def test_backtrack_before_any_read_strict(self) -> None:
        lexer = make("abc", strict_backtrack=True)
        with pytest.raises(CursorError, match="without a preceding read"):
            lexer.backtrack()

    def test_backtrack_never_crosses_start(self) -> None:
        lexer = make("abc")
        lexer.read()
        lexer.ignore()
        lexer.backtrack()
        lexer.backtrack()
        assert lexer.start <= lexer.current


class TestPeek:
    def test_returns_next_without_moving(self) -> None:
        lexer = make("xy")
        assert lexer.peek() == "x"
        assert lexer.current == 0
        assert lexer.peek() == "x"

    def test_at_eof(self) -> None:
        lexer = make("")
        assert lexer.peek() == EOF
        assert lexer.current == 0


class TestAccept:
    def test_accepts_member(self) -> None:
        lexer = make("7a")
        assert lexer.accept("0123456789") is True
        assert lexer.current == 1

    def test_rejects_non_member(self) -> None:
        lexer = make("a7")
        assert lexer.accept("0123456789") is False
        assert lexer.current == 0

    def test_accepts_frozenset(self) -> None:
        lexer = make("x")
        assert lexer.accept(frozenset("xyz"))

    def test_eof_is_never_a_member(self) -> None:
        lexer = make("")
        assert lexer.accept("abc") is False
        assert lexer.accept("") is False

    def test_accept_run(self) -> None:
        lexer = make("   x")
        assert lexer.accept_run(" ") == 3
        assert lexer.current == 3
        assert lexer.peek() == "x"

    def test_accept_run_to_eof(self) -> None:
        lexer = make("aaa")
        assert lexer.accept_run("a") == 3
        assert lexer.at_eof

    def test_accept_run_nothing(self) -> None:
        lexer = make("b")
        assert lexer.accept_run("a") == 0
        assert lexer.current == 0


class TestPendingRegion:
    def test_ignore_drops_pending(self) -> None:
        lexer = make("  word")
        lexer.accept_run(" ")
        assert lexer.pending == "  "
        lexer.ignore()
        assert lexer.start == lexer.current == 2
        assert lexer.pending == ""

    def test_remaining(self) -> None:
        lexer = make("abc")
        lexer.read()
        assert lexer.remaining == "bc"


class TestLiterals:
    def test_has_prefix_does_not_consume(self) -> None:
        lexer = make("{{x}}")
        assert lexer.has_prefix("{{")
        assert lexer.current == 0

    def test_has_prefix_from_current(self) -> None:
        lexer = make("a}}")
        assert not lexer.has_prefix("}}")
        lexer.read()
        assert lexer.has_prefix("}}")

    def test_has_prefix_past_end(self) -> None:
        lexer = make("{")
        assert not lexer.has_prefix("{{")

    def test_accept_literal(self) -> None:
        lexer = make("{{x")
        assert lexer.accept_literal("{{")
        assert lexer.current == 2
        assert lexer.pending == "{{"

    def test_accept_literal_cannot_be_backtracked(self) -> None:
        lexer = make("{{x")
        lexer.accept_literal("{{")
        lexer.backtrack()
        assert lexer.current == 2

    def test_accept_literal_mismatch(self) -> None:
        lexer = make("{x")
        assert not lexer.accept_literal("{{")
        assert lexer.current == 0


class TestBytesInput:
    def test_multibyte_width(self) -> None:
        lexer = make("é日😀".encode())
        assert lexer.read() == "é"
        assert lexer.width == 2
        assert lexer.read() == "日"
        assert lexer.width == 3
        assert lexer.read() == "😀"
        assert lexer.width == 4
        assert lexer.current == 9

    def test_backtrack_restores_multibyte(self) -> None:
        lexer = make("a日".encode())
        lexer.read()
        lexer.read()
        lexer.backtrack()
        assert lexer.current == 1

    def test_accept_advances_by_byte_width(self) -> None:
        lexer = make("日x".encode())
        assert lexer.accept("日本")
        assert lexer.current == 3

    def test_pending_is_decoded(self) -> None:
        lexer = make("café".encode())
        lexer.accept_run("café")
        assert lexer.pending == "café"

    def test_has_prefix_encodes_literal(self) -> None:
        lexer = make("日本".encode())
        assert lexer.has_prefix("日")
        assert lexer.accept_literal("日")
        assert lexer.current == 3

    def test_malformed_byte_becomes_replacement(self) -> None:
        lexer = make(b"\xffa")
        assert lexer.read() == REPLACEMENT_CHAR
        assert lexer.width == 1
        assert lexer.read() == "a"

    def test_truncated_sequence(self) -> None:
        lexer = make(b"\xe6\x97")
        assert lexer.read() == REPLACEMENT_CHAR
        assert lexer.read() == REPLACEMENT_CHAR
        assert lexer.read() == EOF


class TestDecodeRune:
    @pytest.mark.parametrize(
        "data,expected",
        [
            (b"a", ("a", 1)),
            ("ß".encode(), ("ß", 2)),
            ("€".encode(), ("€", 3)),
            ("𝄞".encode(), ("𝄞", 4)),
            (b"\xc0\xaf", (REPLACEMENT_CHAR, 1)),  # overlong
            (b"\xed\xa0\x80", (REPLACEMENT_CHAR, 1)),  # surrogate
            (b"\x80", (REPLACEMENT_CHAR, 1)),  # stray continuation
        ],
    )
    def test_decode(self, data: bytes, expected: tuple[str, int]) -> None:
        assert decode_rune(data, 0) == expected


class TestLocation:
    def test_location_of_cursor(self) -> None:
        lexer = make("ab\ncd")
        for _ in range(4):
            lexer.read()
        loc = lexer.location()
        assert (loc.lineno, loc.col_offset) == (2, 2)
        assert loc.source_name == "test"
