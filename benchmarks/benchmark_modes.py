"""Benchmark pull vs push vs sync scanning of the same template.

Run with:
    pytest benchmarks/benchmark_modes.py -v --benchmark-only
"""

try:
    import pytest

    from runelex import tokenize
    from tests.grammars import lex_text

    @pytest.mark.benchmark(group="scan-modes")
    def test_benchmark_pull(benchmark, large_template):
        """Inline pull: one transition per empty next_token()."""
        benchmark(tokenize, large_template, lex_text, mode="pull")

    @pytest.mark.benchmark(group="scan-modes")
    def test_benchmark_push(benchmark, large_template):
        """Background worker feeding a bounded channel."""
        benchmark(tokenize, large_template, lex_text, mode="push")

    @pytest.mark.benchmark(group="scan-modes")
    def test_benchmark_sync(benchmark, large_template):
        """Whole run buffered before the first token is consumed."""
        benchmark(tokenize, large_template, lex_text, mode="sync")

    @pytest.mark.benchmark(group="scan-input")
    def test_benchmark_bytes_input(benchmark, large_template):
        """UTF-8 bytes input: rune decoding on every read."""
        data = large_template.encode()
        benchmark(tokenize, data, lex_text)

except ImportError:
    pass  # pytest-benchmark not available
