"""ReDoS safety demonstration for urlpattern.

Variable patterns are compiled with google-re2, which matches in linear
time. A pattern such as `(?:a+)+` that makes a backtracking engine blow up
on `"a" * N + "X"` stays fast here even at large N.

Run: uv run pytest tests/bench/test_bench_redos.py --benchmark-only
"""

from __future__ import annotations

from urlpattern import URL, Pattern, RouteMatcher

REDOS_TEMPLATE = "/{x:(?:a+)+}"


def _pathological_url(n: int) -> URL:
    return URL(path="/" + "a" * n + "X")


def test_bench_redos_path_n20(benchmark):
    m = RouteMatcher.compile(REDOS_TEMPLATE, "Path")
    assert benchmark(m.matches, _pathological_url(20)) is False


def test_bench_redos_path_n1000(benchmark):
    """Far beyond what a backtracking engine survives."""
    m = RouteMatcher.compile(REDOS_TEMPLATE, "Path")
    assert benchmark(m.matches, _pathological_url(1000)) is False


def test_bench_redos_full_pattern_n1000(benchmark):
    p = Pattern().path(REDOS_TEMPLATE)
    assert benchmark(p.match, _pathological_url(1000)) == ({}, False)
