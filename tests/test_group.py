"""Tests for MatcherGroup: slots, variable uniqueness and extraction."""

from __future__ import annotations

import pytest

from urlpattern import URL, DuplicateVariableError, MatcherGroup, RouteMatcher


def _m(template: str, kind: str) -> RouteMatcher:
    return RouteMatcher.compile(template, kind)  # type: ignore[arg-type]


class TestInsert:
    def test_slots(self) -> None:
        g = MatcherGroup()
        host = _m("{sub}.example.com", "Host")
        path = _m("/{id}", "Path")
        q1 = _m("a={a}", "Query")
        q2 = _m("b={b}", "Query")
        for m in (host, path, q1, q2):
            g.insert(m)
        assert g.host is host
        assert g.path is path
        assert g.queries == [q1, q2]

    def test_prefix_goes_to_path_slot(self) -> None:
        g = MatcherGroup()
        prefix = _m("/api", "PathPrefix")
        g.insert(prefix)
        assert g.path is prefix

    def test_host_vs_path(self) -> None:
        g = MatcherGroup()
        g.insert(_m("/{name}", "Path"))
        with pytest.raises(DuplicateVariableError) as exc_info:
            g.insert(_m("{name}.example.com", "Host"))
        assert exc_info.value.name == "name"
        assert g.host is None

    def test_path_vs_host(self) -> None:
        g = MatcherGroup()
        g.insert(_m("{name}.example.com", "Host"))
        with pytest.raises(DuplicateVariableError):
            g.insert(_m("/{name}", "Path"))

    def test_query_vs_query(self) -> None:
        g = MatcherGroup()
        g.insert(_m("a={v}", "Query"))
        with pytest.raises(DuplicateVariableError):
            g.insert(_m("b={v}", "Query"))
        assert len(g.queries) == 1

    def test_path_vs_query(self) -> None:
        g = MatcherGroup()
        g.insert(_m("x={id}", "Query"))
        with pytest.raises(DuplicateVariableError):
            g.insert(_m("/{id}", "Path"))

    def test_query_vs_path(self) -> None:
        g = MatcherGroup()
        g.insert(_m("/{id}", "Path"))
        with pytest.raises(DuplicateVariableError):
            g.insert(_m("x={id}", "Query"))
        assert g.queries == []

    def test_query_vs_prefix(self) -> None:
        g = MatcherGroup()
        g.insert(_m("/{id}", "PathPrefix"))
        with pytest.raises(DuplicateVariableError):
            g.insert(_m("x={id}", "Query"))
        assert g.queries == []

    def test_query_vs_host(self) -> None:
        g = MatcherGroup()
        g.insert(_m("{sub}.example.com", "Host"))
        with pytest.raises(DuplicateVariableError):
            g.insert(_m("x={sub}", "Query"))

    def test_replacing_path_not_checked_against_old_path(self) -> None:
        g = MatcherGroup()
        g.insert(_m("/{id}", "Path"))
        replacement = _m("/{id}/edit", "Path")
        g.insert(replacement)
        assert g.path is replacement

    def test_replacing_host(self) -> None:
        g = MatcherGroup()
        g.insert(_m("{sub}.example.com", "Host"))
        replacement = _m("{sub}.example.org", "Host")
        g.insert(replacement)
        assert g.host is replacement


class TestExtract:
    def test_union(self) -> None:
        g = MatcherGroup()
        g.insert(_m("{sub}.example.com", "Host"))
        g.insert(_m("/events/{id:[0-9]+}", "Path"))
        g.insert(_m("page={page}", "Query"))
        url = URL.parse("http://foo.example.com/events/7?page=2")
        assert g.extract(url) == {"sub": "foo", "id": "7", "page": "2"}

    def test_empty_group(self) -> None:
        assert MatcherGroup().extract(URL.parse("http://example.com/")) == {}
