"""MatcherGroup — the route matchers of one pattern that carry variables."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from urlpattern._errors import DuplicateVariableError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from urlpattern._route import RouteMatcher
    from urlpattern._url import URL


@dataclass(slots=True)
class MatcherGroup:
    """At most one host matcher, at most one path matcher, any queries.

    INV: no variable name appears in more than one of host, path and
    queries. Checked on insert, never at match time.
    """

    host: RouteMatcher | None = None
    path: RouteMatcher | None = None
    queries: list[RouteMatcher] = field(default_factory=list)

    def check(self, matcher: RouteMatcher) -> None:
        """Raise DuplicateVariableError if ``matcher`` would break the INV.

        A host replaces the current host and a path replaces the current
        path, so those are not compared with their predecessor.
        """
        for q in self.queries:
            unique_vars(matcher.names, q.names)
        if matcher.kind != "Host" and self.host is not None:
            unique_vars(matcher.names, self.host.names)
        if matcher.kind not in ("Path", "PathPrefix") and self.path is not None:
            unique_vars(matcher.names, self.path.names)

    def insert(self, matcher: RouteMatcher) -> None:
        """Store a matcher in its slot after checking variable uniqueness."""
        self.check(matcher)
        match matcher.kind:
            case "Host":
                self.host = matcher
            case "Query":
                self.queries.append(matcher)
            case _:
                self.path = matcher

    def extract(self, url: URL) -> dict[str, str]:
        """Extract the variables from the URL once every matcher matched."""
        variables: dict[str, str] = {}
        if self.host is not None:
            self.host.extract(url, variables)
        if self.path is not None:
            self.path.extract(url, variables)
        for q in self.queries:
            q.extract(url, variables)
        return variables


def unique_vars(s1: Iterable[str], s2: Iterable[str]) -> None:
    """Raise DuplicateVariableError if the two name lists share a name."""
    seen = set(s2)
    for name in s1:
        if name in seen:
            raise DuplicateVariableError(name)
