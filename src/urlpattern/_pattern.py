"""Pattern — chainable builder over a MatcherGroup, with a sticky error.

A Pattern is built once by chaining host/path/path_prefix/queries calls
and is read-only afterwards, so match() can be called from any number of
threads without locking. The first build error is kept; every later
build call is a no-op and match() never matches.

Example::

    p = (
        Pattern()
        .host("{subdomain}.example.com")
        .path_prefix("/api")
        .path("/events/{id:[0-9]+}")
    )
    p.match("http://foo.example.com/api/events/12345")
    # ({"subdomain": "foo", "id": "12345"}, True)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from urlpattern._errors import MalformedTemplateError, PatternError
from urlpattern._group import MatcherGroup
from urlpattern._route import RouteMatcher
from urlpattern._url import URL

if TYPE_CHECKING:
    from collections.abc import Mapping

    from urlpattern._template import TemplateKind

_log = logging.getLogger("urlpattern")


class Pattern:
    """Stores information to match a URL.

    Variable names must be unique across all templates of one pattern.
    """

    def __init__(self, strict_slash: bool = True, use_encoded_path: bool = False) -> None:
        self.strict_slash = strict_slash
        self.use_encoded_path = use_encoded_path
        self._group = MatcherGroup()
        self._matchers: list[RouteMatcher] = []
        self._err: PatternError | None = None

    def __repr__(self) -> str:
        templates = ", ".join(f"{m.kind}({m.template!r})" for m in self._matchers)
        state = "ok" if self._err is None else f"error={self._err}"
        return f"Pattern([{templates}], {state})"

    # ── Build ───────────────────────────────────────────────────────────────

    def host(self, tpl: str) -> Pattern:
        """Add a matcher for the URL host.

        ``{name}`` matches anything until the next dot; ``{name:pattern}``
        matches the given regexp pattern::

            Pattern().host("www.example.com")
            Pattern().host("{subdomain}.domain.com")
            Pattern().host("{subdomain:[a-z]+}.domain.com")
        """
        if self._err is None:
            self._record(self._add_matcher(tpl, "Host"))
        return self

    def path(self, tpl: str) -> Pattern:
        """Add a matcher for the URL path.

        The template must start with a ``/``. ``{name}`` matches anything
        until the next slash. If a path was added before, ``tpl`` is
        appended to it (trailing slashes of the previous path trimmed).
        """
        if self._err is None:
            self._record(self._add_matcher(tpl, "Path"))
        return self

    def path_prefix(self, tpl: str) -> Pattern:
        """Add a matcher for the URL path prefix.

        Slashes are not treated specially (``/foobar/`` is matched by the
        prefix ``/foo``), so you may want a trailing slash here. strict_slash
        has no effect on prefix templates.
        """
        if self._err is None:
            self._record(self._add_matcher(tpl, "PathPrefix"))
        return self

    def queries(self, *pairs: str) -> Pattern:
        """Add matchers for URL query values, given as key/value pairs.

        ``Pattern().queries("foo", "bar", "id", "{id:[0-9]+}")`` only
        matches if the URL contains ``foo=bar`` and a numeric ``id``. An
        empty value matches any value as long as the key is set.
        """
        if self._err is not None:
            return self
        if len(pairs) % 2 != 0:
            msg = f"number of parameters must be multiple of 2, got {len(pairs)}"
            self._record(MalformedTemplateError(" ".join(pairs), msg))
            return self
        for key, value in zip(pairs[::2], pairs[1::2], strict=True):
            err = self._add_matcher(f"{key}={value}", "Query")
            if err is not None:
                self._record(err)
                break
        return self

    def _add_matcher(self, tpl: str, kind: TemplateKind) -> PatternError | None:
        """Compile a template and store it, returning the error if any."""
        if kind in ("Path", "PathPrefix"):
            if tpl and not tpl.startswith("/"):
                return MalformedTemplateError(tpl, "path must start with a slash")
            if self._group.path is not None:
                tpl = self._group.path.template.rstrip("/") + tpl
        try:
            matcher = RouteMatcher.compile(
                tpl,
                kind,
                strict_slash=self.strict_slash,
                use_encoded_path=self.use_encoded_path,
            )
            self._group.insert(matcher)
        except PatternError as e:
            return e
        self._matchers.append(matcher)
        return None

    def _record(self, err: PatternError | None) -> None:
        if err is None:
            return
        _log.debug("pattern build failed: %s", err)
        self._err = err

    # ── State ───────────────────────────────────────────────────────────────

    @property
    def error(self) -> PatternError | None:
        """The first build error, or None."""
        return self._err

    @property
    def ok(self) -> bool:
        return self._err is None

    @property
    def matchers(self) -> tuple[RouteMatcher, ...]:
        """All matchers in the order they were added."""
        return tuple(self._matchers)

    def raise_for_error(self) -> None:
        """Raise the stored build error, if one occurred."""
        if self._err is not None:
            raise self._err

    # ── Match ───────────────────────────────────────────────────────────────

    def match(self, url: URL | str) -> tuple[dict[str, str], bool]:
        """Match the pattern against the URL.

        Returns the extracted variables and True, or an empty dict and
        False when any matcher fails or the pattern has a build error.
        """
        if self._err is not None:
            return {}, False
        if isinstance(url, str):
            url = URL.parse(url)
        for m in self._matchers:
            if not m.matches(url):
                return {}, False
        return self._group.extract(url), True

    # ── Reverse build ───────────────────────────────────────────────────────

    def url_host(self, values: Mapping[str, str]) -> str:
        """Build the host from variable values."""
        return self._require(self._group.host, "host").build(values)

    def url_path(self, values: Mapping[str, str]) -> str:
        """Build the path from variable values."""
        return self._require(self._group.path, "path").build(values)

    def url_query(self, values: Mapping[str, str]) -> str:
        """Build the query string (without ``?``) from variable values."""
        self.raise_for_error()
        return "&".join(q.build(values) for q in self._group.queries)

    def url(self, values: Mapping[str, str], scheme: str = "http") -> str:
        """Build a URL from every part this pattern defines."""
        self.raise_for_error()
        parts: list[str] = []
        if self._group.host is not None:
            parts.append(f"{scheme}://{self._group.host.build(values)}")
        if self._group.path is not None:
            parts.append(self._group.path.build(values))
        if self._group.queries:
            parts.append(f"?{self.url_query(values)}")
        return "".join(parts)

    def _require(self, matcher: RouteMatcher | None, part: str) -> RouteMatcher:
        self.raise_for_error()
        if matcher is None:
            msg = f"pattern has no {part} template"
            raise PatternError(msg)
        return matcher


def new_pattern(strict_slash: bool = True, use_encoded_path: bool = False) -> Pattern:
    """Return a new pattern, strict slash on and decoded paths by default."""
    return Pattern(strict_slash=strict_slash, use_encoded_path=use_encoded_path)
