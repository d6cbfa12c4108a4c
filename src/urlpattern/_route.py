"""RouteMatcher — one compiled template tested against one URL component.

Host templates are matched against the URL host, Path and PathPrefix
templates against the (optionally escaped) path, and Query templates
against a single ``key=value`` pair taken from the query string.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from urlpattern._errors import MissingRouteVariableError, VariableMismatchError
from urlpattern._template import compile_template
from urlpattern._url import get_host, get_path

if TYPE_CHECKING:
    from collections.abc import Mapping, MutableMapping

    from urlpattern._template import CompiledTemplate, TemplateKind
    from urlpattern._url import URL


@dataclass(frozen=True, slots=True)
class RouteMatcher:
    """Matches a compiled template and builds URL fragments from it."""

    compiled: CompiledTemplate

    @classmethod
    def compile(
        cls,
        template: str,
        kind: TemplateKind,
        *,
        strict_slash: bool = True,
        use_encoded_path: bool = False,
    ) -> RouteMatcher:
        """Compile a template straight into a matcher."""
        return cls(
            compile_template(
                template,
                kind,
                strict_slash=strict_slash,
                use_encoded_path=use_encoded_path,
            )
        )

    @property
    def kind(self) -> TemplateKind:
        return self.compiled.kind

    @property
    def template(self) -> str:
        return self.compiled.template

    @property
    def names(self) -> tuple[str, ...]:
        return self.compiled.names

    def component(self, url: URL) -> str:
        """Return the part of the URL this matcher is tested against."""
        match self.compiled.kind:
            case "Host":
                return get_host(url)
            case "Query":
                return self.query_string(url)
            case _:
                if self.compiled.use_encoded_path:
                    return get_path(url)
                return url.path

    def matches(self, url: URL) -> bool:
        """Match the regexp against the URL host, path or query."""
        return self.compiled.regexp.search(self.component(url)) is not None

    def query_string(self, url: URL) -> str:
        """Return the single ``key=value`` pair this Query template is about.

        For a URL with ``foo=bar&baz=ding`` and a template ``foo={v}``
        this returns ``foo=bar``. Only the first value of a repeated key is
        used. An absent key yields the empty string.
        """
        if self.compiled.kind != "Query":
            return ""
        key = self.compiled.query_key
        value = url.query_param(key)
        if value is None:
            return ""
        return f"{key}={value}"

    def extract(self, url: URL, into: MutableMapping[str, str]) -> None:
        """Copy the variables matched in ``url`` into ``into``.

        Keys are the user variable names. With a name declared twice in
        one template the last occurrence wins. A non-matching URL
        contributes nothing.
        """
        m = self.compiled.regexp.search(self.component(url))
        if m is None:
            return
        for name, group in zip(self.compiled.names, self.compiled.group_names(), strict=True):
            into[name] = m.group(group) or ""

    def build(self, values: Mapping[str, str]) -> str:
        """Build a URL fragment from variable values.

        The result is checked against the full regexp rather than each
        variable on its own. Only when that fails are the variables
        validated one by one, to report which value is wrong.

        Raises:
            MissingRouteVariableError: a variable has no value.
            VariableMismatchError: a value doesn't match its pattern.
        """
        url_values: list[str] = []
        for name in self.compiled.names:
            if name not in values:
                raise MissingRouteVariableError(name)
            url_values.append(values[name])
        rv = self.compiled.reverse % tuple(url_values)
        if self.compiled.regexp.search(rv) is None:
            for name, validator in zip(self.compiled.names, self.compiled.validators, strict=True):
                if validator.search(values[name]) is None:
                    raise VariableMismatchError(values[name], validator.pattern)
        return rv
