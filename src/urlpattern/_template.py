"""Template compiler — template string -> CompiledTemplate.

A template is literal text with zero or more variables enclosed by braces:

- ``{name}`` matches the default pattern for the template kind.
- ``{name:pattern}`` matches the given regexp pattern.

Nested braces are allowed inside a pattern (``{id:[0-9]{3}}``). The only
restrictions on variables are that name and pattern can't be empty and
names can't contain a colon.

Regexes are compiled with ``google-re2``, so matching is linear-time.
Patterns that need backtracking (backreferences, lookaround) are rejected
at compile time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

import re2

from urlpattern._errors import (
    InvalidPatternError,
    MalformedTemplateError,
    TemplateTooLongError,
)

MAX_TEMPLATE_LENGTH = 8192

TemplateKind: TypeAlias = Literal["Host", "Path", "PathPrefix", "Query"]

# Default variable pattern per template kind.
DEFAULT_PATTERNS: dict[TemplateKind, str] = {
    "Host": "[^.]+",
    "Path": "[^/]+",
    "PathPrefix": "[^/]+",
    "Query": "[^?&]*",
}


@dataclass(frozen=True, slots=True)
class CompiledTemplate:
    """A compiled template: regexp to match plus data to build URLs.

    ``names``, ``validators`` and the named groups of ``regexp`` are
    parallel: group ``v{i}`` captures variable ``names[i]``, validated
    on its own by ``validators[i]``.
    """

    # The unmodified template.
    template: str
    kind: TemplateKind
    # Disabled for Host, PathPrefix and Query templates.
    strict_slash: bool
    use_encoded_path: bool
    # Expanded regexp.
    regexp: re2.Pattern[str]
    # Reverse template, one %s per variable.
    reverse: str
    names: tuple[str, ...]
    validators: tuple[re2.Pattern[str], ...]

    @property
    def query_key(self) -> str:
        """The literal key of a Query template (left of the first ``=``)."""
        return self.template.partition("=")[0]

    def group_names(self) -> list[str]:
        """Synthetic capture group labels, in variable order."""
        return [var_group_name(i) for i in range(len(self.names))]


def compile_template(
    template: str,
    kind: TemplateKind,
    *,
    strict_slash: bool = True,
    use_encoded_path: bool = False,
) -> CompiledTemplate:
    """Parse a template and compile it.

    Extracts named variables, assembles the regexp to be matched, creates
    the reverse template used to build URLs, and compiles the regexps that
    validate variable values during URL building.

    Raises:
        TemplateTooLongError: template exceeds MAX_TEMPLATE_LENGTH.
        MalformedTemplateError: unbalanced braces, empty name or pattern.
        InvalidPatternError: a pattern is rejected by the regex engine or
            declares its own capturing group.
    """
    if len(template) > MAX_TEMPLATE_LENGTH:
        raise TemplateTooLongError(template, MAX_TEMPLATE_LENGTH)
    if kind not in DEFAULT_PATTERNS:
        msg = f"unknown template kind: {kind!r}"
        raise ValueError(msg)

    default_pattern = DEFAULT_PATTERNS[kind]
    # Only match strict slash on full paths.
    if kind != "Path":
        strict_slash = False

    tpl = template
    end_slash = False
    if strict_slash and tpl.endswith("/"):
        tpl = tpl[:-1]
        end_slash = True

    idxs = brace_indices(tpl)
    names: list[str] = []
    validators: list[re2.Pattern[str]] = []
    pattern = ["^"]
    reverse: list[str] = []
    end = 0
    for i in range(0, len(idxs), 2):
        raw = tpl[end : idxs[i]]
        end = idxs[i + 1]
        name, sep, patt = tpl[idxs[i] + 1 : end - 1].partition(":")
        if not sep:
            patt = default_pattern
        # Name or pattern can't be empty.
        if not name or not patt:
            raise MalformedTemplateError(template, f"missing name or pattern {tpl[idxs[i]:end]!r}")

        pattern.append(f"{re2.escape(raw)}(?P<{var_group_name(i // 2)}>{patt})")
        reverse.append(f"{_escape_reverse(raw)}%s")
        names.append(name)
        validators.append(_compile(template, f"^{patt}$"))

    # Add the remaining.
    raw = tpl[end:]
    pattern.append(re2.escape(raw))
    if strict_slash:
        pattern.append("[/]?")
    if kind == "Query" and not template.partition("=")[2]:
        # Empty value: match any value as long as the key is set.
        pattern.append(default_pattern)
    if kind != "PathPrefix":
        pattern.append("$")
    reverse.append(_escape_reverse(raw))
    if end_slash:
        reverse.append("/")

    regexp = _compile(template, "".join(pattern))
    # Capturing groups in a custom pattern would shift every group after it.
    if regexp.groups != len(names):
        msg = (
            "template contains capture groups in its regexp, only "
            "non-capturing groups are accepted: e.g. (?:pattern) instead of (pattern)"
        )
        raise InvalidPatternError(template, msg)

    return CompiledTemplate(
        template=template,
        kind=kind,
        strict_slash=strict_slash,
        use_encoded_path=use_encoded_path,
        regexp=regexp,
        reverse="".join(reverse),
        names=tuple(names),
        validators=tuple(validators),
    )


def brace_indices(s: str) -> list[int]:
    """Return the first level curly brace indices from a string.

    Indices come in pairs: the position of ``{`` and the position just
    past the matching ``}``.

    Raises:
        MalformedTemplateError: braces are unbalanced.
    """
    level = 0
    idx = 0
    idxs: list[int] = []
    for i, ch in enumerate(s):
        if ch == "{":
            level += 1
            if level == 1:
                idx = i
        elif ch == "}":
            level -= 1
            if level == 0:
                idxs.extend((idx, i + 1))
            elif level < 0:
                raise MalformedTemplateError(s, "unbalanced braces")
    if level != 0:
        raise MalformedTemplateError(s, "unbalanced braces")
    return idxs


def var_group_name(idx: int) -> str:
    """Build a capturing group name for the indexed variable."""
    return f"v{idx}"


def _escape_reverse(raw: str) -> str:
    return raw.replace("%", "%%")


def _compile(template: str, pattern: str) -> re2.Pattern[str]:
    try:
        return re2.compile(pattern)
    except re2.error as e:
        raise InvalidPatternError(template, f"{pattern!r}: {e}") from e
