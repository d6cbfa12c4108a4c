"""Error types raised while building patterns and reverse-building URLs.

Build-time errors (malformed templates, bad regex patterns, duplicated
variables) are stored on the Pattern that produced them. Reverse-build
errors are raised directly to the caller.
"""

from __future__ import annotations


class PatternError(Exception):
    """Base class for all urlpattern errors."""


class MalformedTemplateError(PatternError):
    """A template is structurally invalid (braces, names, leading slash)."""

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"{reason} in {template!r}")


class TemplateTooLongError(MalformedTemplateError):
    """A template exceeds the length limit."""

    def __init__(self, template: str, max_: int) -> None:
        self.length = len(template)
        self.max = max_
        super().__init__(
            template, f"template length {self.length} exceeds maximum {max_}"
        )

    def __str__(self) -> str:
        # The template itself is too long to be useful in the message.
        return self.reason


class InvalidPatternError(PatternError):
    """A variable pattern was rejected by the regex engine.

    Also raised when a custom pattern declares its own capturing group:
    only non-capturing groups are accepted, e.g. ``(?:a|b)`` instead of
    ``(a|b)``.
    """

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"invalid pattern in {template!r}: {reason}")


class DuplicateVariableError(PatternError):
    """The same variable name is declared by two matchers of one pattern."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"duplicated route variable {name!r}")


class MissingRouteVariableError(PatternError):
    """A reverse build was attempted without a value for a variable."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"missing route variable {name!r}")


class VariableMismatchError(PatternError):
    """A reverse-build value does not satisfy its variable pattern."""

    def __init__(self, value: str, expected: str) -> None:
        self.value = value
        self.expected = expected
        super().__init__(f"variable {value!r} doesn't match, expected {expected!r}")
