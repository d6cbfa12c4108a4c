"""Config types for building patterns from plain data.

The same dict shape can come from JSON or YAML. Config-driven construction
path:
  dict → parse_pattern_config() → PatternConfig → load_pattern() → Pattern

Config shape::

    {
        "strict_slash": True,              # optional, default True
        "use_encoded_path": False,         # optional, default False
        "matchers": [                      # required, applied in order
            {"host": "{subdomain}.example.com"},
            {"path_prefix": "/api"},
            {"path": "/events/{id:[0-9]+}"},
            {"queries": {"foo": "bar", "id": "{id:[0-9]+}"}},
        ],
    }
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

from urlpattern._pattern import Pattern

if TYPE_CHECKING:
    from urlpattern._template import TemplateKind

# ═══════════════════════════════════════════════════════════════════════════════
# Config types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class TemplateConfig:
    """A single host, path or path prefix template."""

    kind: TemplateKind
    template: str


@dataclass(frozen=True, slots=True)
class QueriesConfig:
    """Query key/value template pairs, in order."""

    pairs: tuple[tuple[str, str], ...]


MatcherEntryConfig: TypeAlias = TemplateConfig | QueriesConfig


@dataclass(frozen=True, slots=True)
class PatternConfig:
    """Configuration for a Pattern.

    Load into a Pattern with load_pattern().
    """

    matchers: tuple[MatcherEntryConfig, ...]
    strict_slash: bool = True
    use_encoded_path: bool = False


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → config types)
# ═══════════════════════════════════════════════════════════════════════════════

# Matcher entry keys and the template kind they compile to.
_TEMPLATE_KEYS: dict[str, TemplateKind] = {
    "host": "Host",
    "path": "Path",
    "path_prefix": "PathPrefix",
}
_ENTRY_KEYS = frozenset({*_TEMPLATE_KEYS, "queries"})


class ConfigParseError(Exception):
    """Error parsing a config dict into config types."""


def parse_pattern_config(data: dict[str, Any]) -> PatternConfig:
    """Parse a dict into a PatternConfig.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    raw_matchers = data.get("matchers")
    if raw_matchers is None:
        msg = "missing required field 'matchers'"
        raise ConfigParseError(msg)
    if not isinstance(raw_matchers, list):
        msg = f"'matchers' must be a list, got {type(raw_matchers).__name__}"
        raise ConfigParseError(msg)

    return PatternConfig(
        matchers=tuple(_parse_entry(entry) for entry in raw_matchers),
        strict_slash=_parse_flag(data, "strict_slash", default=True),
        use_encoded_path=_parse_flag(data, "use_encoded_path", default=False),
    )


def _parse_flag(data: dict[str, Any], name: str, *, default: bool) -> bool:
    value = data.get(name, default)
    if not isinstance(value, bool):
        msg = f"'{name}' must be a bool, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return value


def _parse_entry(data: dict[str, Any]) -> MatcherEntryConfig:
    """Parse one matcher entry: a dict with exactly one known key."""
    if not isinstance(data, dict):
        msg = f"matcher entry must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)
    if len(data) != 1:
        msg = f"matcher entry must have exactly one key, got {sorted(data.keys())}"
        raise ConfigParseError(msg)

    key, value = next(iter(data.items()))
    if key not in _ENTRY_KEYS:
        expected = sorted(_ENTRY_KEYS)
        msg = f"matcher entry must be one of {expected}, got {key!r}"
        raise ConfigParseError(msg)

    if key == "queries":
        return _parse_queries(value)

    if not isinstance(value, str):
        msg = f"{key} template must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return TemplateConfig(kind=_TEMPLATE_KEYS[key], template=value)


def _parse_queries(data: dict[str, Any]) -> QueriesConfig:
    """Parse a ``{key: value_template}`` mapping.

    A null value means "any value", same as an empty string.
    """
    if not isinstance(data, dict):
        msg = f"queries must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    pairs: list[tuple[str, str]] = []
    for key, value in data.items():
        if value is None:
            value = ""
        if not isinstance(key, str) or not isinstance(value, str):
            msg = f"query pair must be strings, got {key!r}: {value!r}"
            raise ConfigParseError(msg)
        pairs.append((key, value))
    return QueriesConfig(pairs=tuple(pairs))


# ═══════════════════════════════════════════════════════════════════════════════
# Loading (config types → Pattern)
# ═══════════════════════════════════════════════════════════════════════════════


def load_pattern(config: PatternConfig) -> Pattern:
    """Build a Pattern from configuration.

    Build errors are kept on the returned Pattern, as with direct
    building; call raise_for_error() to surface them.
    """
    pattern = Pattern(
        strict_slash=config.strict_slash,
        use_encoded_path=config.use_encoded_path,
    )
    for entry in config.matchers:
        match entry:
            case TemplateConfig(kind="Host", template=tpl):
                pattern.host(tpl)
            case TemplateConfig(kind="Path", template=tpl):
                pattern.path(tpl)
            case TemplateConfig(kind="PathPrefix", template=tpl):
                pattern.path_prefix(tpl)
            case QueriesConfig(pairs=pairs):
                pattern.queries(*(s for pair in pairs for s in pair))
            case _:  # pragma: no cover
                msg = f"unknown matcher config: {entry!r}"
                raise ConfigParseError(msg)
    return pattern
