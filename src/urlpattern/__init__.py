"""urlpattern — URL templates compiled into host, path and query matchers.

All public types are exported from this module for flat imports:

    from urlpattern import Pattern, URL, compile_template
"""

__version__ = "0.1.0"

# Config types — see urlpattern._config for details
from urlpattern._config import (
    ConfigParseError,
    MatcherEntryConfig,
    PatternConfig,
    QueriesConfig,
    TemplateConfig,
    load_pattern,
    parse_pattern_config,
)

# Errors
from urlpattern._errors import (
    DuplicateVariableError,
    InvalidPatternError,
    MalformedTemplateError,
    MissingRouteVariableError,
    PatternError,
    TemplateTooLongError,
    VariableMismatchError,
)

# Matching
from urlpattern._group import MatcherGroup
from urlpattern._pattern import Pattern, new_pattern
from urlpattern._route import RouteMatcher

# Template compiler
from urlpattern._template import (
    DEFAULT_PATTERNS,
    MAX_TEMPLATE_LENGTH,
    CompiledTemplate,
    TemplateKind,
    brace_indices,
    compile_template,
)
from urlpattern._url import URL, get_host, get_path

__all__ = [
    # Template compiler
    "CompiledTemplate",
    "TemplateKind",
    "compile_template",
    "brace_indices",
    "DEFAULT_PATTERNS",
    "MAX_TEMPLATE_LENGTH",
    # Matching
    "RouteMatcher",
    "MatcherGroup",
    "Pattern",
    "new_pattern",
    # URL
    "URL",
    "get_host",
    "get_path",
    # Errors
    "PatternError",
    "MalformedTemplateError",
    "TemplateTooLongError",
    "InvalidPatternError",
    "DuplicateVariableError",
    "MissingRouteVariableError",
    "VariableMismatchError",
    # Config types
    "TemplateConfig",
    "QueriesConfig",
    "MatcherEntryConfig",
    "PatternConfig",
    "ConfigParseError",
    "parse_pattern_config",
    "load_pattern",
]
