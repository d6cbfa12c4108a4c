"""Conformance fixture loader for urlpattern.

Loads YAML fixtures from tests/fixtures/ and converts them to patterns
for parametrized testing. Each document holds a pattern config and
either a list of URL cases or the build error the config must produce.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from urlpattern import Pattern, load_pattern, parse_pattern_config

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class MatchFixtureCase:
    """A single URL case from a conformance fixture."""

    fixture_name: str
    case_name: str
    pattern: Pattern
    url: str
    expect: dict[str, str] | None


@dataclass
class ErrorFixtureCase:
    """A config that must fail to build with the named error type."""

    fixture_name: str
    pattern: Pattern
    error: str


def load_match_fixtures() -> list[MatchFixtureCase]:
    """Load every fixture document that lists URL cases."""
    cases: list[MatchFixtureCase] = []
    for doc in _load_documents():
        if "cases" not in doc:
            continue
        pattern = _build(doc)
        for case in doc["cases"]:
            cases.append(
                MatchFixtureCase(
                    fixture_name=doc["name"],
                    case_name=case["name"],
                    pattern=pattern,
                    url=case["url"],
                    expect=_parse_expect(case["expect"]),
                )
            )
    return cases


def load_error_fixtures() -> list[ErrorFixtureCase]:
    """Load every fixture document that expects a build error."""
    return [
        ErrorFixtureCase(fixture_name=doc["name"], pattern=_build(doc), error=doc["error"])
        for doc in _load_documents()
        if "error" in doc
    ]


def _load_documents() -> list[dict[str, Any]]:
    docs: list[dict[str, Any]] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("*.yaml")):
        with yaml_file.open() as f:
            for doc in yaml.safe_load_all(f):
                if doc is None:
                    continue
                docs.append(doc)
    return docs


def _build(doc: dict[str, Any]) -> Pattern:
    return load_pattern(parse_pattern_config(doc["pattern"]))


def _parse_expect(expect: dict[str, Any] | None) -> dict[str, str] | None:
    if expect is None:
        return None
    return {str(k): str(v) for k, v in expect.items()}
