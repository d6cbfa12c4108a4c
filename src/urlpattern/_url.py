"""URL — the minimal URL value the matchers read from.

Holds scheme, host (with port, without userinfo), decoded path, the raw
request target as received, the raw query string and the fragment.
Query parameters are parsed from the raw query string on construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import parse_qs, unquote, urlsplit


@dataclass(frozen=True, slots=True)
class URL:
    """URL context for matching.

    ``request_target`` is the URL exactly as it came off the wire (origin
    form ``/a%2Fb?x=1`` or absolute form ``http://host/a%2Fb``). It is the
    source of the escaped path; when it is empty only the decoded ``path``
    is available.
    """

    scheme: str = ""
    host: str = ""
    path: str = ""
    raw_query: str = ""
    fragment: str = ""
    request_target: str = ""

    # Computed — parsed from raw_query
    _query: dict[str, list[str]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_query", parse_qs(self.raw_query, keep_blank_values=True)
        )

    @classmethod
    def parse(cls, raw: str) -> URL:
        """Parse a URL string, keeping ``raw`` as the request target."""
        parts = urlsplit(raw)
        # Drop userinfo; the port stays on the host.
        host = parts.netloc.rpartition("@")[2]
        return cls(
            scheme=parts.scheme,
            host=host,
            path=unquote(parts.path),
            raw_query=parts.query,
            fragment=parts.fragment,
            request_target=raw,
        )

    @property
    def is_absolute(self) -> bool:
        """True if the URL has a scheme."""
        return self.scheme != ""

    @property
    def query(self) -> dict[str, list[str]]:
        """Parsed query parameters, every value of every key in order."""
        return self._query

    def query_param(self, name: str) -> str | None:
        """First value of a query parameter, or None if absent."""
        values = self._query.get(name)
        if not values:
            return None
        return values[0]


def get_host(url: URL) -> str:
    """Return the host to match against.

    Absolute URLs use their host component as is. Otherwise any port
    suffix is sliced off.
    """
    if url.is_absolute:
        return url.host
    host, _, _ = url.host.partition(":")
    return host


def get_path(url: URL) -> str:
    """Return the escaped path if possible.

    The path is taken from the raw request target, which is escaped unlike
    ``url.path``: ``http://localhost/path%2Fhere?v=1`` -> ``/path%2Fhere``.
    An authority with no path gives ``/``. Without a request target the
    decoded path is returned.
    """
    if not url.request_target:
        return url.path
    path = url.request_target
    # urlsplit lowercases the scheme; the target keeps its original case.
    n = len(url.scheme) + 1
    if url.scheme and path[:n].lower() == f"{url.scheme.lower()}:":
        path = path[n:]
    if path.startswith("//"):
        # Skip the authority; it ends at the first "/", "?" or "#".
        rest = path[2:]
        ends = [i for i in (rest.find(c) for c in "/?#") if i != -1]
        path = rest[min(ends, default=len(rest)) :]
    path, _, _ = path.partition("?")
    path, _, _ = path.partition("#")
    # An empty request path means the root, as in a request line.
    return path or "/"
