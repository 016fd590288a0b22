"""Route patterns with named placeholders: matching and URI building."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING

from hashroute.encoding import decode_uri_component, encode_uri_component
from hashroute.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger("hashroute.routing")

_PLACEHOLDER_RE = re.compile(r"\{([^}]*)\}")

# A placeholder captures one path segment, possibly empty.
_SEGMENT = r"([^/]*)"

FRAGMENT_MARKER = "#"


def parse_placeholders(pattern: str) -> tuple[str, ...]:
    """Return placeholder names of *pattern* in order of appearance.

    Repeated names are kept, so the length always equals the number of
    ``{name}`` tokens.
    """
    return tuple(_PLACEHOLDER_RE.findall(pattern))


def parse_query(query: str) -> dict[str, str]:
    """Split a raw query string into a dict.

    Values are percent-decoded, keys are taken as-is. A token without ``=``
    maps to the empty string.
    """
    params: dict[str, str] = {}
    if not query:
        return params
    for token in query.split("&"):
        key, sep, value = token.partition("=")
        params[key] = decode_uri_component(value) if sep else ""
    return params


def _replace_placeholder(uri: str, name: str, value: str) -> str:
    return uri.replace("{" + name + "}", encode_uri_component(value))


def _compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile ``/users/{id}`` into a regex with one group per placeholder."""
    parts: list[str] = []
    last_end = 0

    for m in _PLACEHOLDER_RE.finditer(pattern):
        parts.append(re.escape(pattern[last_end : m.start()]))
        parts.append(_SEGMENT)
        last_end = m.end()

    parts.append(re.escape(pattern[last_end:]))
    return re.compile("".join(parts))


class Route:
    """A compiled pattern with a declared number of placeholders.

    Usage::

        route = Route("/users/{id}/posts/{post}", 2)
        route.match("/users/1/posts/9?tab=raw")
        route.build_uri("1", "9")  # "#/users/1/posts/9"
    """

    __slots__ = ("_placeholders", "_regex", "arity", "pattern")

    def __init__(self, pattern: str, arity: int) -> None:
        self.pattern = pattern
        self.arity = arity
        self._placeholders = parse_placeholders(pattern)

        if len(self._placeholders) != arity:
            msg = (
                f"The route {pattern!r} has [{len(self._placeholders)}] route-params "
                f"but should have [{arity}]"
            )
            raise ConfigurationError(msg)

        self._regex = _compile_pattern(pattern)
        logger.debug("Compiled route %r to %s", pattern, self._regex.pattern)

    @property
    def placeholders(self) -> tuple[str, ...]:
        return self._placeholders

    def match(self, uri: str) -> Match | None:
        """Match *uri* against the whole pattern.

        Returns ``None`` if the path part does not match. Anything after the
        first ``?`` is parsed as query parameters.
        """
        path, _, query = uri.partition("?")

        m = self._regex.fullmatch(path)
        if m is None:
            return None

        route_params = dict(zip(self._placeholders, map(decode_uri_component, m.groups())))
        return Match(route=self, route_params=route_params, query_params=parse_query(query))

    def build_uri(self, *values: str) -> str:
        """Build a fragment URI from positional placeholder values.

        Raises ``IndexError`` unless exactly :attr:`arity` values are given.
        """
        if len(values) != self.arity:
            msg = f"Route {self.pattern!r} takes {self.arity} route-params, got {len(values)}"
            raise IndexError(msg)

        uri = FRAGMENT_MARKER + self.pattern
        for name, value in zip(self._placeholders, values):
            uri = _replace_placeholder(uri, name, value)
        return uri

    def build_uri_with(
        self,
        route_params: Mapping[str, str],
        query_params: Mapping[str, str] | None = None,
    ) -> str:
        """Build a fragment URI from named route params and query params.

        Placeholders missing from *route_params* stay in the output verbatim.
        Query keys are written as given; query values are encoded.
        """
        uri = FRAGMENT_MARKER + self.pattern
        for name, value in route_params.items():
            uri = _replace_placeholder(uri, name, value)

        if not query_params:
            return uri
        return uri + "?" + "&".join(f"{key}={encode_uri_component(value)}" for key, value in query_params.items())

    def __repr__(self) -> str:
        return f"Route({self.pattern!r}, {self.arity})"


class Static(Route):
    """A route without placeholders."""

    __slots__ = ()

    def __init__(self, pattern: str) -> None:
        super().__init__(pattern, 0)

    def build(self) -> str:
        return self.build_uri()

    def __call__(self) -> str:
        return self.build_uri()

    def __repr__(self) -> str:
        return f"Static({self.pattern!r})"


class Route1(Route):
    """A route with one placeholder."""

    __slots__ = ()

    def __init__(self, pattern: str) -> None:
        super().__init__(pattern, 1)

    def build(self, p1: str) -> str:
        return self.build_uri(p1)

    def __repr__(self) -> str:
        return f"Route1({self.pattern!r})"


class Route2(Route):
    """A route with two placeholders."""

    __slots__ = ()

    def __init__(self, pattern: str) -> None:
        super().__init__(pattern, 2)

    def build(self, p1: str, p2: str) -> str:
        return self.build_uri(p1, p2)

    def __repr__(self) -> str:
        return f"Route2({self.pattern!r})"


class Route3(Route):
    """A route with three placeholders."""

    __slots__ = ()

    def __init__(self, pattern: str) -> None:
        super().__init__(pattern, 3)

    def build(self, p1: str, p2: str, p3: str) -> str:
        return self.build_uri(p1, p2, p3)

    def __repr__(self) -> str:
        return f"Route3({self.pattern!r})"


class Route4(Route):
    """A route with four placeholders."""

    __slots__ = ()

    def __init__(self, pattern: str) -> None:
        super().__init__(pattern, 4)

    def build(self, p1: str, p2: str, p3: str, p4: str) -> str:
        return self.build_uri(p1, p2, p3, p4)

    def __repr__(self) -> str:
        return f"Route4({self.pattern!r})"


DEFAULT_ROUTE = Static("")


@dataclass(frozen=True, slots=True)
class Match:
    """Result of a successful route match.

    ``all_params`` merges both parameter sets; a query parameter shadows a
    route parameter of the same name.
    """

    route: Route
    route_params: Mapping[str, str] = field(default_factory=dict)
    query_params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Read-only snapshots; the caller's dicts are never shared.
        object.__setattr__(self, "route_params", MappingProxyType(dict(self.route_params)))
        object.__setattr__(self, "query_params", MappingProxyType(dict(self.query_params)))

    @classmethod
    def default(cls) -> Match:
        """The empty match on the default ``Static("")`` route."""
        return cls(route=DEFAULT_ROUTE)

    @property
    def pattern(self) -> str:
        return self.route.pattern

    @property
    def all_params(self) -> dict[str, str]:
        return {**self.route_params, **self.query_params}

    def __getitem__(self, key: str) -> str:
        return self.param(key)

    def param(self, name: str, default: str = "") -> str:
        """Return the route param *name*, or *default* if it is absent."""
        return self.route_params.get(name, default)

    def with_query_params(
        self,
        params: Mapping[str, str | None] | None = None,
        **kwargs: str | None,
    ) -> Match:
        """Return a copy with ``query_params`` replaced.

        Entries whose value is ``None`` are dropped.
        """
        merged = {**(params or {}), **kwargs}
        return replace(self, query_params={k: v for k, v in merged.items() if v is not None})

    def build_uri(self) -> str:
        """Rebuild the fragment URI for this match, query included."""
        return self.route.build_uri_with(self.route_params, self.query_params)
