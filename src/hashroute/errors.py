"""Hashroute exception hierarchy.

Only configuration and lookup failures are exceptions. A route that does
not match a URI returns ``None``.
"""


class HashrouteError(Exception):
    """Base for all hashroute-specific errors."""


class ConfigurationError(HashrouteError, ValueError):
    """Raised when a route is declared inconsistently.

    Surfaces at construction time, typically while the route table is
    being built at startup.
    """


class NotFound(HashrouteError, LookupError):  # noqa: N818
    """No mounted route matches the URI and no fallback view is set."""

    def __init__(self, uri: str) -> None:
        super().__init__(f"No route matches {uri!r}")
        self.uri = uri
