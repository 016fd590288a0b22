"""Declarative route patterns for fragment-addressed client-side navigation."""

__version__ = "0.1.1"

from hashroute.encoding import decode_uri_component, encode_uri_component
from hashroute.errors import ConfigurationError, HashrouteError, NotFound
from hashroute.router import Mount, Router
from hashroute.routing import Match, Route, Route1, Route2, Route3, Route4, Static

__all__ = [
    "ConfigurationError",
    "HashrouteError",
    "Match",
    "Mount",
    "NotFound",
    "Route",
    "Route1",
    "Route2",
    "Route3",
    "Route4",
    "Router",
    "Static",
    "decode_uri_component",
    "encode_uri_component",
]
