"""Ordered route table that dispatches fragment URIs to views."""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from hashroute.errors import NotFound
from hashroute.routing import DEFAULT_ROUTE, FRAGMENT_MARKER, Match, Route
from hashroute.validation import MATCH_PARAM, is_basemodel, validate_view_signature, view_type_hints

if TYPE_CHECKING:
    from collections.abc import Callable

    from pydantic import BaseModel

logger = logging.getLogger("hashroute.router")


class _ViewMeta:
    """Pre-computed view metadata, built once per view."""

    __slots__ = ("models", "param_names", "view", "wants_match")

    def __init__(self, view: Callable[..., Any]) -> None:
        self.view = view
        sig = inspect.signature(view)
        hints = view_type_hints(view)
        self.wants_match = MATCH_PARAM in sig.parameters
        self.models: dict[str, type[BaseModel]] = {
            name: hints[name] for name in sig.parameters if is_basemodel(hints.get(name))
        }
        self.param_names = frozenset(sig.parameters) - {MATCH_PARAM, *self.models}

    def call(self, match: Match) -> Any:
        params = match.all_params
        kwargs: dict[str, Any] = {name: params[name] for name in self.param_names if name in params}
        for name, model in self.models.items():
            kwargs[name] = model.model_validate(params)
        if self.wants_match:
            kwargs[MATCH_PARAM] = match
        return self.view(**kwargs)


@dataclass(frozen=True, slots=True)
class Mount:
    """A route paired with the view it dispatches to."""

    route: Route
    view: Callable[..., Any]


class Router:
    """Ordered collection of mounted routes with first-match-wins lookup.

    Parameters
    ----------
    strict:
        When ``True``, view signatures are validated at mount time; see
        :func:`~hashroute.validation.validate_view_signature`.
    fallback:
        View called with :meth:`Match.default` when no route matches.
        Without one, :meth:`navigate` raises :class:`NotFound`.
    """

    __slots__ = ("_fallback", "_view_meta", "mounts", "strict")

    def __init__(
        self,
        *,
        strict: bool = False,
        fallback: Callable[..., Any] | None = None,
    ) -> None:
        self.strict = strict
        self.mounts: list[Mount] = []
        self._view_meta: dict[Callable[..., Any], _ViewMeta] = {}
        self._fallback: Callable[..., Any] | None = None
        self.fallback = fallback

    @property
    def fallback(self) -> Callable[..., Any] | None:
        return self._fallback

    @fallback.setter
    def fallback(self, view: Callable[..., Any] | None) -> None:
        if view is not None:
            if self.strict:
                validate_view_signature(view, DEFAULT_ROUTE)
            self._meta_for(view)
        self._fallback = view

    @property
    def routes(self) -> list[Route]:
        return [mount.route for mount in self.mounts]

    def mount(self, route: Route, view: Callable[..., Any]) -> Route:
        """Append *route* to the table, dispatching to *view*."""
        if self.strict:
            validate_view_signature(view, route)
        self._meta_for(view)
        self.mounts.append(Mount(route, view))
        logger.debug("Mounted %r -> %s", route, getattr(view, "__name__", view))
        return route

    def view(self, route: Route) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator form of :meth:`mount`."""

        def decorator(view: Callable[..., Any]) -> Callable[..., Any]:
            self.mount(route, view)
            return view

        return decorator

    def resolve(self, uri: str) -> tuple[Mount, Match] | None:
        """Return ``(mount, match)`` for the first match, or ``None``.

        A single leading ``#`` is ignored, so built URIs resolve directly.
        """
        uri = uri.removeprefix(FRAGMENT_MARKER)
        for mount in self.mounts:
            match = mount.route.match(uri)
            if match is not None:
                return mount, match
        return None

    def navigate(self, uri: str) -> Any:
        """Resolve *uri* and call the mounted view with the match's params."""
        result = self.resolve(uri)
        if result is None:
            logger.debug("No route matches %r", uri)
            if self._fallback is None:
                raise NotFound(uri)
            return self._meta_for(self._fallback).call(Match.default())

        mount, match = result
        return self._meta_for(mount.view).call(match)

    def _meta_for(self, view: Callable[..., Any]) -> _ViewMeta:
        meta = self._view_meta.get(view)
        if meta is None:
            meta = self._view_meta[view] = _ViewMeta(view)
        return meta
