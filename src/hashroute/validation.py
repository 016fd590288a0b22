"""View signature validation for strict mode."""

from __future__ import annotations

import functools
import inspect
from typing import Any, get_type_hints

from pydantic import BaseModel

from hashroute.routing import Match, Route

MATCH_PARAM = "match"


def is_basemodel(tp: Any) -> bool:
    """Return True if *tp* is a BaseModel subclass."""
    return isinstance(tp, type) and issubclass(tp, BaseModel)


def view_type_hints(view: Any) -> dict[str, Any]:
    """Resolve parameter annotations for any view callable.

    Unwraps ``functools.partial`` and looks at ``__init__`` for classes and
    ``__call__`` for callable instances. Builtins without annotations give
    an empty dict.
    """
    target = view
    while isinstance(target, functools.partial):
        target = target.func
    if isinstance(target, type):
        target = target.__init__
    elif not (inspect.isfunction(target) or inspect.ismethod(target)):
        target = getattr(type(target), "__call__", target)
    if not (inspect.isfunction(target) or inspect.ismethod(target)):
        return {}
    return get_type_hints(target)


def validate_view_signature(view: Any, route: Route) -> None:
    """Validate a view's type annotations at mount time.

    Raises :class:`TypeError` with an actionable message when the view
    violates strict-mode typing rules.
    """
    name = getattr(view, "__name__", repr(view))
    hints = view_type_hints(view)
    sig = inspect.signature(view)
    placeholders = set(route.placeholders)

    for param_name in sig.parameters:
        hint = hints.get(param_name)

        # --- Rule 1: All params must be typed ---
        if hint is None:
            raise TypeError(
                f"\n\nStrict-mode violation in view '{name}' "
                f"[{route.pattern}]\n"
                f"  Problem: Parameter '{param_name}' has no type annotation.\n"
                f"  Fix:     Add a type annotation, e.g. {param_name}: str "
                f"or {param_name}: YourModel.\n"
            )

        # --- Rule 2: Route params arrive as strings ---
        if param_name in placeholders:
            if hint is not str:
                raise TypeError(
                    f"\n\nStrict-mode violation in view '{name}' "
                    f"[{route.pattern}]\n"
                    f"  Current: {param_name}: {_type_label(hint)}\n"
                    f"  Problem: Route parameter '{param_name}' is always a string.\n"
                    f"  Fix:     Annotate it as {param_name}: str and convert inside the view.\n"
                )
            continue

        # --- Rule 3: 'match' receives the Match itself ---
        if param_name == MATCH_PARAM:
            if hint is not Match:
                raise TypeError(
                    f"\n\nStrict-mode violation in view '{name}' "
                    f"[{route.pattern}]\n"
                    f"  Current: {param_name}: {_type_label(hint)}\n"
                    f"  Problem: Parameter 'match' must be annotated as Match.\n"
                    f"  Fix:     Use match: Match.\n"
                )
            continue

        # --- Rule 4: Everything else must be a BaseModel subclass ---
        if not is_basemodel(hint):
            raise TypeError(
                f"\n\nStrict-mode violation in view '{name}' "
                f"[{route.pattern}]\n"
                f"  Current: {param_name}: {_type_label(hint)}\n"
                f"  Problem: Non-route parameter '{param_name}' must be a "
                f"BaseModel subclass.\n"
                f"  Fix:     Wrap '{param_name}' fields in a Pydantic model, "
                f"e.g. {param_name}: {param_name.title()}Model.\n"
                f"  Rejected types: dict, list, str, int, and other primitives.\n"
            )


def _type_label(hint: Any) -> str:
    return hint.__name__ if isinstance(hint, type) else repr(hint)
