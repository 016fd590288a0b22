"""Hashroute command-line interface powered by Typer."""

import importlib
import json
import sys
from pathlib import Path
from typing import Annotated

import typer

from hashroute.router import Router
from hashroute.routing import Route, parse_placeholders

app = typer.Typer(name="hashroute", add_completion=False, no_args_is_help=True)


# ------------------------------------------------------------------
# Target resolution
# ------------------------------------------------------------------


def _resolve_cli_target(path: str) -> Router:
    """Turn a CLI *path* argument into a ``Router`` instance.

    Accepted forms:
    - ``module:var``   → imports ``module`` and returns ``var``
    - ``file.py``      → imports ``file``, scans for a Router instance
    """
    if ":" in path:
        module_name, var_name = path.split(":", 1)
        mod = _import_target(module_name)
        router = getattr(mod, var_name, None)
        if not isinstance(router, Router):
            typer.echo(f"Error: {path!r} is not a Router instance.", err=True)
            raise typer.Exit(1)
        return router

    # Treat as a Python file
    file = Path(path)
    if not file.exists():
        typer.echo(f"Error: file {path!r} not found.", err=True)
        raise typer.Exit(1)

    # Ensure the file's directory is on sys.path so we can import it.
    parent = str(file.resolve().parent)
    if parent not in sys.path:
        sys.path.insert(0, parent)

    mod = _import_target(file.stem)
    router = _find_router(mod)
    if router is None:
        typer.echo(
            f"Error: no Router instance found in {path!r}. Provide an explicit target, e.g. routes:router",
            err=True,
        )
        raise typer.Exit(1)
    return router


def _import_target(module_name: str) -> object:
    try:
        return importlib.import_module(module_name)
    except Exception as exc:
        typer.echo(f"Error importing {module_name!r}: {exc}", err=True)
        raise typer.Exit(1) from exc


def _find_router(mod: object) -> Router | None:
    """Scan a module for a ``Router`` instance.

    Checks ``router`` and ``routes`` first, then falls back to any attribute.
    """
    for name in ("router", "routes"):
        val = getattr(mod, name, None)
        if isinstance(val, Router):
            return val

    for name in dir(mod):
        if name.startswith("_"):
            continue
        val = getattr(mod, name, None)
        if isinstance(val, Router):
            return val

    return None


def _route_for(pattern: str) -> Route:
    return Route(pattern, len(parse_placeholders(pattern)))


def _parse_query_options(query: list[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for item in query:
        key, sep, value = item.partition("=")
        if not sep:
            typer.echo(f"Error: query option {item!r} must look like key=value.", err=True)
            raise typer.Exit(1)
        params[key] = value
    return params


# ------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------


@app.command()
def match(
    pattern: Annotated[str, typer.Argument(help="Route pattern, e.g. /users/{id}.")],
    uri: Annotated[str, typer.Argument(help="URI to match, without the leading '#'.")],
) -> None:
    """Match a URI against a pattern and print the parameters as JSON."""
    result = _route_for(pattern).match(uri)
    if result is None:
        typer.echo("No match", err=True)
        raise typer.Exit(1)

    payload = {
        "pattern": result.pattern,
        "route_params": dict(result.route_params),
        "query_params": dict(result.query_params),
        "all_params": result.all_params,
    }
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def build(
    pattern: Annotated[str, typer.Argument(help="Route pattern, e.g. /users/{id}.")],
    values: Annotated[list[str] | None, typer.Argument(help="Placeholder values in order.")] = None,
    query: Annotated[
        list[str] | None,
        typer.Option("--query", "-q", help="Query parameter as key=value. Repeatable."),
    ] = None,
) -> None:
    """Build a fragment URI from placeholder values."""
    route = _route_for(pattern)
    values = values or []
    query_params = _parse_query_options(query or [])

    if len(values) != route.arity:
        typer.echo(
            f"Error: {pattern!r} takes {route.arity} value(s), got {len(values)}.",
            err=True,
        )
        raise typer.Exit(1)

    if query_params:
        uri = route.build_uri_with(dict(zip(route.placeholders, values)), query_params)
    else:
        uri = route.build_uri(*values)
    typer.echo(uri)


@app.command()
def routes(
    path: Annotated[str, typer.Argument(help="Python file or module:var target.")] = "routes.py",
) -> None:
    """List the routes mounted on a Router in priority order."""
    router = _resolve_cli_target(path)
    for mount in router.mounts:
        view_name = getattr(mount.view, "__name__", repr(mount.view))
        typer.echo(f"{mount.route.pattern or '(empty)'}\t{mount.route.arity}\t{view_name}")
