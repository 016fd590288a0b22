"""Tests for the hashroute command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from hashroute.cli import app

runner = CliRunner()

ROUTES_MODULE = '''
from hashroute import Route1, Router, Static

router = Router()


def home():
    return "home"


def show_user(id):
    return id


router.mount(Static("/"), home)
router.mount(Route1("/users/{id}"), show_user)
'''


# =====================================================================
# match
# =====================================================================


class TestMatchCommand:
    def test_match_prints_json(self) -> None:
        result = runner.invoke(app, ["match", "/users/{id}", "/users/42?tab=posts"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload == {
            "pattern": "/users/{id}",
            "route_params": {"id": "42"},
            "query_params": {"tab": "posts"},
            "all_params": {"id": "42", "tab": "posts"},
        }

    def test_no_match_exits_1(self) -> None:
        result = runner.invoke(app, ["match", "/users/{id}", "/other"])
        assert result.exit_code == 1
        assert "No match" in result.output


# =====================================================================
# build
# =====================================================================


class TestBuildCommand:
    def test_build_positional(self) -> None:
        result = runner.invoke(app, ["build", "/users/{id}/posts/{post}", "1", "9"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "#/users/1/posts/9"

    def test_build_static(self) -> None:
        result = runner.invoke(app, ["build", "/home"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "#/home"

    def test_build_with_query(self) -> None:
        result = runner.invoke(app, ["build", "/a/{x}", "5", "--query", "q=a b"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "#/a/5?q=a%20b"

    def test_build_wrong_value_count(self) -> None:
        result = runner.invoke(app, ["build", "/a/{x}/{y}", "5"])
        assert result.exit_code == 1
        assert "takes 2 value(s), got 1" in result.output

    def test_build_malformed_query(self) -> None:
        result = runner.invoke(app, ["build", "/a/{x}", "5", "--query", "oops"])
        assert result.exit_code == 1
        assert "key=value" in result.output


# =====================================================================
# routes
# =====================================================================


class TestRoutesCommand:
    def test_routes_from_file(self, tmp_path: Path) -> None:
        target = tmp_path / "cli_routes_file.py"
        target.write_text(ROUTES_MODULE)
        result = runner.invoke(app, ["routes", str(target)])
        assert result.exit_code == 0
        lines = result.stdout.strip().splitlines()
        assert lines == ["/\t0\thome", "/users/{id}\t1\tshow_user"]

    def test_routes_from_module_var(self, tmp_path: Path, monkeypatch) -> None:
        (tmp_path / "cli_routes_mod.py").write_text(ROUTES_MODULE)
        monkeypatch.syspath_prepend(str(tmp_path))
        result = runner.invoke(app, ["routes", "cli_routes_mod:router"])
        assert result.exit_code == 0
        assert "/users/{id}\t1\tshow_user" in result.stdout

    def test_routes_missing_file(self) -> None:
        result = runner.invoke(app, ["routes", "does_not_exist.py"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_routes_not_a_router(self, tmp_path: Path, monkeypatch) -> None:
        (tmp_path / "cli_not_router.py").write_text("router = 42\n")
        monkeypatch.syspath_prepend(str(tmp_path))
        result = runner.invoke(app, ["routes", "cli_not_router:router"])
        assert result.exit_code == 1
        assert "is not a Router instance" in result.output
