"""Regression tests for the optional Rich dependency.

Bootstrap commands and the error boundary must keep working, with plain
stderr output, when Rich is not importable.  Graph output never depends
on Rich.
"""

from __future__ import annotations

import sys
from unittest.mock import patch

import pytest

from mu_eval.cli import exit_codes
from mu_eval.cli.app import cli, main
from mu_eval.cli.console import console, strip_markup
from mu_eval.exceptions import PackageReadError

from tests.conftest import FakeCompilerFactory

_LOADER = "mu_eval.infra.compiler_loader.load_compiler_factory"


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.markup", None)
    monkeypatch.setitem(sys.modules, "rich.table", None)


def test_help_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_version_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_eval_renders_without_rich(
    monkeypatch: pytest.MonkeyPatch,
    fake_factory: FakeCompilerFactory,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    with patch(_LOADER, return_value=fake_factory):
        assert main(["eval"]) == exit_codes.SUCCESS
    assert capsys.readouterr().out.startswith("mu/stack:\n")


def test_error_boundary_prints_plain_text_without_rich(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    monkeypatch.setattr("sys.argv", ["mu-eval", "eval"])
    error = PackageReadError("Cannot read Mu.yaml[0]", hint="check permissions")
    with patch(_LOADER, side_effect=error), pytest.raises(SystemExit) as exc_info:
        cli()

    assert exc_info.value.code == exit_codes.GENERAL_ERROR
    err = capsys.readouterr().err
    assert "Error: Cannot read Mu.yaml[0]" in err
    assert "Hint: check permissions" in err


class TestMarkupHandling:
    def test_strip_markup_keeps_literal_brackets(self) -> None:
        assert strip_markup("[bold red]Error:[/bold red] a[main]") == "Error: a[main]"

    def test_error_escapes_user_text(self, capsys: pytest.CaptureFixture[str]) -> None:
        console.error("bad label aws:ec2/instance[bold]")
        assert "instance[bold]" in capsys.readouterr().err
