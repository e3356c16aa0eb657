"""Tests for the evaluate orchestration service (core/evaluate_service.py).

The compiler factory and package source are faked — no plugin, no
filesystem.  These tests exercise:

* Compiler selection (working directory vs. package base dir)
* Entrypoint argument binding into compile options
* Vacuous results (no package, no graph)
* Error wrapping at the compiler boundary
"""

from __future__ import annotations

from pathlib import Path

import pytest

from mu_eval.core.evaluate_service import EvaluateService
from mu_eval.core.models import DependencyGraph, Package, default_options
from mu_eval.exceptions import ArgParseError, CompilerError, PackageReadError

from tests.conftest import FakeCompilerFactory


class _StaticPackages:
    """A :class:`PackageSource` returning one fixed package (or none)."""

    def __init__(self, package: Package | None = None, error: Exception | None = None) -> None:
        self.package = package
        self.error = error
        self.requested: list[str] = []

    def read_package(self, arg: str) -> Package | None:
        self.requested.append(arg)
        if self.error is not None:
            raise self.error
        return self.package


def _package(base_dir: Path = Path("/work/webapp")) -> Package:
    return Package(
        name="webapp",
        path=base_dir / "Mu.yaml",
        base_dir=base_dir,
        document={"name": "webapp"},
    )


# ---------------------------------------------------------------------------
# Compiler selection
# ---------------------------------------------------------------------------

class TestCompilerSelection:
    def test_no_target_compiles_working_directory(
        self, fake_factory: FakeCompilerFactory, stack_graph: DependencyGraph,
    ) -> None:
        packages = _StaticPackages(_package())
        graph = EvaluateService(fake_factory, packages).evaluate(None)

        assert graph is stack_graph
        assert packages.requested == []
        (compiler,) = fake_factory.created
        assert compiler.base_dir is None
        assert compiler.compiled == [None]

    def test_dash_uses_working_directory_compiler(
        self, fake_factory: FakeCompilerFactory,
    ) -> None:
        package = _package()
        packages = _StaticPackages(package)
        EvaluateService(fake_factory, packages).evaluate("-")

        assert packages.requested == ["-"]
        (compiler,) = fake_factory.created
        assert compiler.base_dir is None
        assert compiler.compiled == [package]

    def test_path_uses_package_base_dir(self, fake_factory: FakeCompilerFactory) -> None:
        package = _package(Path("/elsewhere/api"))
        EvaluateService(fake_factory, _StaticPackages(package)).evaluate(
            "/elsewhere/api/Mu.yaml",
        )

        (compiler,) = fake_factory.created
        assert compiler.base_dir == Path("/elsewhere/api")
        assert compiler.compiled == [package]


# ---------------------------------------------------------------------------
# Entrypoint arguments
# ---------------------------------------------------------------------------

class TestArguments:
    def test_pack_args_bound_into_options(self, fake_factory: FakeCompilerFactory) -> None:
        service = EvaluateService(fake_factory, _StaticPackages(_package()))
        service.evaluate(None, ["--name=foo", "--replicas", "3", "--no-debug"])

        (compiler,) = fake_factory.created
        assert compiler.options.args.to_plain() == {
            "name": "foo",
            "replicas": "3",
            "debug": False,
        }

    def test_no_pack_args_gives_empty_options(self, fake_factory: FakeCompilerFactory) -> None:
        EvaluateService(fake_factory, _StaticPackages()).evaluate(None, None)
        (compiler,) = fake_factory.created
        assert len(compiler.options.args) == 0

    def test_build_options_starts_from_defaults(self) -> None:
        assert EvaluateService.build_options(None) == default_options()
        options = EvaluateService.build_options(["--flag"])
        assert options.args.to_plain() == {"flag": True}

    def test_malformed_args_fail_before_compiling(
        self, fake_factory: FakeCompilerFactory,
    ) -> None:
        service = EvaluateService(fake_factory, _StaticPackages(_package()))
        with pytest.raises(ArgParseError):
            service.evaluate("-", ["-"])
        assert fake_factory.created == []


# ---------------------------------------------------------------------------
# Vacuous results
# ---------------------------------------------------------------------------

class TestNothingToRender:
    def test_unresolved_package_returns_none(self, fake_factory: FakeCompilerFactory) -> None:
        graph = EvaluateService(fake_factory, _StaticPackages(None)).evaluate("missing")
        assert graph is None
        assert fake_factory.created == []

    def test_compiler_returning_none(self) -> None:
        factory = FakeCompilerFactory(graph=None)
        assert EvaluateService(factory, _StaticPackages(_package())).evaluate("-") is None


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrors:
    def test_compile_failure_wrapped(self) -> None:
        factory = FakeCompilerFactory(compile_error=ValueError("bad resource"))
        service = EvaluateService(factory, _StaticPackages(_package()))
        with pytest.raises(CompilerError, match="bad resource") as exc_info:
            service.evaluate("pkg")
        assert "webapp" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_creation_failure_wrapped(self) -> None:
        factory = FakeCompilerFactory(create_error=FileNotFoundError("no workspace"))
        service = EvaluateService(factory, _StaticPackages())
        with pytest.raises(CompilerError, match="no workspace"):
            service.evaluate(None)

    def test_our_errors_propagate_unchanged(self) -> None:
        original = CompilerError("already typed")
        factory = FakeCompilerFactory(compile_error=original)
        service = EvaluateService(factory, _StaticPackages())
        with pytest.raises(CompilerError) as exc_info:
            service.evaluate(None)
        assert exc_info.value is original

    def test_package_read_error_propagates(self, fake_factory: FakeCompilerFactory) -> None:
        packages = _StaticPackages(error=PackageReadError("broken manifest"))
        with pytest.raises(PackageReadError):
            EvaluateService(fake_factory, packages).evaluate("pkg")
