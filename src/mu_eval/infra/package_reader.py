"""Infrastructure: blueprint package manifest discovery and loading.

This module is the **only** place in the codebase that imports ``yaml``
or touches package manifests on disk.  All OS and parser exceptions are
caught here and re-raised as
:class:`~mu_eval.exceptions.PackageReadError`.

Rules
-----
* No ``print()`` — callers handle user-facing output.
* A missing package is not an error: the reader returns ``None``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from mu_eval.core.evaluate_service import DEFAULT_PACKAGE_ARG
from mu_eval.core.models import Package
from mu_eval.exceptions import EnvironmentError, PackageReadError

MANIFEST_NAMES: tuple[str, ...] = ("Mu.yaml", "Mu.yml", "Mu.json")
"""Manifest file names, in lookup order."""


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

def find_manifest(directory: Path) -> Path | None:
    """Return the first manifest present in *directory*, or ``None``."""
    for name in MANIFEST_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def resolve_manifest(arg: str, *, cwd: Path | None = None) -> Path | None:
    """Map a command-line package argument to a manifest path.

    ``"-"`` searches the working directory; a directory is searched for a
    manifest; any other existing file is taken as the manifest itself.
    """
    base = cwd if cwd is not None else Path.cwd()
    if arg == DEFAULT_PACKAGE_ARG:
        return find_manifest(base)

    path = Path(arg)
    if not path.is_absolute():
        path = base / path
    if path.is_dir():
        return find_manifest(path)
    if path.is_file():
        return path
    return None


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _parse_yaml(text: str, path: Path) -> Any:
    try:
        import yaml
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "PyYAML is not installed. Install with: pip install pyyaml",
        ) from exc

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise PackageReadError(
            f"Malformed YAML in package manifest {path}: {exc}",
        ) from exc


def _parse_json(text: str, path: Path) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise PackageReadError(
            f"Malformed JSON in package manifest {path}: {exc}",
        ) from exc


def load_package(manifest: Path) -> Package:
    """Load and validate the manifest at *manifest*.

    Raises
    ------
    PackageReadError
        If the file cannot be read, does not parse, or is not a mapping.
    """
    manifest = manifest.resolve()
    try:
        text = manifest.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PackageReadError(
            f"Cannot read package manifest {manifest}: {exc}",
        ) from exc

    if manifest.suffix.lower() == ".json":
        document = _parse_json(text, manifest)
    else:
        document = _parse_yaml(text, manifest)

    if not isinstance(document, Mapping):
        raise PackageReadError(
            f"Package manifest {manifest} must contain a mapping at the top level.",
            hint="Start the manifest with a key such as 'name: my-package'.",
        )

    base_dir = manifest.parent
    raw_name = document.get("name")
    name = str(raw_name) if raw_name else base_dir.name
    return Package(name=name, path=manifest, base_dir=base_dir, document=document)


# ---------------------------------------------------------------------------
# PackageSource implementation
# ---------------------------------------------------------------------------

class ManifestPackageReader:
    """Concrete :class:`~mu_eval.core.protocols.PackageSource` over the filesystem.

    Parameters
    ----------
    cwd:
        Directory treated as the working directory.  Defaults to the
        process's current directory at lookup time.
    """

    def __init__(self, cwd: Path | None = None) -> None:
        self._cwd: Path | None = cwd

    def read_package(self, arg: str) -> Package | None:
        """Resolve *arg* and load its manifest, or return ``None``."""
        manifest = resolve_manifest(arg, cwd=self._cwd)
        if manifest is None:
            return None
        return load_package(manifest)


def read_package_from_arg(arg: str) -> Package | None:
    """Convenience wrapper resolving *arg* against the current directory."""
    return ManifestPackageReader().read_package(arg)
