"""Unit coverage for the project version helper."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path

import pytest

from fincalc.backend.version import get_project_version, read_version_from_pyproject

PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def test_read_version_from_pyproject() -> None:
    assert read_version_from_pyproject(PYPROJECT) == "0.1.0"


def test_get_project_version_prefers_installed_metadata(monkeypatch) -> None:
    get_project_version.cache_clear()  # type: ignore[attr-defined]
    monkeypatch.setattr(metadata, "version", lambda package: "9.9.9")

    assert get_project_version() == "9.9.9"
    get_project_version.cache_clear()  # type: ignore[attr-defined]


def test_get_project_version_falls_back_to_pyproject(monkeypatch) -> None:
    get_project_version.cache_clear()  # type: ignore[attr-defined]

    def raise_package_not_found(_: str) -> str:
        raise metadata.PackageNotFoundError

    monkeypatch.setattr(metadata, "version", raise_package_not_found)

    assert get_project_version() == read_version_from_pyproject(PYPROJECT)
    get_project_version.cache_clear()  # type: ignore[attr-defined]


def test_missing_version_raises(tmp_path: Path) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "fincalc"\n', encoding="utf-8")

    with pytest.raises(RuntimeError):
        read_version_from_pyproject(pyproject)
    with pytest.raises(RuntimeError):
        read_version_from_pyproject(tmp_path / "missing.toml")
