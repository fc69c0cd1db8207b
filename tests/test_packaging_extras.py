from __future__ import annotations

import tomllib
from pathlib import Path


def _pyproject() -> dict:
    pyproject_path = Path(__file__).resolve().parents[1] / "pyproject.toml"
    return tomllib.loads(pyproject_path.read_text(encoding="utf-8"))


def test_runtime_dependencies_are_declared() -> None:
    dependencies = " ".join(_pyproject()["project"]["dependencies"])
    for name in ("httpx", "pydantic", "structlog"):
        assert name in dependencies


def test_test_optional_dependency_group_exists() -> None:
    optional = _pyproject()["project"]["optional-dependencies"]
    assert "test" in optional
    assert any(item.startswith("pytest") for item in optional["test"])
