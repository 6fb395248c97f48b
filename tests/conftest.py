"""
Shared pytest fixtures for txtplate tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

import txtplate.config as config

# =============================================================================
# Environment Isolation
# =============================================================================


@_pytest.fixture(autouse=True)
def clean_txtplate_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """Remove TXTPLATE_* variables so settings always start from defaults."""
    for key in list(_os.environ):
        if key.startswith("TXTPLATE_"):
            monkeypatch.delenv(key, raising=False)


@_pytest.fixture
def settings() -> config.Settings:
    """Default settings, without any .env file."""
    return config.Settings.construct_without_dotenv()


# =============================================================================
# Values Files
# =============================================================================


@_pytest.fixture
def write_file(tmp_path: _pathlib.Path) -> _typing.Callable[[str, str], _pathlib.Path]:
    """
    Factory fixture writing a file under tmp_path.

    Usage:
        path = write_file("values.yaml", "name: world\\n")
    """

    def _write(name: str, content: str) -> _pathlib.Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
