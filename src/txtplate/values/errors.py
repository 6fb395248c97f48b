"""Errors raised while loading, normalizing and merging values files."""

from __future__ import annotations

import pathlib as _pathlib
import typing as _typing


class ValuesError(Exception):
    """Base class for all values resolution errors."""

    pass


class ValuesReadError(ValuesError):
    """A values file could not be read."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"failed to read values file {path}: {message}")


class DecodeError(ValuesError):
    """A values file is not valid YAML/JSON."""

    def __init__(
        self,
        path: _pathlib.Path | None,
        format_name: str,
        message: str,
    ) -> None:
        self.path = path
        self.format_name = format_name
        where = f" {path}" if path is not None else ""
        super().__init__(f"failed to parse values file{where} as {format_name}: {message}")


class KeyTypeError(ValuesError, TypeError):
    """A mapping key could not be normalized to a string."""

    def __init__(self, key: _typing.Any, message: str = "key is not a string") -> None:
        self.key = key
        super().__init__(f"{message}: {key!r} ({type(key).__name__})")


class TypeMismatchError(ValuesError, TypeError):
    """The accumulator or an incoming document is not a mapping."""

    def __init__(
        self,
        actual: str,
        path: _pathlib.Path | None = None,
    ) -> None:
        self.actual = actual
        self.path = path
        where = f" in {path}" if path is not None else ""
        super().__init__(f"expected a mapping{where}, got {actual}")


class UnsupportedValueError(ValuesError, TypeError):
    """A decoded value has no ValueTree representation (e.g. YAML !!binary)."""

    def __init__(self, value: _typing.Any) -> None:
        self.value = value
        super().__init__(f"unsupported value type: {type(value).__name__}")
