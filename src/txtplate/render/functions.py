"""
Helper functions available inside templates.

Filters are applied with a pipe (``{{ db.host | quote }}``); globals are
called directly (``{{ getenv("HOME") }}``). Names follow Jinja conventions
(snake_case); the set mirrors the string/encoding helpers commonly used
when rendering config files.
"""

from __future__ import annotations

import base64 as _base64
import datetime as _datetime
import hashlib as _hashlib
import json as _json
import os as _os
import typing as _typing

import jinja2 as _jinja2
import yaml as _yaml


def to_json(value: _typing.Any) -> str:
    """Serialize a value as compact JSON."""
    return _json.dumps(value, ensure_ascii=False)


def to_pretty_json(value: _typing.Any, indent: int = 2) -> str:
    """Serialize a value as indented JSON."""
    return _json.dumps(value, ensure_ascii=False, indent=indent)


def to_yaml(value: _typing.Any) -> str:
    """Serialize a value as block-style YAML, without a trailing newline."""
    return _yaml.safe_dump(
        value,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    ).rstrip("\n")


def b64enc(value: _typing.Any) -> str:
    """Base64-encode a string (UTF-8)."""
    return _base64.b64encode(str(value).encode("utf-8")).decode("ascii")


def b64dec(value: _typing.Any) -> str:
    """Decode a base64 string to text (UTF-8)."""
    return _base64.b64decode(str(value), validate=True).decode("utf-8")


def sha256sum(value: _typing.Any) -> str:
    """Hex SHA-256 digest of a string (UTF-8)."""
    return _hashlib.sha256(str(value).encode("utf-8")).hexdigest()


def quote(value: _typing.Any) -> str:
    """Wrap a value in double quotes, escaping as JSON does."""
    if value is None:
        return '""'
    return _json.dumps(str(value), ensure_ascii=False)


def squote(value: _typing.Any) -> str:
    """Wrap a value in single quotes."""
    if value is None:
        return "''"
    return f"'{value}'"


def nindent(value: _typing.Any, width: int = 4) -> str:
    """Indent every line by width spaces and prepend a newline."""
    pad = " " * width
    lines = str(value).split("\n")
    return "\n" + "\n".join(pad + line for line in lines)


def required(value: _typing.Any, message: str = "required value is missing") -> _typing.Any:
    """
    Fail rendering if value is undefined, None or empty string.

    Raises:
        jinja2.TemplateRuntimeError: If the value is missing.
    """
    if isinstance(value, _jinja2.Undefined) or value is None or value == "":
        raise _jinja2.TemplateRuntimeError(message)
    return value


def getenv(name: str, default: str = "") -> str:
    """Read an environment variable at render time."""
    return _os.environ.get(name, default)


def now() -> _datetime.datetime:
    """Current local time, timezone-aware."""
    return _datetime.datetime.now().astimezone()


FILTERS: dict[str, _typing.Callable[..., _typing.Any]] = {
    "to_json": to_json,
    "to_pretty_json": to_pretty_json,
    "to_yaml": to_yaml,
    "b64enc": b64enc,
    "b64dec": b64dec,
    "sha256sum": sha256sum,
    "quote": quote,
    "squote": squote,
    "nindent": nindent,
    "required": required,
}
"""Filters registered on every environment. Jinja's built-ins
(default, indent, trim, upper, lower, title, ...) remain available."""

GLOBALS: dict[str, _typing.Callable[..., _typing.Any]] = {
    "getenv": getenv,
    "now": now,
}
"""Global functions registered on every environment."""
