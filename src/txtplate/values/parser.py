"""
Decode values files and normalize them into string-keyed ValueTrees.

Format is chosen from the file extension: ``.yaml``/``.yml`` are decoded
as YAML, everything else (including no extension) as JSON.

JSON objects always have string keys. YAML mappings may use any scalar as
a key (``1: one``, ``true: yes``, even ``[a, b]: pair``), so YAML mappings
are loaded as raw key/value pairs and every key is normalized:

- str keys are kept
- int and float keys become their ``str()`` form
- anything else (bool, null, sequences, mappings, binary) is rejected
  with KeyTypeError rather than silently stringified

Unquoted YAML timestamps are kept as strings, matching how JSON values
files spell them.

A YAML stream with several documents (separated by ``---``) contributes
only its first document; later documents are ignored.
"""

from __future__ import annotations

import enum as _enum
import json as _json
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import yaml as _yaml

import txtplate.values.errors as errors
import txtplate.values.tree as tree

_logger = _logging.getLogger(__name__)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class ValuesFormat(_enum.Enum):
    """Supported values file formats."""

    YAML = "yaml"
    JSON = "json"


YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def detect_format(path: _pathlib.Path | str) -> ValuesFormat:
    """
    Infer a values file's format from its extension.

    Args:
        path: Path (or path string) of the values file.

    Returns:
        ValuesFormat.YAML for .yaml/.yml, ValuesFormat.JSON otherwise.
    """
    if _pathlib.PurePath(path).suffix in YAML_SUFFIXES:
        return ValuesFormat.YAML
    return ValuesFormat.JSON


class _RawMapping:
    """
    A YAML mapping as an ordered list of (key, value) pairs.

    Keys are whatever the YAML constructor produced and may be unhashable,
    so they cannot live in a dict until normalize() converts them.
    """

    __slots__ = ("pairs",)

    def __init__(self, pairs: list[tuple[_typing.Any, _typing.Any]]) -> None:
        self.pairs = pairs

    def __repr__(self) -> str:
        return f"_RawMapping({self.pairs!r})"


def _raw_mapping_constructor(
    loader: _yaml.SafeLoader,
    node: _yaml.MappingNode,
) -> _RawMapping:
    """Construct a _RawMapping from a YAML mapping node (handles << merges)."""
    loader.flatten_mapping(node)
    pairs = loader.construct_pairs(node, deep=True)  # type: ignore[no-untyped-call]
    return _RawMapping(pairs)


class _ValuesLoader(_yaml.SafeLoader):
    """
    SafeLoader for values files.

    - Mappings become _RawMapping so non-string and unhashable keys
      reach normalize() instead of failing inside the constructor
    - Timestamps are not resolved implicitly (they stay strings)
    """

    yaml_implicit_resolvers = {
        first_char: [
            (tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG
        ]
        for first_char, resolvers in _yaml.SafeLoader.yaml_implicit_resolvers.items()
    }


_ValuesLoader.add_constructor(
    _yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _raw_mapping_constructor,
)


def decode(
    data: bytes | str,
    values_format: ValuesFormat,
    path: _pathlib.Path | None = None,
) -> _typing.Any:
    """
    Decode raw values file content with the format's generic decoder.

    Args:
        data: File content.
        values_format: Which decoder to use.
        path: Source file, used only for error messages.

    Returns:
        Decoded Python data. YAML mappings are _RawMapping instances; an
        empty YAML document decodes to an empty mapping. Only the first
        document of a YAML stream is decoded.

    Raises:
        DecodeError: If the content is not valid for the format.
    """
    if values_format is ValuesFormat.YAML:
        try:
            loader = _ValuesLoader(data)
            try:
                # Only the first document of a multi-document stream is used
                decoded = loader.get_data() if loader.check_data() else None
            finally:
                loader.dispose()
        except _yaml.YAMLError as e:
            raise errors.DecodeError(path, "yaml", str(e)) from e
        if decoded is None:
            return _RawMapping([])
        return decoded

    try:
        return _json.loads(data)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise errors.DecodeError(path, "json", str(e)) from e


def normalize_key(key: _typing.Any) -> str:
    """
    Convert a decoded mapping key to its string form.

    Raises:
        KeyTypeError: If the key has no valid string form.
    """
    if isinstance(key, str):
        return key
    # bool is an int subclass; true/false keys are rejected
    if isinstance(key, (int, float)) and not isinstance(key, bool):
        return str(key)
    raise errors.KeyTypeError(key)


def normalize(decoded: _typing.Any) -> tree.ValueTree:
    """
    Recursively convert decoded data into a string-keyed ValueTree.

    This is a pure function: the input is never modified and the result
    shares no containers with it.

    Args:
        decoded: Output of decode(), or any plain Python data.

    Returns:
        A ValueTree whose every Mapping has string keys.

    Raises:
        KeyTypeError: If a mapping key cannot be normalized.
        UnsupportedValueError: If a value has no ValueTree representation.
    """
    if isinstance(decoded, _RawMapping):
        items: dict[str, tree.ValueTree] = {}
        for key, value in decoded.pairs:
            items[normalize_key(key)] = normalize(value)
        return tree.Mapping(items)
    if isinstance(decoded, dict):
        # JSON objects: keys are already strings, but check anyway
        return tree.Mapping(
            {normalize_key(key): normalize(value) for key, value in decoded.items()}
        )
    if isinstance(decoded, (list, tuple)):
        return tree.Sequence([normalize(item) for item in decoded])
    return tree.scalar_from_native(decoded)


def parse_values(
    data: bytes | str,
    values_format: ValuesFormat,
    path: _pathlib.Path | None = None,
) -> tree.ValueTree:
    """
    Decode and normalize one values file.

    The root is usually a Mapping; a document whose top level is a
    sequence or scalar is returned as-is and rejected when merged.

    Raises:
        DecodeError: If the content is malformed.
        KeyTypeError: If a mapping key cannot be normalized.
        UnsupportedValueError: If a value has no ValueTree representation.
    """
    decoded = decode(data, values_format, path)
    result = normalize(decoded)
    _logger.debug(
        "Parsed %s as %s (root: %s)",
        path if path is not None else "<bytes>",
        values_format.value,
        tree.type_name(result),
    )
    return result
