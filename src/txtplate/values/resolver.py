"""
Resolve an ordered list of values files into one value tree.

Files are processed strictly in the order given. Each file is read,
parsed and folded into an accumulator that starts as an empty mapping;
later files override earlier ones. The first error aborts resolution and
no further files are read.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import txtplate.values.errors as errors
import txtplate.values.merge as merge
import txtplate.values.parser as parser
import txtplate.values.tree as tree

_logger = _logging.getLogger(__name__)

Reader: _typing.TypeAlias = _typing.Callable[[_pathlib.Path], bytes]


@_dataclasses.dataclass(frozen=True, slots=True)
class ValuesFile:
    """A values file path paired with its inferred format."""

    path: _pathlib.Path
    format: parser.ValuesFormat

    @classmethod
    def from_path(cls, path: _pathlib.Path | str) -> ValuesFile:
        """Create a ValuesFile, inferring the format from the extension."""
        path = _pathlib.Path(path)
        return cls(path=path, format=parser.detect_format(path))


def _read_bytes(path: _pathlib.Path) -> bytes:
    """Default reader: the whole file as bytes."""
    return path.read_bytes()


def read_values_file(
    values_file: ValuesFile,
    *,
    reader: Reader = _read_bytes,
) -> tree.ValueTree:
    """
    Read and parse a single values file.

    Raises:
        ValuesReadError: If the file cannot be read.
        DecodeError: If the content is malformed.
        KeyTypeError: If a mapping key cannot be normalized.
    """
    try:
        data = reader(values_file.path)
    except OSError as e:
        raise errors.ValuesReadError(values_file.path, e.strerror or str(e)) from e

    return parser.parse_values(data, values_file.format, values_file.path)


def resolve_values(
    paths: _typing.Iterable[_pathlib.Path | str],
    *,
    reader: Reader = _read_bytes,
) -> tree.Mapping:
    """
    Read, parse and merge values files in order.

    Args:
        paths: Values file paths, lowest precedence first.
        reader: Callable returning a file's bytes (overridable for tests).

    Returns:
        The merged mapping.

    Raises:
        ValuesError: The first read, decode, key or type error encountered.
    """
    accumulator = tree.Mapping()
    count = 0

    for path in paths:
        values_file = ValuesFile.from_path(path)
        incoming = read_values_file(values_file, reader=reader)
        merge.merge_into(accumulator, incoming, path=values_file.path)
        count += 1
        _logger.debug(
            "Merged %s (%d top-level keys so far)",
            values_file.path,
            len(accumulator.items),
        )

    _logger.info("Resolved values from %d file(s)", count)
    return accumulator
