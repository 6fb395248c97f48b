"""
Deep merge of ValueTrees with last-write-wins override semantics.

For every key of the incoming mapping:

- both sides are mappings: merge recursively, in place
- otherwise (key missing, or either side is not a mapping): replace

Keys only present in the accumulator are left untouched. Sequences are
treated like scalars and replaced wholesale, never concatenated.

Example:
    >>> acc = from_native({"db": {"host": "a", "port": 5432}})
    >>> merge_into(acc, from_native({"db": {"host": "b"}}))
    >>> to_native(acc)
    {'db': {'host': 'b', 'port': 5432}}
"""

from __future__ import annotations

import pathlib as _pathlib
import typing as _typing

import txtplate.values.errors as errors
import txtplate.values.tree as tree


def _require_mapping(
    value: tree.ValueTree,
    path: _pathlib.Path | None = None,
) -> tree.Mapping:
    """Return value if it is a Mapping, otherwise raise TypeMismatchError."""
    if not isinstance(value, tree.Mapping):
        raise errors.TypeMismatchError(tree.type_name(value), path)
    return value


def _merge_mappings(dst: tree.Mapping, src: tree.Mapping) -> None:
    """Fold src into dst. Both are known to be mappings."""
    for key, incoming in src.items.items():
        existing = dst.items.get(key)
        if isinstance(existing, tree.Mapping) and isinstance(incoming, tree.Mapping):
            _merge_mappings(existing, incoming)
        else:
            dst.items[key] = _copy_tree(incoming)


def _copy_tree(value: tree.ValueTree) -> tree.ValueTree:
    """
    Copy the mutable containers of a tree.

    Scalars are immutable and shared. Mappings must be copied so a later
    in-place merge never writes through to an incoming document.
    """
    if isinstance(value, tree.Mapping):
        return tree.Mapping({key: _copy_tree(item) for key, item in value.items.items()})
    if isinstance(value, tree.Sequence):
        return tree.Sequence([_copy_tree(item) for item in value.items])
    return value


def merge_into(
    accumulator: tree.ValueTree,
    incoming: tree.ValueTree,
    *,
    path: _pathlib.Path | None = None,
) -> tree.Mapping:
    """
    Merge incoming into accumulator in place and return the accumulator.

    Args:
        accumulator: The mapping built so far. Mutated.
        incoming: The next document's tree. Never mutated.
        path: Source file of incoming, used only for error messages.

    Returns:
        The accumulator, for use as the next fold step's input.

    Raises:
        TypeMismatchError: If either root is not a Mapping. Type differences
            below the root are not errors; they resolve by replacement.
    """
    dst = _require_mapping(accumulator)
    src = _require_mapping(incoming, path)
    _merge_mappings(dst, src)
    return dst


def merge_all(trees: _typing.Iterable[tree.ValueTree]) -> tree.Mapping:
    """
    Merge trees left to right into a fresh mapping.

    Later trees take precedence. An empty iterable gives an empty mapping.

    Raises:
        TypeMismatchError: On the first tree whose root is not a Mapping.
    """
    accumulator = tree.Mapping()
    for incoming in trees:
        merge_into(accumulator, incoming)
    return accumulator
