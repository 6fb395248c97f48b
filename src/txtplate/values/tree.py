"""
Tagged-variant value model for resolved template values.

Every decoded values document is represented as a ValueTree: one of
Null, Bool, Number, String, Sequence or Mapping. Mapping keys are always
strings. Trees are built from plain Python data with from_native() and
turned back into plain data (for the template engine) with to_native().

Example:
    >>> tree = from_native({"db": {"port": 5432}})
    >>> tree
    Mapping(items={'db': Mapping(items={'port': Number(value=5432)})})
    >>> to_native(tree)
    {'db': {'port': 5432}}
"""

from __future__ import annotations

import dataclasses as _dataclasses
import typing as _typing

import txtplate.values.errors as errors


@_dataclasses.dataclass(frozen=True, slots=True)
class Null:
    """The null scalar."""

    pass


@_dataclasses.dataclass(frozen=True, slots=True)
class Bool:
    """A boolean scalar."""

    value: bool


@_dataclasses.dataclass(frozen=True, slots=True)
class Number:
    """An integer or floating point scalar."""

    value: int | float


@_dataclasses.dataclass(frozen=True, slots=True)
class String:
    """A string scalar."""

    value: str


@_dataclasses.dataclass(frozen=True, slots=True)
class Sequence:
    """An ordered list of values. Never merged element-wise."""

    items: list[ValueTree] = _dataclasses.field(default_factory=list)


@_dataclasses.dataclass(frozen=True, slots=True)
class Mapping:
    """
    A string-keyed mapping of values.

    The dataclass itself is frozen but ``items`` is a plain dict so the
    merge accumulator can be updated in place.
    """

    items: dict[str, ValueTree] = _dataclasses.field(default_factory=dict)


ValueTree: _typing.TypeAlias = "Null | Bool | Number | String | Sequence | Mapping"


def scalar_from_native(obj: _typing.Any) -> Null | Bool | Number | String:
    """
    Convert a decoded Python scalar into its ValueTree variant.

    Raises:
        UnsupportedValueError: If obj is not None, bool, int, float or str.
    """
    if obj is None:
        return Null()
    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, (int, float)):
        return Number(obj)
    if isinstance(obj, str):
        return String(obj)
    raise errors.UnsupportedValueError(obj)


def from_native(obj: _typing.Any) -> ValueTree:
    """
    Convert string-keyed Python data into a ValueTree.

    Args:
        obj: A scalar, a list/tuple, or a dict with str keys.

    Returns:
        The equivalent ValueTree.

    Raises:
        KeyTypeError: If a dict has a key that is not a str.
        UnsupportedValueError: If a value of an unsupported type is found.
    """
    if isinstance(obj, (list, tuple)):
        return Sequence([from_native(item) for item in obj])
    if isinstance(obj, dict):
        items: dict[str, ValueTree] = {}
        for key, value in obj.items():
            if not isinstance(key, str):
                raise errors.KeyTypeError(key)
            items[key] = from_native(value)
        return Mapping(items)
    return scalar_from_native(obj)


def to_native(tree: ValueTree) -> _typing.Any:
    """
    Convert a ValueTree back into plain Python data.

    Returns fresh containers; mutating the result never affects the tree.
    """
    if isinstance(tree, Null):
        return None
    if isinstance(tree, (Bool, Number, String)):
        return tree.value
    if isinstance(tree, Sequence):
        return [to_native(item) for item in tree.items]
    if isinstance(tree, Mapping):
        return {key: to_native(value) for key, value in tree.items.items()}
    raise TypeError(f"Unknown ValueTree node: {type(tree).__name__}")


def type_name(tree: ValueTree) -> str:
    """Return a short, user-facing name for a node's variant."""
    return type(tree).__name__.lower()
