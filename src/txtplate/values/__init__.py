"""
Values resolution for txtplate.

Loads JSON/YAML values files, normalizes their mapping keys to strings
and deep-merges them in order into a single value tree.

Example:
    >>> import txtplate.values as values
    >>> resolved = values.resolve_values(["base.yaml", "prod.json"])
    >>> values.to_native(resolved)
    {'db': {'host': 'prod-db', 'port': 5432}}
"""

from txtplate.values.errors import (
    DecodeError,
    KeyTypeError,
    TypeMismatchError,
    UnsupportedValueError,
    ValuesError,
    ValuesReadError,
)
from txtplate.values.merge import merge_all, merge_into
from txtplate.values.parser import ValuesFormat, decode, detect_format, normalize, parse_values
from txtplate.values.resolver import ValuesFile, read_values_file, resolve_values
from txtplate.values.tree import (
    Bool,
    Mapping,
    Null,
    Number,
    Sequence,
    String,
    ValueTree,
    from_native,
    to_native,
)

__all__ = [
    "Bool",
    "DecodeError",
    "KeyTypeError",
    "Mapping",
    "Null",
    "Number",
    "Sequence",
    "String",
    "TypeMismatchError",
    "UnsupportedValueError",
    "ValueTree",
    "ValuesError",
    "ValuesFile",
    "ValuesFormat",
    "ValuesReadError",
    "decode",
    "detect_format",
    "from_native",
    "merge_all",
    "merge_into",
    "normalize",
    "parse_values",
    "read_values_file",
    "resolve_values",
    "to_native",
]
