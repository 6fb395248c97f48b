"""
txtplate - render text templates from merged JSON/YAML values.

Values files are deep-merged in order (later files win, nested mappings
merge) and the result is handed to a Jinja2 template.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("txtplate")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "txtplate Contributors"

__all__ = ["__version__", "__version_info__"]
