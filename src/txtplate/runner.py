"""
End-to-end run: read the template, resolve values, render, write.

Everything a run needs comes in through a RenderRequest and Settings;
nothing is read from global state.
"""

from __future__ import annotations

import logging as _logging
import os as _os
import pathlib as _pathlib
import sys as _sys
import typing as _typing

import txtplate.config as config
import txtplate.render as render
import txtplate.values as values

_logger = _logging.getLogger(__name__)


class RunError(Exception):
    """A run failed outside values resolution and rendering."""

    pass


class InputReadError(RunError):
    """The template could not be read."""

    def __init__(self, message: str) -> None:
        super().__init__(f"failed to read input: {message}")


class OutputWriteError(RunError):
    """The rendered output could not be written."""

    def __init__(self, message: str) -> None:
        super().__init__(f"failed to write output: {message}")


def read_template(
    request: config.RenderRequest,
    stdin: _typing.TextIO | None = None,
) -> str:
    """
    Read the template from request.input_path, or stdin if not set.

    Raises:
        InputReadError: If reading fails.
    """
    try:
        if request.input_path is not None:
            return request.input_path.read_text(encoding="utf-8")
        return (stdin or _sys.stdin).read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(str(e)) from e


def write_file(path: _pathlib.Path, text: str, mode: int) -> None:
    """
    Write text to path, creating it with mode if it does not exist.

    An existing file is truncated and keeps its permissions.
    """
    fd = _os.open(path, _os.O_WRONLY | _os.O_CREAT | _os.O_TRUNC, mode)
    with _os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(text)


def write_output(
    request: config.RenderRequest,
    text: str,
    settings: config.Settings,
    stdout: _typing.TextIO | None = None,
) -> None:
    """
    Write rendered text to request.output_path, or stdout if not set.

    Raises:
        OutputWriteError: If writing fails.
    """
    try:
        if request.output_path is not None:
            write_file(request.output_path, text, settings.output_mode)
            _logger.info("Wrote %s", request.output_path)
        else:
            out = stdout or _sys.stdout
            out.write(text)
            out.flush()
    except OSError as e:
        raise OutputWriteError(str(e)) from e


def run(
    request: config.RenderRequest,
    settings: config.Settings | None = None,
    *,
    stdin: _typing.TextIO | None = None,
    stdout: _typing.TextIO | None = None,
) -> str:
    """
    Execute one rendering run.

    The template is read before values are resolved, and the output is
    only written once rendering has fully succeeded.

    Returns:
        The rendered text (also written to the output).

    Raises:
        InputReadError, OutputWriteError: On I/O failures.
        ValuesError: If values resolution fails.
        RenderError: If the template fails to compile or execute.
    """
    if settings is None:
        settings = config.Settings()

    source = read_template(request, stdin)
    resolved = values.resolve_values(request.values_files)
    output = render.render_template(source, resolved, settings)
    write_output(request, output, settings, stdout)
    return output
