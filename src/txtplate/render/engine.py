"""
Template execution for txtplate.

Templates are Jinja2 source text. The resolved values mapping is the
template's context: its top-level keys become template variables.
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import jinja2 as _jinja2

import txtplate.config as config
import txtplate.render.functions as functions
import txtplate.values as values

_logger = _logging.getLogger(__name__)


class RenderError(Exception):
    """Base class for template compile and execution errors."""

    pass


class TemplateCompileError(RenderError):
    """The template source is not valid template syntax."""

    def __init__(self, message: str, lineno: int | None = None) -> None:
        self.lineno = lineno
        where = f" (line {lineno})" if lineno is not None else ""
        super().__init__(f"{message}{where}")


class TemplateExecutionError(RenderError):
    """The template failed while rendering."""

    pass


def build_environment(settings: config.Settings | None = None) -> _jinja2.Environment:
    """
    Create a Jinja2 environment with txtplate's helper functions.

    Args:
        settings: Settings to honor. Defaults to Settings() from the environment.
    """
    if settings is None:
        settings = config.Settings()

    environment = _jinja2.Environment(
        undefined=_jinja2.StrictUndefined if settings.strict_undefined else _jinja2.Undefined,
        keep_trailing_newline=settings.keep_trailing_newline,
        autoescape=False,
    )
    environment.filters.update(functions.FILTERS)
    environment.globals.update(functions.GLOBALS)
    return environment


def compile_template(
    source: str,
    environment: _jinja2.Environment,
) -> _jinja2.Template:
    """
    Compile template source.

    Raises:
        TemplateCompileError: On a syntax error.
    """
    try:
        return environment.from_string(source)
    except _jinja2.TemplateSyntaxError as e:
        raise TemplateCompileError(e.message or str(e), e.lineno) from e


def render_template(
    source: str,
    resolved: values.Mapping | dict[str, _typing.Any],
    settings: config.Settings | None = None,
) -> str:
    """
    Compile and execute a template against resolved values.

    Args:
        source: Template text.
        resolved: The merged values, as a Mapping tree or a plain dict.
        settings: Rendering settings.

    Returns:
        The rendered text.

    Raises:
        TemplateCompileError: If the template does not compile.
        TemplateExecutionError: If rendering fails.
    """
    environment = build_environment(settings)
    template = compile_template(source, environment)

    context = values.to_native(resolved) if isinstance(resolved, values.Mapping) else resolved

    try:
        output = template.render(context)
    except _jinja2.TemplateError as e:
        raise TemplateExecutionError(str(e)) from e
    except Exception as e:
        # Anything a template expression can raise (KeyError from .pop(), ...)
        raise TemplateExecutionError(f"{type(e).__name__}: {e}") from e

    _logger.debug("Rendered %d characters", len(output))
    return output
