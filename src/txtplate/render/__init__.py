"""
Template rendering for txtplate.

Uses Jinja2 with a small library of helper filters and globals.
"""

from txtplate.render.engine import (
    RenderError,
    TemplateCompileError,
    TemplateExecutionError,
    build_environment,
    compile_template,
    render_template,
)

__all__ = [
    "RenderError",
    "TemplateCompileError",
    "TemplateExecutionError",
    "build_environment",
    "compile_template",
    "render_template",
]
