"""
Main CLI entry point for txtplate.

Renders a template read from stdin (or --input) with values merged from
one or more JSON/YAML files, writing the result to stdout (or --output).
"""

import json as _json
import logging as _logging
import pathlib as _pathlib
import sys as _sys
import typing as _typing

import click as _click
import pydantic as _pydantic
import yaml as _yaml

import txtplate
import txtplate.config as config
import txtplate.constants as constants
import txtplate.render as render
import txtplate.runner as runner
import txtplate.values as values

CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}


def _configure_logging(level: str) -> None:
    """Send log records to stderr at the given level."""
    _logging.basicConfig(
        level=level,
        format=constants.LOG_FORMAT,
        stream=_sys.stderr,
        force=True,
    )


def _load_settings(verbose: bool) -> config.Settings:
    """Load Settings, exiting with a readable message if they are invalid."""
    try:
        settings = config.Settings()
    except _pydantic.ValidationError as e:
        _click.echo(f"invalid settings: {e}", err=True)
        raise SystemExit(1) from None
    _configure_logging("DEBUG" if verbose else settings.log_level)
    return settings


def _dump_values(resolved: values.Mapping, fmt: str) -> str:
    """Format resolved values for --dump-values."""
    data = values.to_native(resolved)
    if fmt == "yaml":
        return _yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return _json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def _fail(message: str) -> _typing.NoReturn:
    _click.echo(message, err=True)
    raise SystemExit(1)


@_click.command(context_settings=CONTEXT_SETTINGS)
@_click.version_option(txtplate.__version__, "-v", "--version", prog_name="txtplate")
@_click.option(
    "-i",
    "--input",
    "input_path",
    type=_click.Path(dir_okay=False, path_type=_pathlib.Path),
    default=None,
    help="Input from the file given instead of stdin",
)
@_click.option(
    "-o",
    "--output",
    "output_path",
    type=_click.Path(dir_okay=False, path_type=_pathlib.Path),
    default=None,
    help="Output to the file given instead of stdout",
)
@_click.option(
    "--dump-values",
    "dump_format",
    type=_click.Choice(["json", "yaml"]),
    default=None,
    help="Print the merged values in the given format instead of rendering",
)
@_click.option(
    "--verbose",
    is_flag=True,
    help="Enable debug logging on stderr",
)
@_click.argument(
    "values_files",
    nargs=-1,
    required=True,
    type=_click.Path(path_type=_pathlib.Path),
)
def cli(
    input_path: _pathlib.Path | None,
    output_path: _pathlib.Path | None,
    dump_format: str | None,
    verbose: bool,
    values_files: tuple[_pathlib.Path, ...],
) -> None:
    """Apply values in json or yaml files to a Jinja2 template.

    By default the template is read from stdin (or --input) and the result
    written to stdout (or --output). Each VALUESFILE is parsed as YAML if it
    ends in .yaml or .yml, and as JSON otherwise. Files are deep-merged in
    order: later files override earlier ones, nested mappings are merged.

    \b
    Example:
        cat mytemplate.tpl | txtplate base.yaml prod.json > output.txt
    """
    settings = _load_settings(verbose)
    request = config.RenderRequest(
        values_files=list(values_files),
        input_path=input_path,
        output_path=output_path,
    )

    if dump_format is not None:
        try:
            resolved = values.resolve_values(request.values_files)
        except values.ValuesError as e:
            _fail(str(e))
        _click.echo(_dump_values(resolved, dump_format), nl=False)
        return

    try:
        runner.run(request, settings)
    except runner.RunError as e:
        _fail(str(e))
    except values.ValuesError as e:
        _fail(str(e))
    except render.TemplateCompileError as e:
        _fail(f"failed to compile template: {e}")
    except render.TemplateExecutionError as e:
        _fail(f"failed to execute template: {e}")


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="txtplate")


if __name__ == "__main__":
    main()
