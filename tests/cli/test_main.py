"""Tests for CLI main module."""

import json as _json
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import click.testing as _click_testing
import pytest as _pytest
import yaml as _yaml

import txtplate.cli as cli

WriteFile = _typing.Callable[[str, str], _pathlib.Path]


@_pytest.fixture(autouse=True)
def restore_root_logging() -> _typing.Iterator[None]:
    """Undo the root logger setup each CLI invocation performs."""
    root = _logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@_pytest.fixture
def runner() -> _click_testing.CliRunner:
    """CLI runner with no TXTPLATE_* settings."""
    return _click_testing.CliRunner()


class TestCLIBasics:
    """Help, version and argument handling."""

    def test_help(self, runner: _click_testing.CliRunner) -> None:
        """Help describes usage and options."""
        result = runner.invoke(cli.cli, ["--help"])

        assert result.exit_code == 0
        assert "VALUES_FILES" in result.output
        for option in ["--input", "--output", "--dump-values"]:
            assert option in result.output

    def test_version_shows_current_version(self, runner: _click_testing.CliRunner) -> None:
        """Version flag should show the package version."""
        result = runner.invoke(cli.cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_values_file_required(self, runner: _click_testing.CliRunner) -> None:
        """At least one values file must be given."""
        result = runner.invoke(cli.cli, [], input="x")
        assert result.exit_code == 2


class TestRendering:
    """Successful renders."""

    def test_stdin_to_stdout(self, runner: _click_testing.CliRunner, write_file: WriteFile) -> None:
        """Template from stdin, output to stdout."""
        values_path = write_file("values.json", '{"name": "world"}')

        result = runner.invoke(cli.cli, [str(values_path)], input="Hello {{ name }}\n")

        assert result.exit_code == 0, result.output
        assert result.output == "Hello world\n"

    def test_later_files_win(self, runner: _click_testing.CliRunner, write_file: WriteFile) -> None:
        """Values files merge left to right."""
        base = write_file("base.yaml", "db:\n  host: a\n  port: 5432\n")
        prod = write_file("prod.json", '{"db": {"host": "b"}}')

        result = runner.invoke(
            cli.cli,
            [str(base), str(prod)],
            input="{{ db.host }}:{{ db.port }}",
        )

        assert result.exit_code == 0, result.output
        assert result.output == "b:5432"

    def test_input_and_output_files(
        self,
        runner: _click_testing.CliRunner,
        write_file: WriteFile,
        tmp_path: _pathlib.Path,
    ) -> None:
        """-i and -o replace stdin and stdout."""
        values_path = write_file("values.yml", "items: [a, b]\n")
        template = write_file("list.tpl", "{{ items | join(',') }}\n")
        output_path = tmp_path / "out.txt"

        result = runner.invoke(
            cli.cli,
            ["-i", str(template), "-o", str(output_path), str(values_path)],
        )

        assert result.exit_code == 0, result.output
        assert result.output == ""
        assert output_path.read_text(encoding="utf-8") == "a,b\n"


class TestDumpValues:
    """--dump-values prints the merged tree."""

    def test_dump_json(self, runner: _click_testing.CliRunner, write_file: WriteFile) -> None:
        """JSON dump of merged values."""
        a = write_file("a.yaml", "x:\n  nested: 1\nkeep: true\n1: one\n")
        b = write_file("b.json", '{"x": "scalar"}')

        result = runner.invoke(cli.cli, ["--dump-values", "json", str(a), str(b)])

        assert result.exit_code == 0, result.output
        assert _json.loads(result.output) == {"x": "scalar", "keep": True, "1": "one"}

    def test_dump_yaml(self, runner: _click_testing.CliRunner, write_file: WriteFile) -> None:
        """YAML dump of merged values."""
        a = write_file("a.json", '{"db": {"host": "a", "port": 1}}')
        b = write_file("b.json", '{"db": {"host": "b"}}')

        result = runner.invoke(cli.cli, ["--dump-values", "yaml", str(a), str(b)])

        assert result.exit_code == 0, result.output
        assert _yaml.safe_load(result.output) == {"db": {"host": "b", "port": 1}}

    def test_dump_reports_values_errors(
        self,
        runner: _click_testing.CliRunner,
        write_file: WriteFile,
    ) -> None:
        """Resolution errors fail the dump too."""
        bad = write_file("bad.json", "{")

        result = runner.invoke(cli.cli, ["--dump-values", "json", str(bad)])

        assert result.exit_code == 1
        assert "failed to parse values file" in result.output


class TestErrors:
    """Failures exit with status 1 and a one-line message."""

    def test_invalid_json(self, runner: _click_testing.CliRunner, write_file: WriteFile) -> None:
        """Malformed values files name the file and format."""
        bad = write_file("bad.json", "{not json")

        result = runner.invoke(cli.cli, [str(bad)], input="x")

        assert result.exit_code == 1
        assert "failed to parse values file" in result.output
        assert "as json" in result.output

    def test_non_mapping_root(self, runner: _click_testing.CliRunner, write_file: WriteFile) -> None:
        """A top-level list cannot be merged."""
        bad = write_file("list.yaml", "- a\n- b\n")

        result = runner.invoke(cli.cli, [str(bad)], input="x")

        assert result.exit_code == 1
        assert "expected a mapping" in result.output

    def test_bad_key(self, runner: _click_testing.CliRunner, write_file: WriteFile) -> None:
        """A key with no string form is reported."""
        bad = write_file("keys.yaml", "true: x\n")

        result = runner.invoke(cli.cli, [str(bad)], input="x")

        assert result.exit_code == 1
        assert "key is not a string" in result.output

    def test_missing_values_file(self, runner: _click_testing.CliRunner, tmp_path: _pathlib.Path) -> None:
        """Unreadable values files are reported."""
        result = runner.invoke(cli.cli, [str(tmp_path / "missing.json")], input="x")

        assert result.exit_code == 1
        assert "failed to read values file" in result.output

    def test_compile_error(self, runner: _click_testing.CliRunner, write_file: WriteFile) -> None:
        """Template syntax errors are compile failures."""
        values_path = write_file("v.json", "{}")

        result = runner.invoke(cli.cli, [str(values_path)], input="{% if %}")

        assert result.exit_code == 1
        assert "failed to compile template" in result.output

    def test_expression_error(self, runner: _click_testing.CliRunner, write_file: WriteFile) -> None:
        """Errors raised inside template expressions are execution failures."""
        values_path = write_file("v.json", "{}")

        result = runner.invoke(cli.cli, [str(values_path)], input="{{ {}.pop('x') }}")

        assert result.exit_code == 1
        assert "failed to execute template: KeyError" in result.output
        assert "Traceback" not in result.output

    def test_strict_undefined_from_env(self, write_file: WriteFile) -> None:
        """TXTPLATE_STRICT_UNDEFINED turns missing variables into errors."""
        values_path = write_file("v.json", "{}")
        strict_runner = _click_testing.CliRunner(env={"TXTPLATE_STRICT_UNDEFINED": "true"})

        result = strict_runner.invoke(cli.cli, [str(values_path)], input="{{ missing }}")

        assert result.exit_code == 1
        assert "failed to execute template" in result.output

    def test_missing_input_file(
        self,
        runner: _click_testing.CliRunner,
        write_file: WriteFile,
        tmp_path: _pathlib.Path,
    ) -> None:
        """A missing --input file is a read failure."""
        values_path = write_file("v.json", "{}")

        result = runner.invoke(cli.cli, ["-i", str(tmp_path / "nope.tpl"), str(values_path)])

        assert result.exit_code == 1
        assert "failed to read input" in result.output

    def test_invalid_settings(self, write_file: WriteFile) -> None:
        """Bad TXTPLATE_* values are reported before anything runs."""
        values_path = write_file("v.json", "{}")
        bad_runner = _click_testing.CliRunner(env={"TXTPLATE_LOG_LEVEL": "chatty"})

        result = bad_runner.invoke(cli.cli, [str(values_path)], input="x")

        assert result.exit_code == 1
        assert "invalid settings" in result.output


class TestLogging:
    """Log output on stderr."""

    def test_quiet_by_default(self, runner: _click_testing.CliRunner, write_file: WriteFile) -> None:
        """At the default WARNING level a successful run logs nothing."""
        values_path = write_file("v.json", '{"a": 1}')

        result = runner.invoke(cli.cli, [str(values_path)], input="{{ a }}")

        assert result.exit_code == 0, result.output
        assert result.output == "1"

    def test_verbose_enables_debug(self, runner: _click_testing.CliRunner, write_file: WriteFile) -> None:
        """--verbose sends DEBUG records to stderr."""
        values_path = write_file("v.json", '{"a": 1}')

        result = runner.invoke(cli.cli, ["--verbose", str(values_path)], input="{{ a }}")

        assert result.exit_code == 0, result.output
        assert "DEBUG txtplate.values.resolver: Merged" in result.output
        assert "INFO txtplate.values.resolver: Resolved values from 1 file(s)" in result.output

    def test_log_level_setting(self, write_file: WriteFile) -> None:
        """TXTPLATE_LOG_LEVEL sets the level when --verbose is absent."""
        values_path = write_file("v.json", '{"a": 1}')
        info_runner = _click_testing.CliRunner(env={"TXTPLATE_LOG_LEVEL": "info"})

        result = info_runner.invoke(cli.cli, [str(values_path)], input="{{ a }}")

        assert result.exit_code == 0, result.output
        assert "Resolved values from 1 file(s)" in result.output
        assert "DEBUG" not in result.output
