"""Per-run configuration types for txtplate.

RenderRequest carries what used to be global command-line state: the
values files to merge and the optional template input / output paths.
It is built once by the CLI and passed explicitly to the render step.
"""

import pathlib as _pathlib

import pydantic as _pydantic


class RenderRequest(_pydantic.BaseModel):
    """
    One rendering run.

    Attributes:
        values_files: Values files, lowest precedence first. At least one.
        input_path: Template file. None reads the template from stdin.
        output_path: Output file. None writes to stdout.
    """

    model_config = _pydantic.ConfigDict(frozen=True, extra="forbid")

    values_files: list[_pathlib.Path] = _pydantic.Field(min_length=1)
    input_path: _pathlib.Path | None = None
    output_path: _pathlib.Path | None = None

    @_pydantic.field_validator("input_path", "output_path", mode="before")
    @classmethod
    def _empty_path_is_none(cls, value: object) -> object:
        """Treat an empty path string as "not given"."""
        if value == "":
            return None
        return value
