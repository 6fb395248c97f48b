"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with TXTPLATE_ prefix
3. .env file named by TXTPLATE_ENV_FILE (if set and present)

Example:
  TXTPLATE_STRICT_UNDEFINED=true txtplate values.yaml < page.tpl
"""

import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import txtplate.constants as constants


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    TXTPLATE_ENV_FILE names it explicitly. If it is unset, or set to a file
    that does not exist, no .env file is loaded.
    """
    if env_file := _os.environ.get("TXTPLATE_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    txtplate settings.

    All settings can be overridden via environment variables with the
    TXTPLATE_ prefix, e.g. TXTPLATE_OUTPUT_MODE=0o600.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="TXTPLATE_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    strict_undefined: bool = False
    """Raise on undefined template variables instead of rendering them empty."""

    keep_trailing_newline: bool = True
    """Keep a template's final newline in the output."""

    output_mode: int = constants.DEFAULT_OUTPUT_MODE
    """File mode for files written with --output."""

    log_level: str = constants.DEFAULT_LOG_LEVEL
    """Logging level name (DEBUG, INFO, WARNING, ...)."""

    @_pydantic.field_validator("output_mode", mode="before")
    @classmethod
    def _parse_octal_mode(cls, value: _typing.Any) -> _typing.Any:
        """Accept modes written as octal strings ("664", "0o664")."""
        if isinstance(value, str):
            try:
                return int(value, 8)
            except ValueError as e:
                raise ValueError(f"output_mode must be an octal file mode, got {value!r}") from e
        return value

    @_pydantic.field_validator("output_mode")
    @classmethod
    def _check_mode_range(cls, value: int) -> int:
        if not 0 <= value <= 0o7777:
            raise ValueError(f"output_mode out of range: {oct(value)}")
        return value

    @_pydantic.field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(_logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for test isolation.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]
