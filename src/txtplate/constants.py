"""
Shared constants for txtplate.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

DEFAULT_OUTPUT_MODE = 0o664
"""Default file mode for rendered output files."""

DEFAULT_LOG_LEVEL = "WARNING"
"""Default logging level."""

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
"""Format for log records written to stderr."""
