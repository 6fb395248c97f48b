"""
Configuration module for txtplate.

Uses pydantic-settings for environment variable loading and a pydantic
model for the per-run request.
"""

from txtplate.config.settings import Settings
from txtplate.config.types import RenderRequest

__all__ = ["RenderRequest", "Settings"]
