"""Utility modules for checktool."""

from .error_handling import (
    CheckToolError,
    ToolNameError,
    ToolFileError,
    FatalCheckError,
    ExternalCommandError,
    ConfigurationError,
    format_user_error,
)

__all__ = [
    'CheckToolError',
    'ToolNameError',
    'ToolFileError',
    'FatalCheckError',
    'ExternalCommandError',
    'ConfigurationError',
    'format_user_error',
]
