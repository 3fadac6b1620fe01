"""Error types and user-facing message helpers for checktool."""

from typing import Optional


class CheckToolError(Exception):
    """Base exception for all checktool errors."""

    def __init__(self, message: str, tool_name: Optional[str] = None):
        """Initialize the error.

        Args:
            message: Human readable description of the failure
            tool_name: Tool being checked when the error occurred, if any
        """
        super().__init__(message)
        self.message = message
        self.tool_name = tool_name


class ToolNameError(CheckToolError):
    """Raised when a tool name cannot be derived from a file path."""


class ToolFileError(CheckToolError):
    """Raised when a tool file cannot be opened or read."""


class FatalCheckError(CheckToolError):
    """Raised when a single check cannot produce a meaningful result."""


class ExternalCommandError(CheckToolError):
    """Raised when an external program cannot be run or its output is unusable."""


class ConfigurationError(CheckToolError):
    """Raised for invalid settings or convention tables."""


def format_user_error(error: Exception, context: Optional[str] = None) -> str:
    """Format an exception as a one-line diagnostic.

    Args:
        error: The exception to describe
        context: Optional prefix naming what was being done

    Returns:
        Message suitable for the diagnostic stream
    """
    message = getattr(error, "message", None) or str(error) or error.__class__.__name__
    if context:
        return f"{context}: {message}"
    return message
