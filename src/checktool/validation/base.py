"""Shared pieces of the per-tool checks."""

import re
from pathlib import Path
from typing import TextIO

from ..config import Settings
from ..conventions import Conventions
from ..external import ExternalRunner, TextSearch
from ..reporting import Reporter
from ..utils.error_handling import ToolNameError

TOOL_NAME_PATTERN = re.compile(r"[a-z-]+")


def parse_tool_name(path: str) -> str:
    """Derive the short tool name from a tool file path.

    Args:
        path: Path of the tool file, e.g. ``bin/pt-table-checksum``

    Returns:
        The basename, which may only contain lowercase letters and hyphens

    Raises:
        ToolNameError: If the basename does not have that form
    """
    name = Path(path).name
    if not TOOL_NAME_PATTERN.fullmatch(name):
        raise ToolNameError(f"Cannot parse tool name from {path}")
    return name


class ToolContext:
    """Everything a check needs to inspect one tool file."""

    def __init__(
        self,
        path: str,
        tool_name: str,
        file: TextIO,
        conventions: Conventions,
        runner: ExternalRunner,
        search: TextSearch,
        reporter: Reporter,
        settings: Settings,
    ):
        self.path = path
        self.tool_name = tool_name
        self.file = file
        self.conventions = conventions
        self.runner = runner
        self.search = search
        self.reporter = reporter
        self.settings = settings

    @property
    def package_name(self) -> str:
        """Perl package holding the tool's main code, e.g. ``pt_table_checksum``."""
        return self.tool_name.replace("-", "_")

    def read_text(self) -> str:
        return self.file.read()


class ToolCheck:
    """A single validation pass over one tool file.

    Subclasses implement :meth:`run`. Violations are reported through
    ``ctx.reporter``; conditions that make the result meaningless are raised
    as :class:`~checktool.utils.error_handling.FatalCheckError`.
    """

    name = "check"

    def run(self, ctx: ToolContext) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
