"""Synchronous access to the external programs the checks rely on."""

import shutil
import subprocess
from typing import List, Optional, Sequence
import logging

from .utils.error_handling import ExternalCommandError

logger = logging.getLogger(__name__)


class ExternalRunner:
    """Runs external programs and captures their combined output."""

    def run(self, args: Sequence[str]) -> str:
        """Run a program to completion and return stdout and stderr as text.

        The exit status is not interpreted; callers judge the output.

        Args:
            args: Program and arguments

        Returns:
            Combined output of the program

        Raises:
            ExternalCommandError: If the program cannot be started
        """
        logger.debug(f"Running: {' '.join(args)}")
        try:
            result = subprocess.run(
                list(args),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise ExternalCommandError(f"Cannot run {args[0]}: {e}")

        return result.stdout

    def which(self, program: str) -> Optional[str]:
        """Return the full path of a program on PATH, or None."""
        return shutil.which(program)


class TextSearch:
    """Counted and listed pattern searches over files using grep."""

    def __init__(self, runner: ExternalRunner, grep: str = "grep"):
        """Initialize the search helper.

        Args:
            runner: Runner used to invoke grep
            grep: Name or path of the grep program
        """
        self.runner = runner
        self.grep = grep

    def count(self, pattern: str, path: str, fixed: bool = False) -> int:
        """Count the lines of a file matching a pattern.

        Args:
            pattern: Fixed string or extended regular expression
            path: File to search
            fixed: Treat the pattern as a fixed string

        Returns:
            Number of matching lines

        Raises:
            ExternalCommandError: If grep does not report a count
        """
        mode = "-F" if fixed else "-E"
        output = self.runner.run([self.grep, "-c", mode, "-e", pattern, path]).strip()
        try:
            return int(output)
        except ValueError:
            raise ExternalCommandError(f"Unexpected output from {self.grep} -c: {output!r}")

    def lines(self, pattern: str, path: str) -> List[str]:
        """Return the lines of a file matching an extended regular expression, in order."""
        output = self.runner.run([self.grep, "-E", "-e", pattern, path])
        # Only newlines end a line; trailing whitespace is kept for the caller.
        lines = output.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        return lines
