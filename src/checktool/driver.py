"""Runs every check against every tool file and aggregates the result."""

from typing import Iterable, List, Optional, Sequence, TextIO
import logging

from .config import Settings
from .conventions import Conventions
from .external import ExternalRunner, TextSearch
from .reporting import Reporter
from .utils.error_handling import ToolFileError, ToolNameError, format_user_error
from .validation import ToolCheck, ToolContext, default_checks, parse_tool_name

logger = logging.getLogger(__name__)


class ToolChecker:
    """Checks tool files one at a time, isolating each check's failures."""

    def __init__(
        self,
        conventions: Conventions,
        settings: Optional[Settings] = None,
        runner: Optional[ExternalRunner] = None,
        checks: Optional[Sequence[ToolCheck]] = None,
        stream: Optional[TextIO] = None,
    ):
        """Initialize the checker.

        Args:
            conventions: Canonical tables and exceptions
            settings: External command settings
            runner: Runner for external programs; replaced by fakes in tests
            checks: Checks to run, in order; defaults to every check
            stream: Where reports are written; defaults to stdout
        """
        self.conventions = conventions
        self.settings = settings or Settings()
        self.runner = runner or ExternalRunner()
        self.search = TextSearch(self.runner, grep=self.settings.grep)
        self.checks: List[ToolCheck] = list(checks) if checks is not None else default_checks()
        self.stream = stream

    def check_files(self, paths: Iterable[str]) -> int:
        """Check each tool file in order.

        Args:
            paths: Tool file paths

        Returns:
            0 if every file passed every check, 1 otherwise
        """
        reporter = Reporter(self.stream)
        for path in paths:
            self.check_file(path, reporter)

        if reporter.failed:
            logger.debug(f"{reporter.violations} violations reported")
            return 1
        return 0

    def check_file(self, path: str, reporter: Reporter) -> None:
        """Run every check against one tool file."""
        try:
            tool_name = parse_tool_name(path)
            tool_file = self._open(path)
        except (ToolNameError, ToolFileError) as e:
            logger.error(format_user_error(e))
            reporter.fail()
            return

        logger.debug(f"Checking {tool_name} ({path})")
        with tool_file:
            for check in self.checks:
                tool_file.seek(0)
                ctx = ToolContext(
                    path=path,
                    tool_name=tool_name,
                    file=tool_file,
                    conventions=self.conventions,
                    runner=self.runner,
                    search=self.search,
                    reporter=reporter,
                    settings=self.settings,
                )
                try:
                    check.run(ctx)
                except Exception as e:
                    logger.error(format_user_error(e, f"{check.name} check failed for {tool_name}"))
                    logger.debug("Check failure details", exc_info=True)
                    reporter.fail()

    def _open(self, path: str) -> TextIO:
        try:
            return open(path, 'r', encoding='utf-8', errors='replace')
        except OSError as e:
            raise ToolFileError(f"Cannot open {path}: {e.strerror or e}")
