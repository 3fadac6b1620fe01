"""POD rendering and syntax problems reported by the Perl documentation tools."""

import re
import logging

from .base import ToolCheck, ToolContext

logger = logging.getLogger(__name__)

WRAP_FAILURE = re.compile(r"(?:can't|cannot) wrap", re.IGNORECASE)
SYNTAX_OK = "pod syntax OK"


class PodFormatCheck(ToolCheck):
    """Runs the POD renderer and, when installed, the POD syntax checker."""

    name = "POD formatting"

    def run(self, ctx: ToolContext) -> None:
        settings = ctx.settings

        output = ctx.runner.run([*settings.renderer, ctx.path])
        if WRAP_FAILURE.search(output):
            ctx.reporter.violation(f"{ctx.tool_name} has lines too long")

        if not ctx.runner.which(settings.syntax_checker):
            logger.debug(f"{settings.syntax_checker} not found, skipping POD syntax check")
            return

        output = ctx.runner.run([settings.syntax_checker, ctx.path])
        if SYNTAX_OK not in output:
            ctx.reporter.violation(f"{ctx.tool_name} has POD syntax errors:", detail=output)
