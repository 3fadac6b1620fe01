"""Documented options that the tool never reads, and DSN option parsing."""

import re
from typing import List
import logging

from ..pod import documented_options
from .base import ToolCheck, ToolContext

logger = logging.getLogger(__name__)

OPTION_GETTERS = ("get('{}')", "got('{}')")
DSN_PARSE_CALL = re.compile(r"parse_options\(")


class OptionUsageCheck(ToolCheck):
    """Checks that every documented option is read through the option parser.

    Also checks that the tool's main package passes its options to
    ``DSNParser::parse_options()``, unless the tool never connects.
    """

    name = "option usage"

    def run(self, ctx: ToolContext) -> None:
        text = ctx.read_text()

        unused = [option for option in self.checked_options(ctx, text) if not self._is_read(ctx, option)]
        if unused:
            ctx.reporter.name_list(
                f"{ctx.tool_name} has unused options:", [f"--{option}" for option in unused]
            )

        if ctx.conventions.is_dsn_exempt(ctx.tool_name):
            return
        if not DSN_PARSE_CALL.search(self.main_package(ctx, text)):
            ctx.reporter.violation(f"{ctx.tool_name} does not call DSNParser::parse_options()")

    def checked_options(self, ctx: ToolContext, text: str) -> List[str]:
        options = []
        for option in documented_options(text):
            if option in options or ctx.conventions.is_ignored_option(option):
                continue
            options.append(option)
        return options

    def main_package(self, ctx: ToolContext, text: str) -> str:
        """Return the text from the tool's own package declaration to the end."""
        match = re.search(rf"^package {re.escape(ctx.package_name)};", text, re.MULTILINE)
        if match is None:
            logger.debug(f"{ctx.tool_name}: no package {ctx.package_name} found")
            return ""
        return text[match.start():]

    def _is_read(self, ctx: ToolContext, option: str) -> bool:
        calls = sum(ctx.search.count(getter.format(option), ctx.path, fixed=True) for getter in OPTION_GETTERS)
        return calls > 0
