"""Alphabetical order of the options documented in the OPTIONS section."""

from typing import List
import logging

from ..pod import find_section
from ..utils.error_handling import FatalCheckError
from .base import ToolCheck, ToolContext

logger = logging.getLogger(__name__)


class OptionOrderCheck(ToolCheck):
    """Checks that each OPTIONS section and subsection lists options sorted."""

    name = "option order"
    section_name = "OPTIONS"

    def run(self, ctx: ToolContext) -> None:
        section = find_section(ctx.read_text(), self.section_name)
        if section is None:
            raise FatalCheckError(f"Cannot find =head1 {self.section_name}", tool_name=ctx.tool_name)

        for subsection in section.walk():
            logger.debug(f"{ctx.tool_name}: {len(subsection.options)} options in {subsection.name}")
            self._check_section(ctx, subsection.name, subsection.options)

    def _check_section(self, ctx: ToolContext, name: str, options: List[str]) -> None:
        correct = sorted(options)
        for i, (actual, expected) in enumerate(zip(options, correct)):
            if actual == expected:
                continue
            rows = [(a, c) for a, c in zip(options[i:], correct[i:]) if a != c]
            ctx.reporter.order_table(f"{ctx.tool_name} has unsorted options in {name}:", rows)
            return
