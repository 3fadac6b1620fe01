"""Detection of bundled helper modules that a tool never uses."""

import re
from typing import List
import logging

from .base import ToolCheck, ToolContext

logger = logging.getLogger(__name__)

DECLARED_MODULE = re.compile(r"^# (\w+(?:::\w+)*) package\b", re.MULTILINE)


class ModuleUsageCheck(ToolCheck):
    """Reports modules declared with a ``# Name package`` banner but never used.

    A module counts as used when, in order of precedence:

    * the tool instantiates it from a run-time class name (listed per tool),
    * it is a function-only module and grep finds ``Name::x`` or
      ``Name->import``; any such text counts, including comments,
    * it is a base class and one of its subclasses is instantiated, either
      directly or from a run-time class name listed for the tool,
    * otherwise, the text constructs it with ``new Name(``, ``new Name;`` or
      ``Name->new``.
    """

    name = "module usage"

    def run(self, ctx: ToolContext) -> None:
        text = ctx.read_text()
        unused = [
            module for module in self.declared_modules(ctx, text)
            if not self._is_used(ctx, text, module)
        ]
        if unused:
            ctx.reporter.name_list(f"{ctx.tool_name} has unused modules:", unused)

    def declared_modules(self, ctx: ToolContext, text: str) -> List[str]:
        modules = []
        for module in DECLARED_MODULE.findall(text):
            if module in modules or ctx.conventions.is_ignored_module(module):
                continue
            modules.append(module)
        return modules

    def _is_used(self, ctx: ToolContext, text: str, module: str) -> bool:
        conventions = ctx.conventions

        if conventions.is_dynamic_module(ctx.tool_name, module):
            logger.debug(f"{ctx.tool_name}: {module} is instantiated dynamically")
            return True

        if conventions.is_not_object(module):
            pattern = f"{module}::[A-Za-z_]|{module}->import"
            return ctx.search.count(pattern, ctx.path) > 0

        subclasses = conventions.subclasses(module)
        if subclasses is not None:
            return any(
                conventions.is_dynamic_module(ctx.tool_name, subclass) or is_instantiated(text, subclass)
                for subclass in subclasses
            )

        return is_instantiated(text, module)


def is_instantiated(text: str, module: str) -> bool:
    """Return True if the text constructs an object of the given class."""
    name = re.escape(module)
    pattern = rf"\bnew\s+{name}\s*[(;]|(?<![\w:]){name}->new\b"
    return re.search(pattern, text) is not None
