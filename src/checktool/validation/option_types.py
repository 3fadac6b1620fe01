"""Standard option type codes and short forms, read from a tool's --help."""

import os
import re
from typing import List, NamedTuple
import logging

from ..utils.error_handling import FatalCheckError
from .base import ToolCheck, ToolContext

logger = logging.getLogger(__name__)

OPTIONS_HEADING = re.compile(r"^Options:\s*$")
RULES_HEADING = re.compile(r"^Rules:\s*$")
OPTION_NAME = re.compile(r"^\s*--(?:\[no\])?([\w-]+)")
HELP_OPTION = re.compile(
    r"^\s*--(?:\[no\])?(?P<name>[\w-]+)"
    r"(?:=(?P<type>\w))?"
    r"(?:\s+-(?P<short>[A-Za-z])(?=\s|$))?"
    r"(?:\s+\S.*)?$"
)


class HelpOption(NamedTuple):
    name: str
    type: str
    short: str


def parse_help_options(tool_name: str, output: str) -> List[HelpOption]:
    """Parse the option listing of a tool's --help output.

    Parsing starts after the ``Options:`` heading and ends at the first option
    seen twice, since the help output lists the options again with their
    current values, or at the ``Rules:`` heading. Lines not starting with
    ``--`` are blank lines, group headings such as ``Connection:`` or wrapped
    descriptions, and are skipped.

    Args:
        tool_name: Tool the output belongs to, for error messages
        output: Full --help output

    Returns:
        Options in the order listed

    Raises:
        FatalCheckError: If there is no heading or an option line is malformed
    """
    lines = output.splitlines()
    for i, line in enumerate(lines):
        if OPTIONS_HEADING.match(line):
            break
    else:
        raise FatalCheckError("Cannot find Options: in --help output", tool_name=tool_name)

    options = []
    seen = set()
    for line in lines[i + 1:]:
        if RULES_HEADING.match(line):
            break
        leading = OPTION_NAME.match(line)
        if not leading:
            continue
        if leading.group(1) in seen:
            break
        match = HELP_OPTION.match(line)
        if not match:
            raise FatalCheckError(f"Cannot parse --help line: {line.strip()}", tool_name=tool_name)
        name = match.group("name")
        seen.add(name)
        options.append(HelpOption(name, match.group("type") or "", match.group("short") or ""))
    return options


class OptionTypesCheck(ToolCheck):
    """Checks standard options against the canonical type and short form."""

    name = "option types"

    def run(self, ctx: ToolContext) -> None:
        command = [_executable_path(ctx.path), ctx.settings.help_flag]
        options = parse_help_options(ctx.tool_name, ctx.runner.run(command))
        logger.debug(f"{ctx.tool_name}: parsed {len(options)} options from --help")

        for option in options:
            expected = ctx.conventions.option_descriptor(ctx.tool_name, option.name)
            if expected is None:
                continue

            if option.type != expected.type:
                ctx.reporter.violation(
                    f"{ctx.tool_name} --{option.name} type is {_describe(option.type)}"
                    f" but should be {_describe(expected.type)}"
                )
            if option.short != expected.short:
                ctx.reporter.violation(
                    f"{ctx.tool_name} --{option.name} short form is {_describe(option.short, '-')}"
                    f" but should be {_describe(expected.short, '-')}"
                )


def _describe(value: str, prefix: str = "") -> str:
    return f"{prefix}{value}" if value else "none"


def _executable_path(path: str) -> str:
    # A bare file name would be looked up on PATH instead of run in place.
    if os.path.dirname(path):
        return path
    return os.path.join(os.curdir, path)
