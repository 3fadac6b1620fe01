"""Checks applied to every tool file.

Each check is a :class:`ToolCheck`; the driver runs :func:`default_checks`
in order against every tool file.
"""

from typing import List

from .base import ToolCheck, ToolContext, parse_tool_name
from .option_order import OptionOrderCheck
from .module_usage import ModuleUsageCheck
from .option_types import OptionTypesCheck, parse_help_options
from .header_order import HeaderOrderCheck
from .pod_format import PodFormatCheck
from .option_usage import OptionUsageCheck


def default_checks() -> List[ToolCheck]:
    """Return a fresh instance of every check, in the order they run."""
    return [
        OptionOrderCheck(),
        ModuleUsageCheck(),
        OptionTypesCheck(),
        HeaderOrderCheck(),
        PodFormatCheck(),
        OptionUsageCheck(),
    ]


__all__ = [
    "ToolCheck",
    "ToolContext",
    "parse_tool_name",
    "parse_help_options",
    "default_checks",
    "OptionOrderCheck",
    "ModuleUsageCheck",
    "OptionTypesCheck",
    "HeaderOrderCheck",
    "PodFormatCheck",
    "OptionUsageCheck",
]
