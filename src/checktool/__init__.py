"""Documentation and option convention checks for a suite of command-line tools.

Each tool file is inspected by a fixed list of independent checks: option
order, module usage, option types, header order, POD formatting and option
usage. Violations are printed on stdout; the exit status is 1 if any check
reported a violation or failed.
"""

__version__ = "1.0.0"

from .conventions import Conventions, OptionDescriptor
from .driver import ToolChecker
from .reporting import Reporter

__all__ = [
    "__version__",
    "Conventions",
    "OptionDescriptor",
    "ToolChecker",
    "Reporter",
]
