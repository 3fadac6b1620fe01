"""Convention tables for checktool.

The canonical option descriptors, required documentation headers and module
usage policies live in ``conventions.yaml`` next to this module, together with
the per-tool exceptions that shadow them.
"""

from .tables import Conventions, OptionDescriptor, OPTION_TYPES

__all__ = [
    "Conventions",
    "OptionDescriptor",
    "OPTION_TYPES",
]
