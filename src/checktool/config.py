"""Run-time settings for checktool.

Settings come from the environment and an optional TOML file:

``CHECKTOOL_DEBUG``
    Any of ``1``, ``true``, ``yes`` or ``on`` enables debug logging.
``CHECKTOOL_CONFIG``
    Path of a TOML file with these optional tables::

        [conventions]
        file = "my-conventions.yaml"

        [commands]
        grep = "grep"
        renderer = ["perldoc", "-t"]
        syntax_checker = "podchecker"
        help_flag = "--help"
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
import logging

from .utils.error_handling import ConfigurationError

logger = logging.getLogger(__name__)

DEBUG_ENV = "CHECKTOOL_DEBUG"
CONFIG_ENV = "CHECKTOOL_CONFIG"
_TRUE_VALUES = {"1", "true", "yes", "on"}


class Settings:
    """External commands and convention sources used by the checks."""

    def __init__(
        self,
        grep: str = "grep",
        renderer: Optional[List[str]] = None,
        syntax_checker: str = "podchecker",
        help_flag: str = "--help",
        conventions_file: Optional[Path] = None,
        debug: bool = False,
    ):
        self.grep = grep
        self.renderer = list(renderer) if renderer else ["perldoc", "-t"]
        self.syntax_checker = syntax_checker
        self.help_flag = help_flag
        self.conventions_file = conventions_file
        self.debug = debug

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any], base_dir: Path, debug: bool = False) -> "Settings":
        """Build settings from a parsed TOML document.

        Args:
            config: Parsed configuration
            base_dir: Directory relative paths in the configuration resolve against
            debug: Whether debug output was requested

        Returns:
            Settings instance
        """
        commands = config.get("commands", {})
        conventions = config.get("conventions", {})

        renderer = commands.get("renderer")
        if isinstance(renderer, str):
            renderer = renderer.split()

        conventions_file = conventions.get("file")
        if conventions_file:
            conventions_file = base_dir / conventions_file

        return cls(
            grep=commands.get("grep", "grep"),
            renderer=renderer,
            syntax_checker=commands.get("syntax_checker", "podchecker"),
            help_flag=commands.get("help_flag", "--help"),
            conventions_file=conventions_file,
            debug=debug,
        )


def debug_enabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Return True if the debug environment variable is set to a true value."""
    environ = os.environ if environ is None else environ
    return environ.get(DEBUG_ENV, "").strip().lower() in _TRUE_VALUES


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Load settings from the environment and the optional configuration file.

    Raises:
        ConfigurationError: If the configured file is missing or invalid
    """
    environ = os.environ if environ is None else environ
    debug = debug_enabled(environ)

    config_path = environ.get(CONFIG_ENV)
    if not config_path:
        return Settings(debug=debug)

    config_file = Path(config_path)
    config = _load_config(config_file)
    logger.debug(f"Loaded configuration from {config_file}")
    return Settings.from_mapping(config, config_file.parent, debug=debug)


def _load_config(config_file: Path) -> Dict[str, Any]:
    """Load configuration from a TOML file."""
    if not config_file.exists():
        raise ConfigurationError(f"Config file not found: {config_file}")

    if sys.version_info >= (3, 11):
        import tomllib
    else:
        import tomli as tomllib

    try:
        with open(config_file, 'rb') as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid config file {config_file}: {e}")
