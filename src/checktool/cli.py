"""Command-line interface for checktool."""

import argparse
import sys
from typing import List, Optional
import logging

from . import __version__
from .config import load_settings
from .conventions import Conventions
from .driver import ToolChecker
from .utils.error_handling import CheckToolError, format_user_error

logger = logging.getLogger(__name__)


class CheckToolCLI:
    """Command-line interface for the tool documentation checks."""

    def __init__(self):
        """Initialize the CLI."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            prog="check-tool",
            description="Check the documentation and option conventions of toolkit tools",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Checks run against every TOOL file, in order:
  option order      options in each OPTIONS (sub)section are sorted
  module usage      every bundled module is used
  option types      standard options have the standard type and short form
  header order      required =head1 headers are in the standard order
  POD formatting    POD renders without long lines and passes podchecker
  option usage      every documented option is read; DSN options are parsed

Environment:
  CHECKTOOL_DEBUG   enable debug logging
  CHECKTOOL_CONFIG  TOML file overriding commands and convention tables

Examples:
  check-tool bin/pt-table-checksum
  check-tool bin/*
            """
        )

        parser.add_argument(
            "tool_files",
            nargs="*",
            metavar="TOOL",
            help="Tool files to check"
        )

        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        )

        return parser

    def run(self, args: Optional[List[str]] = None) -> int:
        """Run the CLI with given arguments.

        Args:
            args: Command line arguments (defaults to sys.argv)

        Returns:
            Exit code (0 when every tool passed, 1 otherwise)
        """
        parsed_args = self.parser.parse_args(args)

        if not parsed_args.tool_files:
            self.parser.print_usage(sys.stderr)
            return 1

        try:
            settings = load_settings()
            if settings.debug:
                logging.getLogger().setLevel(logging.DEBUG)

            conventions = Conventions.load(settings.conventions_file)
        except CheckToolError as e:
            logger.error(format_user_error(e, "Configuration failed"))
            return 1

        checker = ToolChecker(conventions, settings=settings)
        return checker.check_files(parsed_args.tool_files)


def main():
    """Main entry point for the CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    cli = CheckToolCLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
