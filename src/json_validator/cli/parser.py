"""CLI argument parser for json-validator.

Every option defaults to None so that SettingsManager can tell options
that were given from options left to the environment or config file.
"""

import argparse
from argparse import Namespace
from collections.abc import Sequence

from json_validator.constants import DEFAULT_IGNORE_PATTERNS, OUTPUT_FORMATS


class CLIParser:
    """Command-line argument parser for json-validator."""

    def parse_args(self, argv: Sequence[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Arguments to parse (defaults to sys.argv[1:])

        Returns:
            Namespace: Parsed arguments namespace.

        """
        parser = self._create_main_parser()
        self._add_input_options(parser)
        self._add_output_options(parser)
        return parser.parse_args(argv)

    def _create_main_parser(self) -> argparse.ArgumentParser:
        """Create the main argument parser.

        Returns:
            argparse.ArgumentParser: The configured main parser.

        """
        return argparse.ArgumentParser(
            prog="json-validator",
            description=(
                "Validate JSON files in a directory tree, optionally "
                "against JSON Schema"
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Check syntax of every JSON file below the current directory
  %(prog)s

  # Validate a folder against one schema
  %(prog)s data --schema schemas/record.schema.json

  # Files may point at their own schema: {"$schema": "./user.schema.json"}
  %(prog)s config

  # Replace the default ignore patterns
  %(prog)s --ignore "**/fixtures/**,**/node_modules/**"

  # Report only, never fail
  %(prog)s --no-fail-on-invalid --format json
            """,
        )

    def _add_input_options(self, parser: argparse.ArgumentParser) -> None:
        """Add options selecting what is validated and how.

        Args:
            parser (argparse.ArgumentParser): The main parser.

        """
        parser.add_argument(
            "folder",
            nargs="?",
            default=None,
            help="Root directory to scan (default: .)",
        )
        parser.add_argument(
            "--schema",
            default=None,
            help=(
                "Global schema applied to every file, overriding any "
                "$schema property"
            ),
        )
        parser.add_argument(
            "--ignore",
            action="append",
            default=None,
            metavar="PATTERNS",
            help=(
                "Glob patterns to exclude, comma-separated; repeatable. "
                "Replaces the defaults: "
                f"{', '.join(DEFAULT_IGNORE_PATTERNS)}"
            ),
        )
        parser.add_argument(
            "--fail-on-invalid",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Exit non-zero when any file is invalid (default: on)",
        )
        parser.add_argument(
            "--concurrency",
            type=int,
            default=None,
            help="Number of files validated at the same time (default: 1)",
        )
        parser.add_argument(
            "--config",
            default=None,
            metavar="FILE",
            help="INI file with a [json-validator] section",
        )

    def _add_output_options(self, parser: argparse.ArgumentParser) -> None:
        """Add options controlling output and logging.

        Args:
            parser (argparse.ArgumentParser): The main parser.

        """
        parser.add_argument(
            "--format",
            choices=OUTPUT_FORMATS,
            default=None,
            help="Report format (default: text)",
        )
        parser.add_argument(
            "--log-file",
            default=None,
            metavar="FILE",
            help="Also write a debug log to FILE",
        )
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show debug logging",
        )
        parser.add_argument(
            "--version",
            action="store_true",
            help="Show json-validator version and exit",
        )
