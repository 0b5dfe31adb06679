"""CLI runner for json-validator.

Turns parsed arguments into settings, runs the validation pipeline and
maps the outcome to an exit status.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from pathlib import Path

from .. import __version__
from ..config import Settings, SettingsManager
from ..constants import EXIT_FAILURE, EXIT_SUCCESS
from ..core.pipeline import ValidationPipeline
from ..core.results import Report
from ..exceptions import JsonValidatorError
from ..logger import configure_logging, get_logger
from ..outputs import log_report, render_json, report_outputs, write_outputs
from .parser import CLIParser

logger = get_logger(__name__)


class CLIRunner:
    """CLI command runner and orchestrator."""

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        cwd: Path | None = None,
    ) -> None:
        """Initialize CLI runner.

        Args:
            environ: Environment mapping (defaults to os.environ)
            cwd: Working directory for relative paths (defaults to cwd)

        """
        self.environ = os.environ if environ is None else environ
        self.cwd = cwd or Path.cwd()

    async def run(self, argv: Sequence[str] | None = None) -> int:
        """Run the CLI application.

        Args:
            argv: Command-line arguments (defaults to sys.argv[1:])

        Returns:
            Process exit status

        """
        try:
            args = CLIParser().parse_args(argv)

            if args.version:
                print(__version__)
                return EXIT_SUCCESS

            settings = SettingsManager(self.environ).load(args)
            self._setup_logging(settings)

            pipeline = ValidationPipeline(settings, cwd=self.cwd)
            report = await pipeline.run()
            return self._finish(settings, report)

        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return EXIT_FAILURE
        except JsonValidatorError as e:
            logger.error("Action failed: %s", e)
            return EXIT_FAILURE
        except Exception as e:
            logger.error("Unexpected error: %s", e)
            logger.debug("Unexpected error details", exc_info=True)
            return EXIT_FAILURE

    @staticmethod
    def _setup_logging(settings: Settings) -> None:
        """Apply log settings; JSON output keeps stdout clean of INFO lines.

        Args:
            settings: Effective run settings

        """
        console_level = settings.log_level
        if settings.output_format == "json" and console_level != "DEBUG":
            console_level = "ERROR"
        configure_logging(console_level, settings.log_file)

    def _finish(self, settings: Settings, report: Report) -> int:
        """Publish the report and decide the exit status.

        Args:
            settings: Effective run settings
            report: Aggregated results

        Returns:
            Process exit status

        """
        write_outputs(report_outputs(report), self.environ)

        if settings.output_format == "json":
            print(render_json(report))
        else:
            log_report(report, self.cwd)

        if report.has_invalid and settings.fail_on_invalid:
            if settings.output_format == "text":
                logger.error(
                    "Found %d invalid JSON file(s)", report.invalid_count
                )
            return EXIT_FAILURE
        return EXIT_SUCCESS
