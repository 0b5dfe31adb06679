"""Main CLI entry point for json-validator."""

import sys
from collections.abc import Sequence

import uvloop

from json_validator.cli import CLIRunner
from json_validator.logger import flush_all_handlers, get_logger

logger = get_logger(__name__)


async def async_main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI asynchronously.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Process exit status

    """
    logger.debug("CLI started")
    exit_code = await CLIRunner().run(argv)
    logger.debug("CLI finished with status %d", exit_code)
    return exit_code


def main() -> None:
    """Run the CLI application on the uvloop event loop and exit."""
    try:
        exit_code = uvloop.run(async_main())
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        exit_code = 1
    flush_all_handlers()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
