"""CLI entry point."""

import sys
from pathlib import Path
from typing import Optional

from common.exceptions import StashError
from common.logging_config import get_logger, setup_logging
from cli.commands import create_record_store, handle_get, handle_stash
from cli.config import Config
from cli.constants import DEFAULT_CONFIG_PATH, HELP_TEXT, USAGE
from cli.models import GetCommand, HelpCommand
from cli.parser import ParseError, parse_args

LOGGED_COMPONENTS = ('cli', 'stash', 'recordstore')


def main(argv: Optional[list[str]] = None) -> int:
    """
    Run one CLI invocation.

    Args:
        argv: Arguments after the program name (defaults to sys.argv[1:])

    Returns:
        Process exit code: 0 on success, 1 on any error
    """
    if argv is None:
        argv = sys.argv[1:]

    try:
        invocation = parse_args(argv)
    except ParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    log_level = 'DEBUG' if invocation.options.debug else None
    for component in LOGGED_COMPONENTS:
        setup_logging(component, log_level=log_level)
    logger = get_logger('cli')

    if invocation.options.debug:
        logger.info("Debug logging enabled")

    if isinstance(invocation.command, HelpCommand):
        print(HELP_TEXT)
        return 0

    config_path = Path(invocation.options.config_path).expanduser() if invocation.options.config_path else DEFAULT_CONFIG_PATH
    stdout = sys.stdout.buffer

    try:
        config = Config(config_path)
        settings = config.to_settings(
            namespace=invocation.options.namespace,
            chunk_size=invocation.options.chunk_size,
        )
        with create_record_store(settings) as store:
            if isinstance(invocation.command, GetCommand):
                handle_get(invocation.command, settings, store, stdout=stdout)
            else:
                blob_id = handle_stash(invocation.command, settings, store, stdin=sys.stdin.buffer)
                stdout.write(f"{blob_id}\n".encode("ascii"))
                stdout.flush()
    except (StashError, OSError) as e:
        logger.debug(f"Command failed: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
