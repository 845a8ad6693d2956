"""Command parser for CLI arguments."""

import re
from typing import Optional

from common.exceptions import ValidationError
from cli.models import (
    CommandRequest,
    GetCommand,
    GlobalOptions,
    HelpCommand,
    Invocation,
    StashCommand,
)
from stash.hasher import is_valid_blob_id


class ParseError(ValidationError):
    """Raised when command parsing fails."""

    pass


NAMESPACE_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,62}$")

_VALUE_OPTIONS = {
    "--config": "config_path",
    "-n": "namespace",
    "--namespace": "namespace",
    "--chunk-size": "chunk_size",
    "-o": "output_path",
    "--out": "output_path",
}


def parse_args(args: list[str]) -> Invocation:
    """Parse command line arguments into an Invocation.

    Args:
        args: Arguments after the program name

    Returns:
        Invocation holding the command and the global options

    Raises:
        ParseError: If the arguments are invalid
    """
    values: dict[str, str] = {}
    positionals: list[str] = []
    debug = False
    wants_help = False
    options_done = False

    i = 0
    while i < len(args):
        arg = args[i]
        i += 1

        if options_done or arg == "-" or not arg.startswith("-"):
            positionals.append(arg)
            continue

        if arg == "--":
            options_done = True
        elif arg == "--debug":
            debug = True
        elif arg in ("-h", "--help"):
            wants_help = True
        else:
            name, inline_value = _split_inline_value(arg)
            if name not in _VALUE_OPTIONS:
                raise ParseError(f"Unknown option: {name}")
            if inline_value is None:
                if i >= len(args):
                    raise ParseError(f"{name} requires a value")
                inline_value = args[i]
                i += 1
            values[_VALUE_OPTIONS[name]] = inline_value

    options = GlobalOptions(
        config_path=values.get("config_path"),
        namespace=_parse_namespace(values.get("namespace")),
        chunk_size=_parse_chunk_size(values.get("chunk_size")),
        debug=debug,
    )

    if wants_help:
        return Invocation(command=HelpCommand(), options=options)

    return Invocation(command=_parse_command(positionals, values.get("output_path")), options=options)


def _parse_command(positionals: list[str], output_path: Optional[str]) -> CommandRequest:
    if positionals and positionals[0] == "get":
        return _parse_get(positionals[1:], output_path)

    if output_path is not None:
        raise ParseError("-o/--out is only valid with 'get'")
    return _parse_stash(positionals)


def _parse_stash(args: list[str]) -> StashCommand:
    """Parse 'stash [file]' command."""
    if len(args) > 1:
        raise ParseError("either one or no arguments are allowed")

    if not args or args[0] == "-":
        return StashCommand(path=None)
    return StashCommand(path=args[0])


def _parse_get(args: list[str], output_path: Optional[str]) -> GetCommand:
    """Parse 'get <id> [-o file]' command."""
    if len(args) != 1:
        raise ParseError(f"get expects exactly one id, got {len(args)}")

    blob_id = args[0]
    if not is_valid_blob_id(blob_id):
        raise ParseError(f"Invalid blob id: {blob_id!r}")

    if output_path is not None and not output_path.strip():
        raise ParseError("-o/--out requires a file name")

    return GetCommand(blob_id=blob_id, output_path=output_path)


def _split_inline_value(arg: str) -> tuple[str, Optional[str]]:
    """Split '--name=value' into its parts; short options carry no inline value."""
    if arg.startswith("--") and "=" in arg:
        name, value = arg.split("=", 1)
        return name, value
    return arg, None


def _parse_namespace(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if not NAMESPACE_PATTERN.match(value):
        raise ParseError(f"Invalid namespace: {value!r}")
    return value


def _parse_chunk_size(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        raise ParseError(f"chunk size must be an integer, got {value!r}")
