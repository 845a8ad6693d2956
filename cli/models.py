"""Command request data types for CLI."""

from dataclasses import dataclass, field
from typing import Literal, Optional


@dataclass(frozen=True)
class StashCommand:
    """Stash a blob read from a file, or stdin when path is None."""

    path: Optional[str] = None
    command: Literal["stash"] = "stash"


@dataclass(frozen=True)
class GetCommand:
    """Retrieve a blob by id into a file, or stdout when output_path is None."""

    blob_id: str
    output_path: Optional[str] = None
    command: Literal["get"] = "get"


@dataclass(frozen=True)
class HelpCommand:
    """Show usage."""

    command: Literal["help"] = "help"


CommandRequest = StashCommand | GetCommand | HelpCommand


@dataclass(frozen=True)
class GlobalOptions:
    """Options accepted anywhere on the command line."""

    config_path: Optional[str] = None
    namespace: Optional[str] = None
    chunk_size: Optional[int] = None
    debug: bool = False


@dataclass(frozen=True)
class Invocation:
    """A parsed command line."""

    command: CommandRequest
    options: GlobalOptions = field(default_factory=GlobalOptions)
