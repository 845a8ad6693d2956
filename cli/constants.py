"""CLI constants and help text."""

from pathlib import Path

DEFAULT_CONFIG_PATH = Path.home() / '.stash' / 'config.json'

USAGE = "usage: stash [file] [options] | stash get <id> [-o file] [options]"

HELP_TEXT = """Stash blobs in a size-limited record store, addressed by content.

Commands:
  stash [file]                  Stash a file (or stdin when no file or '-' is given) and print its id
  stash get <id> [-o file]      Write a stashed blob to a file (or stdout)

Options:
  -o, --out FILE                Output file for 'get'
  -n, --namespace NAME          Record namespace (default from config)
  --chunk-size BYTES            Partition size in bytes (default from config)
  --config PATH                 Config file (default ~/.stash/config.json)
  --debug                       Enable debug logging on stderr
  -h, --help                    Show this help

Examples:
  cat doge.svg | stash -
  stash doge.svg
  stash get bcdfghjklmnpqr -o doge.svg

A failed stash can leave partitions behind in the record store; they are
not cleaned up automatically."""
