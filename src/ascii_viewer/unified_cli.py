"""``ascii-viewer <command>``: one console script for the converter and the server."""

import importlib
import sys
from typing import List, NamedTuple, Optional, Sequence

PROG = "ascii-viewer"


class Command(NamedTuple):
    module: str
    summary: str


COMMANDS = {
    "image": Command(
        "ascii_viewer.image_to_ascii", "convert an image file to ASCII text or HTML"
    ),
    "serve": Command("ascii_viewer.web", "run the upload form and converter over HTTP"),
}


def usage(file=sys.stdout) -> None:
    print(f"Usage: {PROG} <command> [args...]", file=file)
    print("Commands:", file=file)
    width = max(len(name) for name in COMMANDS)
    for name, cmd in sorted(COMMANDS.items()):
        print(f"  {name.ljust(width)}  {cmd.summary}", file=file)
    print(f"Run '{PROG} <command> --help' for the command's options.", file=file)


def run_command(entry, argv: List[str]) -> int:
    """Call a module ``main(argv)``, turning argparse exits into return codes."""
    try:
        return entry(argv)
    except SystemExit as se:
        code = se.code
        return code if isinstance(code, int) else 0
    except Exception as e:
        print(f"Error running command: {e}", file=sys.stderr)
        return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    if not argv or argv[0] in ("-h", "--help"):
        usage()
        return 0

    name, *args = argv
    cmd = COMMANDS.get(name)
    if cmd is None:
        print(f"Unknown command: {name}", file=sys.stderr)
        usage(file=sys.stderr)
        return 2

    try:
        module = importlib.import_module(cmd.module)
    except ImportError as e:
        print(f"Failed to import command '{name}' ({cmd.module}): {e}", file=sys.stderr)
        return 3

    entry = getattr(module, "main", None)
    if not callable(entry):
        print(f"Command module '{cmd.module}' has no callable 'main'", file=sys.stderr)
        return 4

    return run_command(entry, args)


if __name__ == "__main__":
    raise SystemExit(main())
