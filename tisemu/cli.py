"""Command-line front end: argument parsing, banner and the run loop."""

from __future__ import annotations

import re
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path

from .emulator import Emulator
from .errors import ProgramError

VERSION = "1.0"
HELP_FILE = "help.txt"
DOC_FILE = "doc/doc.txt"

_INT_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")

_ART = (
    "  ,--------.,--. ,---.                                 \n"
    "  '--.  .--'|  |'   .-'   ,---. ,--,--,--.,--.,--.     \n"
    "     |  |   |  |`.  `-.  | .-. :|        ||  ||  |     \n"
    "     |  |   |  |.-'    | \\   --.|  |  |  |'  ''  '    \n"
    "     `--'   `--'`-----'   `----'`--`--`--' `----'      \n"
    "                                                       \n"
    "-------------------------------------------------------\n"
)


class UsageError(Exception):
    """Raised for command-line arguments that cannot be accepted."""


@dataclass
class Options:
    """Settings gathered from the command line."""

    input_file: str | None = None
    inpt: int = 0
    debug: bool = False
    color: bool = False
    banners: list[bool] = field(default_factory=list)
    action: str | None = None


def _atoi(text):
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def banner(color):
    """Return the start-up banner, with ANSI colours when ``color`` is true."""
    cyan = "\033[36m" if color else ""
    green = "\033[32m" if color else ""
    yellow = "\033[33m" if color else ""
    reset = "\033[0m" if color else ""
    bold = "\033[1m" if color else ""
    return (
        f"{cyan}{bold}{_ART}{reset}"
        f"{green}{bold}TISemu - A TIS-100 emulator\n{reset}"
        f"{yellow} - Version : {VERSION}\n"
        f"{reset}\n"
    )


def parse_args(argv):
    """Parse ``argv`` (without the program name) into Options.

    Parsing stops at the first of --help, --doc or --version, which is
    recorded in ``action``. Each --banner records the colour setting in
    force at that point.
    """
    options = Options()
    args = iter(argv)
    for arg in args:
        if arg in ("-h", "--help"):
            options.action = "help"
            return options
        if arg == "--doc":
            options.action = "doc"
            return options
        if arg in ("-v", "--version"):
            options.action = "version"
            return options
        if arg in ("-i", "--input"):
            value = next(args, None)
            if value is None:
                raise UsageError(f"unknown option '{arg}'")
            options.inpt = _atoi(value)
        elif arg == "--banner":
            options.banners.append(options.color)
        elif arg in ("-d", "--debug"):
            options.debug = True
        elif arg in ("-c", "--color"):
            options.color = True
        elif not arg.startswith("-"):
            options.input_file = arg
        else:
            raise UsageError(f"unknown option '{arg}'")

    if options.input_file is None:
        raise UsageError("no input file provided")
    return options


def _print_file(path):
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        sys.stderr.write(f"error: {path} not found\n")
        return 1
    sys.stdout.write(text)
    return 0


def main(argv=None):
    """Run the emulator from the command line and return the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        options = parse_args(argv)
    except UsageError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1

    for colored in options.banners:
        sys.stdout.write(banner(colored))

    if options.action == "help":
        return _print_file(HELP_FILE)
    if options.action == "doc":
        return _print_file(DOC_FILE)
    if options.action == "version":
        sys.stdout.write(f"tisemu version {VERSION}\n")
        return 0

    try:
        with open(options.input_file, encoding="utf-8", errors="replace") as handle:
            source = handle.read()
    except OSError as exc:
        sys.stderr.write(f"fopen: {exc.strerror}\n")
        return 1

    emu = Emulator(
        filename=options.input_file,
        inpt=options.inpt,
        debug=options.debug,
        color=options.color,
    )
    emu.load(source)

    start = time.process_time()
    try:
        emu.run()
    except ProgramError as exc:
        sys.stderr.write(exc.format(options.color) + "\n")
    elapsed = time.process_time() - start
    sys.stdout.write(f"work time {elapsed:.6f}s\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())