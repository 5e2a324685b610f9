"""Command-line entry point: generate shell completions from a YAML description."""

from __future__ import annotations

import argparse
import sys
from importlib.metadata import PackageNotFoundError, version as _dist_version
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from .bash import generate_bash_completions
from .fish import generate_fish_completions
from .model import CLI, Argument, Command, ConfigError, load_cli
from .zsh import generate_zsh_completions

_DESCRIPTION = """\
Generates Fish, BASH and ZSH completions for a tool from a yaml description file.

This tool creates completion configuration files for Fish, BASH and ZSH based on a
configuration file, allowing you to create completion files for existing tools.

Usage:
  To generate the completion:
  - cgen config.yaml
  To generate an example configuration:
  - cgen --sample
"""


def _program_version() -> str:
    try:
        return _dist_version("cgen")
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    """The argument parser of the ``cgen`` command."""
    parser = argparse.ArgumentParser(
        prog="cgen",
        usage="cgen [PATH]",
        description=_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("paths", nargs="*", metavar="PATH", help="configuration file")
    parser.add_argument("-v", "--version", action="store_true", help="Prints the version.")
    parser.add_argument(
        "-s", "--sample", action="store_true", help="Prints a sample configuration."
    )
    return parser


def _roff(text: str) -> str:
    """Escape text for use in a roff document."""
    lines = []
    for line in text.replace("\\", "\\e").replace("-", "\\-").splitlines():
        if line.startswith((".", "'")):
            line = "\\&" + line
        lines.append(line)
    return "\n".join(lines)


def _argument_label(arg: Argument) -> str:
    if not arg.named:
        return arg.name
    flags = [flag for flag in (arg.short_flag(), arg.long_flag()) if flag]
    return ", ".join(flags) if flags else arg.name


def _visible_arguments(arguments: Iterable[Argument]) -> List[Argument]:
    visible = [arg for arg in arguments if not arg.hidden]
    if any(arg.sort for arg in visible):
        visible.sort(key=lambda arg: arg.name)
    return visible


def _argument_section(arguments: Iterable[Argument]) -> List[str]:
    out: List[str] = []
    for arg in _visible_arguments(arguments):
        out.append(".TP")
        out.append(f"\\fB{_roff(_argument_label(arg))}\\fR")
        description = arg.long_description or arg.short_description
        if description:
            out.append(_roff(description))
        if arg.example:
            out.append(".IP")
            out.append(_roff(arg.example))
    return out


def _command_section(cli_name: str, command: Command) -> List[str]:
    out = [".TP", f"\\fB{_roff(', '.join(command.names()))}\\fR"]
    if command.usage:
        out.append(_roff(f"{cli_name} {command.usage}"))
        out.append(".br")
    if command.long_description:
        out.append(_roff(command.long_description))
    if command.example:
        out.append(".IP")
        out.append(_roff(command.example))
    options = _argument_section(command.arguments)
    if options:
        out.append(".RS")
        out.extend(options)
        out.append(".RE")
    return out


def generate_man_page(cli: CLI) -> str:
    """Render a section 1 manual page for the described tool as roff text."""
    name = _roff(cli.name)
    lines = [f'.TH "{name.upper()}" "1" "" "{_roff(cli.version or "")}" ""', ".SH NAME"]
    lines.append(f"{name} \\- {_roff(cli.short_description)}" if cli.short_description else name)

    lines.append(".SH SYNOPSIS")
    synopsis = f"\\fB{name}\\fR"
    if cli.arguments:
        synopsis += " [OPTIONS]"
    if cli.commands:
        synopsis += " COMMAND"
    lines.append(synopsis)

    if cli.long_description:
        lines.append(".SH DESCRIPTION")
        lines.append(_roff(cli.long_description))

    options = _argument_section(cli.arguments)
    if options:
        lines.append(".SH OPTIONS")
        lines.extend(options)

    commands = [command for command in cli.commands if not command.hidden]
    if commands:
        lines.append(".SH COMMANDS")
        for command in commands:
            lines.extend(_command_section(name, command))

    return "\n".join(lines) + "\n"


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command and return its exit status."""
    parser = build_parser()
    options = parser.parse_args(argv)

    if options.version:
        sys.stdout.write(f"cgen version {_program_version()}")
        return 0

    if len(options.paths) != 1:
        parser.print_help()
        return 0

    path = Path(options.paths[0]).absolute()

    try:
        path.stat()
    except OSError as exc:
        print(f"Could not open configuration file: {exc}", file=sys.stderr)
        return 1

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Could not read configuration file: {exc}", file=sys.stderr)
        return 1

    try:
        cli = load_cli(text)
    except ConfigError as exc:
        print(f"Could not parse configuration file: {exc}", file=sys.stderr)
        return 1

    root = Path.cwd()
    steps: List[Tuple[str, Callable[[CLI, Path], object]]] = [
        ("BASH completion", generate_bash_completions),
        ("Fish completion", generate_fish_completions),
        ("ZSH completion", generate_zsh_completions),
    ]
    for label, generate in steps:
        try:
            generate(cli, root)
        except OSError as exc:
            print(f"Error generating {label}: {exc}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())