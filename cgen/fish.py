"""Generation of Fish completion scripts."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, TextIO

from .model import CLI, Argument, Command, CompletionType
from .quoting import quote


def format_argument_fish(cli_name: str, arg: Argument, condition: str = "") -> str:
    """One ``complete`` line for an argument, optionally guarded by a condition."""
    parts: List[str] = [f"complete -c {cli_name}"]
    if condition:
        parts.append(f" -n '{condition}'")

    if arg.named:
        if not arg.equal_value_separator or arg.space_value_separator:
            parts.append(" -r")
        if arg.single_dash_long:
            option = arg.name or arg.short_name
            if option:
                parts.append(f" -o {option}")
        else:
            if arg.short_name:
                parts.append(f" -s {arg.short_name}")
            if arg.name:
                parts.append(f" -l {arg.name}")
    else:
        parts.append(" -x")

    description = arg.short_description or arg.long_description
    if not description and not arg.named:
        description = arg.name
    if description:
        parts.append(f" -d {quote(description)}")

    completion = arg.completion
    if completion.type in (CompletionType.FILE, CompletionType.FOLDER):
        parts.append(" -F")
    elif completion.type is CompletionType.STATIC:
        parts.append(f" -fa {quote(' '.join(completion.values))}")
    elif completion.type is CompletionType.FUNCTION:
        parts.append(f" -fa {quote('(' + completion.fish + ')')}")

    parts.append("\n")
    return "".join(parts)


def _subcommand_condition(path: Sequence[str], parent: Command) -> str:
    seen = [f"__fish_seen_subcommand_from {step}" for step in path]
    not_seen = [
        f"__fish_seen_subcommand_from {name}"
        for sibling in parent.subcommands
        for name in sibling.names()
    ]
    condition = "; and ".join(seen)
    if not_seen:
        condition += "; and not " + "; and not ".join(not_seen)
    return condition


def _format_subcommand_fish(
    cli_name: str, path: Sequence[str], parent: Command, subcommand: Command
) -> str:
    lines: List[str] = []
    for name in subcommand.names():
        line = f"complete -c {cli_name}"
        condition = _subcommand_condition(path, parent)
        if condition:
            line += f" -n '{condition}'"
        line += f" -fa {name}"
        if subcommand.long_description:
            line += f" -d {quote(subcommand.long_description)}"
        lines.append(line + "\n")
        for nested in subcommand.subcommands:
            lines.append(_format_subcommand_fish(cli_name, [*path, name], subcommand, nested))
    return "".join(lines)


def format_command_fish(cli_name: str, command: Command) -> str:
    """The ``complete`` lines for a command, its aliases and its subcommands."""
    lines: List[str] = []
    for name in command.names():
        line = f"complete -c {cli_name} -n '__fish_use_subcommand' -f -a {name}"
        if command.long_description:
            line += f" -d {quote(command.long_description)}"
        lines.append(line + "\n")
        for sub in command.subcommands:
            lines.append(_format_subcommand_fish(cli_name, [name], command, sub))
    return "".join(lines)


def write_fish_completions(cli: CLI, stream: TextIO) -> None:
    """Write a Fish completion script for the tool to a text stream."""
    for arg in cli.arguments:
        stream.write(format_argument_fish(cli.name, arg, ""))
    for command in cli.commands:
        stream.write(format_command_fish(cli.name, command))
        condition = f"__fish_seen_subcommand_from {command.name}"
        for arg in command.arguments:
            stream.write(format_argument_fish(cli.name, arg, condition))


def generate_fish_completions(cli: CLI, root: "str | Path" = ".") -> Path:
    """Write share/fish/completions/<name>.fish under root and return its path."""
    directory = Path(root) / "share" / "fish" / "completions"
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{cli.name}.fish"
    with path.open("w", encoding="utf-8") as stream:
        write_fish_completions(cli, stream)
    return path