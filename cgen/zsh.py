"""Generation of ZSH completion scripts."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, TextIO

from .bash import collect_commands
from .model import CLI, Argument, Command, CompletionType
from .quoting import quote_command
from .writer import IndentedWriter


def format_zsh_positional(count: int, arg: Argument) -> str:
    """The ``_arguments`` spec of a positional argument, or "" if it has no completion."""
    kind = arg.completion.type
    if kind is CompletionType.NONE:
        return ""
    if kind in (CompletionType.FILE, CompletionType.FOLDER):
        action = "_files"
    elif kind is CompletionType.STATIC:
        action = f"({quote_command(arg.completion.values)})"
    else:
        action = f"_arg_{arg.name}"
    return f'"{count}:{arg.name}:{action}"'


def generate_zsh_argument(arg: Argument) -> str:
    """The ``_arguments`` spec of a named argument."""
    kind = arg.completion.type
    if kind in (CompletionType.FILE, CompletionType.FOLDER):
        action = f":{arg.name}:_files"
    elif kind is CompletionType.STATIC:
        action = f":{arg.name}:({quote_command(arg.completion.values)})"
    elif kind is CompletionType.FUNCTION:
        action = f":{arg.name}:_arg_{arg.name}"
    else:
        action = ""
    dash = "-" if arg.single_dash_long else "--"
    description = arg.short_description.replace("'", "'\"'\"'")
    if arg.name and arg.short_name:
        return (
            f"'(-{arg.short_name} {dash}{arg.name})'"
            f"{{-{arg.short_name},{dash}{arg.name}}}'[{description}]{action}'"
        )
    if arg.name:
        return f"'{dash}{arg.name}[{description}]{action}'"
    return f"'-{arg.short_name}[{description}]{action}'"


def _write_specs(writer: IndentedWriter, specs: Sequence[str]) -> None:
    with writer.indent():
        last = len(specs) - 1
        for index, spec in enumerate(specs):
            writer.write_line(spec)
            if index < last:
                writer.write_line(" \\")
            writer.write_line("\n")


def _write_function_completions(writer: IndentedWriter, command: Command) -> None:
    for arg in command.arguments:
        if arg.completion.type is CompletionType.FUNCTION:
            writer.write_line(f"_arg_{arg.name}() {{\n")
            with writer.indent():
                writer.write_line(f"compadd -- $({arg.completion.zsh})\n")
            writer.write_line("}\n\n")
    for sub in command.subcommands:
        _write_function_completions(writer, sub)


def _write_command_tree(writer: IndentedWriter, command: Command) -> None:
    if not command.arguments and not command.subcommands:
        return

    for name in command.names():
        writer.write_line(f"{name})\n")
        with writer.indent():
            specs: List[str] = []
            subs = collect_commands(command.subcommands)
            if subs:
                specs.append(f"'1:command:({' '.join(subs)})'")
            else:
                positionals = (arg for arg in command.arguments if not arg.named)
                specs.extend(
                    format_zsh_positional(count, arg)
                    for count, arg in enumerate(positionals, start=1)
                )
            specs.extend(generate_zsh_argument(arg) for arg in command.arguments if arg.named)
            if command.subcommands:
                specs.append(f"'*::args:->args_{command.name}'")
            if specs:
                writer.write_line("_arguments -C \\\n")
                _write_specs(writer, specs)
            if command.subcommands:
                writer.write_line("case $state in\n")
                with writer.indent():
                    writer.write_line(f"args_{command.name})\n")
                    with writer.indent():
                        writer.write_line("case ${words[1]} in\n")
                        with writer.indent():
                            for sub in command.subcommands:
                                _write_command_tree(writer, sub)
                        writer.write_line("esac\n")
                    writer.write_line(";;\n")
                writer.write_line("esac\n")
        writer.write_line(";;\n")


def write_zsh_completions(cli: CLI, stream: TextIO) -> None:
    """Write a ZSH completion script for the tool to a text stream."""
    writer = IndentedWriter(stream, "  ")
    writer.write_line(f"#compdef {cli.name}\n")
    writer.write_line(f"compdef _{cli.name} {cli.name}\n\n")

    for command in cli.commands:
        _write_function_completions(writer, command)

    for arg in cli.arguments:
        if arg.completion.type is CompletionType.FUNCTION:
            writer.write_line(f"_arg_{arg.name}() {{")
            with writer.indent():
                writer.write_line(f"compadd -- $({arg.completion.zsh})")
            writer.write_line("}\n")

    writer.write_line(f"_{cli.name}() {{\n")
    with writer.indent():
        commands = collect_commands(cli.commands)
        specs: List[str] = []
        count = 1
        if commands:
            specs.append(f'"{count}:command:({" ".join(commands)})"')
            count += 1
        for arg in cli.arguments:
            if arg.named:
                continue
            spec = format_zsh_positional(count, arg)
            if spec:
                specs.append(spec)
                count += 1
        specs.extend(generate_zsh_argument(arg) for arg in cli.arguments if arg.named)
        if commands:
            specs.append("'*::args:->args'")

        writer.write_line("_arguments -C \\\n")
        _write_specs(writer, specs)

        writer.write_line("case $state in\n")
        with writer.indent():
            writer.write_line("args)\n")
            with writer.indent():
                writer.write_line("case ${words[1]} in\n")
                for command in cli.commands:
                    _write_command_tree(writer, command)
                writer.write_line("esac\n")
            writer.write_line(";;\n")
        writer.write_line("esac\n")
    writer.write_line("}\n")


def generate_zsh_completions(cli: CLI, root: "str | Path" = ".") -> Path:
    """Write share/zsh/completions/_<name> under root and return its path."""
    directory = Path(root) / "share" / "zsh" / "completions"
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"_{cli.name}"
    with path.open("w", encoding="utf-8") as stream:
        write_zsh_completions(cli, stream)
    return path