"""Generation of BASH completion scripts."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, TextIO

from .model import CLI, Argument, Command, Completion, CompletionType
from .quoting import quote, quote_command
from .writer import IndentedWriter

_HELPERS = """__bash_seen_word() {
  local word
  for word in "${COMP_WORDS[@]}"; do
    [[ "$word" == "$1" ]] && return 0
  done
  return 1
}

index_of() {
  local val="$1"; shift
  for i in "${!COMP_WORDS[@]}"; do
    if [[ "${COMP_WORDS[$i]}" == "$val" ]]; then
      echo "$i"
      return
    fi
  done
  echo "-1"
}

"""

_REPLY_FROM_VALUES = 'COMPREPLY=( $(compgen -W "${values[*]}" -- "${COMP_WORDS[COMP_CWORD]}") )\n'
_REPLY_FROM_COMPLETIONS = (
    'COMPREPLY=( $(compgen -W "${completions[*]}" -- "${COMP_WORDS[COMP_CWORD]}") )\n'
)
_REPLY_FILES = 'COMPREPLY=( $(compgen -f -- "${COMP_WORDS[COMP_CWORD]}") )\n'
_REPLY_FOLDERS = 'COMPREPLY=( $(compgen -d -- "${COMP_WORDS[COMP_CWORD]}") )\n'


def collect_arguments(arguments: Iterable[Argument]) -> List[str]:
    """The flags of the named arguments, long form before short form."""
    flags: List[str] = []
    for arg in arguments:
        if not arg.named:
            continue
        flags.extend(flag for flag in (arg.long_flag(), arg.short_flag()) if flag)
    return flags


def collect_commands(commands: Iterable[Command]) -> List[str]:
    """The names and aliases of the commands, in order."""
    return [name for command in commands for name in command.names()]


def _write_array(writer: IndentedWriter, name: str, values: Iterable[str]) -> None:
    words = " ".join(quote(value) for value in sorted(values))
    writer.write_line(f"{name}=({words})\n")


def _write_value_completion(writer: IndentedWriter, completion: Completion) -> None:
    kind = completion.type
    if kind is CompletionType.STATIC:
        writer.write_line(f"values=({quote_command(completion.values)})\n")
        writer.write_line(_REPLY_FROM_VALUES)
    elif kind is CompletionType.FILE:
        writer.write_line(_REPLY_FILES)
    elif kind is CompletionType.FOLDER:
        writer.write_line(_REPLY_FOLDERS)
    elif kind is CompletionType.FUNCTION:
        writer.write_line(f"values=$({completion.bash})\n")
        writer.write_line(_REPLY_FROM_VALUES)


def _write_argument_cases(writer: IndentedWriter, arguments: List[Argument]) -> None:
    writer.write_line('case "$prev" in\n')
    for arg in arguments:
        if not arg.named:
            continue
        keys = [flag for flag in (arg.short_flag(), arg.long_flag()) if flag]
        if arg.completion.type is CompletionType.NONE or not keys:
            continue
        writer.write_line(f"{'|'.join(keys)})\n")
        with writer.indent():
            _write_value_completion(writer, arg.completion)
            writer.write_line("return\n")
        writer.write_line(";;\n")
    writer.write_line("esac\n")

    writer.write_line('case "$pos" in\n')
    with writer.indent():
        positionals = (arg for arg in arguments if not arg.named)
        for position, arg in enumerate(positionals, start=1):
            writer.write_line(f"{position})\n")
            with writer.indent():
                _write_value_completion(writer, arg.completion)
                if position == 1:
                    writer.write_line('COMPREPLY=("${COMPREPLY[@]}" "${subcommands[@]}")\n')
                writer.write_line("return\n")
            writer.write_line(";;\n")
    writer.write_line("esac\n")


def _write_command(writer: IndentedWriter, command: Command) -> None:
    for name in command.names():
        writer.write_line(f"if __bash_seen_word {quote(name)}; then\n")
        with writer.indent():
            for sub in command.subcommands:
                _write_command(writer, sub)
            _write_array(writer, "arguments", collect_arguments(command.arguments))
            _write_array(writer, "subcommands", collect_commands(command.subcommands))
            writer.write_line(
                f"pos=$((${{#COMP_WORDS[@]}} - $(index_of {command.name}) - 1))\n"
            )
            _write_argument_cases(writer, command.arguments)
            writer.write_line(
                'completions=("${subcommands[@]}" "${arguments[@]}" "${global_options[@]}")\n'
            )
            writer.write_line(_REPLY_FROM_COMPLETIONS)
            writer.write_line("return\n")
        writer.write_line("fi\n")


def write_bash_completions(cli: CLI, stream: TextIO) -> None:
    """Write a BASH completion script for the tool to a text stream."""
    writer = IndentedWriter(stream, "  ")
    writer.write_line(_HELPERS)

    writer.write_line(f"_complete_command_{cli.name}() {{\n")
    with writer.indent():
        writer.write_line("prev=${COMP_WORDS[COMP_CWORD-1]}\n")
        for command in cli.commands:
            _write_command(writer, command)
    writer.write_line("}\n\n")

    writer.write_line(f"_{cli.name}() {{\n")
    with writer.indent():
        _write_array(writer, "global_options", collect_arguments(cli.arguments))
        _write_array(writer, "commands", collect_commands(cli.commands))
        writer.write_line('for command in "${commands[@]}"; do\n')
        with writer.indent():
            writer.write_line('if __bash_seen_word "$command"; then\n')
            with writer.indent():
                writer.write_line(f'_complete_command_{cli.name} "$command"\n')
                writer.write_line("return $?\n")
            writer.write_line("fi\n")
        writer.write_line("done\n")
        writer.write_line('completions=("${commands[@]}" "${global_options[@]}")\n')
        writer.write_line(_REPLY_FROM_COMPLETIONS)
    writer.write_line(f"}}\n\ncomplete -o bashdefault -F _{cli.name} {cli.name}\n")


def generate_bash_completions(cli: CLI, root: "str | Path" = ".") -> Path:
    """Write share/bash/completions/<name>.bash under root and return its path."""
    directory = Path(root) / "share" / "bash" / "completions"
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{cli.name}.bash"
    with path.open("w", encoding="utf-8") as stream:
        write_bash_completions(cli, stream)
    return path