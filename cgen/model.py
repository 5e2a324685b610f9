"""Data model of a command-line tool description, loaded from YAML."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import yaml


class ConfigError(ValueError):
    """Raised when a tool description cannot be parsed or is invalid."""


class CompletionType(str, Enum):
    """How the value of an argument is completed."""

    FUNCTION = "function"
    STATIC = "static"
    NONE = "none"
    FILE = "file"
    FOLDER = "folder"


_Converter = Callable[[Any, str], Any]


def _as_mapping(data: Any, where: str) -> Dict[Any, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{where}: expected a mapping, got {type(data).__name__}")
    return data


def _to_str(value: Any, where: str) -> str:
    if isinstance(value, bool) or isinstance(value, (dict, list)):
        raise ConfigError(f"{where}: expected a string, got {type(value).__name__}")
    return str(value)


def _to_bool(value: Any, where: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{where}: expected a boolean, got {type(value).__name__}")
    return value


def _to_list(value: Any, where: str) -> List[Any]:
    if not isinstance(value, list):
        raise ConfigError(f"{where}: expected a list, got {type(value).__name__}")
    return value


def _to_str_list(value: Any, where: str) -> List[str]:
    return [_to_str(item, f"{where}[{i}]") for i, item in enumerate(_to_list(value, where))]


def _list_of(decode: Callable[[Any, str], Any]) -> _Converter:
    def convert(value: Any, where: str) -> List[Any]:
        return [decode(item, f"{where}[{i}]") for i, item in enumerate(_to_list(value, where))]

    return convert


def _to_completion_type(value: Any, where: str) -> CompletionType:
    text = _to_str(value, where)
    try:
        return CompletionType(text)
    except ValueError:
        allowed = ", ".join(member.value for member in CompletionType)
        raise ConfigError(f"{where}: {text!r} is not one of {allowed}") from None


def _decode_fields(
    data: Any, spec: Dict[str, Tuple[str, _Converter]], where: str
) -> Dict[str, Any]:
    mapping = _as_mapping(data, where)
    unknown = sorted(str(key) for key in mapping if key not in spec)
    if unknown:
        raise ConfigError(f'{where}: unknown field "{unknown[0]}"')
    values: Dict[str, Any] = {}
    for key, value in mapping.items():
        if value is None:
            continue
        attr, convert = spec[key]
        values[attr] = convert(value, f"{where}.{key}")
    return values


@dataclass
class Completion:
    """What to suggest as the value of an argument."""

    type: CompletionType = CompletionType.NONE
    fish: str = ""
    bash: str = ""
    zsh: str = ""
    values: List[str] = field(default_factory=list)

    @classmethod
    def _decode(cls, data: Any, where: str) -> "Completion":
        return cls(**_decode_fields(data, _COMPLETION_FIELDS, where))

    @classmethod
    def from_dict(cls, data: Any) -> "Completion":
        return cls._decode(data, "completion")


_COMPLETION_FIELDS: Dict[str, Tuple[str, _Converter]] = {
    "type": ("type", _to_completion_type),
    "fish": ("fish", _to_str),
    "bash": ("bash", _to_str),
    "zsh": ("zsh", _to_str),
    "values": ("values", _to_str_list),
}


@dataclass
class Argument:
    """A named flag or a positional argument."""

    named: bool = False
    single_dash_long: bool = False
    equal_value_separator: bool = False
    space_value_separator: bool = True
    name: str = ""
    short_name: str = ""
    short_description: str = ""
    chainable: bool = True
    exclusive_group: str = ""
    completion: Completion = field(default_factory=Completion)
    sort: bool = False
    hidden: bool = False
    long_description: str = ""
    example: str = ""

    @classmethod
    def _decode(cls, data: Any, where: str) -> "Argument":
        return cls(**_decode_fields(data, _ARGUMENT_FIELDS, where))

    @classmethod
    def from_dict(cls, data: Any) -> "Argument":
        return cls._decode(data, "argument")

    def long_flag(self) -> Optional[str]:
        """The long form of the flag, or None when the argument has no name."""
        if not self.name:
            return None
        return ("-" if self.single_dash_long else "--") + self.name

    def short_flag(self) -> Optional[str]:
        """The short form of the flag, or None when there is none."""
        if not self.short_name:
            return None
        return "-" + self.short_name


_ARGUMENT_FIELDS: Dict[str, Tuple[str, _Converter]] = {
    "named": ("named", _to_bool),
    "single-dash-long": ("single_dash_long", _to_bool),
    "equal-value-separator": ("equal_value_separator", _to_bool),
    "space-value-separator": ("space_value_separator", _to_bool),
    "name": ("name", _to_str),
    "short-name": ("short_name", _to_str),
    "short-description": ("short_description", _to_str),
    "chainable": ("chainable", _to_bool),
    "exclusive-group": ("exclusive_group", _to_str),
    "completion": ("completion", Completion._decode),
    "sort": ("sort", _to_bool),
    "hidden": ("hidden", _to_bool),
    "long-description": ("long_description", _to_str),
    "example": ("example", _to_str),
}


@dataclass
class Command:
    """A command of the tool, possibly with nested subcommands."""

    name: str = ""
    aliases: List[str] = field(default_factory=list)
    arguments: List[Argument] = field(default_factory=list)
    deprecated: str = ""
    subcommands: List["Command"] = field(default_factory=list)
    hidden: bool = False
    usage: str = ""
    long_description: str = ""
    example: str = ""

    @classmethod
    def _decode(cls, data: Any, where: str) -> "Command":
        return cls(**_decode_fields(data, _COMMAND_FIELDS, where))

    @classmethod
    def from_dict(cls, data: Any) -> "Command":
        return cls._decode(data, "command")

    def names(self) -> List[str]:
        """The command's name followed by its aliases."""
        return [self.name, *self.aliases]


_COMMAND_FIELDS: Dict[str, Tuple[str, _Converter]] = {
    "name": ("name", _to_str),
    "aliases": ("aliases", _to_str_list),
    "arguments": ("arguments", _list_of(Argument._decode)),
    "deprecated": ("deprecated", _to_str),
    "commands": ("subcommands", _list_of(lambda value, where: Command._decode(value, where))),
    "hidden": ("hidden", _to_bool),
    "usage": ("usage", _to_str),
    "long-description": ("long_description", _to_str),
    "example": ("example", _to_str),
}


@dataclass
class CLI:
    """Description of a whole command-line tool."""

    name: str
    short_description: str = ""
    long_description: str = ""
    version: str = ""
    arguments: List[Argument] = field(default_factory=list)
    commands: List[Command] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "CLI":
        values = _decode_fields(data, _CLI_FIELDS, "cli")
        if not values.get("name"):
            raise ConfigError("cli: field 'name' is required")
        return cls(**values)


_CLI_FIELDS: Dict[str, Tuple[str, _Converter]] = {
    "name": ("name", _to_str),
    "short-description": ("short_description", _to_str),
    "long-description": ("long_description", _to_str),
    "version": ("version", _to_str),
    "arguments": ("arguments", _list_of(Argument._decode)),
    "commands": ("commands", _list_of(Command._decode)),
}


def load_cli(text: str) -> CLI:
    """Parse a YAML tool description."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML: {exc}") from exc
    return CLI.from_dict(data)


def load_cli_file(path: "str | Path") -> CLI:
    """Read and parse a YAML tool description from a file."""
    return load_cli(Path(path).read_text(encoding="utf-8"))