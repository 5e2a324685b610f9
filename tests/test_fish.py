import io

from cgen.fish import (
    format_argument_fish,
    format_command_fish,
    generate_fish_completions,
    write_fish_completions,
)
from cgen.model import CLI, Argument, Command, Completion, CompletionType
from cgen.quoting import quote


def _render(cli):
    stream = io.StringIO()
    write_fish_completions(cli, stream)
    return stream.getvalue()


def test_named_argument_pinned():
    arg = Argument(named=True, name="verbose", short_name="v", short_description="Be loud")
    assert (
        format_argument_fish("tool", arg, "")
        == "complete -c tool -r -s v -l verbose -d 'Be loud'\n"
    )


def test_single_dash_long_uses_old_style_option():
    arg = Argument(named=True, single_dash_long=True, name="verbose", short_name="v")
    line = format_argument_fish("tool", arg, "")
    assert f" -o {arg.name}" in line
    assert " -l " not in line
    assert " -s " not in line


def test_single_dash_long_falls_back_to_short_name():
    arg = Argument(named=True, single_dash_long=True, short_name="q")
    assert f" -o {arg.short_name}" in format_argument_fish("tool", arg, "")


def test_equal_only_separator_is_not_required():
    arg = Argument(
        named=True, name="level", equal_value_separator=True, space_value_separator=False
    )
    assert " -r" not in format_argument_fish("tool", arg, "")


def test_positional_uses_name_as_description():
    arg = Argument(name="container")
    line = format_argument_fish("tool", arg, "")
    assert " -x" in line
    assert line.endswith(f" -d {arg.name}\n")


def test_long_description_used_when_short_missing():
    arg = Argument(named=True, name="x", long_description="it's long")
    assert f" -d {quote(arg.long_description)}" in format_argument_fish("tool", arg, "")


def test_condition_is_included():
    condition = "__fish_seen_subcommand_from run"
    line = format_argument_fish("tool", Argument(named=True, name="x"), condition)
    assert f" -n '{condition}'" in line


def test_completion_kinds():
    static = Argument(
        named=True,
        name="fmt",
        completion=Completion(type=CompletionType.STATIC, values=["json", "yaml"]),
    )
    assert f" -fa {quote('json yaml')}" in format_argument_fish("tool", static, "")

    func = Argument(
        named=True, name="host", completion=Completion(type=CompletionType.FUNCTION, fish="hosts")
    )
    assert f" -fa {quote('(hosts)')}" in format_argument_fish("tool", func, "")

    for kind in (CompletionType.FILE, CompletionType.FOLDER):
        arg = Argument(named=True, name="p", completion=Completion(type=kind))
        assert format_argument_fish("tool", arg, "").endswith(" -F\n")


def test_command_with_aliases_emits_one_line_each():
    command = Command(name="remove", aliases=["rm", "del"], long_description="Remove it")
    lines = format_command_fish("tool", command).splitlines()
    assert len(lines) == 3
    for line, name in zip(lines, command.names()):
        assert line.startswith("complete -c tool -n '__fish_use_subcommand' -f -a " + name)
        assert line.endswith(quote(command.long_description))


def test_subcommand_conditions():
    command = Command(
        name="remote",
        subcommands=[Command(name="add", aliases=["new"]), Command(name="show")],
    )
    lines = format_command_fish("tool", command).splitlines()
    assert len(lines) == 1 + 3
    for line in lines[1:]:
        assert "__fish_seen_subcommand_from remote; and not " in line
        assert "not __fish_seen_subcommand_from new" in line
        assert "not __fish_seen_subcommand_from show" in line
    assert lines[-1].endswith(" -fa show")


def test_nested_subcommand_path():
    command = Command(
        name="a", subcommands=[Command(name="b", subcommands=[Command(name="c")])]
    )
    lines = format_command_fish("tool", command).splitlines()
    assert len(lines) == 3
    assert (
        "__fish_seen_subcommand_from a; and __fish_seen_subcommand_from b; "
        "and not __fish_seen_subcommand_from c" in lines[2]
    )


def test_write_orders_global_args_then_commands():
    cli = CLI(
        name="tool",
        arguments=[Argument(named=True, name="help")],
        commands=[Command(name="run", arguments=[Argument(named=True, name="fast")])],
    )
    lines = _render(cli).splitlines()
    assert len(lines) == 3
    assert " -l help" in lines[0]
    assert " -a run" in lines[1]
    assert "__fish_seen_subcommand_from run" in lines[2] and " -l fast" in lines[2]


def test_generate_writes_file(tmp_path):
    cli = CLI(name="tool", commands=[Command(name="run")])
    path = generate_fish_completions(cli, tmp_path)
    assert path == tmp_path / "share" / "fish" / "completions" / "tool.fish"
    assert path.read_text(encoding="utf-8") == _render(cli)