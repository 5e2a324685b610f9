import io
from pathlib import Path

import pytest

from cgen.bash import write_bash_completions
from cgen.cli import build_parser, main
from cgen.fish import write_fish_completions
from cgen.model import load_cli
from cgen.zsh import write_zsh_completions

CONFIG = """\
name: tool
short-description: A sample tool
arguments:
  - named: true
    name: verbose
    short-name: v
    short-description: Be verbose
commands:
  - name: run
    aliases: [r]
    arguments:
      - name: target
        completion:
          type: file
"""


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_parser_flags():
    options = build_parser().parse_args(["-v", "--sample", "a.yaml"])
    assert options.version is True
    assert options.sample is True
    assert options.paths == ["a.yaml"]


def test_parser_defaults():
    options = build_parser().parse_args([])
    assert options.version is False
    assert options.sample is False
    assert options.paths == []


def test_version_output(capsys):
    assert main(["--version"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("cgen version ")
    assert not out.endswith("\n")


def test_no_path_prints_help(capsys):
    assert main([]) == 0
    assert "cgen [PATH]" in capsys.readouterr().out


def test_two_paths_prints_help(capsys, workdir):
    assert main(["a.yaml", "b.yaml"]) == 0
    assert "cgen [PATH]" in capsys.readouterr().out
    assert not (workdir / "share").exists()


def test_missing_file(capsys, workdir):
    assert main([str(workdir / "missing.yaml")]) == 1
    assert "Could not open configuration file" in capsys.readouterr().err


def test_unknown_field_fails_to_parse(capsys, workdir):
    config = workdir / "bad.yaml"
    config.write_text("name: tool\nbogus: 1\n", encoding="utf-8")
    assert main([str(config)]) == 1
    assert "Could not parse configuration file" in capsys.readouterr().err


def test_missing_name_fails_to_parse(capsys, workdir):
    config = workdir / "bad.yaml"
    config.write_text("version: '1'\n", encoding="utf-8")
    assert main([str(config)]) == 1
    assert "Could not parse configuration file" in capsys.readouterr().err


def test_generates_all_completion_files(workdir):
    config = workdir / "tool.yaml"
    config.write_text(CONFIG, encoding="utf-8")
    assert main([str(config)]) == 0

    cli = load_cli(CONFIG)
    expected = {
        Path("share/bash/completions/tool.bash"): write_bash_completions,
        Path("share/fish/completions/tool.fish"): write_fish_completions,
        Path("share/zsh/completions/_tool"): write_zsh_completions,
    }
    for relative, write in expected.items():
        buffer = io.StringIO()
        write(cli, buffer)
        assert (workdir / relative).read_text(encoding="utf-8") == buffer.getvalue()


def test_relative_path_is_accepted(workdir):
    (workdir / "tool.yaml").write_text(CONFIG, encoding="utf-8")
    assert main(["tool.yaml"]) == 0
    assert (workdir / "share" / "zsh" / "completions" / "_tool").is_file()


def test_generation_error_reported(capsys, workdir):
    config = workdir / "tool.yaml"
    config.write_text(CONFIG, encoding="utf-8")
    (workdir / "share").write_text("not a directory", encoding="utf-8")
    assert main([str(config)]) == 1
    assert "Error generating BASH completion" in capsys.readouterr().err