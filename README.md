# cgen

`cgen` writes shell completion scripts for Fish, Bash and Zsh from a single
YAML file that describes a command-line tool. The file lists the tool's global
arguments, its commands and subcommands, and how each argument's value is
completed.

It is useful for adding completions to tools that do not ship their own.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

```
cgen config.yaml
```

This reads `config.yaml` and writes these files, relative to the current
directory. Directories are created as needed.

- `share/bash/completions/<name>.bash`
- `share/fish/completions/<name>.fish`
- `share/zsh/completions/_<name>`

Here `<name>` is the tool's `name` from the configuration.

Other invocations:

```
cgen --version
cgen --help
```

`cgen --version` (or `-v`) prints `cgen version <version>`, where the version
is that of the installed distribution. If the command is given no path, or
more than one, it prints its help and exits with status 0.

The command exits with status 1 in these cases, and prints a message on
standard error:

- the configuration file cannot be opened or read
- the configuration file cannot be parsed or fails validation
- a completion file cannot be written

## Configuration

```yaml
name: mytool
short-description: Does useful things
version: "1.0"
arguments:
  - named: true
    name: verbose
    short-name: v
    short-description: Print more output
    completion:
      type: none
commands:
  - name: open
    aliases: [o]
    long-description: Open a file
    arguments:
      - name: path
        completion:
          type: file
      - named: true
        name: format
        short-name: f
        short-description: Output format
        completion:
          type: static
          values: [json, yaml, text]
    commands:
      - name: recent
        long-description: Open a recently used file
```

The top level takes `name` (required), `short-description`,
`long-description`, `version`, `arguments` and `commands`.

### Arguments

| key | default | meaning |
| --- | --- | --- |
| `named` | `false` | a flag (`--name`) rather than a positional argument |
| `name` | | long flag name, or the positional argument's name |
| `short-name` | | short flag name (`v` gives `-v`) |
| `single-dash-long` | `false` | long flags use one dash: `-verbose` |
| `equal-value-separator` | `false` | `--flag=value` is accepted |
| `space-value-separator` | `true` | `--flag value` is accepted |
| `chainable` | `true` | short flag may be chained: `-hal` |
| `exclusive-group` | | flags sharing a group exclude each other |
| `short-description`, `long-description`, `example` | | help text |
| `sort`, `hidden` | `false` | manual page hints |
| `completion` | `type: none` | how the value is completed |

### Completion types

- `none`: the argument takes a value that cannot be completed
- `file`: complete file names
- `folder`: complete directory names
- `static`: complete from `values`
- `function`: complete from the output of shell code given in `bash`, `fish` and `zsh`

### Commands

Each command has a `name`, optional `aliases`, `arguments` and nested
`commands`. It also takes the descriptive keys `deprecated`, `hidden`,
`usage`, `long-description` and `example`.

Unknown keys are rejected, as are values of the wrong type and unknown
completion types. `name` is required at the top level. Such errors are raised
as `cgen.model.ConfigError`.

## Library use

```python
import sys
from cgen.model import load_cli_file
from cgen.bash import write_bash_completions

cli = load_cli_file("config.yaml")
write_bash_completions(cli, sys.stdout)
```

Modules:

- `cgen.model`: the `CLI`, `Command`, `Argument` and `Completion` dataclasses,
  plus the `CompletionType` enum, `ConfigError`, `load_cli(text)` and
  `load_cli_file(path)`.
- `cgen.bash`, `cgen.fish`, `cgen.zsh`: each has a `write_*_completions(cli, stream)`
  function that writes a script to a text stream. Each also has a
  `generate_*_completions(cli, root=".")` function that writes the file under
  `root/share/...` and returns its path.
- `cgen.quoting`: `quote(text)` and `quote_command(args)`, which quote text
  for POSIX shells.
- `cgen.writer`: `IndentedWriter`, a text writer whose `indent()` context
  manager raises the indentation level.
- `cgen.cli`: `main(argv=None)`, `build_parser()`, and
  `generate_man_page(cli)`, which returns a section 1 manual page as roff text.

## Limitations

- The `cgen` command does not write manual pages. `cgen.cli.generate_man_page`
  can render one from library code.
- The command accepts `--sample` (`-s`), but it does not print a sample
  configuration. The option has no effect.