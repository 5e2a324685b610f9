[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cgen"
version = "0.1.0"
description = "Generate Fish, Bash and Zsh completion scripts from a YAML description of a command-line tool"
requires-python = ">=3.10"
keywords = ["completion", "bash", "zsh", "fish", "shell", "cli", "yaml"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
    "Topic :: Software Development :: Code Generators",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cgen = "cgen.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
