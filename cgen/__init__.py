"""Generate Fish, Bash and Zsh completion scripts from a YAML tool description."""

__version__ = "0.1.0"