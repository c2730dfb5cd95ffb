"""A small Lisp interpreter, a minimal shell and lexical path handling."""

__version__ = "0.1.0"

__all__ = [
    "environment",
    "evaluator",
    "expr",
    "lexer",
    "parser",
    "paths",
    "repl",
    "shell",
]