"""Command-line front end for jell: run a file or read expressions interactively."""

from __future__ import annotations

import sys
from typing import Optional, Sequence, TextIO

from octools.environment import Environment
from octools.evaluator import Evaluator
from octools.expr import Expr, JellError, JellSyntaxError, Nil
from octools.lexer import TokenKind, tokenize
from octools.parser import Parser, parse_program

_PROMPT = "user=> "
_INDENT = "  "

_OPENERS = frozenset(
    {TokenKind.LPAREN, TokenKind.LBRACKET, TokenKind.LBRACE, TokenKind.LSHARP_BRACE}
)
_CLOSERS = {
    TokenKind.RPAREN: frozenset({TokenKind.LPAREN}),
    TokenKind.RBRACKET: frozenset({TokenKind.LBRACKET}),
    TokenKind.RBRACE: frozenset({TokenKind.LBRACE, TokenKind.LSHARP_BRACE}),
}


def run(text: str, evaluator: Evaluator, env: Environment) -> Expr:
    """Parse the first expression of text and evaluate it."""
    expr = Parser(tokenize(text)).parse()
    return evaluator.evaluate(expr, env)


def exec_file(path, out: Optional[TextIO] = None) -> Expr:
    """Evaluate every expression in the file at path, in order."""
    out = sys.stdout if out is None else out
    with open(path, encoding="utf-8") as handle:
        program = handle.read()
    exprs = parse_program(program)
    evaluator = Evaluator(out)
    env = Environment()
    for expr in exprs:
        evaluator.evaluate(expr, env)
    out.write("\n")
    return Nil()


def _track_brackets(stack: list, kind: TokenKind) -> None:
    if kind in _OPENERS:
        stack.append(kind)
        return
    expected = _CLOSERS.get(kind)
    if expected is None:
        return
    if not stack or stack[-1] not in expected:
        raise JellSyntaxError(f"unbalanced {kind.value}")
    stack.pop()


def repl(
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> None:
    """Read expressions line by line, evaluate each complete one and print it."""
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr

    evaluator = Evaluator(stdout)
    env = Environment()
    stack: list[TokenKind] = []
    pending = []

    while True:
        stdout.write(_PROMPT + _INDENT * len(stack))
        stdout.flush()
        line = stdin.readline()
        if not line:
            break

        tokens = tokenize(line)
        for token in tokens:
            _track_brackets(stack, token.kind)
        pending.extend(tokens)

        if stack or not pending:
            continue
        expr = Parser(pending).parse()
        pending = []
        try:
            result = evaluator.evaluate(expr, env)
        except JellError as err:
            stderr.write(f"error: {err.message}\n")
        else:
            stdout.write(f"{result}\n")
        stdout.write("\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the file named first in argv, or start the interactive loop."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        if args:
            exec_file(args[0], sys.stdout)
        else:
            repl(sys.stdin, sys.stdout, sys.stderr)
    except JellError as err:
        sys.stderr.write(f"error: {err.message}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())