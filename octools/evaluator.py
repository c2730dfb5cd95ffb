"""Evaluation of jell expressions."""

from __future__ import annotations

import math
import operator
import sys
from typing import Callable, Optional, Sequence, TextIO

from octools.environment import Environment
from octools.expr import (
    Bool,
    Expr,
    Float,
    Int,
    JellRuntimeError,
    Keyword,
    Lambda,
    List,
    Nil,
    Set,
    Str,
    Symbol,
    Vector,
)

_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1

Form = Callable[[Sequence[Expr], Environment], Expr]


def _checked(value: int) -> int:
    if not _INT_MIN <= value <= _INT_MAX:
        raise JellRuntimeError("integer overflow")
    return value


def _int_div(a: int, b: int) -> int:
    if b == 0:
        raise JellRuntimeError("division by zero")
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _float_div(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _arith(a: Expr, b: Expr, int_op, float_op, label: str, sign: str) -> Expr:
    if isinstance(a, Int) and isinstance(b, Int):
        return Int(_checked(int_op(a.value, b.value)))
    if isinstance(a, (Int, Float)) and isinstance(b, (Int, Float)):
        return Float(float_op(float(a.value), float(b.value)))
    raise JellRuntimeError(f"unsupported {label}: {a!r} {sign} {b!r}")


def _comparable(a: Expr, b: Expr) -> tuple:
    if isinstance(a, Str) and isinstance(b, Str):
        return a.value, b.value
    if isinstance(a, Int) and isinstance(b, Int):
        return a.value, b.value
    if isinstance(a, (Int, Float)) and isinstance(b, (Int, Float)):
        return float(a.value), float(b.value)
    raise JellRuntimeError("types not supported for comparison")


class Evaluator:
    """Evaluates expressions; definitions made with def persist across calls."""

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self._out = out
        self._global = Environment()
        self._forms: dict[str, Form] = {
            "defmacro": self._unsupported("defmacro"),
            "eval": self._eval,
            "def": self._def,
            "if": self._if,
            "do": self._do,
            "let": self._let,
            "quote": self._quote,
            "fn": self._fn,
            "loop": self._unsupported("loop"),
            "recur": self._unsupported("recur"),
            "string?": self._predicate("string?", Str),
            "int?": self._predicate("int?", Int),
            "float?": self._predicate("float?", Float),
            "keyword?": self._predicate("keyword?", Keyword),
            "symbol?": self._predicate("symbol?", Symbol),
            "list?": self._predicate("list?", List),
            "vector?": self._predicate("vector?", Vector),
            "list": self._list_fn,
            "vector": self._vector_fn,
            "and": self._and,
            "or": self._or,
            "not": self._not,
            "+": self._add,
            "-": self._sub,
            "*": self._mult,
            "/": self._div,
            "=": self._eq,
            "<": self._comparison("<", operator.lt),
            "<=": self._comparison("<=", operator.le),
            ">": self._comparison(">", operator.gt),
            ">=": self._comparison(">=", operator.ge),
            "first": self._first,
            "rest": self._rest,
            "conj": self._conj,
            "nth": self._nth,
            "count": self._count,
            "print": self._print,
        }

    def evaluate(self, expr: Expr, env: Environment) -> Expr:
        """Evaluate expr in env, falling back to global definitions."""
        if isinstance(expr, Symbol):
            value = env.get(expr.name)
            if value is None:
                value = self._global.get(expr.name)
            if value is None:
                raise JellRuntimeError(f"symbol {expr.name} not found in environment")
            return value
        if isinstance(expr, List):
            return self._evaluate_list(expr.items, env)
        if isinstance(expr, Vector):
            return Vector(self.evaluate(item, env) for item in expr.items)
        if isinstance(expr, Set):
            raise JellRuntimeError("sets can not be evaluated")
        return expr

    def _evaluate_list(self, items: Sequence[Expr], env: Environment) -> Expr:
        if not items:
            return List()
        head, rest = items[0], list(items[1:])
        if isinstance(head, Symbol):
            form = self._forms.get(head.name)
            if form is not None:
                return form(rest, env)
            func = self.evaluate(head, env)
            return self.evaluate(List((func, *rest)), env)
        if isinstance(head, Keyword):
            raise JellRuntimeError(f"{head!r} can not be applied")
        if isinstance(head, Lambda):
            return self._apply(head, rest, env)
        if isinstance(head, List):
            func = self._evaluate_list(head.items, env)
            return self.evaluate(List((func, *rest)), env)
        raise JellRuntimeError(f"{head!r} can not be applied")

    def _apply(self, func: Lambda, args: Sequence[Expr], env: Environment) -> Expr:
        if len(func.params) != len(args):
            raise JellRuntimeError(
                f"function takes {len(func.params)} arguments "
                f"but got {len(args)} arguments"
            )
        bindings: list[Expr] = []
        for name, arg in zip(func.params, args):
            bindings.append(Symbol(name))
            bindings.append(List((Symbol("quote"), self.evaluate(arg, env))))
        inner = func.env.copy() if func.env is not None else Environment()
        return self._let([Vector(bindings), *func.body], inner)

    @staticmethod
    def _bind(name: str, value: Expr, env: Environment) -> None:
        if isinstance(value, Lambda) and value.env is not None:
            value.env.set(name, value)
        env.set(name, value)

    @staticmethod
    def _unsupported(name: str) -> Form:
        def form(args: Sequence[Expr], env: Environment) -> Expr:
            raise JellRuntimeError(f"{name} is not supported")

        return form

    def _eval(self, args: Sequence[Expr], env: Environment) -> Expr:
        if len(args) != 1:
            raise JellRuntimeError("eval takes 1 argument")
        return self.evaluate(args[0], Environment())

    def _def(self, args: Sequence[Expr], env: Environment) -> Expr:
        if len(args) != 2 or not isinstance(args[0], Symbol):
            raise JellRuntimeError("def takes symbol and value")
        name = args[0].name
        scope = env.copy()
        value = self.evaluate(args[1], scope)
        self._bind(name, value, scope)
        self._global.set(name, value)
        return Nil()

    def _if(self, args: Sequence[Expr], env: Environment) -> Expr:
        if len(args) != 3:
            raise JellRuntimeError("required 3 arguments for if")
        test = self.evaluate(args[0], env)
        if not isinstance(test, Bool):
            raise JellRuntimeError("test must be evaluated to boolean")
        return self.evaluate(args[1] if test.value else args[2], env)

    def _do(self, args: Sequence[Expr], env: Environment) -> Expr:
        result: Expr = Nil()
        for arg in args:
            result = self.evaluate(arg, env)
        return result

    def _let(self, args: Sequence[Expr], env: Environment) -> Expr:
        if not args:
            raise JellRuntimeError("required at least binding for let")
        binding = args[0]
        if not isinstance(binding, Vector):
            raise JellRuntimeError("binding must be vector")
        if len(binding.items) % 2 != 0:
            raise JellRuntimeError("binding elements must be even number")
        scope = env.copy()
        pairs = iter(binding.items)
        for name, expr in zip(pairs, pairs):
            if not isinstance(name, Symbol):
                raise JellRuntimeError(
                    "let binding only takes pairs of symbol and value"
                )
            self._bind(name.name, self.evaluate(expr, scope), scope)
        return self._do(args[1:], scope)

    def _quote(self, args: Sequence[Expr], env: Environment) -> Expr:
        if len(args) != 1:
            raise JellRuntimeError("required 1 argument for quote")
        return args[0]

    def _fn(self, args: Sequence[Expr], env: Environment) -> Expr:
        if not args:
            raise JellRuntimeError("fn requires binding")
        params = args[0]
        if not isinstance(params, Vector):
            raise JellRuntimeError("fn takes vector as variable")
        if not all(isinstance(p, Symbol) for p in params.items):
            raise JellRuntimeError("fn takes vector of symbols")
        return Lambda(tuple(p.name for p in params.items), tuple(args[1:]), env.copy())

    def _comparison(self, name: str, op: Callable) -> Form:
        def compare(args: Sequence[Expr], env: Environment) -> Expr:
            if not args:
                raise JellRuntimeError(f"{name} takes at least 1 argument")
            current = self.evaluate(args[0], env)
            for arg in args[1:]:
                value = self.evaluate(arg, env)
                if not op(*_comparable(current, value)):
                    return Bool(False)
                current = value
            return Bool(True)

        return compare

    def _fold(self, start: Expr, args: Sequence[Expr], env: Environment, step) -> Expr:
        result = start
        for arg in args:
            result = step(result, self.evaluate(arg, env))
        return result

    def _add(self, args: Sequence[Expr], env: Environment) -> Expr:
        return self._fold(
            Int(0), args, env,
            lambda a, b: _arith(a, b, operator.add, operator.add, "addition", "+"),
        )

    def _mult(self, args: Sequence[Expr], env: Environment) -> Expr:
        return self._fold(
            Int(1), args, env,
            lambda a, b: _arith(a, b, operator.mul, operator.mul, "mult", "*"),
        )

    def _sub(self, args: Sequence[Expr], env: Environment) -> Expr:
        if not args:
            raise JellRuntimeError("- requires at least 1 argument")
        return self._fold(
            self.evaluate(args[0], env), args[1:], env,
            lambda a, b: _arith(a, b, operator.sub, operator.sub, "sub", "-"),
        )

    def _div(self, args: Sequence[Expr], env: Environment) -> Expr:
        if not args:
            raise JellRuntimeError("/ requires at least 1 argument")
        return self._fold(
            self.evaluate(args[0], env), args[1:], env,
            lambda a, b: _arith(a, b, _int_div, _float_div, "div", "/"),
        )

    def _eq(self, args: Sequence[Expr], env: Environment) -> Expr:
        if len(args) < 2:
            raise JellRuntimeError("= requires at least 2 argument")
        first = self.evaluate(args[0], env)
        for arg in args[1:]:
            if first != self.evaluate(arg, env):
                return Bool(False)
        return Bool(True)

    def _and(self, args: Sequence[Expr], env: Environment) -> Expr:
        for arg in args:
            value = self.evaluate(arg, env)
            if not isinstance(value, Bool):
                raise JellRuntimeError("and only takes booleans")
            if not value.value:
                return Bool(False)
        return Bool(True)

    def _or(self, args: Sequence[Expr], env: Environment) -> Expr:
        for arg in args:
            value = self.evaluate(arg, env)
            if not isinstance(value, Bool):
                raise JellRuntimeError("or only takes booleans")
            if value.value:
                return Bool(True)
        return Bool(False)

    def _not(self, args: Sequence[Expr], env: Environment) -> Expr:
        if len(args) != 1:
            raise JellRuntimeError("not only takes 1 argument")
        value = self.evaluate(args[0], env)
        if not isinstance(value, Bool):
            raise JellRuntimeError("not only takes boolean value")
        return Bool(not value.value)

    def _first(self, args: Sequence[Expr], env: Environment) -> Expr:
        if len(args) != 1:
            raise JellRuntimeError("required 1 argument for first")
        value = self.evaluate(args[0], env)
        if not isinstance(value, (Vector, List)):
            raise JellRuntimeError(f"first can not be applied to {value}")
        return value.items[0] if value.items else Nil()

    def _rest(self, args: Sequence[Expr], env: Environment) -> Expr:
        if len(args) != 1:
            raise JellRuntimeError("required 1 argument for rest")
        value = self.evaluate(args[0], env)
        if not isinstance(value, (Vector, List)):
            raise JellRuntimeError(f"rest can not be applied to {value}")
        return type(value)(value.items[1:])

    def _conj(self, args: Sequence[Expr], env: Environment) -> Expr:
        if not args:
            return List()
        coll = self.evaluate(args[0], env)
        if isinstance(coll, Vector):
            return Vector((*coll.items, *(self.evaluate(a, env) for a in args[1:])))
        if isinstance(coll, List):
            items = list(coll.items)
            for arg in args[1:]:
                items.insert(0, self.evaluate(arg, env))
            return List(items)
        raise JellRuntimeError("conj only supports vectors and lists")

    def _print(self, args: Sequence[Expr], env: Environment) -> Expr:
        text = "".join(str(self.evaluate(arg, env)) for arg in args)
        out = self._out if self._out is not None else sys.stdout
        out.write(text)
        return Nil()

    def _nth(self, args: Sequence[Expr], env: Environment) -> Expr:
        if len(args) not in (2, 3):
            raise JellRuntimeError("required 2 or 3 argument for nth")
        coll = self.evaluate(args[0], env)
        index = self.evaluate(args[1], env)
        if not isinstance(coll, (Vector, List)) or not isinstance(index, Int):
            raise JellRuntimeError("nth does not support those types")
        if 0 <= index.value < len(coll.items):
            return coll.items[index.value]
        if len(args) == 3:
            return self.evaluate(args[2], env)
        raise JellRuntimeError(f"index {index.value} out of bounds")

    def _count(self, args: Sequence[Expr], env: Environment) -> Expr:
        if len(args) != 1:
            raise JellRuntimeError("required 1 argument for count")
        value = self.evaluate(args[0], env)
        if not isinstance(value, (Vector, Set, List)):
            raise JellRuntimeError("count only takes a sequence")
        return Int(len(value.items))

    def _predicate(self, name: str, cls: type) -> Form:
        def check(args: Sequence[Expr], env: Environment) -> Expr:
            if len(args) != 1:
                raise JellRuntimeError(f"required 1 argument for {name}")
            return Bool(isinstance(self.evaluate(args[0], env), cls))

        return check

    def _list_fn(self, args: Sequence[Expr], env: Environment) -> Expr:
        return List(self.evaluate(arg, env) for arg in args)

    def _vector_fn(self, args: Sequence[Expr], env: Environment) -> Expr:
        return Vector(self.evaluate(arg, env) for arg in args)