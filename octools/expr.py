"""Values of the jell language and the errors it raises."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Union


class JellError(Exception):
    """Base class for every error raised while running jell code."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class JellSyntaxError(JellError):
    """The token stream does not form a valid expression."""


class LexicalError(JellError):
    """The input text cannot be split into tokens."""


class JellRuntimeError(JellError):
    """An expression could not be evaluated."""


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _join(items: Iterable[Any]) -> str:
    return " ".join(str(item) for item in items)


@dataclass(frozen=True)
class Symbol:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Keyword:
    name: str

    def __str__(self) -> str:
        return f":{self.name}"


@dataclass(frozen=True)
class Str:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Int:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Float:
    value: float

    def __str__(self) -> str:
        return _format_float(self.value)


@dataclass(frozen=True)
class Bool:
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Nil:
    def __str__(self) -> str:
        return "nil"


@dataclass(frozen=True, eq=False)
class Lambda:
    """A closure: parameter names, body expressions and the captured environment."""

    params: tuple = ()
    body: tuple = ()
    env: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))
        object.__setattr__(self, "body", tuple(self.body))

    def __eq__(self, other: object) -> bool:
        # Functions never compare equal, not even to themselves.
        return False

    def __hash__(self) -> int:
        return id(self)

    def __str__(self) -> str:
        return "<lambda>"


@dataclass(frozen=True)
class List:
    items: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __str__(self) -> str:
        return f"({_join(self.items)})"


@dataclass(frozen=True)
class Vector:
    items: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __str__(self) -> str:
        return f"[{_join(self.items)}]"


@dataclass(frozen=True)
class Set:
    items: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __str__(self) -> str:
        return "#{" + _join(self.items) + "}"


Expr = Union[Symbol, Keyword, Str, Int, Float, Bool, Nil, Lambda, List, Vector, Set]