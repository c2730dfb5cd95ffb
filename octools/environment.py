"""Variable bindings for jell evaluation."""

from __future__ import annotations

from collections import deque
from typing import Optional

from octools.expr import Expr


class Environment:
    """An ordered set of bindings where the most recent binding of a name wins."""

    def __init__(self) -> None:
        self._variables: deque[tuple[str, Expr]] = deque()

    def extend(self, other: Environment) -> None:
        """Append the bindings of other behind the existing ones."""
        self._variables.extend(other._variables)

    def set(self, name: str, value: Expr) -> None:
        """Bind name to value, shadowing any earlier binding."""
        self._variables.appendleft((name, value))

    def get(self, name: str) -> Optional[Expr]:
        """Return the newest value bound to name, or None."""
        return next((value for key, value in self._variables if key == name), None)

    def copy(self) -> Environment:
        """Return an independent environment with the same bindings."""
        clone = Environment()
        clone._variables = deque(self._variables)
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Environment):
            return NotImplemented
        return list(self._variables) == list(other._variables)

    def __repr__(self) -> str:
        return f"Environment({list(self._variables)!r})"