"""Slash-separated paths and their components."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Iterator, Optional, Union


class _State(enum.IntEnum):
    START_DIR = 0
    BODY = 1
    DONE = 2


@dataclass(frozen=True)
class Component:
    """One piece of a path: the root, ".", ".." or a plain name."""

    kind: str
    name: str = ""

    ROOT_DIR_KIND = "RootDir"
    CUR_DIR_KIND = "CurDir"
    PARENT_DIR_KIND = "ParentDir"
    NORMAL_KIND = "Normal"

    @classmethod
    def normal(cls, name: str) -> Component:
        return cls(cls.NORMAL_KIND, name)

    @property
    def is_normal(self) -> bool:
        return self.kind == self.NORMAL_KIND

    def to_str(self) -> str:
        if self.kind == self.ROOT_DIR_KIND:
            return "/"
        if self.kind == self.CUR_DIR_KIND:
            return "."
        if self.kind == self.PARENT_DIR_KIND:
            return ".."
        return self.name


ROOT_DIR = Component(Component.ROOT_DIR_KIND)
CUR_DIR = Component(Component.CUR_DIR_KIND)
PARENT_DIR = Component(Component.PARENT_DIR_KIND)


def _parse_single(text: str) -> Optional[Component]:
    if text in (".", ""):
        return None
    if text == "..":
        return PARENT_DIR
    return Component.normal(text)


class Components:
    """Iterator over the components of a path, usable from either end."""

    def __init__(self, path: str) -> None:
        self._path = path
        self._has_root = path.startswith("/")
        self._front = _State.START_DIR
        self._back = _State.BODY

    def _clone(self) -> Components:
        clone = Components(self._path)
        clone._has_root = self._has_root
        clone._front = self._front
        clone._back = self._back
        return clone

    @property
    def has_root(self) -> bool:
        return self._has_root

    def _include_cur_dir(self) -> bool:
        if self._has_root:
            return False
        return self._path == "." or self._path.startswith("./")

    def _len_before_body(self) -> int:
        at_start = self._front <= _State.START_DIR
        root = 1 if at_start and self._has_root else 0
        cur_dir = 1 if at_start and self._include_cur_dir() else 0
        return root + cur_dir

    def _finished(self) -> bool:
        return (
            self._front == _State.DONE
            or self._back == _State.DONE
            or self._front > self._back
        )

    def _next_component(self) -> tuple[str, Optional[Component]]:
        head, sep, tail = self._path.partition("/")
        if sep:
            return tail, _parse_single(head)
        return "", _parse_single(self._path)

    def _next_component_back(self) -> tuple[str, Optional[Component]]:
        head, sep, tail = self._path.rpartition("/")
        if sep:
            return head, _parse_single(tail)
        return "", _parse_single(self._path)

    def _trim_left(self) -> None:
        while self._path:
            extra, comp = self._next_component()
            if comp is not None:
                return
            self._path = extra

    def _trim_right(self) -> None:
        while self._path:
            extra, comp = self._next_component_back()
            if comp is not None:
                return
            self._path = extra

    def as_path(self) -> Path:
        """Return the part of the path not yet consumed."""
        comps = self._clone()
        if comps._front == _State.BODY:
            comps._trim_left()
        if comps._back == _State.BODY:
            comps._trim_right()
        return Path(comps._path)

    def __iter__(self) -> Components:
        return self

    def __next__(self) -> Component:
        while not self._finished():
            if self._front == _State.START_DIR:
                self._front = _State.BODY
                if self._has_root:
                    self._path = self._path[1:]
                    return ROOT_DIR
                if self._include_cur_dir():
                    self._path = self._path[1:]
                    return CUR_DIR
            elif self._path:
                self._path, comp = self._next_component()
                if comp is not None:
                    return comp
            else:
                self._front = _State.DONE
        raise StopIteration

    def next_back(self) -> Optional[Component]:
        """Take the last remaining component, or None when none is left."""
        while not self._finished():
            if self._back == _State.BODY:
                if len(self._path) > self._len_before_body():
                    self._path, comp = self._next_component_back()
                    if comp is not None:
                        return comp
                else:
                    self._back = _State.START_DIR
            else:
                self._back = _State.DONE
                if self._has_root:
                    return ROOT_DIR
                if self._include_cur_dir():
                    return CUR_DIR
        return None

    def reversed(self) -> Iterator[Component]:
        """Yield the remaining components from the last to the first."""
        while (comp := self.next_back()) is not None:
            yield comp


PathLike = Union["Path", str]


def _as_path(value: PathLike) -> Path:
    return value if isinstance(value, Path) else Path(value)


def _starts_with(items: list, prefix: list) -> bool:
    return len(prefix) <= len(items) and items[: len(prefix)] == prefix


class Path:
    """A path held as text, split on "/" into components on demand."""

    def __init__(self, text: Union[str, Path] = "") -> None:
        self._text = str(text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Path({self._text!r})"

    def __fspath__(self) -> str:
        return self._text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._text == other._text

    def __hash__(self) -> int:
        return hash(self._text)

    def components(self) -> Components:
        return Components(self._text)

    def has_root(self) -> bool:
        return self.components().has_root

    def is_absolute(self) -> bool:
        return self.has_root()

    def is_relative(self) -> bool:
        return not self.is_absolute()

    def parent(self) -> Optional[Path]:
        """The path without its last component, or None at a root or empty path."""
        comps = self.components()
        comp = comps.next_back()
        if comp is None or comp.kind == Component.ROOT_DIR_KIND:
            return None
        return comps.as_path()

    def ancestors(self) -> Iterator[Path]:
        """Yield this path and then each successive parent."""
        current: Optional[Path] = self
        while current is not None:
            yield current
            current = current.parent()

    def file_name(self) -> Optional[str]:
        comp = self.components().next_back()
        if comp is not None and comp.is_normal:
            return comp.name
        return None

    def starts_with(self, base: PathLike) -> bool:
        return _starts_with(list(self.components()), list(_as_path(base).components()))

    def ends_with(self, child: PathLike) -> bool:
        mine = list(self.components().reversed())
        theirs = list(_as_path(child).components().reversed())
        return _starts_with(mine, theirs)

    def file_stem(self) -> Optional[str]:
        """The file name up to its last dot; None when it has no dot."""
        name = self.file_name()
        if name is None or "." not in name:
            return None
        return name.rpartition(".")[0]

    def file_prefix(self) -> Optional[str]:
        """The file name up to its first dot; None when it has no dot."""
        name = self.file_name()
        if name is None or "." not in name:
            return None
        return name.partition(".")[0]

    def join(self, other: PathLike) -> Path:
        """Append other, which replaces this path entirely when it is absolute."""
        other = _as_path(other)
        if other.is_absolute():
            return Path(other._text)
        need_sep = bool(self._text) and not self._text.endswith("/")
        return Path(self._text + ("/" if need_sep else "") + other._text)

    def is_dir(self) -> bool:
        return os.path.isdir(self._text)

    def exists(self) -> bool:
        return os.path.exists(self._text)