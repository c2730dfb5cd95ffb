"""A small interactive shell with pipes, output redirection and a few builtins."""

from __future__ import annotations

import io
import os
import subprocess
import sys
from dataclasses import dataclass, field
from typing import IO, MutableMapping, Optional, Sequence, TextIO, Union

PROMPT = "$ "
PATHS_FILE = "/etc/paths"
DEFAULT_CD_TARGET = "/"


@dataclass
class CommandSpec:
    """One stage of a pipeline: a program, its arguments and an optional redirect."""

    program: str
    args: list = field(default_factory=list)
    redirect: Optional[str] = None
    append: bool = False


@dataclass
class _Running:
    process: subprocess.Popen
    capture: bool


def split_pipeline(line: str) -> list[str]:
    """Split a command line into the texts of its pipeline stages."""
    return line.strip().split("|")


def parse_command(text: str) -> Optional[CommandSpec]:
    """Parse one pipeline stage; return None when it holds no command."""
    words = text.split()
    if not words:
        return None
    program, rest = words[0], words[1:]
    args = []
    position = 0
    while position < len(rest) and ">" not in rest[position]:
        args.append(rest[position])
        position += 1
    tail = rest[position:]
    if not tail:
        return CommandSpec(program, args)

    append = ">>" in tail[0]
    redirect = ""
    for index, piece in enumerate("".join(tail).split(">")):
        if not piece:
            continue
        if index == 0:
            args.append(piece)
        else:
            redirect = piece
    if not redirect:
        raise ValueError("redirect")
    return CommandSpec(program, args, redirect, append)


def load_paths(
    path_file: Union[str, os.PathLike], environ: MutableMapping[str, str]
) -> Optional[str]:
    """Append the lines of path_file to PATH in environ; return the new PATH."""
    if not os.path.exists(path_file):
        return None
    with open(path_file, encoding="utf-8") as handle:
        extra = handle.read().splitlines()
    paths = [part for part in environ.get("PATH", "").split(":") if part]
    paths.extend(extra)
    new_path = ":".join(paths)
    environ["PATH"] = new_path
    return new_path


def _fileno(stream: Optional[IO]) -> Optional[int]:
    if stream is None:
        return None
    try:
        return stream.fileno()
    except (AttributeError, io.UnsupportedOperation, ValueError, OSError):
        return None


class Shell:
    """Reads command lines and runs them as pipelines of child processes."""

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        environ: Optional[MutableMapping[str, str]] = None,
    ) -> None:
        self.stdin = sys.stdin if stdin is None else stdin
        self.stdout = sys.stdout if stdout is None else stdout
        self.stderr = sys.stderr if stderr is None else stderr
        self.environ = os.environ if environ is None else environ

    def run_line(self, line: str) -> bool:
        """Run one command line; return False when the shell should exit."""
        stages = split_pipeline(line)
        previous: Optional[_Running] = None
        for index, text in enumerate(stages):
            words = text.split()
            if not words:
                return True
            program, args = words[0], words[1:]
            if program == "cd":
                # Only the shell itself can change its directory.
                if index == 0:
                    self._cd(args)
                return True
            if program == "export":
                self._export(args)
                return True
            if program == "exit":
                return False
            spec = parse_command(text)
            previous = self._spawn(spec, previous, index == len(stages) - 1)
        if previous is not None:
            self._wait(previous)
        return True

    def loop(self) -> None:
        """Prompt for and run lines until exit or end of input."""
        while True:
            self.stdout.write(PROMPT)
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                break
            if not self.run_line(line):
                break

    def _cd(self, args: Sequence[str]) -> None:
        target = args[0] if args else DEFAULT_CD_TARGET
        try:
            os.chdir(target)
        except OSError as err:
            self.stderr.write(f"{err}\n")

    def _export(self, args: Sequence[str]) -> None:
        if not args or args[0] == "-p":
            for key, value in list(self.environ.items()):
                self.stdout.write(f"{key}: {value}\n")
            return
        for arg in args:
            key, sep, value = arg.partition("=")
            if sep:
                self.environ[key] = value
            else:
                self.stderr.write(f"export: invalid argument: {arg}\n")

    def _spawn(
        self, spec: CommandSpec, previous: Optional[_Running], last: bool
    ) -> Optional[_Running]:
        if previous is not None and previous.process.stdout is not None:
            stdin = previous.process.stdout
        else:
            fd = _fileno(self.stdin)
            stdin = subprocess.DEVNULL if fd is None else fd

        redirect_file = None
        capture = False
        if spec.redirect is not None:
            redirect_file = open(spec.redirect, "ab" if spec.append else "wb")
            stdout = redirect_file
        elif not last:
            stdout = subprocess.PIPE
        else:
            fd = _fileno(self.stdout)
            if fd is None:
                capture = True
                stdout = subprocess.PIPE
            else:
                stdout = fd

        self.stdout.flush()
        try:
            process = subprocess.Popen(
                [spec.program, *spec.args],
                stdin=stdin,
                stdout=stdout,
                stderr=_fileno(self.stderr),
                env=dict(self.environ),
            )
        except OSError as err:
            self.stderr.write(f"{err}\n")
            return None
        finally:
            if redirect_file is not None:
                redirect_file.close()
            if previous is not None and previous.process.stdout is not None:
                previous.process.stdout.close()
        return _Running(process, capture)

    def _wait(self, running: _Running) -> None:
        if running.capture:
            data, _ = running.process.communicate()
            self.stdout.write(data.decode("utf-8", "replace"))
        else:
            running.process.wait()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start an interactive shell on the standard streams."""
    shell = Shell()
    load_paths(PATHS_FILE, shell.environ)
    shell.loop()
    return 0


if __name__ == "__main__":
    sys.exit(main())