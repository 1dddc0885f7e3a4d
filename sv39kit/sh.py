"""Parser for the shell's command language: words, < > >>, |, ;, & and ( )."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union

from .params import OpenFlag

WHITESPACE = " \t\r\n\v"
SYMBOLS = "<|>&;()"
MAXARGS = 10


class ShellSyntaxError(ValueError):
    """A command line that cannot be parsed."""

    def __init__(self, message: str, leftover: str = "") -> None:
        super().__init__(message)
        self.leftover = leftover


@dataclass
class ExecCmd:
    """Run a program with arguments; ``argv[0]`` names the program."""

    argv: list[str] = field(default_factory=list)


@dataclass
class RedirCmd:
    """Run ``cmd`` with descriptor ``fd`` reopened on ``file``."""

    cmd: "Command"
    file: str
    mode: OpenFlag
    fd: int


@dataclass
class PipeCmd:
    """Connect the output of ``left`` to the input of ``right``."""

    left: "Command"
    right: "Command"


@dataclass
class ListCmd:
    """Run ``left`` to completion, then ``right``."""

    left: "Command"
    right: "Command"


@dataclass
class BackCmd:
    """Run ``cmd`` without waiting for it."""

    cmd: "Command"


Command = Union[ExecCmd, RedirCmd, PipeCmd, ListCmd, BackCmd]


class _Scanner:
    def __init__(self, s: str) -> None:
        self.s = s
        self.pos = 0

    def _skip_space(self) -> None:
        while self.pos < len(self.s) and self.s[self.pos] in WHITESPACE:
            self.pos += 1

    def at_end(self) -> bool:
        return self.pos >= len(self.s)

    def peek(self, toks: str) -> bool:
        self._skip_space()
        return not self.at_end() and self.s[self.pos] in toks

    def gettoken(self) -> tuple[str, str]:
        """Return (kind, text); kind is "" at end of input, "a" for a word,
        "+" for ">>", otherwise the symbol itself."""
        self._skip_space()
        start = self.pos
        if self.at_end():
            return "", ""
        c = self.s[self.pos]
        if c in "|();&<":
            self.pos += 1
            kind = c
        elif c == ">":
            self.pos += 1
            kind = ">"
            if self.pos < len(self.s) and self.s[self.pos] == ">":
                kind = "+"
                self.pos += 1
        else:
            kind = "a"
            while (
                self.pos < len(self.s)
                and self.s[self.pos] not in WHITESPACE
                and self.s[self.pos] not in SYMBOLS
            ):
                self.pos += 1
        text = self.s[start:self.pos]
        self._skip_space()
        return kind, text


def tokenize(s: str) -> Iterator[tuple[str, str]]:
    """Yield (kind, text) for each token of ``s``.

    ``kind`` is "a" for a word, "+" for ">>", and the symbol itself
    for any of ``< > | & ; ( )``.
    """
    scanner = _Scanner(s)
    while True:
        kind, text = scanner.gettoken()
        if not kind:
            return
        yield kind, text


class _Parser(_Scanner):
    def line(self) -> Command:
        cmd = self.pipe()
        while self.peek("&"):
            self.gettoken()
            cmd = BackCmd(cmd)
        if self.peek(";"):
            self.gettoken()
            cmd = ListCmd(cmd, self.line())
        return cmd

    def pipe(self) -> Command:
        cmd = self.exec()
        if self.peek("|"):
            self.gettoken()
            cmd = PipeCmd(cmd, self.pipe())
        return cmd

    def redirs(self, cmd: Command) -> Command:
        while self.peek("<>"):
            tok, _ = self.gettoken()
            kind, file = self.gettoken()
            if kind != "a":
                raise ShellSyntaxError("missing file for redirection")
            if tok == "<":
                cmd = RedirCmd(cmd, file, OpenFlag.RDONLY, 0)
            elif tok == ">":
                cmd = RedirCmd(
                    cmd, file, OpenFlag.WRONLY | OpenFlag.CREATE | OpenFlag.TRUNC, 1
                )
            else:
                cmd = RedirCmd(cmd, file, OpenFlag.WRONLY | OpenFlag.CREATE, 1)
        return cmd

    def block(self) -> Command:
        if not self.peek("("):
            raise ShellSyntaxError("parseblock")
        self.gettoken()
        cmd = self.line()
        if not self.peek(")"):
            raise ShellSyntaxError("syntax - missing )")
        self.gettoken()
        return self.redirs(cmd)

    def exec(self) -> Command:
        if self.peek("("):
            return self.block()
        ecmd = ExecCmd()
        ret = self.redirs(ecmd)
        while not self.peek("|)&;"):
            kind, text = self.gettoken()
            if not kind:
                break
            if kind != "a":
                raise ShellSyntaxError("syntax")
            ecmd.argv.append(text)
            if len(ecmd.argv) >= MAXARGS:
                raise ShellSyntaxError("too many args")
            ret = self.redirs(ret)
        return ret


def parse_command(s: str) -> Command:
    """Parse one command line into a command tree."""
    parser = _Parser(s)
    cmd = parser.line()
    parser.peek("")
    if not parser.at_end():
        rest = parser.s[parser.pos:]
        raise ShellSyntaxError("syntax", leftover=rest)
    return cmd