"""A small TIS-100 style machine with one accumulator and a backup register."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, TextIO

from .errors import ProgramError

MAX_LABELS = 100
MAX_LINES = 1024
MAX_LABEL_LEN = 32

_LINE_LIMIT = 127
_FIELD_RE = re.compile(r"[ \t\n\v\f\r]*([^ \t\n\v\f\r]{1,15})")
_INT_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


class Token(IntEnum):
    """Keywords, each valued as its characters read as a little-endian integer."""

    ACC = 0x00636361
    MOV = 0x00766F6D
    SAV = 0x00766173
    SWP = 0x00707773
    INPT = 0x74706E69
    NIL = 0x006C696E
    NOP = 0x00706F6E
    ADD = 0x00646461
    SUB = 0x00627573
    NEG = 0x0067656E
    JMP = 0x00706D6A
    JEZ = 0x007A656A
    JNZ = 0x007A6E6A
    JGZ = 0x007A676A
    JLZ = 0x007A6C6A
    JRO = 0x006F726A
    OUT = 0x0074756F
    COMMENT = 0x00000023


_WORDS = {token.name.lower(): token for token in Token if token is not Token.COMMENT}
_WORDS["#"] = Token.COMMENT


def str_to_token(text):
    """Return the keyword token for ``text``, or None if it is not a keyword."""
    return _WORDS.get(text)


def _scan_fields(text, count=3):
    """Split ``text`` into at most ``count`` fields of up to 15 characters each."""
    fields = []
    pos = 0
    while len(fields) < count:
        match = _FIELD_RE.match(text, pos)
        if not match:
            break
        fields.append(match.group(1))
        pos = match.end()
    return fields


def _atoi(text):
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


@dataclass
class Label:
    """A named position: the 1-based line on which the label is defined."""

    name: str
    line: int


@dataclass
class Emulator:
    """Machine state together with the loaded program."""

    filename: str = ""
    inpt: int = 0
    debug: bool = False
    color: bool = False
    acc: int = 0
    bak: int = 0
    pc: int = 0
    line: int = 1
    lines: list[str] = field(default_factory=list)
    labels: list[Label] = field(default_factory=list)
    stdout: TextIO | None = field(default=None, repr=False)
    stderr: TextIO | None = field(default=None, repr=False)

    @property
    def _out(self):
        return self.stdout if self.stdout is not None else sys.stdout

    @property
    def _err(self):
        return self.stderr if self.stderr is not None else sys.stderr

    def get_register(self, name):
        """Return the value of a readable register, or None for nil and non-registers."""
        return {"acc": self.acc, "bak": self.bak, "inpt": self.inpt}.get(name)

    def parse_labels(self, lines: Iterable[str]):
        """Record every ``name:`` found in ``lines`` with its 1-based line number."""
        for number, text in enumerate(lines, start=1):
            head, colon, _ = text.partition(":")
            if not colon:
                continue
            words = head.split()
            if words and len(self.labels) < MAX_LABELS:
                self.labels.append(Label(words[0][: MAX_LABEL_LEN - 1], number))

    def find_label_line(self, name):
        """Return the line a label is defined on, or None if it is unknown."""
        return next((label.line for label in self.labels if label.name == name), None)

    def load_program(self, lines: Iterable[str]):
        """Store the program lines with comments removed, up to the line limit."""
        self.lines = []
        for text in lines:
            if len(self.lines) >= MAX_LINES:
                break
            self.lines.append(text.partition("#")[0])

    def load(self, text):
        """Load a whole program from its source text."""
        lines = text.splitlines(keepends=True)
        self.parse_labels(lines)
        self.load_program(lines)

    def _error(self, message):
        return ProgramError(self.filename, self.line, message)

    def _report(self, message):
        self._err.write(self._error(message).format(self.color) + "\n")

    def _jump(self, fields):
        if len(fields) < 2:
            self._report("jmp requires a label")
            return
        target = self.find_label_line(fields[1])
        if target is None:
            self._report(f"unknown label '{fields[1]}'")
        else:
            self.pc = target - 1

    def _value(self, operand):
        value = self.get_register(operand)
        return _atoi(operand) if value is None else value

    def _mov(self, fields):
        if len(fields) != 3:
            raise self._error("mov requires two arguments")
        _, source, dest = fields
        dest_token = str_to_token(dest)
        if dest_token is Token.NIL:
            raise self._error("invalid mov: cannot write to 'nil'")
        if dest_token not in (Token.ACC, Token.OUT):
            raise self._error("invalid mov: destination must be 'acc'")
        value = 0 if source == "nil" else self._value(source)
        if dest_token is Token.ACC:
            self.acc = value
        else:
            self._out.write(f"{value}\n")

    def exec_line(self, text):
        """Execute one line.

        Returns False when the line is empty, which halts the program, and True
        otherwise. Raises ProgramError for a malformed instruction.
        """
        text = text[:_LINE_LIMIT].partition("#")[0]
        fields = _scan_fields(text)
        if not fields:
            return False
        op = fields[0]
        if op.endswith(":"):
            return True

        token = str_to_token(op)
        if token is Token.MOV:
            self._mov(fields)
        elif token is Token.SAV:
            self.bak = self.acc
        elif token is Token.SWP:
            self.acc, self.bak = self.bak, self.acc
        elif token is Token.COMMENT:
            pass
        elif token is Token.NOP:
            self.acc = 0
        elif token in (Token.ADD, Token.SUB):
            if len(fields) != 2:
                raise self._error(f"{op} requires one argument")
            value = self._value(fields[1])
            self.acc += value if token is Token.ADD else -value
        elif token is Token.NEG:
            self.acc = -self.acc
        elif token is Token.JMP:
            self._jump(fields)
        elif token is Token.JEZ:
            if self.acc == 0:
                self._jump(fields)
        elif token is Token.JNZ:
            if self.acc != 0:
                self._jump(fields)
        elif token is Token.JGZ:
            if self.acc > 0:
                self._jump(fields)
        elif token is Token.JLZ:
            if self.acc < 0:
                self._jump(fields)
        elif token is Token.JRO:
            if len(fields) < 2:
                raise self._error("jro requires one argument")
            # The run loop advances pc after every line.
            self.pc += self._value(fields[1]) - 1
        else:
            raise self._error(f"unknown instruction '{op}'")

        self.line = self.pc
        return True

    def debug_message(self):
        """Return a dump of the machine registers."""
        label = "\033[1;36m" if self.color else ""
        value = "\033[1;33m" if self.color else ""
        reset = "\033[0m" if self.color else ""
        rows = [
            ("line:", self.line),
            ("pc  :", self.pc),
            ("inpt:", self.inpt),
            ("acc :", self.acc),
            ("bak :", self.bak),
        ]
        parts = [f"{label}[DEBUG INFO]{reset}\n"]
        parts.extend(f"{label}{name}{reset}  {value}{number}{reset}\n" for name, number in rows)
        parts.append(f"{label}-------------------{reset}\n")
        return "".join(parts)

    def run(self):
        """Execute the loaded program until it ends or reaches an empty line."""
        while self.pc < len(self.lines):
            if self.pc < 0:
                raise self._error("program counter out of range")
            if not self.exec_line(self.lines[self.pc]):
                break
            if self.debug:
                self._out.write(self.debug_message())
            self.pc += 1