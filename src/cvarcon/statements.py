"""
Console statements and the line tokenizer.

A statement is one console invocation: a target name followed by argument
tokens. Lines are split on whitespace; a double-quoted segment keeps its
spaces and understands the escapes written by values.quote().
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

_ESCAPES = {'"': '"', "\\": "\\", "n": "\n", "r": "\r"}


@dataclass(frozen=True)
class Statement:
    """
    One parsed console invocation.

    Properties:
        argv: Tokens; argv[0] names the command or variable
    """

    argv: Tuple[str, ...] = ()

    @classmethod
    def of(cls, tokens: Iterable[str]) -> "Statement":
        return cls(tuple(tokens))

    @classmethod
    def parse(cls, line: str) -> "Statement":
        return cls(tuple(tokenize(line)))

    @property
    def argc(self) -> int:
        return len(self.argv)

    @property
    def name(self) -> str:
        return self.argv[0] if self.argv else ""

    @property
    def args(self) -> Tuple[str, ...]:
        return self.argv[1:]

    @property
    def text(self) -> str:
        return " ".join(self.argv)

    def extended(self, *tokens: str) -> "Statement":
        return Statement(self.argv + tuple(tokens))

    def __bool__(self) -> bool:
        return bool(self.argv)

    def __str__(self) -> str:
        return self.text


def tokenize(line: str) -> List[str]:
    """
    Split a console line into tokens.

    Examples:
        'video.width 640'          -> ['video.width', '640']
        'player.name "Jo Smith"'   -> ['player.name', 'Jo Smith']
        'x ""'                     -> ['x', '']

    An unterminated quote runs to the end of the line.
    """
    tokens: List[str] = []
    current: List[str] = []
    started = False
    in_quotes = False
    pos = 0

    while pos < len(line):
        ch = line[pos]
        if in_quotes:
            if ch == "\\" and pos + 1 < len(line) and line[pos + 1] in _ESCAPES:
                current.append(_ESCAPES[line[pos + 1]])
                pos += 2
                continue
            if ch == '"':
                in_quotes = False
            else:
                current.append(ch)
        elif ch == '"':
            in_quotes = True
            started = True
        elif ch.isspace():
            if started:
                tokens.append("".join(current))
                current = []
                started = False
        else:
            current.append(ch)
            started = True
        pos += 1

    if started:
        tokens.append("".join(current))
    return tokens


__all__ = ["Statement", "tokenize"]
