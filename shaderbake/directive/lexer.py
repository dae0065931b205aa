"""Lexer for directive lists such as `hlsl, vert, I "inc", D N="2"`."""
from __future__ import annotations

import enum
import re
from collections.abc import Iterator
from dataclasses import dataclass

from shaderbake.errors import DirectiveSyntaxError


class TokenKind(enum.Enum):
    IDENT = "identifier"
    STRING = "string"
    NUMBER = "number"
    EQUALS = "'='"
    SEPARATOR = "','"


@dataclass(frozen=True, slots=True)
class Token:
    """One lexical token and where it starts in the directive text."""

    kind: TokenKind
    text: str
    offset: int

    @property
    def value(self) -> str:
        """The literal value; string tokens are unquoted and unescaped."""
        if self.kind is TokenKind.STRING:
            return _unescape(self.text[1:-1])
        return self.text


_TOKEN = re.compile(
    r"""
    (?P<ws>\s+)
    |(?P<string>"(?:[^"\\]|\\.)*")
    |(?P<number>[0-9][0-9A-Za-z_.]*)
    |(?P<ident>[A-Za-z_][A-Za-z0-9_]*)
    |(?P<equals>=)
    |(?P<separator>,)
    """,
    re.VERBOSE | re.DOTALL,
)

_KINDS = {
    "string": TokenKind.STRING,
    "number": TokenKind.NUMBER,
    "ident": TokenKind.IDENT,
    "equals": TokenKind.EQUALS,
    "separator": TokenKind.SEPARATOR,
}

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", '"': '"', "\\": "\\"}


def _unescape(body: str) -> str:
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), body, flags=re.DOTALL)


def tokenize(text: str) -> Iterator[Token]:
    """Split directive text into tokens, skipping whitespace.

    Raises:
        DirectiveSyntaxError: On a character no token can start with, or an
            unterminated string literal.
    """
    pos = 0
    index = 0
    while pos < len(text):
        m = _TOKEN.match(text, pos)
        if m is None:
            bad = text[pos:].split(None, 1)[0]
            what = "unterminated string literal" if bad.startswith('"') else "unexpected character"
            raise DirectiveSyntaxError(what, token=bad, index=index, offset=pos)
        group = m.lastgroup
        if group is not None and group != "ws":
            yield Token(_KINDS[group], m.group(), pos)
            index += 1
        pos = m.end()
