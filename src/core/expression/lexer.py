"""
Lexer — разбиение текста выражения на токены.

Токены:
- NUMBER: 12, 3.5, .5, 1e-3, 2.5E+4
- IDENT: x, pi, sin, log10
- OP: + - * / ^
- LPAREN / RPAREN / COMMA
- EOF: маркер конца ввода (всегда последний)
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List

from src.core.expression.errors import CompilationError


class TokenKind(str, Enum):
    """Вид токена."""

    NUMBER = "NUMBER"
    IDENT = "IDENT"
    OP = "OP"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    COMMA = "COMMA"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: int


_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
    | (?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)
    | (?P<ident>[A-Za-z_][A-Za-z_0-9]*)
    | (?P<op>[-+*/^])
    | (?P<lparen>\()
    | (?P<rparen>\))
    | (?P<comma>,)
    """,
    re.VERBOSE,
)

_GROUP_KINDS = {
    "number": TokenKind.NUMBER,
    "ident": TokenKind.IDENT,
    "op": TokenKind.OP,
    "lparen": TokenKind.LPAREN,
    "rparen": TokenKind.RPAREN,
    "comma": TokenKind.COMMA,
}


def tokenize(expression: str) -> List[Token]:
    """
    Токенизация выражения.

    Args:
        expression: Текст выражения

    Returns:
        Список токенов, заканчивающийся EOF

    Raises:
        CompilationError: Если встречен символ вне грамматики
    """
    tokens: List[Token] = []
    pos = 0
    length = len(expression)

    while pos < length:
        match = _TOKEN_RE.match(expression, pos)
        if match is None:
            raise CompilationError(
                f"Unexpected character {expression[pos]!r}",
                expression=expression,
                position=pos,
            )

        group = match.lastgroup
        if group != "ws":
            tokens.append(Token(_GROUP_KINDS[group], match.group(), pos))
        pos = match.end()

    tokens.append(Token(TokenKind.EOF, "", length))
    return tokens
