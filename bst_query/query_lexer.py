"""Tokenizer for the query line.

Splits text such as ``build_tree([50, 30, -7], T).`` into names, numbers and
punctuation. Anything else becomes an ``OTHER`` token so that list elements
like ``abc`` or ``3x`` survive tokenizing and can be dropped later.
"""

import re
from typing import List, NamedTuple

NAME = "NAME"
NUMBER = "NUMBER"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
LBRACKET = "LBRACKET"
RBRACKET = "RBRACKET"
COMMA = "COMMA"
OTHER = "OTHER"

_TOKEN_RE = re.compile(
    r"""
    (?P<NUMBER>[-+]?\d+(?:\.\d+)?(?![\w.]))
    |(?P<NAME>[A-Za-z_][A-Za-z0-9_]*)
    |(?P<LPAREN>\()
    |(?P<RPAREN>\))
    |(?P<LBRACKET>\[)
    |(?P<RBRACKET>\])
    |(?P<COMMA>[,，])
    |(?P<WS>\s+)
    |(?P<OTHER>[^\s()\[\],，]+)
    """,
    re.VERBOSE,
)

_INT_RE = re.compile(r"[-+]?\d+")
_TRAILING_PERIOD_RE = re.compile(r"\.\s*$")


class Token(NamedTuple):
    kind: str
    text: str
    pos: int


def normalize(text: str) -> str:
    """Strip surrounding whitespace and one trailing period."""
    return _TRAILING_PERIOD_RE.sub("", text.strip()).strip()


def tokenize(text: str) -> List[Token]:
    tokens = []
    for match in _TOKEN_RE.finditer(text):
        kind = match.lastgroup
        if kind == "WS":
            continue
        tokens.append(Token(kind, match.group(), match.start()))
    return tokens


def is_integer_literal(token: Token) -> bool:
    return token.kind == NUMBER and _INT_RE.fullmatch(token.text) is not None
