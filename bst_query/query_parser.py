from dataclasses import dataclass, field
from typing import List, Optional

from bst_query import query_lexer as lx
from bst_query.query_errors import QuerySyntaxError


@dataclass
class Arg:
    """
    One call argument. ``tokens`` holds the raw tokens of a scalar argument;
    for a bracketed list, ``items`` holds the tokens of each comma-separated
    element instead.
    """

    tokens: List[lx.Token] = field(default_factory=list)
    items: Optional[List[List[lx.Token]]] = None

    @property
    def is_list(self) -> bool:
        return self.items is not None

    @property
    def text(self) -> str:
        if self.is_list:
            return "[" + ", ".join(_join(item) for item in self.items) + "]"
        return _join(self.tokens)

    @property
    def single(self) -> Optional[lx.Token]:
        if self.is_list or len(self.tokens) != 1:
            return None
        return self.tokens[0]


@dataclass
class Call:
    name: str
    args: List[Arg]
    has_parens: bool = True


def _join(tokens):
    return "".join(tok.text for tok in tokens)


class _Parser:
    def __init__(self, tokens: List[lx.Token]):
        self.tokens = tokens
        self.index = 0

    def peek(self) -> Optional[lx.Token]:
        return self.tokens[self.index] if self.index < len(self.tokens) else None

    def take(self, kind=None) -> lx.Token:
        tok = self.peek()
        if tok is None:
            raise QuerySyntaxError("unexpected end of query")
        if kind is not None and tok.kind != kind:
            raise QuerySyntaxError(f"unexpected {tok.text!r} at column {tok.pos + 1}")
        self.index += 1
        return tok

    def parse_call(self) -> Call:
        name = self.take(lx.NAME).text.lower()
        if self.peek() is None:
            return Call(name, [], has_parens=False)

        self.take(lx.LPAREN)
        args: List[Arg] = []
        if self.peek() is not None and self.peek().kind == lx.RPAREN:
            self.take()
        else:
            while True:
                args.append(self.parse_arg())
                tok = self.take()
                if tok.kind == lx.RPAREN:
                    break
                if tok.kind != lx.COMMA:
                    raise QuerySyntaxError(f"unexpected {tok.text!r} at column {tok.pos + 1}")

        trailing = self.peek()
        if trailing is not None:
            raise QuerySyntaxError(f"unexpected {trailing.text!r} at column {trailing.pos + 1}")
        return Call(name, args)

    def parse_arg(self) -> Arg:
        tok = self.peek()
        if tok is not None and tok.kind == lx.LBRACKET:
            return Arg(items=self.parse_list())
        tokens = []
        while self.peek() is not None and self.peek().kind not in (lx.COMMA, lx.RPAREN):
            if self.peek().kind in (lx.LPAREN, lx.LBRACKET, lx.RBRACKET):
                bad = self.peek()
                raise QuerySyntaxError(f"unexpected {bad.text!r} at column {bad.pos + 1}")
            tokens.append(self.take())
        if not tokens:
            raise QuerySyntaxError("missing argument")
        return Arg(tokens=tokens)

    def parse_list(self) -> List[List[lx.Token]]:
        self.take(lx.LBRACKET)
        items: List[List[lx.Token]] = []
        current: List[lx.Token] = []
        while True:
            tok = self.take()
            if tok.kind == lx.RBRACKET:
                if current or items:
                    items.append(current)
                return items
            if tok.kind == lx.COMMA:
                items.append(current)
                current = []
            elif tok.kind in (lx.LBRACKET, lx.LPAREN, lx.RPAREN):
                raise QuerySyntaxError(f"unexpected {tok.text!r} at column {tok.pos + 1}")
            else:
                current.append(tok)


def parse(text: str) -> Call:
    """Parse one normalized query line into a call. Raises QuerySyntaxError."""
    tokens = lx.tokenize(text)
    if not tokens:
        raise QuerySyntaxError("empty query")
    return _Parser(tokens).parse_call()
