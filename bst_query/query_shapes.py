"""Command shape table.

Each supported command is described by its keyword, any aliases, and the
kind of every positional argument. Adding a command means adding a row
here plus a handler in the interpreter.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from bst_query import query_lexer as lx
from bst_query.query_errors import QueryArgumentError, QuerySyntaxError
from bst_query.query_parser import Arg, Call

INT = "int"
VAR = "var"
INT_LIST = "int_list"


@dataclass(frozen=True)
class CommandShape:
    name: str
    arg_kinds: Tuple[str, ...]
    usage: str
    aliases: Tuple[str, ...] = ()
    parens_optional: bool = False


SHAPES: Tuple[CommandShape, ...] = (
    CommandShape("build_tree", (INT_LIST, VAR), "build_tree([values], T)"),
    CommandShape("insert", (INT, VAR), "insert(value, T)"),
    CommandShape("delete", (INT, VAR), "delete(value, T)"),
    CommandShape("lookup", (INT, VAR), "lookup(value, T)"),
    CommandShape("inorder", (VAR, VAR), "inorder(T, L)"),
    CommandShape("preorder", (VAR, VAR), "preorder(T, L)"),
    CommandShape("postorder", (VAR, VAR), "postorder(T, L)"),
    CommandShape("is_valid_bst", (VAR,), "is_valid_bst(T)"),
    CommandShape("size", (VAR, VAR), "size(T, N)"),
    CommandShape("height", (VAR, VAR), "height(T, H)"),
    CommandShape("find_min", (VAR, VAR), "find_min(T, Min)"),
    CommandShape("find_max", (VAR, VAR), "find_max(T, Max)"),
    CommandShape("count_leaves", (VAR, VAR), "count_leaves(T, Count)"),
    CommandShape("clear", (), "clear", aliases=("clear_tree",), parens_optional=True),
)

_BY_NAME: Dict[str, CommandShape] = {}
for _shape in SHAPES:
    _BY_NAME[_shape.name] = _shape
    for _alias in _shape.aliases:
        _BY_NAME[_alias] = _shape


def find_shape(name: str) -> CommandShape:
    shape = _BY_NAME.get(name.lower())
    if shape is None:
        raise QuerySyntaxError(f"unknown command {name!r}")
    return shape


def supported_usages() -> List[str]:
    return [shape.usage for shape in SHAPES]


def bind(call: Call) -> Tuple[CommandShape, list]:
    """
    Check ``call`` against its shape and convert the arguments.

    INT arguments become ``int``, VAR arguments stay as the placeholder name
    the user typed, INT_LIST arguments become a list of the elements that
    parse as integers (the rest are dropped).
    """
    shape = find_shape(call.name)
    if not call.has_parens and not shape.parens_optional:
        raise QueryArgumentError(f"{shape.name} expects arguments", shape.usage)
    if len(call.args) != len(shape.arg_kinds):
        raise QueryArgumentError(
            f"{shape.name} expects {len(shape.arg_kinds)} argument(s), got {len(call.args)}",
            shape.usage,
        )
    values = [
        _convert(arg, kind, position, shape)
        for position, (arg, kind) in enumerate(zip(call.args, shape.arg_kinds), start=1)
    ]
    return shape, values


def _convert(arg: Arg, kind: str, position: int, shape: CommandShape):
    if kind == INT_LIST:
        if not arg.is_list:
            raise QueryArgumentError(f"argument {position} must be a list, got {arg.text}", shape.usage)
        return [
            int(item[0].text)
            for item in arg.items
            if len(item) == 1 and lx.is_integer_literal(item[0])
        ]

    tok = arg.single
    if kind == INT:
        if tok is None or not lx.is_integer_literal(tok):
            raise QueryArgumentError(f"argument {position} must be an integer, got {arg.text}", shape.usage)
        return int(tok.text)

    if tok is None or tok.kind != lx.NAME:
        raise QueryArgumentError(f"argument {position} must be a variable, got {arg.text}", shape.usage)
    return tok.text
