from enum import Enum


class QueryErrorKind(Enum):
    EMPTY_INPUT = "empty_input"
    UNKNOWN_COMMAND = "unknown_command"
    INVALID_ARGUMENT = "invalid_argument"
    EMPTY_TREE = "empty_tree"


class QueryError(Exception):
    """A query that could not run. Converted to an error result by the interpreter."""

    kind = QueryErrorKind.UNKNOWN_COMMAND

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class QuerySyntaxError(QueryError):
    kind = QueryErrorKind.UNKNOWN_COMMAND


class QueryArgumentError(QueryError):
    kind = QueryErrorKind.INVALID_ARGUMENT

    def __init__(self, message: str, usage: str = ""):
        super().__init__(message)
        self.usage = usage
