import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from bst.bst_model import BSTModel, BSTNode
from bst_query import query_lexer, query_parser, query_shapes
from bst_query.history import CommandHistory
from bst_query.query_errors import QueryArgumentError, QueryError, QueryErrorKind

logger = logging.getLogger(__name__)


class Outcome(Enum):
    TRUE = "true"
    FALSE = "false"
    ERROR = "error"


SEARCH_ANIMATION = "search"
TRAVERSAL_ANIMATION = "traversal"


@dataclass
class QueryResult:
    """
    What a query produced. ``outcome`` separates a negative answer
    (``FALSE``) from a query that could not run (``ERROR``).
    """

    outcome: Outcome
    output: str
    update_tree: bool = False
    error: Optional[QueryErrorKind] = None
    highlight: List[BSTNode] = field(default_factory=list)
    animation: Optional[str] = None
    found: bool = False

    @property
    def success(self) -> bool:
        return self.outcome is Outcome.TRUE

    @property
    def executed(self) -> bool:
        return self.outcome is not Outcome.ERROR


def _true(body: str, **kwargs) -> QueryResult:
    return QueryResult(Outcome.TRUE, f"true.\n\n{body}", **kwargs)


def _false(body: str, **kwargs) -> QueryResult:
    return QueryResult(Outcome.FALSE, f"false.\n\n{body}", **kwargs)


def _error(kind: QueryErrorKind, body: str) -> QueryResult:
    return QueryResult(Outcome.ERROR, f"Error: {body}", error=kind)


def _format_list(values) -> str:
    return "[" + ", ".join(str(v) for v in values) + "]"


def unknown_command_help() -> str:
    lines = ["Unknown query or syntax error.", "", "Supported queries:"]
    lines.extend(f"- {usage}" for usage in query_shapes.supported_usages())
    return "\n".join(lines)


class QueryInterpreter:
    """
    Maps one query line onto one ``BSTModel`` operation.

    The model is mutated completely before ``execute`` returns; the
    highlight list in the result is only for playback afterwards.
    """

    def __init__(self, model: BSTModel):
        self.model = model
        self._handlers: Dict[str, Callable[..., QueryResult]] = {
            "clear": self._clear,
            "build_tree": self._build_tree,
            "insert": self._insert,
            "delete": self._delete,
            "lookup": self._lookup,
            "inorder": self._traversal("inorder"),
            "preorder": self._traversal("preorder"),
            "postorder": self._traversal("postorder"),
            "is_valid_bst": self._is_valid_bst,
            "size": self._measure(self.model.size),
            "height": self._measure(self.model.height),
            "count_leaves": self._measure(self.model.count_leaves),
            "find_min": self._extreme(self.model.find_min),
            "find_max": self._extreme(self.model.find_max),
        }

    def execute(self, query: str) -> QueryResult:
        text = query_lexer.normalize(query or "")
        if not text:
            return _error(QueryErrorKind.EMPTY_INPUT, "Empty query")

        try:
            call = query_parser.parse(text)
            shape, args = query_shapes.bind(call)
        except QueryArgumentError as exc:
            body = exc.message
            if exc.usage:
                body += f"\n\nUsage: {exc.usage}"
            return _error(exc.kind, body)
        except QueryError as exc:
            logger.debug("Unrecognized query %r: %s", text, exc.message)
            return _error(exc.kind, unknown_command_help())

        result = self._handlers[shape.name](*args)
        logger.debug("Executed %s%r -> %s", shape.name, tuple(args), result.outcome.value)
        return result

    # ---------- Handlers ----------

    def _tree_term(self) -> str:
        return "nil" if self.model.is_empty else "tree(...)"

    def _clear(self):
        self.model.clear()
        return _true("Tree cleared.", update_tree=True)

    def _build_tree(self, values, tree_var):
        if not values:
            return _error(QueryErrorKind.INVALID_ARGUMENT, "No valid values provided")
        self.model.build(values)
        return _true(
            f"Tree built with values: {_format_list(values)}\n"
            f"{tree_var} = tree({self.model.root.value}, ...)",
            update_tree=True,
        )

    def _insert(self, value, tree_var):
        if not self.model.insert(value):
            return _true(
                f"Value {value} already in tree (duplicate rejected).\n{tree_var} = {self._tree_term()}"
            )
        return _true(
            f"Inserted {value} into tree.\n{tree_var} = {self._tree_term()}",
            update_tree=True,
        )

    def _delete(self, value, tree_var):
        if not self.model.delete(value):
            return _false(f"Value {value} not found in tree.")
        return _true(
            f"Deleted {value} from tree.\n{tree_var} = {self._tree_term()}",
            update_tree=True,
        )

    def _lookup(self, value, _tree_var):
        found, path = self.model.search(value)
        kwargs = dict(update_tree=True, highlight=path, animation=SEARCH_ANIMATION, found=found)
        if found:
            return _true(f"Value {value} found in tree!", **kwargs)
        return _false(f"Value {value} not found in tree.", **kwargs)

    def _traversal(self, order):
        def handler(_tree_var, list_var):
            values, nodes = self.model.traverse(order)
            if not nodes:
                return _true(f"{list_var} = []")
            return _true(
                f"{list_var} = {_format_list(values)}",
                update_tree=True,
                highlight=nodes,
                animation=TRAVERSAL_ANIMATION,
            )

        return handler

    def _is_valid_bst(self, _tree_var):
        if self.model.is_valid_bst():
            return _true("The tree is a valid BST.")
        return _false("The tree is NOT a valid BST.")

    @staticmethod
    def _measure(query):
        def handler(_tree_var, out_var):
            return _true(f"{out_var} = {query()}")

        return handler

    def _extreme(self, query):
        def handler(_tree_var, out_var):
            if self.model.is_empty:
                return _error(QueryErrorKind.EMPTY_TREE, "Tree is empty")
            return _true(f"{out_var} = {query().value}")

        return handler


class QuerySession:
    """One interactive session: a tree, its interpreter and the query history."""

    def __init__(self, model: Optional[BSTModel] = None, history: Optional[CommandHistory] = None):
        self.model = model if model is not None else BSTModel()
        self.interpreter = QueryInterpreter(self.model)
        self.history = history if history is not None else CommandHistory()

    def run(self, query: str) -> QueryResult:
        query = (query or "").strip()
        if query:
            self.history.add(query)
        result = self.interpreter.execute(query)
        if result.update_tree:
            # A redrawn tree starts without stale selection or search marks.
            self.model.clear_highlights()
        if result.outcome is Outcome.ERROR:
            logger.info("Query %r failed: %s", query, result.error.value)
        return result
