"""Query interpreter transcript and error-taxonomy tests.

Drives ``QueryInterpreter`` / ``QuerySession`` with query lines and checks
the outcome, transcript body and tree-changed flag of each result.
"""

from __future__ import annotations

import unittest

from bst_query.query_errors import QueryErrorKind
from bst_query.query_interp import (
    SEARCH_ANIMATION,
    TRAVERSAL_ANIMATION,
    Outcome,
    QueryInterpreter,
    QuerySession,
)
from bst.bst_model import BSTModel

BUILD = "build_tree([50,30,70,20,40,60,80], T)"


class InterpreterTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.model = BSTModel()
        self.interp = QueryInterpreter(self.model)

    def run_query(self, text):
        return self.interp.execute(text)


class BuildAndTraversalTests(InterpreterTestCase):
    def test_build_then_inorder_round_trip(self) -> None:
        built = self.run_query(BUILD)
        self.assertTrue(built.success)
        self.assertTrue(built.update_tree)
        self.assertEqual(
            built.output,
            "true.\n\nTree built with values: [50, 30, 70, 20, 40, 60, 80]\nT = tree(50, ...)",
        )

        result = self.run_query("inorder(T, L)")
        self.assertEqual(result.output, "true.\n\nL = [20, 30, 40, 50, 60, 70, 80]")
        self.assertEqual(result.animation, TRAVERSAL_ANIMATION)
        self.assertEqual([n.value for n in result.highlight], [20, 30, 40, 50, 60, 70, 80])

    def test_preorder_and_postorder(self) -> None:
        self.run_query(BUILD)
        self.assertEqual(self.run_query("preorder(T, L)").output, "true.\n\nL = [50, 30, 20, 40, 70, 60, 80]")
        self.assertEqual(self.run_query("postorder(T, L)").output, "true.\n\nL = [20, 40, 30, 60, 80, 70, 50]")

    def test_build_drops_non_numeric_values(self) -> None:
        result = self.run_query("build_tree([5, abc, 3, 2.5, 9x, -4], T)")
        self.assertTrue(result.success)
        self.assertIn("Tree built with values: [5, 3, -4]", result.output)
        self.assertEqual(self.model.inorder()[0], [-4, 3, 5])

    def test_build_with_no_valid_values_is_argument_error(self) -> None:
        for text in ("build_tree([a, b], T)", "build_tree([], T)"):
            result = self.run_query(text)
            self.assertEqual(result.outcome, Outcome.ERROR)
            self.assertEqual(result.error, QueryErrorKind.INVALID_ARGUMENT)
            self.assertEqual(result.output, "Error: No valid values provided")

    def test_build_replaces_existing_tree(self) -> None:
        self.run_query(BUILD)
        self.run_query("build_tree([1, 2], T)")
        self.assertEqual(self.model.inorder()[0], [1, 2])

    def test_traversal_of_empty_tree(self) -> None:
        result = self.run_query("inorder(T, L)")
        self.assertTrue(result.success)
        self.assertEqual(result.output, "true.\n\nL = []")
        self.assertFalse(result.update_tree)
        self.assertEqual(result.highlight, [])


class MutationTests(InterpreterTestCase):
    def test_insert_then_lookup(self) -> None:
        self.run_query(BUILD)
        inserted = self.run_query("insert(45, T)")
        self.assertEqual(inserted.output, "true.\n\nInserted 45 into tree.\nT = tree(...)")
        self.assertTrue(inserted.update_tree)

        hit = self.run_query("lookup(45, T)")
        self.assertTrue(hit.success)
        self.assertTrue(hit.found)
        self.assertEqual(hit.output, "true.\n\nValue 45 found in tree!")
        self.assertEqual(hit.animation, SEARCH_ANIMATION)
        self.assertEqual([n.value for n in hit.highlight], [50, 30, 40, 45])

        miss = self.run_query("lookup(999, T)")
        self.assertEqual(miss.outcome, Outcome.FALSE)
        self.assertTrue(miss.executed)
        self.assertFalse(miss.success)
        self.assertEqual(miss.output, "false.\n\nValue 999 not found in tree.")
        self.assertEqual([n.value for n in miss.highlight], [50, 70, 80])

    def test_duplicate_insert_is_reported_and_leaves_tree_alone(self) -> None:
        self.run_query(BUILD)
        result = self.run_query("insert(40, T)")
        self.assertTrue(result.success)
        self.assertFalse(result.update_tree)
        self.assertIn("duplicate rejected", result.output)
        self.assertEqual(self.model.size(), 7)

    def test_delete_present_and_missing(self) -> None:
        self.run_query(BUILD)
        deleted = self.run_query("delete(30, T)")
        self.assertTrue(deleted.success)
        self.assertIn("Deleted 30 from tree.", deleted.output)
        self.assertTrue(self.model.is_valid_bst())

        missing = self.run_query("delete(30, T)")
        self.assertEqual(missing.outcome, Outcome.FALSE)
        self.assertEqual(missing.output, "false.\n\nValue 30 not found in tree.")
        self.assertFalse(missing.update_tree)

    def test_negative_values_are_accepted_everywhere(self) -> None:
        self.assertTrue(self.run_query("insert(-5, T)").success)
        self.assertTrue(self.run_query("lookup(-5, T)").success)
        self.assertTrue(self.run_query("delete(-5, T)").success)
        self.assertTrue(self.model.is_empty)

    def test_clear_and_alias(self) -> None:
        for text in ("clear", "clear_tree", "clear().", "CLEAR"):
            self.run_query(BUILD)
            result = self.run_query(text)
            self.assertEqual(result.output, "true.\n\nTree cleared.")
            self.assertTrue(result.update_tree)
            self.assertTrue(self.model.is_empty)
        self.assertEqual(self.run_query("size(T, N)").output, "true.\n\nN = 0")
        self.assertEqual(self.run_query("inorder(T, L)").output, "true.\n\nL = []")


class MeasureTests(InterpreterTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.run_query(BUILD)

    def test_structural_queries(self) -> None:
        self.assertEqual(self.run_query("size(T, N)").output, "true.\n\nN = 7")
        self.assertEqual(self.run_query("height(T, H)").output, "true.\n\nH = 3")
        self.assertEqual(self.run_query("find_min(T, Min)").output, "true.\n\nMin = 20")
        self.assertEqual(self.run_query("find_max(T, Max)").output, "true.\n\nMax = 80")
        self.assertEqual(self.run_query("count_leaves(T, Count)").output, "true.\n\nCount = 4")

    def test_binding_uses_typed_placeholder_name(self) -> None:
        self.assertEqual(self.run_query("size(T, Total)").output, "true.\n\nTotal = 7")

    def test_is_valid_bst(self) -> None:
        self.assertEqual(self.run_query("is_valid_bst(T)").output, "true.\n\nThe tree is a valid BST.")
        self.model.root.left.value = 99
        result = self.run_query("is_valid_bst(T)")
        self.assertEqual(result.outcome, Outcome.FALSE)
        self.assertEqual(result.output, "false.\n\nThe tree is NOT a valid BST.")

    def test_min_max_on_empty_tree_is_error(self) -> None:
        self.run_query("clear")
        for text in ("find_min(T, Min)", "find_max(T, Max)"):
            result = self.run_query(text)
            self.assertEqual(result.outcome, Outcome.ERROR)
            self.assertFalse(result.executed)
            self.assertEqual(result.error, QueryErrorKind.EMPTY_TREE)
            self.assertEqual(result.output, "Error: Tree is empty")


class SurfaceSyntaxTests(InterpreterTestCase):
    def test_trailing_period_whitespace_and_case(self) -> None:
        result = self.run_query("  INSERT ( 7 ,  T ) .  ")
        self.assertTrue(result.success)
        self.assertTrue(self.model.contains(7))

    def test_empty_input(self) -> None:
        for text in ("", "   ", "."):
            result = self.run_query(text)
            self.assertEqual(result.error, QueryErrorKind.EMPTY_INPUT)
            self.assertEqual(result.output, "Error: Empty query")

    def test_unknown_command_lists_supported_shapes(self) -> None:
        self.run_query(BUILD)
        before = self.model.snapshot()
        result = self.run_query("foo(1)")
        self.assertEqual(result.outcome, Outcome.ERROR)
        self.assertEqual(result.error, QueryErrorKind.UNKNOWN_COMMAND)
        self.assertTrue(result.output.startswith("Error: Unknown query or syntax error."))
        for usage in ("- build_tree([values], T)", "- count_leaves(T, Count)", "- clear"):
            self.assertIn(usage, result.output)
        self.assertEqual(self.model.snapshot(), before)

    def test_garbled_syntax_is_unknown_command(self) -> None:
        for text in ("insert(5, T", "insert 5 T", "(5)", "size(T, N) extra"):
            self.assertEqual(self.run_query(text).error, QueryErrorKind.UNKNOWN_COMMAND, text)

    def test_wrong_argument_shape_is_argument_error(self) -> None:
        cases = (
            "insert(abc, T)",
            "insert(2.5, T)",
            "insert(5)",
            "delete(T, 5)",
            "size(T)",
            "inorder",
            "build_tree(5, T)",
            "is_valid_bst(3)",
        )
        for text in cases:
            result = self.run_query(text)
            self.assertEqual(result.error, QueryErrorKind.INVALID_ARGUMENT, text)
            self.assertIn("Usage:", result.output)
        self.assertTrue(self.model.is_empty)


class QuerySessionTests(unittest.TestCase):
    def test_run_records_history_most_recent_first(self) -> None:
        session = QuerySession()
        session.run(BUILD)
        session.run("  size(T, N)  ")
        session.run("")
        self.assertEqual(session.history.recent(), ["size(T, N)", BUILD])

    def test_session_owns_independent_tree(self) -> None:
        first, second = QuerySession(), QuerySession()
        first.run("insert(1, T)")
        self.assertFalse(first.model.is_empty)
        self.assertTrue(second.model.is_empty)

    def test_tree_change_drops_a_clicked_selection(self) -> None:
        session = QuerySession()
        session.run(BUILD)
        session.model.root.left.highlighted = True
        result = session.run("delete(30, T)")
        self.assertTrue(result.update_tree)
        # 30 had two children, so its node now holds the successor 40.
        self.assertEqual(session.model.root.left.value, 40)
        self.assertFalse(any(node.highlighted or node.found for node in session.model.nodes()))

    def test_read_only_query_keeps_a_clicked_selection(self) -> None:
        session = QuerySession()
        session.run(BUILD)
        session.model.root.right.highlighted = True
        session.run("size(T, N)")
        self.assertTrue(session.model.root.right.highlighted)


if __name__ == "__main__":
    unittest.main()
