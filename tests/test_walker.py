"""
Tests for the generic tree traversal.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from cminus.syntax.ast_nodes import (
    AssignExpression, BinaryExpression, CompoundStatement, ConstExpression,
    ExpType, FunctionDeclaration, IdentifierExpression, Operator, ReturnStatement,
    TypeSpecifier, VariableDeclaration, VoidParameter, chain,
)
from cminus.analyzer.walker import traverse


def label(node):
    return getattr(node, "name", None) or node.__class__.__name__


class TestTraverse(unittest.TestCase):
    """Test cases for pre/post order callbacks."""

    def setUp(self):
        """Set up test fixtures."""
        self.events = []

    def on_enter(self, node):
        self.events.append(("enter", label(node)))

    def on_exit(self, node):
        self.events.append(("exit", label(node)))

    def test_empty_tree(self):
        """Traversing nothing calls nothing."""
        traverse(None, self.on_enter, self.on_exit)
        self.assertEqual(self.events, [])

    def test_children_before_exit(self):
        """A node is exited only after all of its children."""
        expr = BinaryExpression(Operator.PLUS, IdentifierExpression("a"), ConstExpression(1))

        traverse(expr, self.on_enter, self.on_exit)

        self.assertEqual(self.events, [
            ("enter", "BinaryExpression"),
            ("enter", "a"),
            ("exit", "a"),
            ("enter", "ConstExpression"),
            ("exit", "ConstExpression"),
            ("exit", "BinaryExpression"),
        ])

    def test_siblings_after_node_is_finished(self):
        """Siblings are visited after the node's own subtree."""
        tree = chain(
            VariableDeclaration("x", TypeSpecifier(ExpType.INTEGER)),
            VariableDeclaration("y", TypeSpecifier(ExpType.INTEGER)),
        )

        traverse(tree, self.on_enter, self.on_exit)

        self.assertEqual(self.events, [
            ("enter", "x"),
            ("enter", "TypeSpecifier"),
            ("exit", "TypeSpecifier"),
            ("exit", "x"),
            ("enter", "y"),
            ("enter", "TypeSpecifier"),
            ("exit", "TypeSpecifier"),
            ("exit", "y"),
        ])

    def test_absent_children_are_skipped(self):
        """Missing optional children (a bare return) are not visited."""
        traverse(ReturnStatement(), self.on_enter, self.on_exit)

        self.assertEqual(self.events, [
            ("enter", "ReturnStatement"),
            ("exit", "ReturnStatement"),
        ])

    def test_enter_and_exit_are_balanced(self):
        """Every entered node is exited exactly once, in nested order."""
        body = CompoundStatement(
            declarations=[VariableDeclaration("x", TypeSpecifier(ExpType.INTEGER))],
            statements=[
                AssignExpression(IdentifierExpression("x"), ConstExpression(3)),
                CompoundStatement(statements=[ReturnStatement()]),
            ],
        )
        tree = FunctionDeclaration("main", TypeSpecifier(ExpType.VOID), VoidParameter(), body)

        traverse(tree, self.on_enter, self.on_exit)

        depth = 0
        for event, _ in self.events:
            depth += 1 if event == "enter" else -1
            self.assertGreaterEqual(depth, 0)
        self.assertEqual(depth, 0)
        self.assertEqual(self.events[0], ("enter", "main"))
        self.assertEqual(self.events[-1], ("exit", "main"))

    def test_deeply_nested_tree(self):
        """Depth is not limited by the recursion limit."""
        expr = ConstExpression(1)
        for _ in range(5000):
            expr = BinaryExpression(Operator.PLUS, expr, ConstExpression(1))

        traverse(expr, self.on_enter, self.on_exit)

        enters = [name for event, name in self.events if event == "enter"]
        self.assertEqual(len(enters), 10001)
        self.assertEqual(len(self.events), 20002)
        self.assertEqual(self.events[0], ("enter", "BinaryExpression"))
        self.assertEqual(self.events[-1], ("exit", "BinaryExpression"))
        # The innermost left operand is the first node finished
        self.assertEqual(self.events[5001], ("exit", "ConstExpression"))

    def test_default_actions(self):
        """Either callback may be omitted."""
        traverse(ConstExpression(1), on_exit=self.on_exit)
        self.assertEqual(self.events, [("exit", "ConstExpression")])


if __name__ == '__main__':
    unittest.main()
