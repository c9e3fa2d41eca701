"""
Indented listing of a C-Minus syntax tree.

One line per node, two spaces of indentation per nesting level. Type
specifiers are folded into the line of the declaration that owns them.

Author: xwest
"""

import itertools
import sys
from typing import Iterator, List, Optional, TextIO, Tuple

from .ast_nodes import (
    ASTNode, ArrayDeclaration, AssignExpression, BinaryExpression, CallExpression,
    CompoundStatement, ConstExpression, FunctionDeclaration, IdentifierExpression,
    IfElseStatement, IfStatement, NodeKind, Parameter, ReturnStatement, TypeSpecifier,
    VariableDeclaration, VoidParameter, WhileStatement, array_of, iter_siblings,
)

INDENT = "  "


def describe_node(node: ASTNode) -> str:
    """Return the one-line description of a single node."""
    if isinstance(node, VariableDeclaration):
        return f"Variable Declaration: name = {node.name}, type = {node.type_spec.base}"
    if isinstance(node, ArrayDeclaration):
        return (f"Variable Declaration: name = {node.name}, "
                f"type = {array_of(node.type_spec.base)}, size = {node.size}")
    if isinstance(node, FunctionDeclaration):
        return f"Function Declaration: name = {node.name}, return type = {node.return_type.base}"
    if isinstance(node, Parameter):
        if node.is_array:
            return f"Array Parameter: name = {node.name}, type = {array_of(node.type_spec.base)}"
        return f"Parameter: name = {node.name}, type = {node.type_spec.base}"
    if isinstance(node, VoidParameter):
        return "Void Parameter"
    if isinstance(node, CompoundStatement):
        return "Compound Statement:"
    if isinstance(node, IfElseStatement):
        return "If-Else Statement:"
    if isinstance(node, IfStatement):
        return "If Statement:"
    if isinstance(node, WhileStatement):
        return "While Statement:"
    if isinstance(node, ReturnStatement):
        return "Return Statement:"
    if isinstance(node, AssignExpression):
        return "Assign:"
    if isinstance(node, IdentifierExpression):
        return f"Variable: name = {node.name}"
    if isinstance(node, BinaryExpression):
        return f"Op: {node.operator}"
    if isinstance(node, ConstExpression):
        return f"Const: {node.value}"
    if isinstance(node, CallExpression):
        return f"Call: function name = {node.name}"
    if isinstance(node, TypeSpecifier):
        return f"Type: {node.base}"
    return f"Unknown node: {node.__class__.__name__}"


def _format(tree: Optional[ASTNode], lines: List[str], show_types: bool):
    # Each frame is a depth and the nodes still to be listed at that depth
    stack: List[Tuple[int, Iterator[ASTNode]]] = [(1, iter_siblings(tree))]
    while stack:
        depth, pending = stack[-1]
        current = next(pending, None)
        if current is None:
            stack.pop()
            continue
        if isinstance(current, TypeSpecifier):
            continue

        line = INDENT * depth + describe_node(current)
        if show_types and current.kind == NodeKind.EXPRESSION:
            line += f" [{current.type}]"
        lines.append(line)

        children = itertools.chain.from_iterable(
            iter_siblings(child) for child in current.children() if child is not None
        )
        stack.append((depth + 1, children))


def format_tree(tree: Optional[ASTNode], show_types: bool = False) -> str:
    """
    Render a tree (and all of its siblings) as an indented listing.

    Args:
        tree: Head of the top-level declaration chain
        show_types: Append each expression's resolved type in brackets

    Returns:
        The listing, one node per line
    """
    lines: List[str] = []
    _format(tree, lines, show_types)
    return "".join(line + "\n" for line in lines)


def print_tree(tree: Optional[ASTNode], stream: Optional[TextIO] = None,
               show_types: bool = False):
    """Write the tree listing to ``stream`` (standard output by default)."""
    (stream or sys.stdout).write(format_tree(tree, show_types=show_types))
