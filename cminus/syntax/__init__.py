"""
C-Minus Syntax Tree Package

Node classes for the parsed program handed to semantic analysis, plus an
indented tree listing for debugging.

Key Features:
- One class per node variant, grouped by category
- Ordered child slots and sibling-chained lists
- Explicit array/element type tables

Author: xwest
"""

from .ast_nodes import (
    ASTNode, NodeKind, ExpType, Operator,
    array_of, element_type, is_array, chain, iter_siblings,
    TypeSpecifier,
    Declaration, VariableDeclaration, ArrayDeclaration, FunctionDeclaration,
    Parameter, VoidParameter,
    Statement, CompoundStatement, IfStatement, IfElseStatement, WhileStatement,
    ReturnStatement,
    Expression, AssignExpression, BinaryExpression, ConstExpression,
    IdentifierExpression, CallExpression,
)
from .tree_printer import format_tree, print_tree, describe_node

__all__ = [
    # Types and helpers
    "ASTNode", "NodeKind", "ExpType", "Operator",
    "array_of", "element_type", "is_array", "chain", "iter_siblings",

    # Nodes
    "TypeSpecifier",
    "Declaration", "VariableDeclaration", "ArrayDeclaration", "FunctionDeclaration",
    "Parameter", "VoidParameter",
    "Statement", "CompoundStatement", "IfStatement", "IfElseStatement",
    "WhileStatement", "ReturnStatement",
    "Expression", "AssignExpression", "BinaryExpression", "ConstExpression",
    "IdentifierExpression", "CallExpression",

    # Listing
    "format_tree", "print_tree", "describe_node",
]
