"""
Pass 2: type checking.

Re-walks the tree over the scopes built by the declaration pass. Entry
actions re-enter the scope recorded on each function and block node; exit
actions resolve references against the now complete symbol table, annotate
every expression with its type and record each rule violation.

Type rules:
- Operands of arithmetic and relational operators are ``int``
- Indexing needs an ``int[]`` base and an ``int`` index; the result is ``int``
- Call arguments match the callee's parameters in number and type
- Both sides of an assignment have the same type
- ``if`` and ``while`` conditions are ``int``
- ``return`` agrees with the enclosing function's return type
- Variables are never ``void`` or ``void[]``

An operand that is already ``unresolved`` carries its own diagnostic, so
the checks consuming it are skipped.

Author: xwest
"""

import logging
from typing import Optional

from ..syntax.ast_nodes import (
    ASTNode, ArrayDeclaration, AssignExpression, BinaryExpression, CallExpression,
    CompoundStatement, ConstExpression, ExpType, FunctionDeclaration,
    IdentifierExpression, IfElseStatement, IfStatement, NodeKind, ReturnStatement,
    VariableDeclaration, VoidParameter, WhileStatement,
)
from .context import AnalysisContext
from .errors import ErrorKind
from .scopes import GLOBAL_SCOPE_NAME
from .symbol_table import Symbol
from .walker import traverse

logger = logging.getLogger(__name__)

UNRESOLVED = ExpType.UNRESOLVED


class TypeChecker:
    """Scope-tracking entry actions and validating exit actions of pass 2."""

    def __init__(self, context: AnalysisContext):
        self.context = context

    def run(self, tree: Optional[ASTNode]) -> None:
        """Type check every node reachable from ``tree``."""
        scopes = self.context.scopes
        scopes.activate(scopes.find(GLOBAL_SCOPE_NAME))
        traverse(tree, self.enter, self.exit)

    # ========================================================================
    # Entry actions
    # ========================================================================

    def enter(self, node: ASTNode) -> None:
        if isinstance(node, (FunctionDeclaration, CompoundStatement)):
            self.context.scopes.activate(node.scope_id)

    # ========================================================================
    # Exit actions
    # ========================================================================

    def exit(self, node: ASTNode) -> None:
        if isinstance(node, ConstExpression):
            node.type = ExpType.INTEGER
        elif isinstance(node, BinaryExpression):
            self._check_binary(node)
        elif isinstance(node, IdentifierExpression):
            self._check_identifier(node)
        elif isinstance(node, CallExpression):
            self._check_call(node)
        elif isinstance(node, AssignExpression):
            self._check_assignment(node)
        elif isinstance(node, (IfStatement, IfElseStatement, WhileStatement)):
            self._check_condition(node)
        elif isinstance(node, ReturnStatement):
            self._check_return(node)
        elif isinstance(node, (VariableDeclaration, ArrayDeclaration)):
            self._check_storage(node)
        elif isinstance(node, CompoundStatement):
            self.context.scopes.close()
        elif isinstance(node, VoidParameter):
            node.type = ExpType.VOID

        if node.kind == NodeKind.STATEMENT:
            node.type = ExpType.VOID

    def _check_binary(self, node: BinaryExpression) -> None:
        node.type = ExpType.INTEGER
        operands = (node.left.type, node.right.type)
        if UNRESOLVED in operands:
            return
        if any(operand != ExpType.INTEGER for operand in operands):
            self.context.report(ErrorKind.INVALID_OPERATION, node.lineno)

    def _check_identifier(self, node: IdentifierExpression) -> None:
        symbol = self._resolve(node)
        if symbol is None:
            node.type = UNRESOLVED
            self.context.report(ErrorKind.UNDECLARED_VARIABLE, node.lineno, node.name)
            return

        if not node.is_indexed:
            node.type = symbol.type
            return

        if symbol.type != ExpType.INTEGER_ARRAY:
            self.context.report(ErrorKind.ARRAY_INDEX_ON_SCALAR, node.lineno, node.name)
        index_type = node.index.type
        if index_type != UNRESOLVED and index_type != ExpType.INTEGER:
            self.context.report(ErrorKind.NON_INTEGER_INDEX, node.lineno, node.name)
        node.type = ExpType.INTEGER

    def _check_call(self, node: CallExpression) -> None:
        symbol = self._resolve(node)
        if symbol is None:
            node.type = UNRESOLVED
            self.context.report(ErrorKind.UNDECLARED_FUNCTION, node.lineno, node.name)
            return

        if not symbol.is_function:
            node.type = UNRESOLVED
            self.context.report(ErrorKind.INVALID_CALL, node.lineno, node.name)
            return

        node.type = symbol.type
        param_types = symbol.parameter_types()
        arg_types = [arg.type for arg in node.arguments()]
        if len(param_types) != len(arg_types) or any(
            arg != UNRESOLVED and arg != param
            for param, arg in zip(param_types, arg_types)
        ):
            self.context.report(ErrorKind.INVALID_CALL, node.lineno, node.name)

    def _check_assignment(self, node: AssignExpression) -> None:
        target_type = node.target.type
        value_type = node.value.type
        node.type = target_type
        if UNRESOLVED in (target_type, value_type):
            return
        if target_type != value_type:
            self.context.report(ErrorKind.INVALID_ASSIGNMENT, node.lineno)

    def _check_condition(self, node) -> None:
        condition_type = node.condition.type
        if condition_type != UNRESOLVED and condition_type != ExpType.INTEGER:
            self.context.report(ErrorKind.INVALID_CONDITION, node.lineno)

    def _check_return(self, node: ReturnStatement) -> None:
        scopes = self.context.scopes
        function = scopes.enclosing_function(scopes.active)
        if function is None:
            return

        expected = function.return_type
        if node.value is None:
            valid = expected == ExpType.VOID
        elif expected == ExpType.VOID:
            valid = False
        else:
            valid = node.value.type in (expected, UNRESOLVED)

        if not valid:
            self.context.report(ErrorKind.INVALID_RETURN, node.lineno)

    def _check_storage(self, node) -> None:
        if node.type in (ExpType.VOID, ExpType.VOID_ARRAY):
            self.context.report(ErrorKind.VOID_VARIABLE, node.lineno, node.name)

    def _resolve(self, node) -> Optional[Symbol]:
        """Resolve a reference in the active scope, recording first-time uses."""
        symbols = self.context.symbols
        symbol_id = symbols.lookup_chained(self.context.scopes.active, node.name)
        if symbol_id is None:
            return None

        if node.symbol_id is None:
            symbols.add_reference(symbol_id, node.lineno)
        node.symbol_id = symbol_id
        return symbols.symbol(symbol_id)


def type_check(tree: Optional[ASTNode], context: AnalysisContext) -> None:
    """Run the type checking pass over ``tree``."""
    logger.debug("type checking")
    TypeChecker(context).run(tree)
