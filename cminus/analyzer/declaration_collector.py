"""
Pass 1: declaration collection.

Walks the tree once, opening a scope for every function and every nested
block, inserting each declaration into the active scope and resolving the
references that are already visible. References that cannot be resolved yet
(a call to a function declared further down, for instance) are left for the
type checking pass, which sees the complete symbol table.

Author: xwest
"""

import logging
from typing import Optional

from ..syntax.ast_nodes import (
    ASTNode, ArrayDeclaration, CallExpression, CompoundStatement, ExpType,
    FunctionDeclaration, IdentifierExpression, Parameter, TypeSpecifier,
    VariableDeclaration, element_type, is_array,
)
from .context import AnalysisContext
from .errors import SymbolRedefinitionError
from .scopes import GLOBAL_SCOPE_NAME, ScopeKind
from .walker import traverse

logger = logging.getLogger(__name__)


class DeclarationCollector:
    """
    Entry-action visitor of the first pass.

    Populates the scope directory and symbol table held by the context.
    """

    def __init__(self, context: AnalysisContext):
        self.context = context

    def run(self, tree: Optional[ASTNode]) -> None:
        """Collect every declaration reachable from ``tree``."""
        traverse(tree, self.enter, self.exit)

    # ========================================================================
    # Entry actions
    # ========================================================================

    def enter(self, node: ASTNode) -> None:
        if isinstance(node, (VariableDeclaration, ArrayDeclaration, Parameter)):
            self._declare(node)
        elif isinstance(node, FunctionDeclaration):
            self._enter_function(node)
        elif isinstance(node, CompoundStatement):
            self._enter_compound(node)
        elif isinstance(node, (IdentifierExpression, CallExpression)):
            self._resolve_reference(node)
        elif isinstance(node, TypeSpecifier):
            node.type = node.base

    def _declare(self, node) -> None:
        node.type = node.declared_type()
        self._insert(node.name, node.type, node)

    def _enter_function(self, func: FunctionDeclaration) -> None:
        func.type = func.declared_type()
        self.context.function_name = func.name
        self._insert(func.name, func.type, func)

        # A redefined function still gets a scope of its own for its body
        scopes = self.context.scopes
        func.scope_id = scopes.open(
            scopes.unique_name(func.name),
            ScopeKind.FUNCTION,
            function_name=func.name,
            return_type=func.type,
        )
        self.context.function_scope_pending = True

    def _enter_compound(self, block: CompoundStatement) -> None:
        scopes = self.context.scopes

        if self.context.function_scope_pending:
            # Function body: the function declaration already opened it
            self.context.function_scope_pending = False
            block.scope_id = scopes.active
            return

        function_name = self.context.function_name or GLOBAL_SCOPE_NAME
        block.scope_id = scopes.open(
            scopes.unique_name(f"{function_name}:{block.lineno}"),
            ScopeKind.BLOCK,
            function_name=function_name,
        )

    def _resolve_reference(self, node) -> None:
        symbols = self.context.symbols
        symbol_id = symbols.lookup_chained(self.context.scopes.active, node.name)
        node.symbol_id = symbol_id
        if symbol_id is None:
            # Possibly declared later; the type checker reports it if not
            node.type = ExpType.UNRESOLVED
            return

        symbol = symbols.symbol(symbol_id)
        if isinstance(node, IdentifierExpression) and node.is_indexed and is_array(symbol.type):
            node.type = element_type(symbol.type)
        else:
            node.type = symbol.type
        symbols.add_reference(symbol_id, node.lineno)

    def _insert(self, name: str, exp_type: ExpType, node: ASTNode) -> None:
        try:
            self.context.symbols.insert(
                self.context.scopes.active, name, exp_type, node.lineno, node
            )
        except SymbolRedefinitionError as e:
            self.context.record(e.diagnostic)

    # ========================================================================
    # Exit actions
    # ========================================================================

    def exit(self, node: ASTNode) -> None:
        if isinstance(node, CompoundStatement):
            self.context.scopes.close()


def build_symbol_table(tree: Optional[ASTNode], context: AnalysisContext) -> None:
    """Run the declaration pass over ``tree``."""
    logger.debug("collecting declarations")
    DeclarationCollector(context).run(tree)
