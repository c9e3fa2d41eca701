"""
Symbol table for C-Minus semantic analysis.

Declaration records live in an arena owned by the ``SymbolTable`` and are
addressed by integer handles; each scope maps names to those handles.
Implements:
- Scoped insertion with redefinition detection
- Chained lookup through parent scopes (shadowing)
- Per-scope memory slots assigned once, in declaration order
- Reference line tracking and a tabular listing

Author: xwest
"""

import io
import logging
import sys
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, TextIO

from ..syntax.ast_nodes import ASTNode, ExpType, FunctionDeclaration
from .errors import SymbolRedefinitionError
from .scopes import Scope, ScopeDirectory, ScopeId

logger = logging.getLogger(__name__)

SymbolId = int

LISTING_HEADER = (
    "Variable Name  Type        Location  Scope      Line Numbers\n"
    "-------------  ----        --------  -----      ------------\n"
)


@dataclass
class Symbol:
    """A declaration record."""
    symbol_id: SymbolId
    name: str
    type: ExpType
    scope_id: ScopeId
    memloc: int
    node: Optional[ASTNode] = None
    lines: List[int] = field(default_factory=list)

    @property
    def is_function(self) -> bool:
        return isinstance(self.node, FunctionDeclaration)

    def parameter_types(self) -> List[ExpType]:
        """Declared parameter types of a function symbol."""
        if not isinstance(self.node, FunctionDeclaration):
            return []
        return [param.declared_type() for param in self.node.parameters()]

    def __str__(self) -> str:
        return f"{self.name}: {self.type}"


class SymbolTable:
    """
    Declaration records of one analysis run, keyed by scope.

    Provides insertion, scoped and chained lookup, and the symbol listing.
    """

    def __init__(self, directory: ScopeDirectory):
        self.directory = directory
        self._symbols: List[Symbol] = []

    def insert(self, scope_id: ScopeId, name: str, exp_type: ExpType,
               lineno: int, node: Optional[ASTNode] = None) -> SymbolId:
        """
        Declare ``name`` in the given scope.

        Raises:
            SymbolRedefinitionError: if the scope already declares ``name``;
                the existing record is left untouched
        """
        scope = self.directory.scope(scope_id)
        existing = scope.symbols.get(name)
        if existing is not None:
            raise SymbolRedefinitionError(name, lineno, existing)

        symbol_id = len(self._symbols)
        symbol = Symbol(
            symbol_id=symbol_id,
            name=name,
            type=exp_type,
            scope_id=scope_id,
            memloc=scope.allocate_slot(),
            node=node,
            lines=[lineno],
        )
        self._symbols.append(symbol)
        scope.symbols[name] = symbol_id

        logger.debug("declared %s '%s' in scope '%s' at slot %d",
                     exp_type, name, scope.name, symbol.memloc)
        return symbol_id

    def lookup_chained(self, scope_id: ScopeId, name: str) -> Optional[SymbolId]:
        """Look up a name in a scope and then in its parents."""
        for scope in self.directory.ancestors(scope_id):
            symbol_id = scope.symbols.get(name)
            if symbol_id is not None:
                return symbol_id
        return None

    def lookup_local(self, scope_id: ScopeId, name: str) -> Optional[SymbolId]:
        """Look up a name only in the given scope (no parent traversal)."""
        return self.directory.scope(scope_id).symbols.get(name)

    def add_reference(self, symbol_id: SymbolId, lineno: int) -> None:
        """Record a use of a declared name; the memory slot is unaffected."""
        self.symbol(symbol_id).lines.append(lineno)

    def symbol(self, symbol_id: SymbolId) -> Symbol:
        return self._symbols[symbol_id]

    def symbols_in(self, scope_id: ScopeId) -> List[Symbol]:
        """Symbols declared directly in a scope, in slot order."""
        scope = self.directory.scope(scope_id)
        return [self._symbols[symbol_id] for symbol_id in scope.symbols.values()]

    def scope_of(self, symbol_id: SymbolId) -> Scope:
        return self.directory.scope(self.symbol(symbol_id).scope_id)

    def format_listing(self) -> str:
        """Render every declaration, grouped by scope in creation order."""
        out = io.StringIO()
        out.write(LISTING_HEADER)
        for scope in self.directory:
            for symbol in self.symbols_in(scope.scope_id):
                row = f"{symbol.name:<14} {str(symbol.type):<11} {symbol.memloc:<8}  {scope.name:<10} "
                row += "".join(f"{line:4d} " for line in symbol.lines)
                out.write(row.rstrip() + "\n")
        return out.getvalue()

    def print_listing(self, stream: Optional[TextIO] = None) -> None:
        (stream or sys.stdout).write(self.format_listing())

    def __iter__(self) -> Iterator[Symbol]:
        return iter(list(self._symbols))

    def __len__(self) -> int:
        return len(self._symbols)

    def __str__(self) -> str:
        return f"SymbolTable({len(self._symbols)} symbols in {len(self.directory)} scopes)"
