"""
Main semantic analyzer for C-Minus.

Coordinates the analysis passes:
- Built-in function declarations
- Symbol table construction (pass 1)
- Type checking and reference resolution (pass 2)

Author: xwest
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import List, Optional, TextIO

from ..syntax.ast_nodes import (
    ASTNode, CompoundStatement, ExpType, FunctionDeclaration, Parameter,
    TypeSpecifier, VoidParameter,
)
from .context import AnalysisContext
from .declaration_collector import build_symbol_table
from .errors import Diagnostic
from .scopes import ScopeDirectory
from .symbol_table import SymbolTable
from .type_checker import type_check

logger = logging.getLogger(__name__)

BUILTIN_LINENO = 0


@dataclass
class AnalyzerOptions:
    """Options controlling analyzer output."""
    trace_analyze: bool = False  # Print the symbol table after pass 1
    echo_diagnostics: bool = False  # Write each diagnostic as it is recorded
    listing: Optional[TextIO] = field(default=None, repr=False)

    @property
    def stream(self) -> TextIO:
        return self.listing if self.listing is not None else sys.stdout


@dataclass
class AnalysisResult:
    """Results of semantic analysis."""
    tree: Optional[ASTNode]
    scopes: ScopeDirectory
    symbol_table: SymbolTable
    diagnostics: List[Diagnostic]

    @property
    def failed(self) -> bool:
        """True when code generation must not run."""
        return len(self.diagnostics) > 0

    def has_errors(self) -> bool:
        """Check if analysis found any errors."""
        return self.failed

    def format_diagnostics(self) -> str:
        """One line per diagnostic, in order of discovery."""
        return "".join(f"{diagnostic}\n" for diagnostic in self.diagnostics)

    def format_symbol_table(self) -> str:
        return self.symbol_table.format_listing()


def builtin_declarations() -> List[FunctionDeclaration]:
    """
    The standard library visible to every program:
    ``int input(void)`` and ``void output(int arg)``.
    """
    input_decl = FunctionDeclaration(
        "input",
        TypeSpecifier(ExpType.INTEGER, BUILTIN_LINENO),
        VoidParameter(BUILTIN_LINENO),
        CompoundStatement(lineno=BUILTIN_LINENO),
        lineno=BUILTIN_LINENO,
    )
    output_decl = FunctionDeclaration(
        "output",
        TypeSpecifier(ExpType.VOID, BUILTIN_LINENO),
        Parameter("arg", TypeSpecifier(ExpType.INTEGER, BUILTIN_LINENO), BUILTIN_LINENO),
        CompoundStatement(lineno=BUILTIN_LINENO),
        lineno=BUILTIN_LINENO,
    )
    return [input_decl, output_decl]


class SemanticAnalyzer:
    """
    Main semantic analyzer for C-Minus.

    Each call to ``analyze`` works on a fresh scope directory and symbol
    table, so one analyzer can be reused for any number of trees.
    """

    def __init__(self, options: Optional[AnalyzerOptions] = None):
        """Initialize the semantic analyzer."""
        self.options = options or AnalyzerOptions()

    def analyze(self, tree: Optional[ASTNode]) -> AnalysisResult:
        """
        Perform complete semantic analysis on the tree.

        Args:
            tree: Head of the program's top-level declaration chain

        Returns:
            AnalysisResult with the annotated tree, the scopes, the symbol
            table and every diagnostic that was recorded
        """
        options = self.options
        context = AnalysisContext(echo=options.stream if options.echo_diagnostics else None)

        self._declare_builtins(context)

        build_symbol_table(tree, context)
        if options.trace_analyze:
            options.stream.write("\nSymbol table:\n\n")
            context.symbols.print_listing(options.stream)

        type_check(tree, context)

        logger.debug("analysis finished: %d scopes, %d symbols, %d diagnostics",
                     len(context.scopes), len(context.symbols), len(context.diagnostics))

        return AnalysisResult(
            tree=tree,
            scopes=context.scopes,
            symbol_table=context.symbols,
            diagnostics=list(context.diagnostics),
        )

    def _declare_builtins(self, context: AnalysisContext) -> None:
        """Insert the built-in functions into the global scope."""
        global_scope = context.scopes.global_scope.scope_id
        for decl in builtin_declarations():
            decl.type = decl.declared_type()
            for param in decl.parameters():
                param.type = param.declared_type()
            context.symbols.insert(global_scope, decl.name, decl.type, decl.lineno, decl)
