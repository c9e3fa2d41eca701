"""
C-Minus Semantic Analyzer Package

Implements semantic analysis including:
- Nested function and block scopes with shadowing
- Declare-then-check traversal over the syntax tree
- Static type checking of int, int[] and void
- Accumulated, non-fatal diagnostics

Author: xwest
"""

from .semantic_analyzer import (
    SemanticAnalyzer, AnalyzerOptions, AnalysisResult, builtin_declarations,
)
from .context import AnalysisContext
from .declaration_collector import DeclarationCollector, build_symbol_table
from .type_checker import TypeChecker, type_check
from .scopes import Scope, ScopeDirectory, ScopeKind
from .symbol_table import Symbol, SymbolTable
from .walker import traverse
from .errors import (
    Diagnostic, ErrorKind, SemanticError, DuplicateScopeName,
    UnknownScopeError, SymbolRedefinitionError,
)

__all__ = [
    # Main analyzer
    "SemanticAnalyzer", "AnalyzerOptions", "AnalysisResult", "builtin_declarations",

    # Passes
    "AnalysisContext", "DeclarationCollector", "build_symbol_table",
    "TypeChecker", "type_check", "traverse",

    # Symbol management
    "Scope", "ScopeDirectory", "ScopeKind", "Symbol", "SymbolTable",

    # Error handling
    "Diagnostic", "ErrorKind", "SemanticError", "DuplicateScopeName",
    "UnknownScopeError", "SymbolRedefinitionError",
]
