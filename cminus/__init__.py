"""
C-Minus Semantic Analysis Package

Semantic analysis front half of a compiler for the C-Minus teaching
language: scoped symbol tables, name resolution and static type checking
over an already-parsed syntax tree.

Architecture:
    cminus/
    ├── syntax/          # Syntax tree nodes and tree listing
    └── analyzer/        # Scopes, symbol table, declaration and type passes

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@neuralscript.org"
__license__ = "MIT"

from .analyzer import SemanticAnalyzer, AnalyzerOptions, AnalysisResult
from .syntax import print_tree

__all__ = [
    # Core classes
    "SemanticAnalyzer",
    "AnalyzerOptions",
    "AnalysisResult",
    "print_tree",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
