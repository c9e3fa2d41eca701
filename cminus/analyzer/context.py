"""
Per-run analysis state shared by the declaration and type checking passes.

Author: xwest
"""

import logging
from typing import List, Optional, TextIO

from .errors import Diagnostic, ErrorKind
from .scopes import ScopeDirectory
from .symbol_table import SymbolTable

logger = logging.getLogger(__name__)


class AnalysisContext:
    """
    Everything one analysis run mutates: the scope directory and its active
    scope, the symbol table, the diagnostics recorded so far and the cursor
    state of the declaration pass.

    A context belongs to a single run; independent analyses use independent
    contexts.
    """

    def __init__(self, echo: Optional[TextIO] = None):
        self.scopes = ScopeDirectory()
        self.symbols = SymbolTable(self.scopes)
        self.diagnostics: List[Diagnostic] = []

        # Declaration pass cursor
        self.function_scope_pending = False
        self.function_name: Optional[str] = None

        self._echo = echo

    def report(self, kind: ErrorKind, lineno: int, name: Optional[str] = None) -> Diagnostic:
        """Record a diagnostic; analysis always continues."""
        diagnostic = Diagnostic(kind, lineno, name)
        self.record(diagnostic)
        return diagnostic

    def record(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        logger.debug("[%s] %s", diagnostic.code, diagnostic.message)
        if self._echo is not None:
            self._echo.write(diagnostic.message + "\n")

    @property
    def failed(self) -> bool:
        return len(self.diagnostics) > 0
