"""
Semantic analysis error handling for C-Minus.

User-level problems (undeclared names, type mismatches, redefinitions) are
recorded as ``Diagnostic`` values and never stop the analysis. Exceptions
are reserved for misuse of the scope and symbol table APIs, plus the
redefinition signal raised by ``SymbolTable.insert`` that the declaration
pass turns into a diagnostic.

Author: xwest
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Semantic error taxonomy; the value is the stable error code."""
    UNDECLARED_FUNCTION = "S001"
    UNDECLARED_VARIABLE = "S002"
    REDEFINED_SYMBOL = "S003"
    VOID_VARIABLE = "S004"
    NON_INTEGER_INDEX = "S005"
    ARRAY_INDEX_ON_SCALAR = "S006"
    INVALID_CALL = "S007"
    INVALID_RETURN = "S008"
    INVALID_ASSIGNMENT = "S009"
    INVALID_OPERATION = "S010"
    INVALID_CONDITION = "S011"

    @property
    def code(self) -> str:
        return self.value


# Semantic error codes for categorization
SEMANTIC_ERROR_CODES = {
    # Name resolution
    "S001": "Undeclared function",
    "S002": "Undeclared variable",
    "S003": "Symbol redefinition",

    # Storage
    "S004": "Void-typed variable",

    # Array indexing
    "S005": "Non-integer array index",
    "S006": "Indexing a non-array variable",

    # Type compatibility
    "S007": "Invalid function call",
    "S008": "Invalid return",
    "S009": "Invalid assignment",
    "S010": "Invalid operation",
    "S011": "Invalid condition",
}


_MESSAGE_FORMATS = {
    ErrorKind.UNDECLARED_FUNCTION: 'undeclared function "{name}" is called at line {line}',
    ErrorKind.UNDECLARED_VARIABLE: 'undeclared variable "{name}" is used at line {line}',
    ErrorKind.REDEFINED_SYMBOL: 'Symbol "{name}" is redefined at line {line}',
    ErrorKind.VOID_VARIABLE: 'The void-type variable is declared at line {line} (name : "{name}")',
    ErrorKind.NON_INTEGER_INDEX: ('Invalid array indexing at line {line} (name : "{name}"). '
                                  'indices should be integer'),
    ErrorKind.ARRAY_INDEX_ON_SCALAR: ('Invalid array indexing at line {line} (name : "{name}"). '
                                      'indexing can only allowed for int[] variables'),
    ErrorKind.INVALID_CALL: 'Invalid function call at line {line} (name : "{name}")',
    ErrorKind.INVALID_RETURN: 'Invalid return at line {line}',
    ErrorKind.INVALID_ASSIGNMENT: 'invalid assignment at line {line}',
    ErrorKind.INVALID_OPERATION: 'invalid operation at line {line}',
    ErrorKind.INVALID_CONDITION: 'invalid condition at line {line}',
}


@dataclass(frozen=True)
class Diagnostic:
    """A single recorded semantic error."""
    kind: ErrorKind
    lineno: int
    name: Optional[str] = None

    @property
    def code(self) -> str:
        return self.kind.code

    @property
    def message(self) -> str:
        """Human-readable listing line for this diagnostic."""
        body = _MESSAGE_FORMATS[self.kind].format(name=self.name or "", line=self.lineno)
        return f"Error: {body}"

    def __str__(self) -> str:
        return self.message


class SemanticError(Exception):
    """
    Exception raised when the scope or symbol table API is misused.

    Carries an optional error code for categorization.
    """

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class DuplicateScopeName(SemanticError):
    """Raised when a scope is opened under a name that is already registered."""

    def __init__(self, name: str):
        super().__init__(f"Scope '{name}' is already defined")
        self.name = name


class UnknownScopeError(SemanticError):
    """Raised when a scope handle does not belong to the directory."""

    def __init__(self, scope_id: int):
        super().__init__(f"No scope with id {scope_id}")
        self.scope_id = scope_id


class SymbolRedefinitionError(SemanticError):
    """
    Raised by ``SymbolTable.insert`` when a name is already declared in the
    target scope. The existing declaration is left untouched.
    """

    def __init__(self, name: str, lineno: int, existing: int):
        super().__init__(
            f"Symbol '{name}' is already defined in this scope",
            code=ErrorKind.REDEFINED_SYMBOL.code,
        )
        self.name = name
        self.lineno = lineno
        self.existing = existing

    @property
    def diagnostic(self) -> Diagnostic:
        return Diagnostic(ErrorKind.REDEFINED_SYMBOL, self.lineno, self.name)
