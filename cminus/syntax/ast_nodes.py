"""
Syntax tree node definitions for C-Minus.

The parser hands the analyzer a tree built from these classes. Each node
category (declaration, type, parameter, statement, expression) has one class
per variant holding only the fields that variant needs. Children are exposed
as an ordered list through ``children()``; statement, declaration, parameter
and argument lists are chained through the ``sibling`` link.

Semantic analysis writes ``type``, ``scope_id`` and ``symbol_id`` in place
but never relinks children or siblings.

Author: xwest
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Union


class NodeKind(Enum):
    """Top-level node categories."""
    DECLARATION = "Declaration"
    TYPE = "Type"
    PARAMETER = "Parameter"
    STATEMENT = "Statement"
    EXPRESSION = "Expression"


class ExpType(Enum):
    """Semantic types of the language."""
    UNRESOLVED = "unresolved"
    VOID = "void"
    INTEGER = "int"
    VOID_ARRAY = "void[]"
    INTEGER_ARRAY = "int[]"

    def __str__(self) -> str:
        return self.value


_ARRAY_OF = {
    ExpType.VOID: ExpType.VOID_ARRAY,
    ExpType.INTEGER: ExpType.INTEGER_ARRAY,
}

_ELEMENT_TYPE = {array: scalar for scalar, array in _ARRAY_OF.items()}


def array_of(scalar: ExpType) -> ExpType:
    """Return the array type whose elements are ``scalar``."""
    try:
        return _ARRAY_OF[scalar]
    except KeyError:
        raise ValueError(f"'{scalar}' has no array counterpart") from None


def element_type(array: ExpType) -> ExpType:
    """Return the scalar element type of an array type."""
    try:
        return _ELEMENT_TYPE[array]
    except KeyError:
        raise ValueError(f"'{array}' is not an array type") from None


def is_array(exp_type: ExpType) -> bool:
    return exp_type in _ELEMENT_TYPE


class Operator(Enum):
    """Arithmetic and relational operators."""
    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    OVER = "/"
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    EQ = "=="
    NE = "!="

    def __str__(self) -> str:
        return self.value


class ASTNode(ABC):
    """Base class for all syntax tree nodes."""

    kind: NodeKind

    def __init__(self, lineno: int = 0):
        self.lineno = lineno
        self.type = ExpType.UNRESOLVED
        self.sibling: Optional['ASTNode'] = None

    @abstractmethod
    def children(self) -> List[Optional['ASTNode']]:
        """Get the child slots in order; absent children are ``None``."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(line={self.lineno}, type={self.type})"


NodeList = Union[ASTNode, Sequence[ASTNode], None]


def chain(*nodes: Optional[ASTNode]) -> Optional[ASTNode]:
    """Link nodes through their sibling field and return the head."""
    linked = [node for node in nodes if node is not None]
    for current, following in zip(linked, linked[1:]):
        current.sibling = following
    return linked[0] if linked else None


def iter_siblings(node: Optional[ASTNode]) -> Iterator[ASTNode]:
    """Iterate over a node and every node chained after it."""
    while node is not None:
        yield node
        node = node.sibling


def _link(nodes: NodeList) -> Optional[ASTNode]:
    if nodes is None or isinstance(nodes, ASTNode):
        return nodes
    return chain(*nodes)


# ============================================================================
# Type specifiers
# ============================================================================

class TypeSpecifier(ASTNode):
    """The ``int`` or ``void`` keyword in front of a declaration."""
    kind = NodeKind.TYPE

    def __init__(self, base: ExpType, lineno: int = 0):
        super().__init__(lineno)
        if base not in (ExpType.VOID, ExpType.INTEGER):
            raise ValueError(f"type specifier must be int or void, not '{base}'")
        self.base = base

    def children(self) -> List[Optional[ASTNode]]:
        return []


# ============================================================================
# Declarations
# ============================================================================

class Declaration(ASTNode):
    """Base class for declarations."""
    kind = NodeKind.DECLARATION
    name: str


class VariableDeclaration(Declaration):
    """Scalar variable declaration: ``int x;``"""

    def __init__(self, name: str, type_spec: TypeSpecifier, lineno: int = 0):
        super().__init__(lineno)
        self.name = name
        self.type_spec = type_spec

    def declared_type(self) -> ExpType:
        return self.type_spec.base

    def children(self) -> List[Optional[ASTNode]]:
        return [self.type_spec]


class ArrayDeclaration(Declaration):
    """Array variable declaration: ``int a[10];``"""

    def __init__(self, name: str, type_spec: TypeSpecifier, size: int, lineno: int = 0):
        super().__init__(lineno)
        self.name = name
        self.type_spec = type_spec
        self.size = size

    def declared_type(self) -> ExpType:
        return array_of(self.type_spec.base)

    def children(self) -> List[Optional[ASTNode]]:
        return [self.type_spec]


class FunctionDeclaration(Declaration):
    """Function definition with its parameter list and body."""

    def __init__(self, name: str, return_type: TypeSpecifier, params: NodeList,
                 body: 'CompoundStatement', lineno: int = 0):
        super().__init__(lineno)
        self.name = name
        self.return_type = return_type
        self.params = _link(params)
        self.body = body
        self.scope_id: Optional[int] = None

    def declared_type(self) -> ExpType:
        return self.return_type.base

    def parameters(self) -> List['Parameter']:
        """Declared parameters in order; the ``void`` marker yields none."""
        return [p for p in iter_siblings(self.params) if isinstance(p, Parameter)]

    def children(self) -> List[Optional[ASTNode]]:
        return [self.return_type, self.params, self.body]


# ============================================================================
# Parameters
# ============================================================================

class Parameter(ASTNode):
    """Function parameter, scalar (``int x``) or array (``int a[]``)."""
    kind = NodeKind.PARAMETER

    def __init__(self, name: str, type_spec: TypeSpecifier, lineno: int = 0,
                 is_array: bool = False):
        super().__init__(lineno)
        self.name = name
        self.type_spec = type_spec
        self.is_array = is_array

    def declared_type(self) -> ExpType:
        if self.is_array:
            return array_of(self.type_spec.base)
        return self.type_spec.base

    def children(self) -> List[Optional[ASTNode]]:
        return [self.type_spec]


class VoidParameter(ASTNode):
    """The lone ``void`` in ``f(void)``, meaning no parameters."""
    kind = NodeKind.PARAMETER

    def children(self) -> List[Optional[ASTNode]]:
        return []


# ============================================================================
# Statements
# ============================================================================

class Statement(ASTNode):
    """Base class for statements."""
    kind = NodeKind.STATEMENT


class CompoundStatement(Statement):
    """Braced block of local declarations followed by statements."""

    def __init__(self, declarations: NodeList = None, statements: NodeList = None,
                 lineno: int = 0):
        super().__init__(lineno)
        self.declarations = _link(declarations)
        self.statements = _link(statements)
        self.scope_id: Optional[int] = None

    def children(self) -> List[Optional[ASTNode]]:
        return [self.declarations, self.statements]


class IfStatement(Statement):
    """``if`` without an else branch."""

    def __init__(self, condition: 'Expression', then: ASTNode, lineno: int = 0):
        super().__init__(lineno)
        self.condition = condition
        self.then = then

    def children(self) -> List[Optional[ASTNode]]:
        return [self.condition, self.then]


class IfElseStatement(Statement):
    """``if`` with an else branch."""

    def __init__(self, condition: 'Expression', then: ASTNode, otherwise: ASTNode,
                 lineno: int = 0):
        super().__init__(lineno)
        self.condition = condition
        self.then = then
        self.otherwise = otherwise

    def children(self) -> List[Optional[ASTNode]]:
        return [self.condition, self.then, self.otherwise]


class WhileStatement(Statement):
    """``while`` loop."""

    def __init__(self, condition: 'Expression', body: ASTNode, lineno: int = 0):
        super().__init__(lineno)
        self.condition = condition
        self.body = body

    def children(self) -> List[Optional[ASTNode]]:
        return [self.condition, self.body]


class ReturnStatement(Statement):
    """``return;`` or ``return expr;``"""

    def __init__(self, value: Optional['Expression'] = None, lineno: int = 0):
        super().__init__(lineno)
        self.value = value

    def children(self) -> List[Optional[ASTNode]]:
        return [self.value]


# ============================================================================
# Expressions
# ============================================================================

class Expression(ASTNode):
    """Base class for expressions."""
    kind = NodeKind.EXPRESSION


class AssignExpression(Expression):
    """``target = value``"""

    def __init__(self, target: 'IdentifierExpression', value: Expression, lineno: int = 0):
        super().__init__(lineno)
        self.target = target
        self.value = value

    def children(self) -> List[Optional[ASTNode]]:
        return [self.target, self.value]


class BinaryExpression(Expression):
    """Arithmetic or relational operation."""

    def __init__(self, operator: Operator, left: Expression, right: Expression,
                 lineno: int = 0):
        super().__init__(lineno)
        self.operator = operator
        self.left = left
        self.right = right

    def children(self) -> List[Optional[ASTNode]]:
        return [self.left, self.right]


class ConstExpression(Expression):
    """Integer literal."""

    def __init__(self, value: int, lineno: int = 0):
        super().__init__(lineno)
        self.value = value

    def children(self) -> List[Optional[ASTNode]]:
        return []


class IdentifierExpression(Expression):
    """Variable reference, optionally indexed: ``x`` or ``a[i]``."""

    def __init__(self, name: str, index: Optional[Expression] = None, lineno: int = 0):
        super().__init__(lineno)
        self.name = name
        self.index = index
        self.symbol_id: Optional[int] = None

    @property
    def is_indexed(self) -> bool:
        return self.index is not None

    def children(self) -> List[Optional[ASTNode]]:
        return [self.index]


class CallExpression(Expression):
    """Function call with a (possibly empty) argument list."""

    def __init__(self, name: str, args: NodeList = None, lineno: int = 0):
        super().__init__(lineno)
        self.name = name
        self.args = _link(args)
        self.symbol_id: Optional[int] = None

    def arguments(self) -> List[ASTNode]:
        return list(iter_siblings(self.args))

    def children(self) -> List[Optional[ASTNode]]:
        return [self.args]
