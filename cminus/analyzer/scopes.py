"""
Scope management for C-Minus semantic analysis.

All scopes created during one analysis run live in a ``ScopeDirectory`` and
are addressed by integer handles. A scope refers to its parent by handle, so
the parent links form a tree rooted at the global scope while the directory
alone owns every scope. Closing a scope only moves the active cursor; the
scope stays reachable for the type checking pass.

Author: xwest
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional

from ..syntax.ast_nodes import ExpType
from .errors import DuplicateScopeName, SemanticError, UnknownScopeError

logger = logging.getLogger(__name__)

ScopeId = int

GLOBAL_SCOPE_NAME = "global"


class ScopeKind(Enum):
    """Types of scopes."""
    GLOBAL = "global"
    FUNCTION = "function"
    BLOCK = "block"


@dataclass
class Scope:
    """Represents a lexical scope."""
    scope_id: ScopeId
    name: str
    kind: ScopeKind
    parent: Optional[ScopeId] = None
    symbols: Dict[str, int] = field(default_factory=dict)
    next_slot: int = 0

    # Enclosing function, None for the global scope
    function_name: Optional[str] = None
    # For function scopes
    return_type: Optional[ExpType] = None

    def allocate_slot(self) -> int:
        """Hand out the next memory slot of this scope."""
        slot = self.next_slot
        self.next_slot += 1
        return slot

    def __str__(self) -> str:
        return f"Scope({self.kind.value}, {self.name}, {len(self.symbols)} symbols)"


class ScopeDirectory:
    """
    Owns every scope of one analysis run.

    Tracks the active scope cursor used while the tree is walked. A
    directory must not be shared between concurrent analyses.
    """

    def __init__(self):
        self._scopes: List[Scope] = []
        self._by_name: Dict[str, ScopeId] = {}
        self._active: Optional[ScopeId] = None
        self.reset()

    def reset(self) -> ScopeId:
        """Drop all scopes and open a fresh global scope."""
        self._scopes.clear()
        self._by_name.clear()
        self._active = None
        return self.open(GLOBAL_SCOPE_NAME, ScopeKind.GLOBAL)

    def open(self, name: str, kind: ScopeKind = ScopeKind.BLOCK,
             function_name: Optional[str] = None,
             return_type: Optional[ExpType] = None) -> ScopeId:
        """
        Create a scope nested in the active one and make it active.

        Raises:
            DuplicateScopeName: if ``name`` is already registered
        """
        if name in self._by_name:
            raise DuplicateScopeName(name)

        scope_id = len(self._scopes)
        scope = Scope(
            scope_id=scope_id,
            name=name,
            kind=kind,
            parent=self._active,
            function_name=function_name,
            return_type=return_type,
        )
        self._scopes.append(scope)
        self._by_name[name] = scope_id
        self._active = scope_id

        logger.debug("opened %s scope '%s' (id %d, parent %s)",
                     kind.value, name, scope_id, scope.parent)
        return scope_id

    def close(self) -> ScopeId:
        """Make the parent of the active scope active and return the closed scope."""
        closing = self.scope(self._require_active())
        if closing.parent is None:
            raise SemanticError("Cannot close the global scope")

        self._active = closing.parent
        logger.debug("closed scope '%s'", closing.name)
        return closing.scope_id

    def activate(self, scope_id: ScopeId) -> None:
        """Re-enter a previously created scope."""
        self.scope(scope_id)
        self._active = scope_id

    def find(self, name: str) -> Optional[ScopeId]:
        """Look up a scope by name."""
        return self._by_name.get(name)

    def unique_name(self, base: str) -> str:
        """Return ``base`` or the first free ``base#n`` variant."""
        if base not in self._by_name:
            return base
        suffix = 2
        while f"{base}#{suffix}" in self._by_name:
            suffix += 1
        return f"{base}#{suffix}"

    def scope(self, scope_id: ScopeId) -> Scope:
        """Resolve a handle to its scope."""
        if not 0 <= scope_id < len(self._scopes):
            raise UnknownScopeError(scope_id)
        return self._scopes[scope_id]

    def enclosing_function(self, scope_id: ScopeId) -> Optional[Scope]:
        """Get the nearest enclosing function scope, if any."""
        current: Optional[ScopeId] = scope_id
        while current is not None:
            scope = self.scope(current)
            if scope.kind == ScopeKind.FUNCTION:
                return scope
            current = scope.parent
        return None

    def ancestors(self, scope_id: ScopeId) -> Iterator[Scope]:
        """Yield a scope followed by each of its parents up to global."""
        current: Optional[ScopeId] = scope_id
        while current is not None:
            scope = self.scope(current)
            yield scope
            current = scope.parent

    @property
    def active(self) -> ScopeId:
        return self._require_active()

    @property
    def active_scope(self) -> Scope:
        return self.scope(self._require_active())

    @property
    def global_scope(self) -> Scope:
        return self._scopes[0]

    def _require_active(self) -> ScopeId:
        if self._active is None:
            raise SemanticError("No active scope")
        return self._active

    def __iter__(self) -> Iterator[Scope]:
        return iter(list(self._scopes))

    def __len__(self) -> int:
        return len(self._scopes)

    def __str__(self) -> str:
        return f"ScopeDirectory({len(self._scopes)} scopes, active: {self.active_scope})"
