"""
Generic syntax tree traversal.

``traverse`` applies ``on_enter`` in preorder and ``on_exit`` in postorder to
every node reachable from ``node``: the node itself, its children left to
right, then its sibling chain. Pairing the two callbacks on the same node is
what keeps scope opening and closing balanced in both analysis passes.

The walk keeps its own stack of open nodes, so tree depth is not bounded by
the interpreter's recursion limit.

Author: xwest
"""

from typing import Callable, Iterator, List, Optional, Tuple

from ..syntax.ast_nodes import ASTNode

Action = Callable[[ASTNode], None]


def null_action(node: ASTNode) -> None:
    """Callback that does nothing."""
    pass


def _present_children(node: ASTNode) -> Iterator[ASTNode]:
    return (child for child in node.children() if child is not None)


def traverse(node: Optional[ASTNode], on_enter: Action = null_action,
             on_exit: Action = null_action) -> None:
    if node is None:
        return

    # Each frame is an entered node and the children it has yet to visit
    on_enter(node)
    stack: List[Tuple[ASTNode, Iterator[ASTNode]]] = [(node, _present_children(node))]

    while stack:
        current, pending = stack[-1]
        child = next(pending, None)
        if child is not None:
            on_enter(child)
            stack.append((child, _present_children(child)))
            continue

        stack.pop()
        on_exit(current)

        # The sibling takes the finished node's place at the same depth
        following = current.sibling
        if following is not None:
            on_enter(following)
            stack.append((following, _present_children(following)))
