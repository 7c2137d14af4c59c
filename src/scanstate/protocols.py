"""Protocols for scanstate.

Defines the one capability the toolkit needs from a caller's tree nodes.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TreeNode(Protocol):
    """A node that can adopt children.

    Leaf, branch or typed AST classes all qualify as long as they implement
    add_child(). How the child is stored is up to the node.

    """

    def add_child(self, child: TreeNode) -> None:
        """Attach child below this node."""
        ...
