"""Nesting-aware tree builder stack.

The stack holds the path from the root to the node currently being filled.
push() attaches a node to the current node and descends into it; pop()
returns to the parent. The root is never removed.

Thread Safety:
TreeBuilder instances are single-use. Create one per parse.

"""

from __future__ import annotations

from scanstate.config import get_scan_config
from scanstate.errors import contract_violation
from scanstate.protocols import TreeNode


class TreeBuilder:
    """Stack of tree nodes with the root at the bottom.

    Usage:
            >>> builder = TreeBuilder(root)
            >>> builder.push(section)   # root.add_child(section)
            >>> builder.push(entry)     # section.add_child(entry)
            >>> builder.pop()
            >>> builder.current is section
            True

    """

    __slots__ = ("_stack", "_strict")

    def __init__(self, root: TreeNode) -> None:
        """Initialize the stack with the root node.

        Args:
            root: Caller-owned root; stays at the bottom for the whole parse
        """
        self._stack: list[TreeNode] = [root]
        self._strict = get_scan_config().strict_contracts

    def __len__(self) -> int:
        return len(self._stack)

    def __repr__(self) -> str:
        return f"TreeBuilder(depth={len(self._stack)}, current={self.current!r})"

    def push(self, node: TreeNode) -> None:
        """Attach node to the current node and make it the current node."""
        self._stack[-1].add_child(node)
        self._stack.append(node)

    def pop(self) -> None:
        """Return to the parent of the current node.

        Popping the root is ignored (or raises CursorContractError in strict
        mode).
        """
        if len(self._stack) < 2:
            contract_violation("pop", "cannot pop the root node", strict=self._strict)
            return
        self._stack.pop()

    @property
    def current(self) -> TreeNode:
        """Node that new nodes are attached to."""
        return self._stack[-1]

    @property
    def root(self) -> TreeNode:
        return self._stack[0]

    @property
    def depth(self) -> int:
        """Number of nodes on the stack, root included."""
        return len(self._stack)
