"""Scanner: the context handed to every state function.

A Scanner is a Cursor that also carries the TreeBuilder for the parse, so a
state function can read input and grow the output tree through one object.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from scanstate.builder import TreeBuilder
from scanstate.cursor import Cursor
from scanstate.driver import run as run_states
from scanstate.protocols import TreeNode

if TYPE_CHECKING:
    from scanstate.driver import StateFn


class Scanner(Cursor):
    """Cursor plus tree builder for one parse.

    Usage:
            >>> def lex_digits(s: Scanner) -> StateFn | None:
            ...     s.accept_run("0123456789")
            ...     s.push_node(Number(s.emit()))
            ...     return None
            >>> scanner = Scanner("123abc", Document())
            >>> scanner.run(lex_digits)
            >>> scanner.peek()
            'a'

    Thread Safety:
        Scanner instances are single-use. Create one per source string.

    """

    __slots__ = ("tree",)

    def __init__(
        self,
        source: str | bytes | bytearray | memoryview,
        root: TreeNode,
        *,
        source_file: str | None = None,
    ) -> None:
        """Initialize scanner with source text and the root of the output tree.

        Args:
            source: Input text
            root: Caller-owned root node
            source_file: Optional source label for locations and diagnostics
        """
        super().__init__(source, source_file=source_file)
        self.tree = TreeBuilder(root)

    def run(self, start: StateFn) -> None:
        """Drive state functions from start; see scanstate.driver.run()."""
        run_states(self, start)

    # =========================================================================
    # Tree building shortcuts
    # =========================================================================

    def push_node(self, node: TreeNode) -> None:
        """Attach node to the current node and descend into it."""
        self.tree.push(node)

    def pop_node(self) -> None:
        """Return to the parent node; ignored at the root."""
        self.tree.pop()

    @property
    def current_node(self) -> TreeNode:
        return self.tree.current

    @property
    def root(self) -> TreeNode:
        return self.tree.root

    @property
    def depth(self) -> int:
        """Builder stack depth, root included."""
        return self.tree.depth
