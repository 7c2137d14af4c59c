"""
scanstate: state-function scanning toolkit

Infrastructure for hand-written parsers built from state functions: a
rune-oriented cursor, a trampoline driver, and a tree-builder stack.
A state function receives the Scanner, consumes input, optionally grows the
output tree, and returns the next state function (or None to stop).

Quick Start:
    >>> from scanstate import EOF, Scanner, scan
    >>>
    >>> def lex_number(s):
    ...     s.accept_run("0123456789")
    ...     s.push_node(Number(s.emit()))
    ...     s.pop_node()
    ...     return lex_separator
    >>>
    >>> def lex_separator(s):
    ...     if s.accept(","):
    ...         s.discard()
    ...         return lex_number
    ...     if s.peek() != EOF:
    ...         s.fail("unexpected %r", s.peek())
    ...     return None
    >>>
    >>> doc = scan("1,22,333", Document(), lex_number)

Errors:
    A state that calls fail() stops the run; scan() and Scanner.run() raise
    the recorded ParseError. Reaching the end of input is a normal stop.
"""

from scanstate.builder import TreeBuilder
from scanstate.config import (
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)
from scanstate.cursor import EOF, Cursor, Halt
from scanstate.driver import StateFn, run
from scanstate.errors import CursorContractError, ParseError, ScanError
from scanstate.location import SourceLocation
from scanstate.profiling import ScanAccumulator, get_scan_accumulator, profiled_scan
from scanstate.protocols import TreeNode
from scanstate.scanner import Scanner

__version__ = "0.1.0"


def scan(
    source: str | bytes,
    root: TreeNode,
    start: StateFn,
    *,
    source_file: str | None = None,
) -> TreeNode:
    """Run a state machine over source and return the populated root.

    Args:
        source: Input text
        root: Caller-owned root node of the output tree
        start: First state function
        source_file: Optional source label for diagnostics

    Returns:
        The root node, after the state functions attached their nodes to it

    Raises:
        ParseError: If a state function recorded a diagnostic
    """
    scanner = Scanner(source, root, source_file=source_file)
    scanner.run(start)
    return root


__all__ = [
    "EOF",
    "Cursor",
    "CursorContractError",
    "Halt",
    "ParseError",
    "ScanAccumulator",
    "ScanConfig",
    "ScanError",
    "Scanner",
    "SourceLocation",
    "StateFn",
    "TreeBuilder",
    "TreeNode",
    "__version__",
    "get_scan_accumulator",
    "get_scan_config",
    "profiled_scan",
    "reset_scan_config",
    "run",
    "scan",
    "scan_config_context",
    "set_scan_config",
]
