"""Rune-oriented input cursor.

The cursor owns the input and every piece of positional state: byte offsets,
the width of the last rune read, and line/column bookkeeping. State functions
drive it one rune at a time and cut tokens out of it with emit().

Positions:
- start/pos are byte offsets into the UTF-8 encoded input
- line/column are zero-based and describe the *next* rune to read
- columns count runes, not bytes

Backtracking:
Exactly one read can be undone. The undo slot is filled by every read and
emptied by backtrack(), emit() and discard(). Backtracking with an empty slot
is ignored (or raises CursorContractError in strict mode); it never corrupts
the position.

Thread Safety:
Cursor instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Container
from enum import Enum, auto

from scanstate.config import ScanConfig, get_scan_config
from scanstate.errors import ParseError, contract_violation
from scanstate.location import SourceLocation
from scanstate.utils.logger import get_logger
from scanstate.utils.runes import decode_rune

logger = get_logger(__name__)

# Returned by reads at the end of input. Every decoded rune is a
# one-character string, so the empty string can never come from the input.
EOF = ""


class Halt(Enum):
    """Non-error terminal condition of a cursor.

    A cursor's halt is either None (still running), Halt.END_OF_INPUT,
    or a ParseError recorded by fail().
    """

    END_OF_INPUT = auto()


def _encode(source: str | bytes | bytearray | memoryview) -> bytes:
    # Lone surrogates become "?" so each still counts as one rune
    if isinstance(source, str):
        return source.encode("utf-8", "replace")
    return bytes(source)


class Cursor:
    """Stateful rune reader over an immutable input.

    Usage:
            >>> cursor = Cursor("123abc")
            >>> cursor.accept_run("0123456789")
            >>> cursor.emit()
            '123'
            >>> cursor.peek()
            'a'

    Thread Safety:
        Cursor instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_input",
        "_input_len",  # Cached len(input)
        "_start",
        "_pos",
        "_last_width",
        "_line",
        "_column",
        "_prev_line",
        "_prev_column",
        "_start_line",
        "_start_column",
        "_can_backtrack",  # Single-slot undo buffer is full
        "_halt",
        "_source_file",
        "_config",
    )

    def __init__(
        self,
        source: str | bytes | bytearray | memoryview,
        *,
        source_file: str | None = None,
    ) -> None:
        """Initialize cursor over source text.

        Args:
            source: Input text; str is encoded as UTF-8, bytes are used as is
            source_file: Optional source label for locations and diagnostics
        """
        self._input = _encode(source)
        self._input_len = len(self._input)
        self._start = 0
        self._pos = 0
        self._last_width = 0
        self._line = 0
        self._column = 0
        self._prev_line = 0
        self._prev_column = 0
        self._start_line = 0
        self._start_column = 0
        self._can_backtrack = False
        self._halt: Halt | ParseError | None = None
        self._source_file = source_file
        self._config = get_scan_config()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(pos={self._pos}, start={self._start}, "
            f"line={self._line}, column={self._column}, halt={self._halt!r})"
        )

    # =========================================================================
    # Rune navigation
    # =========================================================================

    def read_rune(self) -> str:
        """Consume and return the next rune.

        At the end of input returns EOF without moving and marks the cursor
        with Halt.END_OF_INPUT. Once a diagnostic is recorded every read
        returns EOF and the diagnostic is kept.

        Returns:
            One-character string, or EOF.
        """
        self._prev_line = self._line
        self._prev_column = self._column
        self._can_backtrack = True

        if self._pos >= self._input_len or isinstance(self._halt, ParseError):
            self._last_width = 0
            if self._halt is None:
                self._halt = Halt.END_OF_INPUT
            return EOF

        rune, width = decode_rune(self._input, self._pos)
        self._pos += width
        self._last_width = width

        if rune == "\n":
            self._line += 1
            self._column = 0
        else:
            self._column += 1

        return rune

    def backtrack(self) -> None:
        """Undo the last read_rune().

        Only one read can be undone. Calling this without a pending read is a
        caller error: ignored, or CursorContractError in strict mode.
        """
        if not self._can_backtrack:
            contract_violation(
                "backtrack",
                "no pending read to undo",
                strict=self._config.strict_contracts,
            )
            return

        self._pos -= self._last_width
        self._line = self._prev_line
        self._column = self._prev_column
        self._last_width = 0
        self._can_backtrack = False

    def peek(self) -> str:
        """Return the next rune without consuming it."""
        rune = self.read_rune()
        self.backtrack()
        return rune

    def accept(self, valid: Container[str]) -> bool:
        """Consume the next rune if it is in valid.

        Args:
            valid: Acceptable runes, e.g. a string like "+-"

        Returns:
            True if a rune was consumed.
        """
        rune = self.read_rune()
        if rune != EOF and rune in valid:
            return True
        self.backtrack()
        return False

    def accept_run(self, valid: Container[str]) -> None:
        """Consume runes while they are in valid."""
        while True:
            rune = self.read_rune()
            if rune == EOF or rune not in valid:
                break
        self.backtrack()

    def advance_until(self, stop: Container[str]) -> None:
        """Consume runes up to, not including, the first rune in stop."""
        while True:
            rune = self.read_rune()
            if rune == EOF or rune in stop:
                break
        self.backtrack()

    # =========================================================================
    # Token extraction
    # =========================================================================

    def emit(self) -> str:
        """Return the text accumulated since the token start and begin a new token."""
        text = self.pending
        self._mark_start()
        return text

    def discard(self) -> None:
        """Drop the text accumulated since the token start."""
        self._mark_start()

    def _mark_start(self) -> None:
        self._start = self._pos
        self._start_line = self._line
        self._start_column = self._column
        # Reads before the token start are committed
        self._can_backtrack = False

    # =========================================================================
    # Terminal conditions
    # =========================================================================

    def fail(self, message: str, *args: object) -> None:
        """Record a diagnostic at the current position and stop the cursor.

        The message is %-formatted with args when args are given. A recorded
        diagnostic replaces an end-of-input halt; the first diagnostic wins.

        Args:
            message: Error message or %-style format string
            *args: Format arguments
        """
        if isinstance(self._halt, ParseError):
            logger.debug("Cursor already failed, dropping: %s", message)
            return

        radius = self._config.context_radius
        lo = max(0, self._pos - radius)
        hi = min(self._input_len, self._pos + radius)

        self._halt = ParseError(
            message % args if args else message,
            self._line + 1,
            self._column + 1,
            offset=self._pos,
            context=self._input[lo:hi].decode("utf-8", "replace"),
            source_file=self._source_file,
        )

    @property
    def halt(self) -> Halt | ParseError | None:
        """Terminal condition: None, Halt.END_OF_INPUT or a ParseError."""
        return self._halt

    @property
    def error(self) -> ParseError | None:
        """The recorded diagnostic, if any."""
        return self._halt if isinstance(self._halt, ParseError) else None

    @property
    def is_at_end(self) -> bool:
        """True exactly when the cursor stopped at the end of input."""
        return self._halt is Halt.END_OF_INPUT

    @property
    def has_error(self) -> bool:
        """True when any terminal condition is set, end of input included."""
        return self._halt is not None

    # =========================================================================
    # Position accessors
    # =========================================================================

    @property
    def pos(self) -> int:
        return self._pos

    @property
    def start(self) -> int:
        return self._start

    @property
    def line(self) -> int:
        return self._line

    @property
    def column(self) -> int:
        return self._column

    @property
    def input(self) -> bytes:
        return self._input

    @property
    def source(self) -> str:
        """The whole input as text."""
        return self._input.decode("utf-8", "replace")

    @property
    def config(self) -> ScanConfig:
        """Configuration captured when the cursor was created."""
        return self._config

    @property
    def source_file(self) -> str | None:
        return self._source_file

    @property
    def pending(self) -> str:
        """Text between the token start and the current position."""
        return self._input[self._start : self._pos].decode("utf-8", "replace")

    def location(self) -> SourceLocation:
        """1-based location of the next rune."""
        return SourceLocation(
            lineno=self._line + 1,
            col_offset=self._column + 1,
            offset=self._pos,
            end_offset=self._pos,
            source_file=self._source_file,
        )

    def span(self) -> SourceLocation:
        """1-based location covering the pending token."""
        start = SourceLocation(
            lineno=self._start_line + 1,
            col_offset=self._start_column + 1,
            offset=self._start,
            source_file=self._source_file,
        )
        return start.span_to(self.location())
