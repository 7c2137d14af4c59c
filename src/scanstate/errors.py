"""Exception classes for scanstate.

Provides standardized exceptions for error handling throughout scanstate.
End of input is not an error and has no exception; see cursor.Halt.
"""

from __future__ import annotations

from scanstate.location import SourceLocation
from scanstate.utils.logger import get_logger

logger = get_logger(__name__)


class ScanError(Exception):
    """Base exception for all scanstate errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(ScanError):
    """Diagnostic recorded by a state function through Cursor.fail().

    The string form is the fixed diagnostic layout::

        Error in line L at position C: <message>
        context:
        <window>

    where L and C are 1-based and the window is the input surrounding the
    failing byte offset.
    """

    def __init__(
        self,
        message: str,
        lineno: int,
        col_offset: int,
        *,
        offset: int = 0,
        context: str = "",
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with its location and context window.

        Args:
            message: Formatted error description
            lineno: Line number where the error occurred (1-indexed)
            col_offset: Column where the error occurred (1-indexed)
            offset: Byte offset into the input
            context: Input text surrounding the offset
            source_file: Source label (optional, not part of the message)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.offset = offset
        self.context = context
        self.source_file = source_file

        super().__init__(
            f"Error in line {lineno} at position {col_offset}: {message}\n"
            f"context:\n{context}\n"
        )

    def __reduce__(self) -> tuple:
        return (
            _rebuild_parse_error,
            (
                self.message,
                self.lineno,
                self.col_offset,
                self.offset,
                self.context,
                self.source_file,
            ),
        )

    @property
    def location(self) -> SourceLocation:
        """Location of the failure as a SourceLocation."""
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col_offset,
            offset=self.offset,
            end_offset=self.offset,
            source_file=self.source_file,
        )


class CursorContractError(ScanError):
    """Misuse of the cursor or builder stack by a state function.

    Only raised when ScanConfig.strict_contracts is enabled. Otherwise the
    offending call is a logged no-op.
    """

    def __init__(self, operation: str, message: str) -> None:
        """Initialize contract error.

        Args:
            operation: Name of the misused operation (e.g., "backtrack")
            message: Description of the violation
        """
        self.operation = operation
        self.message = message
        super().__init__(f"{operation}(): {message}")

    def __reduce__(self) -> tuple:
        return (type(self), (self.operation, self.message))


def contract_violation(operation: str, message: str, *, strict: bool) -> None:
    """Report a contract violation: raise in strict mode, log otherwise.

    Args:
        operation: Name of the misused operation
        message: Description of the violation
        strict: Whether ScanConfig.strict_contracts is enabled

    Raises:
        CursorContractError: If strict is set
    """
    if strict:
        raise CursorContractError(operation, message)

    logger.debug("Ignoring %s(): %s", operation, message)


def _rebuild_parse_error(
    message: str,
    lineno: int,
    col_offset: int,
    offset: int,
    context: str,
    source_file: str | None,
) -> ParseError:
    """Unpickle helper: ParseError takes its keyword arguments by name only."""
    return ParseError(
        message,
        lineno,
        col_offset,
        offset=offset,
        context=context,
        source_file=source_file,
    )
