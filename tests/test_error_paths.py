"""Error-path tests.

Covers ParseError construction and formatting, Cursor.fail() diagnostics,
and CursorContractError.
"""

from __future__ import annotations

import copy
import pickle

import pytest

from scanstate import (
    EOF,
    Cursor,
    CursorContractError,
    Halt,
    ParseError,
    ScanConfig,
    ScanError,
    scan_config_context,
)
from scanstate.location import SourceLocation

# =========================================================================
# ParseError construction and formatting
# =========================================================================


class TestParseErrorFormatting:
    """Verify ParseError produces the fixed diagnostic layout."""

    def test_exact_format(self) -> None:
        err = ParseError("bad syntax", 3, 7, context="a = ;")
        assert str(err) == "Error in line 3 at position 7: bad syntax\ncontext:\na = ;\n"

    def test_attributes(self) -> None:
        err = ParseError("x", 2, 4, offset=9, context="ctx", source_file="in.txt")
        assert err.message == "x"
        assert err.lineno == 2
        assert err.col_offset == 4
        assert err.offset == 9
        assert err.context == "ctx"
        assert err.source_file == "in.txt"

    def test_source_file_not_in_message(self) -> None:
        err = ParseError("x", 1, 1, source_file="in.txt")
        assert "in.txt" not in str(err)

    def test_location(self) -> None:
        err = ParseError("x", 2, 4, offset=9, source_file="in.txt")
        assert err.location == SourceLocation(
            lineno=2, col_offset=4, offset=9, end_offset=9, source_file="in.txt"
        )

    def test_is_scan_error(self) -> None:
        assert isinstance(ParseError("x", 1, 1), ScanError)


class TestParseErrorCopying:
    """Diagnostics survive pickling and copying with every field intact."""

    def _recorded(self) -> ParseError:
        cursor = Cursor("hello world", source_file="greeting.txt")
        for _ in range(6):
            cursor.read_rune()
        cursor.fail("unexpected %s", "token")
        assert cursor.error is not None
        return cursor.error

    @pytest.mark.parametrize(
        "clone",
        [copy.copy, copy.deepcopy, lambda err: pickle.loads(pickle.dumps(err))],
        ids=["copy", "deepcopy", "pickle"],
    )
    def test_round_trip(self, clone) -> None:
        err = self._recorded()
        restored = clone(err)
        assert type(restored) is ParseError
        assert str(restored) == str(err)
        assert restored.message == "unexpected token"
        assert (restored.lineno, restored.col_offset) == (1, 7)
        assert restored.offset == 6
        assert restored.context == "ello world"
        assert restored.source_file == "greeting.txt"

    def test_copy_minimal_error(self) -> None:
        restored = copy.copy(ParseError("x", 1, 1))
        assert str(restored) == "Error in line 1 at position 1: x\ncontext:\n\n"

    def test_contract_error_pickles(self) -> None:
        err = CursorContractError("pop", "cannot pop the root node")
        restored = pickle.loads(pickle.dumps(err))
        assert str(restored) == str(err)
        assert restored.operation == "pop"


class TestCursorContractError:
    def test_format(self) -> None:
        err = CursorContractError("pop", "cannot pop the root node")
        assert str(err) == "pop(): cannot pop the root node"
        assert err.operation == "pop"

    def test_is_scan_error(self) -> None:
        assert isinstance(CursorContractError("x", "y"), ScanError)


# =========================================================================
# Cursor.fail()
# =========================================================================


class TestFail:
    """Verify diagnostics recorded by Cursor.fail()."""

    def test_message_and_context(self) -> None:
        cursor = Cursor("hello world")
        for _ in range(6):
            cursor.read_rune()
        cursor.fail("unexpected %s", "token")

        err = cursor.error
        assert err is not None
        assert "Error in line 1 at position 7: unexpected token" in str(err)
        assert err.context == "hello world"[1:11]
        assert str(err) == "Error in line 1 at position 7: unexpected token\ncontext:\nello world\n"

    def test_context_clamped_at_start(self) -> None:
        cursor = Cursor("abcdefgh")
        cursor.read_rune()
        cursor.fail("oops")
        assert cursor.error is not None
        assert cursor.error.context == "abcdef"

    def test_context_clamped_at_end(self) -> None:
        cursor = Cursor("abcdefgh")
        cursor.accept_run("abcdefgh")
        cursor.fail("oops")
        assert cursor.error is not None
        assert cursor.error.context == "defgh"

    def test_context_radius_from_config(self) -> None:
        with scan_config_context(ScanConfig(context_radius=2)):
            cursor = Cursor("abcdefgh")
        cursor.advance_until("e")
        cursor.fail("oops")
        assert cursor.error is not None
        assert cursor.error.context == "cdef"

    def test_multiline_position(self) -> None:
        cursor = Cursor("a = 1\nb = ?\n")
        cursor.advance_until("?")
        cursor.fail("bad value")
        assert cursor.error is not None
        assert cursor.error.lineno == 2
        assert cursor.error.col_offset == 5

    def test_message_without_args_is_literal(self) -> None:
        cursor = Cursor("x")
        cursor.fail("100% wrong")
        assert cursor.error is not None
        assert cursor.error.message == "100% wrong"

    def test_fail_replaces_end_of_input(self) -> None:
        cursor = Cursor("")
        cursor.read_rune()
        assert cursor.is_at_end
        cursor.fail("unexpected end of input")
        assert not cursor.is_at_end
        assert cursor.has_error
        assert isinstance(cursor.halt, ParseError)

    def test_first_diagnostic_wins(self) -> None:
        cursor = Cursor("abc")
        cursor.fail("first")
        cursor.fail("second")
        assert cursor.error is not None
        assert cursor.error.message == "first"

    def test_reads_after_fail_return_eof(self) -> None:
        cursor = Cursor("abc")
        cursor.fail("stop")
        assert cursor.read_rune() == EOF
        assert not cursor.accept("abc")
        assert cursor.pos == 0
        assert cursor.halt is not Halt.END_OF_INPUT

    def test_source_file_recorded(self) -> None:
        cursor = Cursor("abc", source_file="grammar.txt")
        cursor.fail("oops")
        assert cursor.error is not None
        assert str(cursor.error.location) == "grammar.txt:1:1"

    def test_no_error_initially(self) -> None:
        cursor = Cursor("abc")
        assert cursor.error is None
        assert cursor.halt is None
        assert not cursor.has_error
        assert not cursor.is_at_end

    def test_end_of_input_is_not_an_error(self) -> None:
        cursor = Cursor("a")
        cursor.accept_run("a")
        assert cursor.has_error
        assert cursor.is_at_end
        assert cursor.error is None


class TestStrictContracts:
    def test_strict_backtrack_without_read(self) -> None:
        with scan_config_context(ScanConfig(strict_contracts=True)):
            cursor = Cursor("abc")
        with pytest.raises(CursorContractError):
            cursor.backtrack()

    def test_accept_never_violates(self) -> None:
        """The accept family only backtracks reads it made itself."""
        with scan_config_context(ScanConfig(strict_contracts=True)):
            cursor = Cursor("aab")
        cursor.accept_run("a")
        cursor.emit()
        cursor.accept("x")
        cursor.advance_until("z")
        cursor.peek()
        cursor.fail("done")
        cursor.accept("b")
